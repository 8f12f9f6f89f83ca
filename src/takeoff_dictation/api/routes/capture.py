"""Capture session API routes."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from takeoff_dictation.api.dependencies import (
    CaptureSessionNotFoundError,
    FieldRegistryDep,
    RecordSinkDep,
    SessionRegistryDep,
)
from takeoff_dictation.domain.entities.committed_line import CommittedLine
from takeoff_dictation.domain.services.capture_session import (
    CaptureOutcome,
    CaptureSession,
    CaptureSessionClosedError,
)
from takeoff_dictation.domain.value_objects.field_spec import FieldSpec
from takeoff_dictation.domain.value_objects.transcript import Transcript
from takeoff_dictation.ports.record_sink import RecordSinkError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/capture", tags=["capture"])


# =============================================================================
# Request/Response Models
# =============================================================================


class StartCaptureRequest(BaseModel):
    """Request body for opening a capture session."""

    known_line_ids: list[str] = Field(default_factory=list)


class FragmentRequest(BaseModel):
    """One transcript fragment from the speech recognizer."""

    text: str
    is_final: bool = True
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class RecordStateResponse(BaseModel):
    """Live parser state for the UI."""

    context: str
    armed_field: str | None
    fields: dict[str, str | int | float]
    record_id: str | None
    preview_text: str


class CaptureSessionResponse(BaseModel):
    """Response for session creation and lookup."""

    session_id: str
    closed: bool
    committed_count: int
    state: RecordStateResponse


class CommittedLineResponse(BaseModel):
    """Committed line in API response."""

    record_id: str | None
    fields: dict[str, str | int | float]
    committed_at: str


class FragmentResponse(BaseModel):
    """Result of one fragment."""

    signal: str
    record_id: str | None = None
    should_process: bool
    notice: str | None = None
    committed: CommittedLineResponse | None = None
    state: RecordStateResponse


class FieldSchemaResponse(BaseModel):
    """One dictatable field, for UI labels and voice help."""

    name: str
    label: str
    field_type: str
    group: str
    aliases: list[str]
    number: int | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    error: ErrorDetail


# =============================================================================
# Helpers
# =============================================================================


def _state(session: CaptureSession) -> RecordStateResponse:
    record = session.record
    return RecordStateResponse(
        context=record.context.value,
        armed_field=record.armed_field,
        fields=dict(record.fields),
        record_id=record.record_id,
        preview_text=session.preview_text,
    )


def _session_response(session: CaptureSession) -> CaptureSessionResponse:
    return CaptureSessionResponse(
        session_id=session.id,
        closed=session.closed,
        committed_count=len(session.committed_lines),
        state=_state(session),
    )


def _committed_response(line: CommittedLine | None) -> CommittedLineResponse | None:
    if line is None:
        return None
    return CommittedLineResponse(**line.to_dict())


def _outcome_response(session: CaptureSession, outcome: CaptureOutcome | None) -> FragmentResponse:
    if outcome is None:
        # Interim fragment: preview only
        return FragmentResponse(signal="none", should_process=False, state=_state(session))
    return FragmentResponse(
        signal=outcome.signal.signal_type.value,
        record_id=outcome.signal.record_id,
        should_process=outcome.should_process,
        notice=outcome.notice,
        committed=_committed_response(outcome.committed),
        state=_state(session),
    )


def _field_response(spec: FieldSpec) -> FieldSchemaResponse:
    return FieldSchemaResponse(
        name=spec.name,
        label=spec.label,
        field_type=spec.field_type.value,
        group=spec.group.value,
        aliases=list(spec.aliases),
        number=spec.number,
    )


def _not_found(e: CaptureSessionNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": {
                "code": "SESSION_NOT_FOUND",
                "message": str(e),
            }
        },
    )


def _closed(e: CaptureSessionClosedError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "error": {
                "code": "SESSION_CLOSED",
                "message": str(e),
            }
        },
    )


# =============================================================================
# Routes
# =============================================================================


@router.get("/fields", response_model=list[FieldSchemaResponse])
async def list_fields(fields: FieldRegistryDep) -> list[FieldSchemaResponse]:
    """List every field that can be dictated, in workflow order."""
    return [_field_response(spec) for spec in fields.specs()]


@router.post(
    "/sessions",
    response_model=CaptureSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_capture(
    registry: SessionRegistryDep,
    request: StartCaptureRequest | None = None,
) -> CaptureSessionResponse:
    """Open a new hands-free capture session."""
    known = request.known_line_ids if request else []
    session = registry.create(known_line_ids=known)
    return _session_response(session)


@router.get(
    "/sessions/{session_id}",
    response_model=CaptureSessionResponse,
    responses={404: {"model": ErrorResponse, "description": "Session not found"}},
)
async def get_capture(session_id: str, registry: SessionRegistryDep) -> CaptureSessionResponse:
    """Get live parser state for a session."""
    try:
        session = registry.get(session_id)
    except CaptureSessionNotFoundError as e:
        raise _not_found(e) from None
    return _session_response(session)


@router.post(
    "/sessions/{session_id}/fragments",
    response_model=FragmentResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Session closed"},
        502: {"model": ErrorResponse, "description": "Record store unavailable"},
    },
)
async def post_fragment(
    session_id: str,
    request: FragmentRequest,
    registry: SessionRegistryDep,
    sink: RecordSinkDep,
) -> FragmentResponse:
    """Feed one transcript fragment to a session.

    Final fragments are interpreted; interim ones only update the preview.
    A committed line is handed to the record store before responding.
    """
    try:
        session = registry.get(session_id)
        outcome = session.handle(
            Transcript(text=request.text, is_final=request.is_final, confidence=request.confidence)
        )
    except CaptureSessionNotFoundError as e:
        raise _not_found(e) from None
    except CaptureSessionClosedError as e:
        raise _closed(e) from None

    if session.closed:
        registry.remove(session_id)

    if outcome is not None and outcome.committed is not None:
        try:
            await sink.emit(outcome.committed)
        except RecordSinkError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "error": {
                        "code": "RECORD_SINK_UNAVAILABLE",
                        "message": f"Line was committed but could not be stored: {e}",
                        "details": outcome.committed.to_dict(),
                    }
                },
            ) from None

    return _outcome_response(session, outcome)


@router.post(
    "/sessions/{session_id}/stop",
    response_model=FragmentResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Session closed"},
    },
)
async def stop_capture(session_id: str, registry: SessionRegistryDep) -> FragmentResponse:
    """Stop capture. Pending preview text gets one best-effort parse; nothing is committed."""
    try:
        session = registry.get(session_id)
        outcome = session.stop()
    except CaptureSessionNotFoundError as e:
        raise _not_found(e) from None
    except CaptureSessionClosedError as e:
        raise _closed(e) from None

    registry.remove(session_id)
    return _outcome_response(session, outcome)
