"""FastAPI dependency injection module.

Provides singleton instances of services for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends

from takeoff_dictation.composition import (
    create_capture_session,
    create_record_sink,
    get_interpreter,
)
from takeoff_dictation.domain.services.capture_session import CaptureSession
from takeoff_dictation.domain.services.field_registry import FieldRegistry
from takeoff_dictation.ports.record_sink import RecordSink

logger = logging.getLogger(__name__)


class CaptureSessionNotFoundError(Exception):
    """Raised when no open capture session has the given id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Capture session {session_id} not found")


class CaptureSessionRegistry:
    """Open capture sessions by id.

    One process, one event loop: CaptureSession.handle never awaits, so a
    fragment is always applied in full before the next one is read.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, CaptureSession] = {}

    def create(self, known_line_ids: Iterable[str] = ()) -> CaptureSession:
        session = create_capture_session(known_line_ids=tuple(known_line_ids))
        self._sessions[session.id] = session
        logger.info(f"Opened capture session {session.id}")
        return session

    def get(self, session_id: str) -> CaptureSession:
        """Get an open session.

        Raises:
            CaptureSessionNotFoundError: If the id is unknown or already removed
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise CaptureSessionNotFoundError(session_id)
        return session

    def remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def close_all(self) -> None:
        for session in list(self._sessions.values()):
            if not session.closed:
                session.stop()
        self._sessions.clear()


# Singletons stored at module level
_record_sink: RecordSink | None = None
_session_registry: CaptureSessionRegistry | None = None


async def init_dependencies() -> None:
    """Initialize all singleton dependencies.

    Called during FastAPI lifespan startup.
    """
    global _record_sink, _session_registry

    _record_sink = create_record_sink()
    _session_registry = CaptureSessionRegistry()


async def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    Called during FastAPI lifespan shutdown.
    Stops open sessions and closes connections.
    """
    global _record_sink, _session_registry

    if _session_registry is not None:
        if len(_session_registry):
            logger.warning(f"Stopping {len(_session_registry)} open capture sessions")
        _session_registry.close_all()

    if _record_sink is not None:
        await _record_sink.close()


def get_record_sink() -> RecordSink:
    """Dependency: Get RecordSink instance."""
    if _record_sink is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _record_sink


def get_session_registry() -> CaptureSessionRegistry:
    """Dependency: Get CaptureSessionRegistry instance."""
    if _session_registry is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _session_registry


def get_field_registry() -> FieldRegistry:
    """Dependency: Get the FieldRegistry the shared interpreter parses with."""
    return get_interpreter().registry


# Type aliases for dependency injection
RecordSinkDep = Annotated[RecordSink, Depends(get_record_sink)]
SessionRegistryDep = Annotated[CaptureSessionRegistry, Depends(get_session_registry)]
FieldRegistryDep = Annotated[FieldRegistry, Depends(get_field_registry)]
