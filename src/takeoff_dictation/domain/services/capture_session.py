"""Capture session - owns the accumulator for one speaker's dictation."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from takeoff_dictation.domain.entities.committed_line import CommittedLine
from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.services.interpreter import DictationInterpreter, InterpretResult
from takeoff_dictation.domain.services.line_id_allocator import LineIdAllocator
from takeoff_dictation.domain.value_objects.lifecycle_signal import LifecycleSignal, SignalType
from takeoff_dictation.domain.value_objects.transcript import Transcript

logger = logging.getLogger(__name__)


class CaptureSessionClosedError(Exception):
    """Raised when a fragment arrives after the session was stopped."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Capture session {session_id} is closed")


@dataclass(frozen=True)
class CaptureOutcome:
    """What one final fragment did to the session.

    Attributes:
        signal: Lifecycle signal of the utterance
        should_process: True if the signal was acted on
        record: Snapshot of the accumulator after the utterance
        committed: The finished line, set only for an actionable commit
        notice: Informational message (never an error)
    """

    signal: LifecycleSignal
    should_process: bool
    record: PartialRecord
    committed: CommittedLine | None = None
    notice: str | None = None


@dataclass
class CaptureSession:
    """
    One hands-free capture session.

    Exclusively owns a single PartialRecord. Fragments must be delivered
    one at a time in arrival order; only final fragments reach the
    interpreter, interim ones only update the live preview.

    Attributes:
        interpreter: Stateless dictation interpreter
        allocator: Line id allocator for new records
        id: Unique session identifier (UUID v4)
        record: The live accumulator
        preview_text: Latest interim fragment, for display only
        committed_lines: Lines committed during this session, oldest first
        closed: True after StopCapture
    """

    interpreter: DictationInterpreter
    allocator: LineIdAllocator = field(default_factory=LineIdAllocator)
    id: str = field(default_factory=lambda: str(uuid4()))
    record: PartialRecord = field(default_factory=PartialRecord.empty)
    preview_text: str = ""
    committed_lines: list[CommittedLine] = field(default_factory=list)
    closed: bool = False
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def handle(self, fragment: Transcript) -> CaptureOutcome | None:
        """
        Feed one transcript fragment.

        Args:
            fragment: Fragment from the speech-recognition source

        Returns:
            CaptureOutcome for a final fragment, None for an interim one

        Raises:
            CaptureSessionClosedError: If the session was already stopped
        """
        self._ensure_open()

        if not fragment.is_final:
            self.preview_text = fragment.text
            return None

        self.preview_text = ""
        result = self.interpreter.interpret(fragment.text, self.record)
        return self._apply(result)

    def stop(self) -> CaptureOutcome:
        """
        Stop capture without a spoken command.

        Pending interim text gets one best-effort field parse; lifecycle
        commands in it are ignored, so nothing is committed.
        """
        self._ensure_open()

        notice = None
        if self.preview_text.strip():
            pending = self.preview_text
            result = self.interpreter.interpret(pending, self.record)
            if result.signal.is_none:
                self.record = result.record
            else:
                notice = f"Ignored {result.signal} in pending text: {pending!r}"
                logger.info(notice)
            self.preview_text = ""

        self.closed = True
        logger.info(f"Capture session {self.id} stopped")
        return CaptureOutcome(
            signal=LifecycleSignal.stop_capture(),
            should_process=True,
            record=self.record.copy(),
            notice=notice,
        )

    async def drain(self, source: AsyncIterator[Transcript]) -> AsyncIterator[CaptureOutcome]:
        """Consume a transcript stream in arrival order until it ends or stops capture."""
        async for fragment in source:
            outcome = self.handle(fragment)
            if outcome is not None:
                yield outcome
            if self.closed:
                break

    def _apply(self, result: InterpretResult) -> CaptureOutcome:
        signal_type = result.signal.signal_type
        committed = None

        if signal_type is SignalType.COMMIT:
            if result.should_process:
                committed = CommittedLine.from_record(result.record)
                self.committed_lines.append(committed)
                self.allocator.register(committed.record_id)
                logger.info(
                    f"Committed line {committed.record_id or '(new)'} "
                    f"with {len(committed.fields)} fields"
                )
                self.record = PartialRecord.empty()
        elif signal_type is SignalType.NEW_RECORD:
            if self.record.fields:
                logger.warning(
                    f"Discarding {len(self.record.fields)} uncommitted fields for new line"
                )
            line_id = self.allocator.next_id()
            logger.info(f"Started new line {line_id}")
            self.record = PartialRecord.empty(record_id=line_id)
        elif signal_type is SignalType.STOP_CAPTURE:
            self.closed = True
            logger.info(f"Capture session {self.id} stopped by voice command")
        else:
            if signal_type is SignalType.ADDRESS_RECORD:
                self.allocator.register(result.signal.record_id)
            self.record = result.record

        return CaptureOutcome(
            signal=result.signal,
            should_process=result.should_process,
            record=self.record.copy(),
            committed=committed,
            notice=result.notice,
        )

    def _ensure_open(self) -> None:
        if self.closed:
            raise CaptureSessionClosedError(self.id)
