"""
Dictation Interpreter.

Turns one final transcript fragment plus the current PartialRecord into
an updated PartialRecord and a lifecycle signal:

    CommandRecognizer -> (command) signal, maybe touch record
                      -> (no command) ContextTracker -> UtteranceSegmenter

The interpreter works on a copy of the record and never raises on
malformed input; an utterance it cannot read leaves the record as it was.
"""

import logging
from dataclasses import dataclass

from takeoff_dictation.domain.constants import DEFAULT_LINE_ID_PREFIX
from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.services.bare_value_inference import BareValueInference
from takeoff_dictation.domain.services.command_recognizer import CommandRecognizer
from takeoff_dictation.domain.services.context_tracker import ContextTracker
from takeoff_dictation.domain.services.field_registry import FieldRegistry
from takeoff_dictation.domain.services.segmenter import SegmentCursor, UtteranceSegmenter
from takeoff_dictation.domain.services.value_normalizer import ValueNormalizer
from takeoff_dictation.domain.value_objects.lifecycle_signal import LifecycleSignal, SignalType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterpretResult:
    """Result of interpreting one utterance (immutable value object).

    Attributes:
        record: Updated accumulator (a new object; the input is untouched)
        signal: Lifecycle signal recognized before field parsing
        should_process: True if the signal is actionable. A commit on an
            empty record is recognized but not actionable.
        notice: Informational message for the caller (e.g. text spoken
            alongside "stop recording" that was not parsed)
        cursor: Segment cursor after field parsing, None if no field
            parsing happened
    """

    record: PartialRecord
    signal: LifecycleSignal
    should_process: bool
    notice: str | None = None
    cursor: SegmentCursor | None = None


class DictationInterpreter:
    """
    Stateless interpreter for field dictation.

    All vocabulary lives in the injected collaborators; two interpreters
    built from different registries do not share any state.
    """

    def __init__(
        self,
        registry: FieldRegistry | None = None,
        normalizer: ValueNormalizer | None = None,
        commands: CommandRecognizer | None = None,
        context_tracker: ContextTracker | None = None,
        line_id_prefix: str = DEFAULT_LINE_ID_PREFIX,
    ) -> None:
        self.registry = registry or FieldRegistry()
        self.normalizer = normalizer or ValueNormalizer()
        self.commands = commands or CommandRecognizer(line_id_prefix=line_id_prefix)
        self.context_tracker = context_tracker or ContextTracker()
        self.segmenter = UtteranceSegmenter(
            self.registry,
            self.normalizer,
            BareValueInference(self.registry),
        )

    def interpret(self, utterance: str, record: PartialRecord) -> InterpretResult:
        """
        Interpret one final utterance.

        Args:
            utterance: Final transcript fragment, as transcribed
            record: Current accumulator (not modified)

        Returns:
            InterpretResult with the updated record copy and signal
        """
        working = record.copy()
        command = self.commands.recognize(utterance, working)
        signal = command.signal

        if signal.signal_type is SignalType.STOP_CAPTURE:
            notice = None
            if command.unconsumed_text:
                notice = f"Ignored text spoken with stop command: {command.unconsumed_text!r}"
                logger.info(notice)
            return InterpretResult(working, signal, command.should_process, notice=notice)

        if signal.signal_type is SignalType.COMMIT:
            if command.should_process:
                working.complete = True
            return InterpretResult(working, signal, command.should_process)

        if signal.signal_type is SignalType.NEW_RECORD:
            return InterpretResult(working, signal, command.should_process)

        if signal.signal_type is SignalType.ADDRESS_RECORD:
            working.record_id = signal.record_id
            logger.info(f"Addressing record {signal.record_id}")

        cursor = self._parse_fields(command.remainder or "", working)
        return InterpretResult(working, signal, command.should_process, cursor=cursor)

    def _parse_fields(self, text: str, record: PartialRecord) -> SegmentCursor | None:
        if not text.strip():
            return None
        if self.context_tracker.apply(text, record):
            return None

        record.ensure_context()
        return self.segmenter.process(text, record)
