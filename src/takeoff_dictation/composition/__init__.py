"""
Composition Root.

Centralized dependency wiring for the application.
All factory functions that instantiate adapters belong here to maintain
hexagonal architecture (domain NEVER imports from adapters).
"""

import logging

from takeoff_dictation.adapters.http_sink import HttpRecordSink
from takeoff_dictation.adapters.memory_sink import InMemoryRecordSink
from takeoff_dictation.config import (
    get_line_id_prefix,
    get_record_sink_max_attempts,
    get_record_sink_timeout,
    get_record_sink_type,
    get_record_sink_url,
)
from takeoff_dictation.domain.services.capture_session import CaptureSession
from takeoff_dictation.domain.services.interpreter import DictationInterpreter
from takeoff_dictation.domain.services.line_id_allocator import LineIdAllocator
from takeoff_dictation.infrastructure.retry import RetryPolicy
from takeoff_dictation.ports.record_sink import RecordSink

logger = logging.getLogger(__name__)

# Module-level interpreter shared by every session (it holds no session state)
_interpreter: DictationInterpreter | None = None


def get_interpreter() -> DictationInterpreter:
    """Get or create the shared interpreter."""
    global _interpreter
    if _interpreter is None:
        _interpreter = create_interpreter()
    return _interpreter


def create_interpreter(line_id_prefix: str | None = None) -> DictationInterpreter:
    """Create a DictationInterpreter with the default vocabulary.

    Args:
        line_id_prefix: Record id prefix; LINE_ID_PREFIX when omitted
    """
    return DictationInterpreter(line_id_prefix=line_id_prefix or get_line_id_prefix())


def create_record_sink(sink_type: str | None = None) -> RecordSink:
    """Create the configured RecordSink.

    Raises:
        ValueError: If RECORD_SINK names an unknown sink
    """
    sink_type = sink_type or get_record_sink_type()
    if sink_type == "memory":
        logger.info("Using in-memory record sink")
        return InMemoryRecordSink()
    if sink_type == "http":
        url = get_record_sink_url()
        logger.info(f"Using HTTP record sink: {url}")
        return HttpRecordSink(
            url=url,
            timeout=get_record_sink_timeout(),
            retry_policy=RetryPolicy(max_attempts=get_record_sink_max_attempts()),
        )
    raise ValueError(f"Invalid RECORD_SINK: '{sink_type}'. Valid options: 'memory', 'http'")


def create_capture_session(
    interpreter: DictationInterpreter | None = None,
    known_line_ids: tuple[str, ...] = (),
) -> CaptureSession:
    """Create a CaptureSession with its own accumulator and id allocator.

    Args:
        interpreter: Interpreter to use; the shared one when omitted
        known_line_ids: Line ids that already exist in the takeoff
    """
    interpreter = interpreter or get_interpreter()
    allocator = LineIdAllocator(prefix=interpreter.commands.line_id_prefix, known_ids=known_line_ids)
    return CaptureSession(interpreter=interpreter, allocator=allocator)
