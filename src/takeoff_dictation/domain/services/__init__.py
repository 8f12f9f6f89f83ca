"""Domain services - dictation parsing and capture orchestration."""

from .bare_value_inference import BareValueInference
from .capture_session import (
    CaptureOutcome,
    CaptureSession,
    CaptureSessionClosedError,
)
from .command_recognizer import CommandRecognizer, RecognizedCommand
from .context_tracker import ContextTracker
from .field_registry import (
    DEFAULT_FIELD_SPECS,
    PLATE_FIELD_NUMBERS,
    AliasMatch,
    FieldRegistry,
)
from .interpreter import DictationInterpreter, InterpretResult
from .line_id_allocator import LineIdAllocator, extract_line_number
from .segmenter import SegmentCursor, UtteranceSegmenter
from .value_normalizer import ValueNormalizer, parse_duration_hours, parse_fractional

__all__ = [
    "AliasMatch",
    "BareValueInference",
    "CaptureOutcome",
    "CaptureSession",
    "CaptureSessionClosedError",
    "CommandRecognizer",
    "ContextTracker",
    "DEFAULT_FIELD_SPECS",
    "DictationInterpreter",
    "FieldRegistry",
    "InterpretResult",
    "LineIdAllocator",
    "PLATE_FIELD_NUMBERS",
    "RecognizedCommand",
    "SegmentCursor",
    "UtteranceSegmenter",
    "ValueNormalizer",
    "extract_line_number",
    "parse_duration_hours",
    "parse_fractional",
]
