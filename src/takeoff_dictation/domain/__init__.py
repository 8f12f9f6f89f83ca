# Domain layer - Dictation parsing (NO external dependencies)

from .entities import CommittedLine, PartialRecord
from .value_objects import (
    DictationContext,
    FieldSpec,
    FieldType,
    LifecycleSignal,
    SignalType,
    Transcript,
)

__all__ = [
    "CommittedLine",
    "DictationContext",
    "FieldSpec",
    "FieldType",
    "LifecycleSignal",
    "PartialRecord",
    "SignalType",
    "Transcript",
]
