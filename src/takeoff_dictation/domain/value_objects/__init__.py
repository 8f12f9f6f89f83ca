"""Domain value objects - immutable objects without identity."""

from .dictation_context import DictationContext
from .field_spec import FieldAlias, FieldGroup, FieldSpec, FieldType
from .lifecycle_signal import LifecycleSignal, SignalType
from .transcript import Transcript

__all__ = [
    "DictationContext",
    "FieldAlias",
    "FieldGroup",
    "FieldSpec",
    "FieldType",
    "LifecycleSignal",
    "SignalType",
    "Transcript",
]
