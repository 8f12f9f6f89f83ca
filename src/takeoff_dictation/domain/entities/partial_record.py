"""PartialRecord entity - the in-progress line record built across utterances."""

from dataclasses import dataclass, field, replace
from typing import Any, Self, TypedDict

from takeoff_dictation.domain.value_objects.dictation_context import DictationContext

FieldValue = str | int | float


class PartialRecordDict(TypedDict):
    """PartialRecord structure for serialization."""

    context: str
    armed_field: str | None
    fields: dict[str, Any]
    record_id: str | None
    complete: bool


@dataclass
class PartialRecord:
    """Accumulator for one capture session.

    Exclusively owned by a single CaptureSession; no locking is needed.

    Attributes:
        context: Field group currently being dictated
        armed_field: Field named without a value, waiting for the next input.
            One-shot: naming another field replaces it.
        fields: Canonical field -> normalized value. A missing key means
            "not yet provided", never zero.
        record_id: External record future commits target (e.g. "L3")
        complete: Set on commit, just before hand-off
    """

    context: DictationContext = DictationContext.UNSET
    armed_field: str | None = None
    fields: dict[str, FieldValue] = field(default_factory=dict)
    record_id: str | None = None
    complete: bool = False

    @classmethod
    def empty(cls, record_id: str | None = None) -> Self:
        """Create a fresh accumulator, optionally already addressing a record."""
        return cls(record_id=record_id)

    def copy(self) -> Self:
        """Independent copy; the fields mapping is not shared."""
        return replace(self, fields=dict(self.fields))

    def has_content(self) -> bool:
        """True if a commit would be actionable."""
        return bool(self.fields) or self.record_id is not None

    def set_field(self, name: str, value: FieldValue) -> None:
        self.fields[name] = value

    def arm(self, name: str) -> None:
        self.armed_field = name

    def disarm(self) -> None:
        self.armed_field = None

    def ensure_context(self) -> None:
        """Default an unset context to MATERIAL."""
        if not self.context.is_set():
            self.context = DictationContext.MATERIAL

    def to_dict(self) -> PartialRecordDict:
        """Convert record to dictionary for state serialization."""
        return {
            "context": self.context.value,
            "armed_field": self.armed_field,
            "fields": dict(self.fields),
            "record_id": self.record_id,
            "complete": self.complete,
        }
