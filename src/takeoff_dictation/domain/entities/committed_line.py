"""CommittedLine entity handed to the persistence collaborator on commit."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TypedDict

from takeoff_dictation.domain.entities.partial_record import FieldValue, PartialRecord


class CommittedLineDict(TypedDict):
    """CommittedLine structure for serialization."""

    record_id: str | None
    fields: dict[str, Any]
    committed_at: str


@dataclass(frozen=True)
class CommittedLine:
    """Finished field map for one line record.

    Carries only what was dictated. Schema defaults and derived values
    (weights, surface areas, labor totals) are the record builder's job.
    """

    record_id: str | None
    fields: dict[str, FieldValue]
    committed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_record(cls, record: PartialRecord) -> "CommittedLine":
        return cls(record_id=record.record_id, fields=dict(record.fields))

    def to_dict(self) -> CommittedLineDict:
        return {
            "record_id": self.record_id,
            "fields": dict(self.fields),
            "committed_at": self.committed_at.isoformat(),
        }
