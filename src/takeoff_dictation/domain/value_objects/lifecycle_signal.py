"""Lifecycle signal value object."""

from dataclasses import dataclass
from enum import StrEnum


class SignalType(StrEnum):
    """Non-field control outcomes of parsing an utterance."""

    NONE = "none"
    COMMIT = "commit"
    NEW_RECORD = "new_record"
    ADDRESS_RECORD = "address_record"
    STOP_CAPTURE = "stop_capture"


@dataclass(frozen=True)
class LifecycleSignal:
    """At most one per utterance (immutable value object).

    record_id is only set for ADDRESS_RECORD.
    """

    signal_type: SignalType = SignalType.NONE
    record_id: str | None = None

    @classmethod
    def none(cls) -> "LifecycleSignal":
        return cls(SignalType.NONE)

    @classmethod
    def commit(cls) -> "LifecycleSignal":
        return cls(SignalType.COMMIT)

    @classmethod
    def new_record(cls) -> "LifecycleSignal":
        return cls(SignalType.NEW_RECORD)

    @classmethod
    def address_record(cls, record_id: str) -> "LifecycleSignal":
        return cls(SignalType.ADDRESS_RECORD, record_id)

    @classmethod
    def stop_capture(cls) -> "LifecycleSignal":
        return cls(SignalType.STOP_CAPTURE)

    @property
    def is_none(self) -> bool:
        return self.signal_type is SignalType.NONE

    def __str__(self) -> str:
        if self.record_id:
            return f"{self.signal_type.value}({self.record_id})"
        return self.signal_type.value
