"""Port interface for the committed-line persistence collaborator."""

from typing import Protocol, runtime_checkable

from takeoff_dictation.domain.entities.committed_line import CommittedLine


class RecordSinkError(Exception):
    """Raised when a committed line could not be handed off."""

    def __init__(self, message: str, record_id: str | None = None):
        self.record_id = record_id
        super().__init__(message)


@runtime_checkable
class RecordSink(Protocol):
    """Port for committed lines.

    Receives the finished field map on every actionable commit. Schema
    defaults, derived values and row placement happen on the other side.
    """

    async def emit(self, line: CommittedLine) -> None:
        """Hand off one committed line.

        Args:
            line: Committed field map with its target record id (if any)

        Raises:
            RecordSinkError: If the line could not be delivered
        """
        ...

    async def close(self) -> None:
        """Release any held resources."""
        ...
