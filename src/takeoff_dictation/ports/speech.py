"""Port interface for the speech-recognition transcript source."""

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from takeoff_dictation.domain.value_objects.transcript import Transcript


@runtime_checkable
class TranscriptSource(Protocol):
    """Speech-to-text port interface."""

    def fragments(self) -> AsyncIterator[Transcript]:
        """
        Stream transcript fragments in arrival order.

        Yields interim fragments (is_final=False) for live preview and
        final fragments (is_final=True) for interpretation.
        """
        ...
