"""Voice transcription value objects."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Transcript:
    """One fragment emitted by the speech-recognition source.

    Interim fragments (is_final=False) are display-only.
    """

    text: str
    is_final: bool
    confidence: float = 1.0
