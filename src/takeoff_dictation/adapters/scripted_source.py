"""Transcript source that replays a fixed list of fragments."""

from collections.abc import AsyncIterator, Iterable

from takeoff_dictation.domain.value_objects.transcript import Transcript


class ScriptedTranscriptSource:
    """Replays fragments in order; plain strings become final fragments."""

    def __init__(self, fragments: Iterable[Transcript | str]) -> None:
        self._fragments = [
            f if isinstance(f, Transcript) else Transcript(text=f, is_final=True)
            for f in fragments
        ]

    async def fragments(self) -> AsyncIterator[Transcript]:
        for fragment in self._fragments:
            yield fragment
