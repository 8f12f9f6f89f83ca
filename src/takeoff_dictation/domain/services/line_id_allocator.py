"""Sequential line id allocation (L1, L2, L3, ...)."""

import re
from collections.abc import Iterable

from takeoff_dictation.domain.constants import DEFAULT_LINE_ID_PREFIX

_TRAILING_NUMBER = re.compile(r"(\d+)\s*$")


def extract_line_number(line_id: str) -> int:
    """Numeric part of a line id.

    L1 -> 1, L10 -> 10, L1-L10 -> 10 (copies rank by their location)
    """
    last_part = line_id.split("-")[-1]
    match = _TRAILING_NUMBER.search(last_part)
    return int(match.group(1)) if match else 0


class LineIdAllocator:
    """Hands out the next free sequential line id.

    Tracks every id the capture session has seen (addressed, committed or
    allocated) so a new line never reuses one.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_LINE_ID_PREFIX,
        known_ids: Iterable[str] = (),
    ) -> None:
        self.prefix = prefix
        self._known: set[str] = set()
        for line_id in known_ids:
            self.register(line_id)

    def register(self, line_id: str | None) -> None:
        if line_id:
            self._known.add(line_id)

    def is_known(self, line_id: str) -> bool:
        return line_id in self._known

    def next_id(self) -> str:
        """Allocate the id after the highest one seen, and reserve it."""
        highest = max((extract_line_number(i) for i in self._known), default=0)
        line_id = f"{self.prefix}{highest + 1}"
        self.register(line_id)
        return line_id
