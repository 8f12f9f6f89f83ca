"""Dictation context value object."""

from enum import StrEnum


class DictationContext(StrEnum):
    """Which field group the speaker is currently dictating.

    UNSET becomes MATERIAL the first time field content arrives.
    """

    UNSET = "unset"
    MATERIAL = "material"
    LABOR = "labor"

    def is_set(self) -> bool:
        return self is not DictationContext.UNSET
