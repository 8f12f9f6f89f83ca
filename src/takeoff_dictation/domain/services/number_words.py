"""
Spoken Number Conversion.

Speech recognizers often emit numbers as words ("twenty five", "three
eighths"). These helpers rewrite such runs into digits so the value
normalizer only has to deal with numeric tokens.
"""

import re
from collections.abc import Mapping

from takeoff_dictation.domain.constants import FRACTION_WORDS, TENS_WORDS, UNIT_WORDS

_HUNDRED = "hundred"


def _word_run_pattern(units: Mapping[str, int], tens: Mapping[str, int]) -> re.Pattern[str]:
    words = sorted([*units, *tens, _HUNDRED], key=len, reverse=True)
    alternation = "|".join(re.escape(w) for w in words)
    return re.compile(rf"\b(?:{alternation})(?:[\s-]+(?:{alternation}))*\b", re.IGNORECASE)


_WORD_RUN = _word_run_pattern(UNIT_WORDS, TENS_WORDS)

_fraction_alternation = "|".join(sorted(FRACTION_WORDS, key=len, reverse=True))
_COUNTED_FRACTION = re.compile(rf"\b(\d+)\s+({_fraction_alternation})\b", re.IGNORECASE)
_BARE_FRACTION = re.compile(rf"\b(?:an?\s+)?({_fraction_alternation})\b", re.IGNORECASE)
_AND_FRACTION = re.compile(r"\b(\d+)\s+and\s+(\d+/\d+)\b", re.IGNORECASE)


def _run_to_numbers(run: str) -> list[int]:
    """Split a run of number words into the numbers it speaks.

    "twenty five" -> [25], "one two" -> [1, 2], "three hundred ten" -> [310]
    """
    numbers: list[int] = []
    current: int | None = None
    last_kind = ""

    for token in re.split(r"[\s-]+", run.lower()):
        if token == _HUNDRED:
            current = (current or 1) * 100
            last_kind = "hundred"
            continue

        if token in TENS_WORDS:
            value, kind = TENS_WORDS[token], "tens"
            # "twenty thirty" starts a new number; "hundred twenty" continues
            starts_new = current is not None and last_kind != "hundred"
        else:
            value, kind = UNIT_WORDS[token], "unit"
            starts_new = current is not None and last_kind in ("unit",)

        if starts_new:
            numbers.append(current)
            current = None
        current = (current or 0) + value
        last_kind = kind

    if current is not None:
        numbers.append(current)
    return numbers


def replace_number_words(text: str) -> str:
    """Rewrite spoken number words as digits.

    Args:
        text: Raw spoken text

    Returns:
        Text with every run of number words replaced by digits
        (space-separated when the run speaks more than one number)
    """

    def _sub(match: re.Match[str]) -> str:
        return " ".join(str(n) for n in _run_to_numbers(match.group(0)))

    return _WORD_RUN.sub(_sub, text)


def replace_fraction_words(text: str) -> str:
    """Rewrite spoken fractions as n/d after number words are digits.

    "3 eighths" -> "3/8", "a half" -> "1/2", "1 and 1/2" -> "1 1/2"
    """
    text = _COUNTED_FRACTION.sub(lambda m: f"{m.group(1)}/{FRACTION_WORDS[m.group(2).lower()]}", text)
    text = _BARE_FRACTION.sub(lambda m: f"1/{FRACTION_WORDS[m.group(1).lower()]}", text)
    return _AND_FRACTION.sub(r"\1 \2", text)


def to_numeric_text(text: str) -> str:
    """Apply every spoken-number rewrite."""
    return replace_fraction_words(replace_number_words(text))


_LEADING_DIGITS = re.compile(r"(\d+)\b")


def split_leading_number(text: str) -> tuple[int, str] | None:
    """Read the number a text starts with, spoken or in digits.

    Digit-by-digit speech is concatenated: "one two" -> 12.

    Returns:
        (number, rest of text) or None if the text does not start with a number
    """
    stripped = text.lstrip()
    match = _LEADING_DIGITS.match(stripped)
    if match:
        return int(match.group(1)), stripped[match.end() :]
    match = _WORD_RUN.match(stripped)
    if match:
        digits = "".join(str(n) for n in _run_to_numbers(match.group(0)))
        return int(digits), stripped[match.end() :]
    return None
