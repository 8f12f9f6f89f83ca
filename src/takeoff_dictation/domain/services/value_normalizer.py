"""
Value Normalizer.

Converts the raw spoken value for a field into its canonical value.
Dispatch is by the field's FieldType, never by field name.

Every normalizer returns None when the text cannot be read as a value of
its type. Callers leave the field absent in that case, so "not provided"
stays distinguishable from an explicit zero.
"""

import logging
import re
from collections.abc import Callable

from takeoff_dictation.domain.constants import (
    COATING_VOCABULARY,
    DESIGNATION_FILLER_WORDS,
    FRACTION_WORDS,
    NO_COATING,
)
from takeoff_dictation.domain.entities.partial_record import FieldValue
from takeoff_dictation.domain.services.number_words import to_numeric_text
from takeoff_dictation.domain.value_objects.field_spec import FieldSpec, FieldType

logger = logging.getLogger(__name__)

_NUMBER = r"(?:\d+(?:\.\d+)?|\.\d+)"
_FRACTIONAL = r"\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?"

_INTEGER_TOKEN = re.compile(r"\d+")
_DECIMAL_TOKEN = re.compile(rf"({_FRACTIONAL})")
_BARE_NUMBER = re.compile(rf"\s*({_NUMBER})\s*")

_FEET = re.compile(rf"({_NUMBER})\s*(?:feet|foot|ft\b|')", re.IGNORECASE)
_INCHES = re.compile(rf"({_NUMBER})\s*(?:inches|inch|in\b|\")", re.IGNORECASE)
_THICKNESS = re.compile(rf"({_FRACTIONAL})\s*(?:inches|inch|in\b|\")", re.IGNORECASE)

_DURATION_VALUE = rf"(?:{_FRACTIONAL}|\.\d+)"
_HOUR_UNITS = r"(?:hours|hour|hrs|hr|h)(?![a-z])"
_MINUTE_UNITS = r"(?:minutes|minute|mins|min|m)(?![a-z])"
_HOURS = re.compile(rf"({_DURATION_VALUE})\s*{_HOUR_UNITS}", re.IGNORECASE)
_MINUTES = re.compile(rf"({_DURATION_VALUE})\s*{_MINUTE_UNITS}", re.IGNORECASE)
_BARE_DURATION = re.compile(_DURATION_VALUE)
_ARTICLE_UNIT = re.compile(r"\ban?\s+(hour|minute)\b", re.IGNORECASE)
# "half an hour", "three quarters of an hour" -> "half hour", "three quarters hour"
_fraction_alternation = "|".join(sorted(FRACTION_WORDS, key=len, reverse=True))
_FRACTION_ARTICLE = re.compile(
    rf"\b({_fraction_alternation})\s+(?:of\s+)?an?\s+(hour|minute)\b",
    re.IGNORECASE,
)
# "1 hour and 1/2" -> "1 1/2 hour"
_UNIT_AND_FRACTION = re.compile(
    rf"\b(\d+)\s*({_HOUR_UNITS}|{_MINUTE_UNITS})\s+and\s+(\d+/\d+)(?!\s*(?:{_HOUR_UNITS}|{_MINUTE_UNITS}))",
    re.IGNORECASE,
)

_SPOKEN_BY = re.compile(r"\s+by\s+", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def parse_fractional(token: str) -> float:
    """Parse "3", "0.5", "3/8" or "1 1/2" into a float.

    Raises:
        ValueError: If token is not one of those forms
    """
    token = token.strip()
    whole = 0.0
    if " " in token:
        whole_text, token = token.split(None, 1)
        whole = float(whole_text)
    if "/" in token:
        num, den = token.split("/")
        if float(den) == 0:
            raise ValueError(f"Zero denominator in {token!r}")
        return whole + float(num) / float(den)
    return whole + float(token)


def _as_number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


def parse_duration_hours(text: str) -> float | None:
    """Parse a spoken labor duration into decimal hours.

    "1 hour 15 minutes" -> 1.25, "45 minutes" -> 0.75, "an hour and a half"
    -> 1.5. With no hour or minute unit present, a bare number is read as
    whole hours ("2" -> 2.0).

    Returns:
        Decimal hours, or None if the text holds no number at all
    """
    text = _FRACTION_ARTICLE.sub(r"\1 \2", text)
    numeric = to_numeric_text(_ARTICLE_UNIT.sub(r"1 \1", text))
    numeric = _UNIT_AND_FRACTION.sub(r"\1 \3 \2", numeric)

    try:
        hours = [parse_fractional(m.group(1)) for m in _HOURS.finditer(numeric)]
        minutes = [parse_fractional(m.group(1)) for m in _MINUTES.finditer(numeric)]
        if hours or minutes:
            return round(sum(hours) + sum(minutes) / 60, 4)

        # No unit at all: a bare number means hours
        match = _BARE_DURATION.search(numeric)
        if match:
            return parse_fractional(match.group(0))
    except ValueError:
        return None
    return None


class ValueNormalizer:
    """Per-type conversion of raw spoken text into canonical values."""

    def __init__(
        self,
        coating_vocabulary: tuple[tuple[str, str], ...] = COATING_VOCABULARY,
        designation_filler_words: frozenset[str] = DESIGNATION_FILLER_WORDS,
    ) -> None:
        self._coating_vocabulary = coating_vocabulary
        self._filler = re.compile(
            r"\b(?:" + "|".join(sorted(designation_filler_words)) + r")\b",
            re.IGNORECASE,
        )
        self._dispatch: dict[FieldType, Callable[[FieldSpec, str], FieldValue | None]] = {
            FieldType.CATEGORICAL: self._categorical,
            FieldType.INTEGER: self._integer,
            FieldType.DECIMAL: self._decimal,
            FieldType.FEET: self._feet,
            FieldType.INCHES: self._inches,
            FieldType.THICKNESS: self._thickness,
            FieldType.DURATION: self._duration,
            FieldType.TEXT: self._text,
            FieldType.DESIGNATION: self._designation,
            FieldType.COATING: self._coating,
        }

    def normalize(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        """
        Normalize a raw spoken value for a field.

        Args:
            spec: Field being filled (its FieldType selects the normalizer)
            raw: Spoken value text, case as transcribed

        Returns:
            Canonical value, or None if the text is not a value of this type
        """
        try:
            value = self._dispatch[spec.field_type](spec, raw.strip())
        except ValueError:
            value = None
        if value is None:
            logger.debug(f"Could not read {raw!r} as {spec.field_type.value} for {spec.name}")
        return value

    def _categorical(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        if not raw:
            return None
        key = _WHITESPACE.sub(" ", raw.lower())
        return spec.synonyms.get(key, raw.upper())

    def _integer(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        match = _INTEGER_TOKEN.search(to_numeric_text(raw))
        return int(match.group(0)) if match else None

    def _decimal(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        match = _DECIMAL_TOKEN.search(to_numeric_text(raw))
        return _as_number(parse_fractional(match.group(1))) if match else None

    def _with_unit(self, pattern: re.Pattern[str], raw: str) -> FieldValue | None:
        numeric = to_numeric_text(raw)
        match = pattern.search(numeric)
        if match:
            return _as_number(float(match.group(1)))
        # A value that is nothing but a number is taken in the field's unit
        bare = _BARE_NUMBER.fullmatch(numeric)
        return _as_number(float(bare.group(1))) if bare else None

    def _feet(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        return self._with_unit(_FEET, raw)

    def _inches(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        return self._with_unit(_INCHES, raw)

    def _thickness(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        # Inch marker required; a unit-less number is too easy to misread
        match = _THICKNESS.search(to_numeric_text(raw))
        return parse_fractional(match.group(1)) if match else None

    def _duration(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        return parse_duration_hours(raw)

    def _text(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        return raw or None

    def _designation(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        text = _SPOKEN_BY.sub("x", to_numeric_text(raw))
        text = _WHITESPACE.sub("", self._filler.sub("", text))
        return text.upper() or None

    def _coating(self, spec: FieldSpec, raw: str) -> FieldValue | None:
        lowered = raw.lower()
        for needle, system in self._coating_vocabulary:
            if needle in lowered:
                return system
        return NO_COATING
