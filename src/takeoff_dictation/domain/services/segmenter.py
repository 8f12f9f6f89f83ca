"""
Utterance Segmenter.

Splits an utterance on commas and walks the segments with one shared
cursor, so a field named in one segment can take the next segment as its
value ("type, wide flange"). A field named at the very end of an
utterance is armed and filled by the next utterance.

Per segment, first match wins:
1. Field alias prefix (longest alias) -> store trailing value, or take the
   next segment, or arm the field
2. Numbered shortcut "number <n> <value>" -> same, for the field at that
   workflow position
3. Armed field -> the whole segment is its value
4. Otherwise -> bare-value inference over the remaining text, then stop
"""

import logging
import re
from dataclasses import dataclass

from takeoff_dictation.domain.constants import NUMBERED_FIELD_KEYWORD
from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.services.bare_value_inference import BareValueInference
from takeoff_dictation.domain.services.field_registry import FieldRegistry
from takeoff_dictation.domain.services.number_words import split_leading_number
from takeoff_dictation.domain.services.value_normalizer import ValueNormalizer
from takeoff_dictation.domain.value_objects.field_spec import FieldSpec, FieldType

logger = logging.getLogger(__name__)

_SEGMENT_EDGE = " .!?"
_NUMBER_SEPARATOR = " .,:-"
MATERIAL_TYPE_FIELD = "materialType"


@dataclass
class SegmentCursor:
    """Position in an utterance's segment queue.

    Exposed so tests can inspect how far an utterance was consumed.
    """

    segments: tuple[str, ...]
    position: int = 0
    inferred: bool = False  # True once bare-value inference took the tail

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.segments)

    @property
    def current(self) -> str:
        return self.segments[self.position]

    def peek_next(self) -> str | None:
        index = self.position + 1
        return self.segments[index] if index < len(self.segments) else None

    def advance(self, count: int = 1) -> None:
        self.position = min(self.position + count, len(self.segments))

    def remaining_text(self) -> str:
        return ", ".join(self.segments[self.position :])

    def finish(self) -> None:
        self.position = len(self.segments)


class UtteranceSegmenter:
    """Dispatches utterance segments against the field registry."""

    def __init__(
        self,
        registry: FieldRegistry,
        normalizer: ValueNormalizer,
        inference: BareValueInference,
        numbered_keyword: str = NUMBERED_FIELD_KEYWORD,
    ) -> None:
        self.registry = registry
        self.normalizer = normalizer
        self.inference = inference
        self._numbered_pattern = re.compile(rf"^{re.escape(numbered_keyword)}\b\s*", re.IGNORECASE)

    @staticmethod
    def split(text: str) -> tuple[str, ...]:
        """Split on commas into trimmed, non-empty segments."""
        parts = (part.strip().rstrip(_SEGMENT_EDGE) for part in text.split(","))
        return tuple(part for part in parts if part)

    def process(self, text: str, record: PartialRecord) -> SegmentCursor:
        """
        Parse field content into the record.

        Args:
            text: Utterance text with commands and context switches removed
            record: Accumulator to update in place (context already set)

        Returns:
            The cursor after processing, for inspection
        """
        cursor = SegmentCursor(self.split(text))
        while not cursor.exhausted:
            self._step(cursor, record)
        return cursor

    def _step(self, cursor: SegmentCursor, record: PartialRecord) -> None:
        segment = cursor.current

        alias = self.registry.match_prefix(segment, record.context)
        if alias is not None:
            self._fill_named(alias.spec, alias.value_text, cursor, record)
            return

        numbered = self._match_numbered(segment, record)
        if numbered is not None:
            spec, value_text = numbered
            self._fill_named(spec, value_text, cursor, record)
            return

        if record.armed_field is not None:
            spec = self.registry.spec(record.armed_field)
            record.disarm()
            self._store(spec, segment, record)
            cursor.advance()
            return

        for name, value in self.inference.infer(cursor.remaining_text(), record.context).items():
            record.set_field(name, value)
            logger.debug(f"Inferred {name}={value!r}")
        cursor.inferred = True
        cursor.finish()

    def _fill_named(
        self,
        spec: FieldSpec,
        value_text: str,
        cursor: SegmentCursor,
        record: PartialRecord,
    ) -> None:
        # Naming a field always supersedes whatever was armed before
        record.disarm()

        if value_text:
            self._store(spec, value_text, record)
            cursor.advance()
            return

        next_segment = cursor.peek_next()
        if next_segment is not None:
            self._store(spec, next_segment, record)
            cursor.advance(2)
            return

        record.arm(spec.name)
        logger.debug(f"Armed {spec.name}, waiting for its value")
        cursor.advance()

    def _match_numbered(
        self, segment: str, record: PartialRecord
    ) -> tuple[FieldSpec, str] | None:
        keyword = self._numbered_pattern.match(segment)
        if not keyword:
            return None

        parsed = split_leading_number(segment[keyword.end() :])
        if parsed is None:
            return None

        number, rest = parsed
        material_type = record.fields.get(MATERIAL_TYPE_FIELD)
        spec = self.registry.field_for_number(
            number, material_type if isinstance(material_type, str) else None
        )
        if spec is None:
            return None
        return spec, rest.strip(_NUMBER_SEPARATOR)

    def _store(self, spec: FieldSpec, value_text: str, record: PartialRecord) -> None:
        if spec.field_type is FieldType.DURATION:
            # "welding 2 hours and cutting 1 hour": welding reads up to "cutting"
            mentions = self.registry.labor_mentions(value_text)
            if mentions:
                value_text = value_text[: mentions[0].start]
        value = self.normalizer.normalize(spec, value_text)
        if value is None:
            return
        record.set_field(spec.name, value)
        logger.debug(f"Set {spec.name}={value!r}")
