"""
Bare-Value Inference.

Handles text that names no field while no field is armed:

- Material context: a rolled-shape designation ("W10X15", "HSS 6x6x1/4")
  fills shape type and size together; otherwise a bare category name
  ("columns") fills the category.
- Labor context: any labor alias anywhere in the text, followed by a
  duration ("it took welding 2 hours").

Anything else is dropped without a state change.
"""

import logging
import re
from collections.abc import Mapping

from takeoff_dictation.domain.constants import CATEGORY_SYNONYMS
from takeoff_dictation.domain.entities.partial_record import FieldValue
from takeoff_dictation.domain.services.field_registry import FieldRegistry
from takeoff_dictation.domain.services.value_normalizer import parse_duration_hours
from takeoff_dictation.domain.value_objects.dictation_context import DictationContext

logger = logging.getLogger(__name__)

_ROLLED_SHAPE = re.compile(
    r"\b([WHCLT])\s*(\d+(?:\.\d+)?)\s*[x×]\s*(\d+(?:/\d+)?(?:\.\d+)?)\b",
    re.IGNORECASE,
)
_HSS_SHAPE = re.compile(
    r"\bHSS\s*(\d+(?:\.\d+)?)\s*[x×]\s*(\d+(?:\.\d+)?)\s*[x×]\s*(\d+(?:/\d+)?(?:\.\d+)?)",
    re.IGNORECASE,
)

SHAPE_TYPE_FIELD = "shapeType"
SIZE_FIELD = "sizeDesignation"
CATEGORY_FIELD = "category"


class BareValueInference:
    """Infers fields from alias-less text using the current context."""

    def __init__(
        self,
        registry: FieldRegistry,
        category_synonyms: Mapping[str, str] = CATEGORY_SYNONYMS,
    ) -> None:
        self.registry = registry
        # Longest spoken category first so "misc metals" beats "misc"
        self._categories = sorted(category_synonyms.items(), key=lambda kv: len(kv[0]), reverse=True)

    def infer(self, text: str, context: DictationContext) -> dict[str, FieldValue]:
        """
        Infer field updates from text that names no field.

        Args:
            text: Remaining unsegmented utterance text
            context: Current dictation context

        Returns:
            Field updates; empty if nothing could be inferred
        """
        if context is DictationContext.LABOR:
            updates = self.infer_labor(text)
        else:
            updates = self.infer_material(text)

        if not updates:
            logger.debug(f"Dropped unrecognized utterance: {text!r}")
        return updates

    def infer_material(self, text: str) -> dict[str, FieldValue]:
        # HSS first: "HSS6x6x1/4" would otherwise read as an "H" shape
        hss = _HSS_SHAPE.search(text)
        if hss:
            size = f"HSS{hss.group(1)}X{hss.group(2)}X{hss.group(3)}"
            return {SHAPE_TYPE_FIELD: "HSS", SIZE_FIELD: size.upper()}

        rolled = _ROLLED_SHAPE.search(text)
        if rolled:
            letter = rolled.group(1).upper()
            size = f"{letter}{rolled.group(2)}X{rolled.group(3)}"
            return {SHAPE_TYPE_FIELD: letter, SIZE_FIELD: size.upper()}

        lowered = text.lower()
        for spoken, category in self._categories:
            if re.search(rf"\b{re.escape(spoken)}\b", lowered):
                return {CATEGORY_FIELD: category}

        return {}

    def infer_labor(self, text: str) -> dict[str, FieldValue]:
        """First labor alias whose own duration parses.

        Each alias only reads the text up to the next alias, so
        "welding 2 hours and cutting 1 hour" gives welding 2.0, not 3.0.
        """
        mentions = self.registry.labor_mentions(text)
        for mention, following in zip(mentions, mentions[1:] + (None,)):
            end = following.start if following else len(text)
            hours = parse_duration_hours(text[mention.end : end])
            if hours is not None:
                return {mention.alias.canonical_field: hours}
        return {}
