"""Context Tracker - switches between material and labor dictation."""

import logging

from takeoff_dictation.domain.constants import LABOR_KEYWORD, MATERIAL_KEYWORD
from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.value_objects.dictation_context import DictationContext

logger = logging.getLogger(__name__)


class ContextTracker:
    """Detects context-switch utterances.

    An utterance that is, or begins with, a context keyword switches the
    context and is consumed whole; accumulated fields are never cleared.
    """

    def __init__(
        self,
        keywords: dict[str, DictationContext] | None = None,
    ) -> None:
        self.keywords = keywords or {
            MATERIAL_KEYWORD: DictationContext.MATERIAL,
            LABOR_KEYWORD: DictationContext.LABOR,
        }

    def detect(self, text: str) -> DictationContext | None:
        """Get the context an utterance switches to, if any."""
        lowered = text.strip().lower()
        for keyword, context in self.keywords.items():
            if lowered.startswith(keyword):
                return context
        return None

    def apply(self, text: str, record: PartialRecord) -> bool:
        """
        Switch context if the utterance asks for it.

        Args:
            text: Utterance text (commands already removed)
            record: Accumulator to update in place

        Returns:
            True if the utterance was a context switch and is fully consumed
        """
        context = self.detect(text)
        if context is None:
            return False

        if record.context is not context:
            logger.debug(f"Dictation context {record.context.value} -> {context.value}")
        record.context = context
        record.disarm()
        return True
