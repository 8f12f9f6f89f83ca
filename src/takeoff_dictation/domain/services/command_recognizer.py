"""
Lifecycle Command Recognizer.

Scans an utterance for lifecycle commands before any field parsing.
Rules are priority-ordered; the first match wins:

1. "stop" and "recording" anywhere -> STOP_CAPTURE
2. Whole utterance "enter" / "done" / "complete" / "finish" -> COMMIT
3. Whole or leading "new line" / "newline" -> NEW_RECORD
4. Leading "line id <n>" / "lineid <n>" -> ADDRESS_RECORD, rest re-parsed
"""

import logging
import re
from dataclasses import dataclass

from takeoff_dictation.domain.constants import (
    COMMIT_WORDS,
    DEFAULT_LINE_ID_PREFIX,
    LINE_ID_PREFIXES,
    NEW_RECORD_PHRASES,
    STOP_WORDS,
)
from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.services.number_words import split_leading_number
from takeoff_dictation.domain.value_objects.lifecycle_signal import LifecycleSignal

logger = logging.getLogger(__name__)

# Recognizers add sentence punctuation to short commands ("Enter.")
_EDGE_PUNCTUATION = ",.!?;: "


@dataclass(frozen=True)
class RecognizedCommand:
    """Result of command recognition (immutable value object).

    Attributes:
        signal: Lifecycle signal, NONE if the utterance is not a command
        should_process: True if the signal is actionable (a commit on an
            empty accumulator is recognized but not actionable)
        remainder: Text still to be parsed for fields. The whole utterance
            for NONE, the text after the prefix for ADDRESS_RECORD, else None.
        unconsumed_text: Text that accompanied a stop command and was ignored
    """

    signal: LifecycleSignal
    should_process: bool
    remainder: str | None = None
    unconsumed_text: str | None = None


def _phrase_pattern(phrase: str) -> str:
    return r"\s*".join(re.escape(w) for w in phrase.split())


class CommandRecognizer:
    """
    Recognizes lifecycle commands embedded in dictation.

    Vocabulary is injected so alternate command words can be configured
    without touching module state.
    """

    def __init__(
        self,
        commit_words: frozenset[str] = COMMIT_WORDS,
        new_record_phrases: tuple[str, ...] = NEW_RECORD_PHRASES,
        stop_words: tuple[str, ...] = STOP_WORDS,
        line_id_prefixes: tuple[str, ...] = LINE_ID_PREFIXES,
        line_id_prefix: str = DEFAULT_LINE_ID_PREFIX,
    ) -> None:
        self.commit_words = commit_words
        self.stop_words = stop_words
        self.line_id_prefix = line_id_prefix

        self._stop_word_pattern = re.compile(
            r"\b(?:" + "|".join(re.escape(w) for w in stop_words) + r")\b",
            re.IGNORECASE,
        )
        self._new_record_pattern = re.compile(
            r"^(?:" + "|".join(_phrase_pattern(p) for p in new_record_phrases) + r")\b",
            re.IGNORECASE,
        )
        self._line_id_pattern = re.compile(
            r"^(?:"
            + "|".join(_phrase_pattern(p) for p in line_id_prefixes)
            + r")(?![a-z])\s*[:,\-]?\s*",
            re.IGNORECASE,
        )
        # Spoken ids may repeat the prefix letter: "line id L 3", "line id L3"
        self._id_letter_pattern = re.compile(
            rf"^{re.escape(line_id_prefix)}(?:\s+|(?=\d))", re.IGNORECASE
        )

    def recognize(self, utterance: str, record: PartialRecord) -> RecognizedCommand:
        """
        Recognize a lifecycle command.

        Args:
            utterance: One final transcript fragment
            record: Current accumulator (decides whether a commit is actionable)

        Returns:
            RecognizedCommand; signal is NONE and remainder is the utterance
            when no command matched
        """
        text = utterance.strip()
        lowered = text.lower()

        if all(word in lowered for word in self.stop_words):
            leftover = self._stop_word_pattern.sub(" ", text)
            leftover = " ".join(leftover.split()).strip(_EDGE_PUNCTUATION)
            return RecognizedCommand(
                signal=LifecycleSignal.stop_capture(),
                should_process=True,
                unconsumed_text=leftover or None,
            )

        if lowered.strip(_EDGE_PUNCTUATION) in self.commit_words:
            actionable = record.has_content()
            if not actionable:
                logger.debug("Ignoring commit on an empty record")
            return RecognizedCommand(signal=LifecycleSignal.commit(), should_process=actionable)

        if self._new_record_pattern.match(text):
            return RecognizedCommand(signal=LifecycleSignal.new_record(), should_process=True)

        addressed = self._match_line_id(text)
        if addressed is not None:
            record_id, rest = addressed
            return RecognizedCommand(
                signal=LifecycleSignal.address_record(record_id),
                should_process=True,
                remainder=rest,
            )

        return RecognizedCommand(
            signal=LifecycleSignal.none(), should_process=False, remainder=text
        )

    def _match_line_id(self, text: str) -> tuple[str, str] | None:
        prefix = self._line_id_pattern.match(text)
        if not prefix:
            return None

        token = text[prefix.end() :]
        parsed = split_leading_number(token)
        if parsed is None:
            parsed = split_leading_number(self._id_letter_pattern.sub("", token, count=1))
        if parsed is None:
            return None

        number, rest = parsed
        return f"{self.line_id_prefix}{number}", rest.lstrip(_EDGE_PUNCTUATION)
