"""In-memory record sink, used in development and tests."""

import logging

from takeoff_dictation.domain.entities.committed_line import CommittedLine

logger = logging.getLogger(__name__)


class InMemoryRecordSink:
    """Keeps committed lines in a list, oldest first."""

    def __init__(self) -> None:
        self.lines: list[CommittedLine] = []

    async def emit(self, line: CommittedLine) -> None:
        self.lines.append(line)
        logger.debug(f"Stored line {line.record_id or '(new)'} ({len(self.lines)} total)")

    async def close(self) -> None:
        pass
