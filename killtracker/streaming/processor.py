"""
Ingestion cycle processing.

Takes one fetch from a line source and pushes every new line through
de-duplication, extraction, the session state and the record store.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .dedup import LineDeduplicator
from .session import SessionState
from .source import FetchResult, extract_text
from ..database.storage import AggregateStore
from ..parser.events import ChatEvent
from ..parser.parser import ChatLogParser

logger = logging.getLogger(__name__)


class TrackerStatus(Enum):
    """Tracker status reported after every cycle."""

    READY = "ready"
    RUNNING = "running"
    SOURCE_UNAVAILABLE = "source_unavailable"
    STOPPED = "stopped"
    ERROR = "error"


@dataclass
class CycleResult:
    """Summary of one ingestion cycle."""

    status: TrackerStatus
    note: str = ""
    lines_fetched: int = 0
    new_lines: int = 0
    events: List[ChatEvent] = field(default_factory=list)
    merges: int = 0


class ChatStreamProcessor:
    """
    Owns the session state and drives it from fetched chat lines.

    One processor is the single writer for its session and store; callers
    must not run two cycles at the same time.
    """

    def __init__(
        self,
        store: AggregateStore,
        session: Optional[SessionState] = None,
        parser: Optional[ChatLogParser] = None,
        dedup: Optional[LineDeduplicator] = None,
        window: int = 30,
    ):
        """
        Initialize stream processor.

        Args:
            store: Record store
            session: Session state (a fresh one is created if omitted)
            parser: Chat parser
            dedup: Line de-duplication cache
            window: Only the last ``window`` fetched lines are looked at
        """
        self.store = store
        self.session = session or SessionState()
        self.parser = parser or ChatLogParser()
        self.dedup = dedup or LineDeduplicator()
        self.window = window

        self._stats = {
            "cycles": 0,
            "unavailable_cycles": 0,
            "lines_fetched": 0,
            "new_lines": 0,
            "merges": 0,
        }

    def start_session(self):
        """Start a clean tracking run."""
        self.dedup.clear()
        self.parser.reset()
        self.session.reset()
        logger.info("Tracking session started")

    def process_result(self, result: FetchResult) -> CycleResult:
        """
        Process one fetch from the line source.

        Args:
            result: Fetch outcome

        Returns:
            Cycle summary
        """
        self._stats["cycles"] += 1

        if not result.ok:
            self._stats["unavailable_cycles"] += 1
            logger.debug(f"Line source unavailable: {result.note}")
            return CycleResult(status=TrackerStatus.SOURCE_UNAVAILABLE, note=result.note)

        records = result.lines[-self.window:] if self.window else result.lines
        cycle = self.process_lines(records)
        cycle.note = result.note
        return cycle

    def process_lines(self, records: List[Any]) -> CycleResult:
        """
        Process raw line records in order.

        Args:
            records: Strings or structured line records

        Returns:
            Cycle summary
        """
        cycle = CycleResult(status=TrackerStatus.RUNNING, lines_fetched=len(records))

        for record in records:
            text = extract_text(record)
            if not text:
                continue
            if self.dedup.seen(text):
                continue

            cycle.new_lines += 1
            event = self.parser.parse_line(text)
            if event is None:
                continue

            cycle.events.append(event)
            if self.session.apply(event, self.store):
                cycle.merges += 1

        self._stats["lines_fetched"] += cycle.lines_fetched
        self._stats["new_lines"] += cycle.new_lines
        self._stats["merges"] += cycle.merges
        return cycle

    def get_stats(self) -> Dict[str, Any]:
        """Get processing statistics."""
        return {
            **self._stats,
            "parser": self.parser.get_stats(),
            "dedup": self.dedup.get_stats(),
            "session": self.session.to_dict(),
        }
