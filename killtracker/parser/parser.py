"""
Chat line parser that coordinates extraction and keeps diagnostics.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional

from .events import ChatEvent, ItemAcquiredEvent, KillCountEvent
from .extractor import EventExtractor


logger = logging.getLogger(__name__)


class ChatLogParser:
    """
    Parser for game chat lines.

    Runs each line through the extractor, keeps the most recent lines in a
    small rolling buffer for troubleshooting, and counts what it saw. Lines
    that match no pattern are normal chat and are dropped quietly.
    """

    def __init__(self, debug_size: int = 12, extractor: Optional[EventExtractor] = None):
        """
        Initialize the chat parser.

        Args:
            debug_size: Number of recent lines kept for diagnostics
            extractor: Event extractor (a default one is created if omitted)
        """
        self.extractor = extractor or EventExtractor()
        self.debug_size = debug_size
        self.debug_lines: Deque[str] = deque(maxlen=debug_size)
        self.lines_processed = 0
        self.kill_events = 0
        self.item_events = 0
        self.unmatched = 0

    def parse_line(self, line: str) -> Optional[ChatEvent]:
        """
        Parse a single chat line.

        Args:
            line: Chat line text

        Returns:
            Extracted event, or None for ordinary chat
        """
        self.lines_processed += 1
        if self.debug_size:
            self.debug_lines.append(line)

        event = self.extractor.extract(line)
        if isinstance(event, KillCountEvent):
            self.kill_events += 1
        elif isinstance(event, ItemAcquiredEvent):
            self.item_events += 1
        else:
            self.unmatched += 1

        return event

    def parse_lines(self, lines: Iterable[str]) -> List[ChatEvent]:
        """Parse several lines and return the events found, in order."""
        events = []
        for line in lines:
            event = self.parse_line(line)
            if event is not None:
                events.append(event)
        return events

    @property
    def debug_text(self) -> str:
        """Recent lines joined for display."""
        return "\n".join(self.debug_lines)

    def get_stats(self) -> Dict[str, Any]:
        """Get parsing statistics."""
        return {
            "lines_processed": self.lines_processed,
            "kill_events": self.kill_events,
            "item_events": self.item_events,
            "unmatched": self.unmatched,
        }

    def reset(self):
        """Reset parser state for a new session."""
        self.debug_lines.clear()
        self.lines_processed = 0
        self.kill_events = 0
        self.item_events = 0
        self.unmatched = 0
