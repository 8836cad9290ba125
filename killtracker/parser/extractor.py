"""
Pattern extraction for kill count and pet drop chat messages.
"""

import re
import logging
from typing import NamedTuple, Optional, Tuple

from .events import ChatEvent, ItemAcquiredEvent, KillCountEvent, Mode
from ..config.item_data import is_pet_item


logger = logging.getLogger(__name__)


class ModeClause(NamedTuple):
    """A mode annotation that may close a kill count message."""

    suffix: str
    grammar: str
    mode: Mode


# Mode resolution table. A clause only counts when it sits directly before
# the period that ends the message; at most one suffix can match there.
MODE_CLAUSES: Tuple[ModeClause, ...] = (
    ModeClause(" (hard mode)", "parenthetical", Mode.HARD),
    ModeClause(" (hm)", "parenthetical", Mode.HARD),
    ModeClause(" in normal mode", "trailing", Mode.NORMAL),
    ModeClause(" in hard mode", "trailing", Mode.HARD),
)


class EventExtractor:
    """
    Classifies chat lines as kill count events, pet drop events or nothing.

    Kill messages look like ``You have killed 5 Vorkath (hm).`` or
    ``You have killed 12 General Graardor in normal mode.``. The subject runs
    up to the first period; a mode clause from MODE_CLAUSES directly before
    that period sets the mode and is cut from the subject. When a line carries
    both clause styles only the last one counts and the other one stays in
    the subject text.

    Drop messages look like ``A golden beam shines over one of your items,
    You receive: 1x Ribs of Chaos`` and only count for items on the pet list.

    The extractor holds no state; the same text always gives the same result.
    """

    KILL_PATTERN = re.compile(r"You have killed ([0-9]+) ", re.IGNORECASE)

    PET_DROP_PATTERN = re.compile(
        r"A golden beam shines over one of your items, You receive: ([0-9]+)x (.+)",
        re.IGNORECASE,
    )

    def extract(self, text: str) -> Optional[ChatEvent]:
        """
        Extract an event from a single chat line.

        Args:
            text: Chat line text

        Returns:
            KillCountEvent, ItemAcquiredEvent or None if the line matches neither
        """
        if not text:
            return None

        event = self.extract_kill(text)
        if event is not None:
            return event

        return self.extract_item(text)

    def extract_kill(self, text: str) -> Optional[KillCountEvent]:
        """Extract a kill count event, or None."""
        for match in self.KILL_PATTERN.finditer(text):
            rest = text[match.end():]

            # Subject needs at least one character before the closing period
            period = rest.find(".", 1)
            if period == -1:
                continue

            subject, mode = self.resolve_mode(rest[:period])
            return KillCountEvent(
                kill_count=int(match.group(1)),
                subject_raw=subject,
                mode=mode,
                raw_line=text,
            )

        return None

    @staticmethod
    def resolve_mode(phrase: str) -> Tuple[str, Mode]:
        """
        Split the text between the kill count and the period into subject and mode.

        Args:
            phrase: e.g. "Vorkath (hm)" or "General Graardor in normal mode"

        Returns:
            Tuple of (raw subject, mode)
        """
        for clause in MODE_CLAUSES:
            size = len(clause.suffix)
            if len(phrase) > size and phrase[-size:].lower() == clause.suffix:
                return phrase[:-size], clause.mode

        return phrase, Mode.NONE

    def extract_item(self, text: str) -> Optional[ItemAcquiredEvent]:
        """Extract a pet drop event, or None if the line is not a pet drop."""
        match = self.PET_DROP_PATTERN.search(text)
        if not match:
            return None

        item_name = match.group(2).strip().lower()
        if not is_pet_item(item_name):
            logger.debug(f"Golden beam for untracked item: {item_name}")
            return None

        return ItemAcquiredEvent(
            item_name=item_name,
            quantity=int(match.group(1)),
            raw_line=text,
        )
