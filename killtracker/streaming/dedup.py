"""
Bounded de-duplication of chat lines.

The chat source hands back the whole visible window on every poll, so the
same lines arrive again and again. This cache remembers which lines were
already handled without growing without bound.
"""

import hashlib
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


def line_id(text: str) -> str:
    """
    Stable identifier for a chat line.

    Args:
        text: Full line text

    Returns:
        Hex digest of the text combined with its length
    """
    digest = hashlib.blake2b(text.encode("utf-8", errors="surrogatepass"), digest_size=16)
    return f"{digest.hexdigest()}|{len(text)}"


class LineDeduplicator:
    """
    Insertion-ordered set of seen line identifiers with FIFO trimming.

    Holds at most ``capacity`` identifiers. Once that is exceeded only the
    ``retain`` most recently inserted ones are kept, so recent lines stay
    suppressed while old ones are forgotten.
    """

    def __init__(self, capacity: int = 2000, retain: int = 1200):
        """
        Initialize the de-duplication cache.

        Args:
            capacity: Maximum identifiers kept
            retain: Identifiers kept after a trim
        """
        if retain <= 0 or retain > capacity:
            raise ValueError(f"retain must be between 1 and capacity ({capacity}), got {retain}")

        self.capacity = capacity
        self.retain = retain

        # dict keeps insertion order
        self._ids: Dict[str, None] = {}
        self._total_seen = 0
        self._duplicates = 0
        self._trims = 0

    def seen(self, text: str) -> bool:
        """
        Check a line and mark it as seen.

        Args:
            text: Line text

        Returns:
            True if the line was already seen, False if it is new
        """
        ident = line_id(text)
        if ident in self._ids:
            self._duplicates += 1
            return True

        self._ids[ident] = None
        self._total_seen += 1

        if len(self._ids) > self.capacity:
            self._trim()

        return False

    def _trim(self):
        """Drop the oldest identifiers down to the retain size."""
        dropped = len(self._ids) - self.retain
        keep = list(self._ids)[-self.retain:]
        self._ids = dict.fromkeys(keep)
        self._trims += 1
        logger.debug(f"Dedup cache trimmed, dropped {dropped} oldest lines")

    def clear(self):
        """Forget every seen line."""
        self._ids.clear()

    def __contains__(self, text: str) -> bool:
        return line_id(text) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "size": len(self._ids),
            "capacity": self.capacity,
            "retain": self.retain,
            "total_seen": self._total_seen,
            "duplicates": self._duplicates,
            "trims": self._trims,
        }
