"""
Chat line sources.

A line source hands back the recently visible chat lines on every call. The
source is not reliable: it repeats lines across calls and can be unavailable
for a while (host not ready, permission missing, log file not there yet).
"""

import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Protocol, Sequence, Union

logger = logging.getLogger(__name__)

# Field names a structured line record may carry its text under, in order
TEXT_FIELDS = ("text", "message")

# Container fields a host result may carry its lines under, in order
LINE_CONTAINER_FIELDS = ("messages", "lines")

# Host chat APIs to try, in order
DEFAULT_PROBES = ("chat.read", "rs.chat.read")


@dataclass
class FetchResult:
    """Outcome of one line source fetch."""

    ok: bool
    lines: List[Any] = field(default_factory=list)
    note: str = ""

    @classmethod
    def unavailable(cls, note: str) -> "FetchResult":
        """Result for a source that cannot be read right now."""
        return cls(ok=False, lines=[], note=note)


class LineSource(Protocol):
    """Anything that can hand back the recent chat window."""

    def fetch_recent(self) -> FetchResult:
        ...


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def extract_text(record: Any) -> str:
    """
    Get the plain text of a raw line record.

    Args:
        record: Either a string or an object/mapping with a text field

    Returns:
        Line text, or an empty string for shapes that carry no text
    """
    if not record:
        return ""
    if isinstance(record, str):
        return record

    for name in TEXT_FIELDS:
        value = _field(record, name)
        if isinstance(value, str):
            return value

    return ""


def _coerce_lines(result: Any) -> List[Any]:
    """Turn a host read result into a list of line records."""
    if isinstance(result, (list, tuple)):
        return list(result)

    if result is None or isinstance(result, str):
        return []

    for name in LINE_CONTAINER_FIELDS:
        value = _field(result, name)
        if value:
            return list(value)

    return []


def _resolve(host: Any, path: str) -> Optional[Callable[[], Any]]:
    """Follow a dotted attribute path on the host, returning a callable or None."""
    target = host
    for part in path.split("."):
        target = getattr(target, part, None)
        if target is None:
            return None
    return target if callable(target) else None


class HostLineSource:
    """
    Reads chat from a host application object.

    Different host versions expose chat reading in different places, so a
    list of probes (dotted attribute paths) is tried in order and the first
    one that works wins. A probe that raises is skipped.
    """

    def __init__(self, host: Any = None, probes: Sequence[str] = DEFAULT_PROBES):
        """
        Initialize host line source.

        Args:
            host: Host application object, None when not running inside a host
            probes: Dotted paths of zero-argument chat read functions
        """
        self.host = host
        self.probes = tuple(probes)

    def fetch_recent(self) -> FetchResult:
        if self.host is None:
            return FetchResult.unavailable("Not running inside a chat host.")

        for path in self.probes:
            try:
                read = _resolve(self.host, path)
                if read is None:
                    continue
                result = read()
            except Exception as e:
                logger.debug(f"Chat probe {path}() failed: {e}")
                continue

            return FetchResult(ok=True, lines=_coerce_lines(result), note=f"{path}()")

        return FetchResult.unavailable(
            "Chat API not available. Ensure the app has game state permission "
            "and the chatbox is visible."
        )


class FileLineSource:
    """
    Reads the tail of a chat log file.

    Every fetch returns the last ``window`` lines of the file, the same
    way an on-screen chatbox shows the last few messages.
    """

    def __init__(self, path: Union[str, Path], window: int = 30, encoding: str = "utf-8"):
        """
        Initialize file line source.

        Args:
            path: Chat log file
            window: Number of trailing lines returned per fetch
            encoding: File encoding
        """
        self.path = Path(path).expanduser()
        self.window = window
        self.encoding = encoding

    def fetch_recent(self) -> FetchResult:
        if not self.path.exists():
            return FetchResult.unavailable(f"Chat log not found: {self.path}")

        try:
            with open(self.path, "r", encoding=self.encoding, errors="ignore") as f:
                tail = deque(f, maxlen=self.window)
        except OSError as e:
            return FetchResult.unavailable(f"Cannot read chat log {self.path}: {e}")

        lines = [line.rstrip("\r\n") for line in tail]
        return FetchResult(ok=True, lines=lines, note=self.path.name)


class StaticLineSource:
    """Replays a fixed, growable list of line records on every fetch."""

    def __init__(self, lines: Optional[Sequence[Any]] = None, note: str = "static"):
        self.lines = list(lines or [])
        self.note = note
        self.available = True

    def push(self, *records: Any):
        """Append records to the visible window."""
        self.lines.extend(records)

    def fetch_recent(self) -> FetchResult:
        if not self.available:
            return FetchResult.unavailable(f"{self.note} source offline")
        return FetchResult(ok=True, lines=list(self.lines), note=self.note)
