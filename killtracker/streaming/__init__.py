"""
Chat ingestion package.

This package provides:
- Line sources for host chat APIs and chat log files
- Bounded line de-duplication
- Session state tracking the current boss
- The ingestion cycle and the periodic poll loop
"""

from .dedup import LineDeduplicator, line_id
from .poller import PollLoop
from .processor import ChatStreamProcessor, CycleResult, TrackerStatus
from .session import SessionState
from .source import (
    FetchResult,
    FileLineSource,
    HostLineSource,
    LineSource,
    StaticLineSource,
    extract_text,
)

__all__ = [
    "LineDeduplicator",
    "line_id",
    "PollLoop",
    "ChatStreamProcessor",
    "CycleResult",
    "TrackerStatus",
    "SessionState",
    "FetchResult",
    "FileLineSource",
    "HostLineSource",
    "LineSource",
    "StaticLineSource",
    "extract_text",
]
