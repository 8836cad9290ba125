"""
Chat parser module for extracting kill and pet drop events.
"""

from .events import (
    ChatEvent,
    ItemAcquiredEvent,
    KillCountEvent,
    Mode,
    build_record_key,
    normalize_subject,
)
from .extractor import EventExtractor, MODE_CLAUSES
from .parser import ChatLogParser

__all__ = [
    "ChatEvent",
    "ItemAcquiredEvent",
    "KillCountEvent",
    "Mode",
    "build_record_key",
    "normalize_subject",
    "EventExtractor",
    "MODE_CLAUSES",
    "ChatLogParser",
]
