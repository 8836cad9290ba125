"""
Event classes and identity helpers for chat events.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


_NON_KEY_CHARS = re.compile(r"[^a-z0-9 ]")


class Mode(Enum):
    """Boss difficulty mode."""

    NONE = "none"
    NORMAL = "nm"
    HARD = "hm"

    @property
    def tag(self) -> Optional[str]:
        """Suffix used in record keys, None when no mode is known."""
        return None if self is Mode.NONE else self.value

    @property
    def label(self) -> str:
        """Short human readable label."""
        return "—" if self is Mode.NONE else self.value


def normalize_subject(name: str) -> str:
    """
    Normalize a boss display name into a subject identity.

    Lowercases, drops everything except ASCII letters, digits and spaces,
    and strips surrounding whitespace. Normalizing twice is a no-op.
    """
    return _NON_KEY_CHARS.sub("", name.lower()).strip()


def build_record_key(subject: str, mode: Mode = Mode.NONE) -> str:
    """
    Build the aggregation key for a subject and mode.

    Args:
        subject: Raw or normalized boss name
        mode: Difficulty mode

    Returns:
        Key such as "vorkath_hm" or "general_graardor_nm"
    """
    base = normalize_subject(subject).replace(" ", "_")
    return f"{base}_{mode.tag}" if mode.tag else base


@dataclass(frozen=True)
class KillCountEvent:
    """A 'You have killed N <boss>' chat message."""

    kill_count: int
    subject_raw: str
    mode: Mode = Mode.NONE
    raw_line: str = ""

    @property
    def subject(self) -> str:
        """Normalized subject identity."""
        return normalize_subject(self.subject_raw)

    @property
    def record_key(self) -> str:
        return build_record_key(self.subject_raw, self.mode)


@dataclass(frozen=True)
class ItemAcquiredEvent:
    """A golden beam drop message naming a tracked pet item."""

    item_name: str
    quantity: int = 1
    raw_line: str = ""


ChatEvent = Union[KillCountEvent, ItemAcquiredEvent]
