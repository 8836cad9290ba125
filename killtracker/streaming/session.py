"""
Tracking session state.

Follows the boss the player is currently killing so that pet drop messages
can be attributed to it.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..parser.events import ChatEvent, ItemAcquiredEvent, KillCountEvent, Mode, build_record_key

if TYPE_CHECKING:
    from ..database.storage import AggregateStore

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """
    Current boss context for one tracking run.

    There is no current boss until the first kill count message of the run.
    """

    current_subject: Optional[str] = None
    current_mode: Mode = Mode.NONE
    current_kill_count: int = 0
    current_pet_flag: bool = False

    @property
    def has_subject(self) -> bool:
        return bool(self.current_subject)

    @property
    def record_key(self) -> Optional[str]:
        """Record key for the current boss, None before the first kill."""
        if not self.has_subject:
            return None
        return build_record_key(self.current_subject, self.current_mode)

    def reset(self):
        """Forget the current boss."""
        self.current_subject = None
        self.current_mode = Mode.NONE
        self.current_kill_count = 0
        self.current_pet_flag = False

    def apply(self, event: Optional[ChatEvent], store: "AggregateStore") -> bool:
        """
        Apply one extracted event and persist the result.

        A kill count switches the current boss and starts with the pet flag
        cleared, unless the store already has the pet for that boss and
        mode. A pet drop sets the flag for the current boss; it is ignored
        before the first kill and when the flag is already set.

        Args:
            event: Extracted event, or None for ordinary chat
            store: Record store to read pet status from and merge into

        Returns:
            True if the store was written
        """
        if isinstance(event, KillCountEvent):
            self.current_subject = event.subject_raw
            self.current_mode = event.mode
            self.current_kill_count = event.kill_count

            self.current_pet_flag = False
            if store.has_pet(self.record_key):
                self.current_pet_flag = True

            logger.info(
                f"Kill: {self.current_subject} [{self.current_mode.value}] "
                f"kc={self.current_kill_count} pet={self.current_pet_flag}"
            )
            store.merge_session(self)
            return True

        if isinstance(event, ItemAcquiredEvent):
            if not self.has_subject:
                logger.debug(f"Pet drop {event.item_name} before any kill, ignoring")
                return False
            if self.current_pet_flag:
                return False

            self.current_pet_flag = True
            logger.info(f"Pet drop for {self.current_subject}: {event.item_name}")
            store.merge_session(self)
            return True

        return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to dictionary for display."""
        return {
            "subject": self.current_subject,
            "mode": self.current_mode.value,
            "kill_count": self.current_kill_count if self.has_subject else None,
            "pet": self.current_pet_flag if self.has_subject else None,
            "record_key": self.record_key,
        }
