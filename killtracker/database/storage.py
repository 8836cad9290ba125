"""
Aggregate record store with the kill/pet merge policy.

Holds one KillRecord per record key. Every read loads the whole snapshot and
every write persists the whole snapshot; the number of records is bounded by
the bosses a player fights, so nothing finer grained is needed.
"""

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .backends import PersistentStore
from .models import KillRecord, utc_now
from ..parser.events import build_record_key, normalize_subject

if TYPE_CHECKING:
    from ..streaming.session import SessionState

logger = logging.getLogger(__name__)


class AggregateStore:
    """
    Durable record map keyed by boss and mode.

    Features:
    - Corrupt or unreadable snapshots load as an empty map
    - Pet status never goes back from acquired to not acquired
    - Whole-snapshot writes through a pluggable backend
    """

    def __init__(self, backend: PersistentStore, clock: Callable[[], datetime] = utc_now):
        """
        Initialize record store.

        Args:
            backend: Snapshot backend
            clock: Timestamp source for updated_at
        """
        self.backend = backend
        self.clock = clock

    def load(self) -> Dict[str, KillRecord]:
        """
        Load every stored record.

        Returns:
            Mapping of record key to record (empty if the snapshot is unusable)
        """
        payload = self.backend.read()
        if not payload:
            return {}

        try:
            raw = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.warning(f"Record store is corrupt, starting empty: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.warning(f"Record store has unexpected type {type(raw).__name__}, starting empty")
            return {}

        records = {}
        for key, value in raw.items():
            try:
                records[key] = KillRecord.model_validate(value)
            except ValidationError as e:
                logger.warning(f"Dropping invalid stored record {key!r}: {e}")

        return records

    def save(self, records: Dict[str, KillRecord]) -> None:
        """Persist the whole record map."""
        payload = json.dumps(
            {key: records[key].model_dump(mode="json") for key in sorted(records)},
            indent=2,
        )
        self.backend.write(payload)

    def get(self, key: str) -> Optional[KillRecord]:
        """Get a single record by key."""
        return self.load().get(key)

    def has_pet(self, key: str) -> bool:
        """Check whether the stored record for a key has the pet."""
        record = self.get(key)
        return bool(record and record.pet_acquired)

    def records(self) -> List[Tuple[str, KillRecord]]:
        """All records sorted by key."""
        data = self.load()
        return [(key, data[key]) for key in sorted(data)]

    def __len__(self) -> int:
        return len(self.load())

    def upsert(self, key: str, candidate: KillRecord) -> KillRecord:
        """
        Merge a candidate record into the store.

        The stored pet flag is OR-ed into the candidate, so a record that
        once had the pet keeps it whatever the candidate says.

        Args:
            key: Record key
            candidate: New values for the record

        Returns:
            The record as written
        """
        records = self.load()
        existing = records.get(key)

        pet_acquired = bool(existing and existing.pet_acquired) or candidate.pet_acquired
        record = candidate.model_copy(
            update={"pet_acquired": pet_acquired, "updated_at": self.clock()}
        )

        records[key] = record
        self.save(records)

        logger.debug(
            f"Upserted {key}: kc={record.kill_count} pet={record.pet_acquired}"
        )
        return record

    def merge_session(self, session: "SessionState") -> Optional[KillRecord]:
        """
        Write the session's current boss into the store.

        Does nothing when the session has no current boss. When the stored
        record already has the pet, the session flag is raised to match.

        Args:
            session: Current tracking session

        Returns:
            The record as written, or None if nothing was written
        """
        if not session.has_subject:
            return None

        subject = normalize_subject(session.current_subject)
        key = build_record_key(subject, session.current_mode)
        candidate = KillRecord(
            subject=subject,
            mode=session.current_mode,
            kill_count=session.current_kill_count,
            pet_acquired=session.current_pet_flag,
        )

        record = self.upsert(key, candidate)
        if record.pet_acquired and not session.current_pet_flag:
            session.current_pet_flag = True

        return record

    def clear(self) -> None:
        """Remove every stored record."""
        self.save({})
        logger.info("Cleared all stored records")
