"""
Fake Progress Repository for Testing.

In-memory implementation of ProgressRepository for fast, isolated testing.
It honours the same contract as the Supabase implementation: one record per
(user_id, workout_id), insert-if-absent creation and version-checked saves.
"""
import threading
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from application.exceptions import ConcurrencyConflictError, NoProgressRecordError
from domain.models import PlanShape, ProgressRecord

Key = Tuple[str, str]


class FakeProgressRepository:
    """
    In-memory fake implementation of ProgressRepository.

    All operations take an internal lock, so the fake can be shared between
    threads in concurrency tests.
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._records: Dict[Key, ProgressRecord] = {}
        self._lock = threading.Lock()
        self.save_calls = 0
        self.conflicts = 0

    # =========================================================================
    # Test Helpers
    # =========================================================================

    def reset(self) -> None:
        """Clear all stored data."""
        with self._lock:
            self._records.clear()
            self.save_calls = 0
            self.conflicts = 0

    def seed(self, records: List[ProgressRecord]) -> None:
        """
        Seed the repository with records, stored exactly as given.

        Records without an id get one assigned.
        """
        with self._lock:
            for record in records:
                if record.id is None:
                    record = record.model_copy(update={"id": str(uuid.uuid4())})
                self._records[(record.user_id, record.workout_id)] = record

    def get_all(self) -> List[ProgressRecord]:
        """Get all stored records."""
        with self._lock:
            return list(self._records.values())

    # =========================================================================
    # ProgressRepository Protocol
    # =========================================================================

    def get(self, user_id: str, workout_id: str) -> Optional[ProgressRecord]:
        with self._lock:
            return self._records.get((user_id, workout_id))

    def get_or_create(
        self,
        user_id: str,
        workout_id: str,
        shape: PlanShape,
        now: datetime,
    ) -> ProgressRecord:
        with self._lock:
            key = (user_id, workout_id)
            if key not in self._records:
                record = ProgressRecord.new(user_id, workout_id, shape, now)
                self._records[key] = record.model_copy(update={"id": str(uuid.uuid4())})
            return self._records[key]

    def save(self, record: ProgressRecord) -> ProgressRecord:
        with self._lock:
            self.save_calls += 1
            key = (record.user_id, record.workout_id)
            stored = self._records.get(key)
            if stored is None:
                raise NoProgressRecordError(record.workout_id)
            if stored.version != record.version:
                self.conflicts += 1
                raise ConcurrencyConflictError(
                    f"Progress for workout {record.workout_id} was modified concurrently"
                )
            saved = record.model_copy(update={
                "id": stored.id,
                "version": record.version + 1,
            })
            self._records[key] = saved
            return saved

    def touch(self, user_id: str, workout_id: str, at: datetime) -> None:
        with self._lock:
            key = (user_id, workout_id)
            stored = self._records.get(key)
            if stored is not None:
                self._records[key] = stored.model_copy(update={"last_accessed_at": at})

    def list_for_user(self, user_id: str) -> List[ProgressRecord]:
        with self._lock:
            records = [r for (uid, _), r in self._records.items() if uid == user_id]
        records.sort(key=lambda r: r.last_accessed_at, reverse=True)
        return records

    def list_for_workout(self, workout_id: str) -> List[ProgressRecord]:
        with self._lock:
            return [r for (_, wid), r in self._records.items() if wid == workout_id]
