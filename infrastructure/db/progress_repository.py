"""
Supabase implementation of ProgressRepository.

This module provides the concrete Supabase implementation for workout
progress persistence (user_workout_progress table). Snapshots are written
with a conditional update on the version column; a write that matches no
row lost the race to another request.
"""
import logging
from datetime import datetime
from typing import Any, List, Optional

from supabase import Client

from application.exceptions import (
    ConcurrencyConflictError,
    NoProgressRecordError,
    PersistenceError,
)
from domain.converters import db_row_to_progress, progress_to_db_row
from domain.models import PlanShape, ProgressRecord

logger = logging.getLogger(__name__)

PROGRESS_TABLE = "user_workout_progress"
UNIQUE_KEY = "user_id,workout_id"


class SupabaseProgressRepository:
    """
    Supabase implementation of ProgressRepository protocol.

    All Supabase query logic for progress records is encapsulated here.
    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def _table(self):
        return self._client.table(PROGRESS_TABLE)

    def _execute(self, query: Any, action: str):
        try:
            return query.execute()
        except Exception as e:
            logger.exception(f"Failed to {action}: {e}")
            raise PersistenceError(f"Failed to {action}") from e

    # =========================================================================
    # Reads
    # =========================================================================

    def get(
        self,
        user_id: str,
        workout_id: str,
    ) -> Optional[ProgressRecord]:
        """Get the progress record for a user and workout."""
        result = self._execute(
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .eq("workout_id", workout_id)
            .limit(1),
            f"get progress {user_id}/{workout_id}",
        )
        if result.data:
            return db_row_to_progress(result.data[0])
        return None

    def list_for_user(self, user_id: str) -> List[ProgressRecord]:
        """Get all progress records of a user, most recently accessed first."""
        result = self._execute(
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .order("last_accessed_at", desc=True),
            f"list progress for user {user_id}",
        )
        return [db_row_to_progress(row) for row in result.data or []]

    def list_for_workout(self, workout_id: str) -> List[ProgressRecord]:
        """Get every user's progress record for a workout."""
        result = self._execute(
            self._table().select("*").eq("workout_id", workout_id),
            f"list progress for workout {workout_id}",
        )
        return [db_row_to_progress(row) for row in result.data or []]

    # =========================================================================
    # Writes
    # =========================================================================

    def get_or_create(
        self,
        user_id: str,
        workout_id: str,
        shape: PlanShape,
        now: datetime,
    ) -> ProgressRecord:
        """
        Insert-if-absent on (user_id, workout_id), then read the stored row.

        Concurrent first accesses collapse onto the same row because the
        insert ignores duplicates on the unique key.
        """
        existing = self.get(user_id, workout_id)
        if existing is not None:
            return existing

        row = progress_to_db_row(ProgressRecord.new(user_id, workout_id, shape, now))
        row["version"] = 0
        self._execute(
            self._table().upsert(row, on_conflict=UNIQUE_KEY, ignore_duplicates=True),
            f"create progress {user_id}/{workout_id}",
        )

        stored = self.get(user_id, workout_id)
        if stored is None:
            raise PersistenceError(
                f"Progress {user_id}/{workout_id} missing after insert"
            )
        logger.info(f"Progress record ready for user {user_id}, workout {workout_id}")
        return stored

    def save(self, record: ProgressRecord) -> ProgressRecord:
        """
        Write a full snapshot if the stored version still matches.

        Raises:
            ConcurrencyConflictError: Another write landed first
            NoProgressRecordError: The row does not exist
        """
        row = progress_to_db_row(record)
        row["version"] = record.version + 1

        result = self._execute(
            self._table()
            .update(row)
            .eq("user_id", record.user_id)
            .eq("workout_id", record.workout_id)
            .eq("version", record.version),
            f"save progress {record.user_id}/{record.workout_id}",
        )

        if result.data:
            return db_row_to_progress(result.data[0])

        if self.get(record.user_id, record.workout_id) is None:
            raise NoProgressRecordError(record.workout_id)
        logger.info(
            f"Version {record.version} of progress {record.user_id}/{record.workout_id} "
            f"is stale"
        )
        raise ConcurrencyConflictError(
            f"Progress for workout {record.workout_id} was modified concurrently"
        )

    def touch(self, user_id: str, workout_id: str, at: datetime) -> None:
        """Update last_accessed_at only. Last write wins."""
        self._execute(
            self._table()
            .update({"last_accessed_at": at.isoformat()})
            .eq("user_id", user_id)
            .eq("workout_id", workout_id),
            f"touch progress {user_id}/{workout_id}",
        )
