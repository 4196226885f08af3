"""
Progress Repository Interface (Port).

This module defines the abstract interface for progress record persistence.
There is exactly one record per (user_id, workout_id) pair.

Writes are optimistic: ``save`` succeeds only when the stored version still
equals the version the caller read, so two devices completing days on the
same record can never silently overwrite each other's log entries.
"""
from datetime import datetime
from typing import List, Optional, Protocol

from domain.models import PlanShape, ProgressRecord


class ProgressRepository(Protocol):
    """
    Abstract interface for progress record persistence.

    Implementations must enforce uniqueness of (user_id, workout_id) and
    write all fields of a snapshot in a single statement.
    """

    def get(
        self,
        user_id: str,
        workout_id: str,
    ) -> Optional[ProgressRecord]:
        """
        Get the progress record for a user and workout.

        Args:
            user_id: Authenticated user ID
            workout_id: Catalog workout ID

        Returns:
            ProgressRecord or None if the user never accessed the workout
        """
        ...

    def get_or_create(
        self,
        user_id: str,
        workout_id: str,
        shape: PlanShape,
        now: datetime,
    ) -> ProgressRecord:
        """
        Return the existing record or create one seeded from the plan shape.

        Creation is an insert-if-absent on the unique key, so concurrent
        callers for the same pair all end up with the same record.

        Args:
            user_id: Authenticated user ID
            workout_id: Catalog workout ID
            shape: Plan shape to pin a new record to
            now: Creation time

        Returns:
            The stored ProgressRecord
        """
        ...

    def save(
        self,
        record: ProgressRecord,
    ) -> ProgressRecord:
        """
        Persist a full snapshot if nobody else wrote since it was read.

        The write is conditional on the stored version equal to
        ``record.version``.

        Args:
            record: Snapshot to persist, carrying the version it was read at

        Returns:
            The stored record with its version incremented

        Raises:
            ConcurrencyConflictError: The stored version moved on
            NoProgressRecordError: The record does not exist
        """
        ...

    def touch(
        self,
        user_id: str,
        workout_id: str,
        at: datetime,
    ) -> None:
        """
        Update only last_accessed_at, unconditionally.

        Last write wins is acceptable for this column.
        """
        ...

    def list_for_user(
        self,
        user_id: str,
    ) -> List[ProgressRecord]:
        """
        Get all progress records of a user, most recently accessed first.
        """
        ...

    def list_for_workout(
        self,
        workout_id: str,
    ) -> List[ProgressRecord]:
        """
        Get every user's progress record for a workout.

        Used for the rating rollup and workout statistics.
        """
        ...
