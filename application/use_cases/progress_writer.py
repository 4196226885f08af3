"""
Optimistic read-modify-write for progress records.

Every mutating use case goes through ProgressWriter.update: it reads the
latest snapshot, applies a pure domain function, and writes the result
conditionally on the version it read. When another request won the race
the whole cycle runs again against the fresh snapshot, so domain checks
(such as duplicate day detection) see the other writer's changes.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from application.exceptions import ConcurrencyConflictError, NoProgressRecordError
from application.ports import ProgressRepository
from domain.models import PlanShape, ProgressRecord

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Mutation = Callable[[ProgressRecord, datetime], ProgressRecord]

DEFAULT_CONFLICT_RETRIES = 1


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class ProgressWriter:
    """
    Applies domain mutations to stored progress records with conflict retry.

    Usage:
        >>> writer = ProgressWriter(progress_repo)
        >>> record = writer.update(
        ...     "user-1", "workout-1",
        ...     lambda record, now: toggle_bookmark(record, now),
        ... )
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        *,
        clock: Clock = utc_now,
        max_retries: int = DEFAULT_CONFLICT_RETRIES,
    ) -> None:
        """
        Args:
            progress_repo: Repository for progress records
            clock: Source of the current time
            max_retries: Re-attempts after a lost optimistic write
        """
        self._progress_repo = progress_repo
        self._clock = clock
        self._max_retries = max(0, max_retries)

    @property
    def clock(self) -> Clock:
        return self._clock

    def update(
        self,
        user_id: str,
        workout_id: str,
        mutate: Mutation,
        *,
        create_with: Optional[PlanShape] = None,
    ) -> ProgressRecord:
        """
        Read, mutate and conditionally write one progress record.

        Args:
            user_id: Owner of the record
            workout_id: Workout the record tracks
            mutate: Pure function (record, now) -> new record
            create_with: Plan shape for creating the record when absent.
                When None, a missing record is an error.

        Returns:
            The persisted record

        Raises:
            NoProgressRecordError: Record missing and create_with not given
            ConcurrencyConflictError: Still conflicting after all retries
            ProgressError: Whatever the mutation raises
        """
        attempts = self._max_retries + 1

        for attempt in range(1, attempts + 1):
            now = self._clock()
            if create_with is None:
                current = self._progress_repo.get(user_id, workout_id)
                if current is None:
                    raise NoProgressRecordError(workout_id)
            else:
                current = self._progress_repo.get_or_create(
                    user_id, workout_id, create_with, now
                )

            updated = mutate(current, now)

            try:
                return self._progress_repo.save(updated)
            except ConcurrencyConflictError:
                if attempt >= attempts:
                    logger.warning(
                        f"Progress {user_id}/{workout_id} still conflicting "
                        f"after {attempts} attempts"
                    )
                    raise
                logger.warning(
                    f"Concurrent update on progress {user_id}/{workout_id}, "
                    f"retrying ({attempt}/{self._max_retries})"
                )

        raise ConcurrencyConflictError("Progress update could not be applied")
