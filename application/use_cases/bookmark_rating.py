"""
Bookmark, rating and reminder use cases.

Bookmarking and reminder preferences create the progress record lazily.
Rating requires an existing record: a user must have started a workout to
rate it. Every successful rating triggers a rollup of all users' ratings
onto the catalog workout.
"""

import logging
from typing import Optional

from application.exceptions import ConcurrencyConflictError, PersistenceError
from application.ports import ProgressRepository, WorkoutCatalog
from application.use_cases.progress_writer import (
    DEFAULT_CONFLICT_RETRIES,
    Clock,
    ProgressWriter,
    utc_now,
)
from application.use_cases.track_progress import require_plan
from backend.core import progress_tracker
from backend.core.progress_overview import rating_rollup
from domain.models import ProgressRecord

logger = logging.getLogger(__name__)

ROLLUP_ATTEMPTS = 3


class BookmarkWorkoutUseCase:
    """Set or clear the bookmark on a workout."""

    def __init__(
        self,
        progress_repo: ProgressRepository,
        catalog: WorkoutCatalog,
        *,
        clock: Clock = utc_now,
        max_retries: int = DEFAULT_CONFLICT_RETRIES,
    ) -> None:
        self._catalog = catalog
        self._writer = ProgressWriter(progress_repo, clock=clock, max_retries=max_retries)

    def execute(self, user_id: str, workout_id: str, *, bookmarked: bool) -> ProgressRecord:
        plan = require_plan(self._catalog, workout_id)

        record = self._writer.update(
            user_id,
            workout_id,
            lambda current, now: progress_tracker.set_bookmark(current, bookmarked, now),
            create_with=plan.shape,
        )
        logger.info(
            f"User {user_id} {'bookmarked' if bookmarked else 'removed bookmark from'} "
            f"workout {workout_id}"
        )
        return record

    def toggle(self, user_id: str, workout_id: str) -> ProgressRecord:
        """Flip the current bookmark state."""
        plan = require_plan(self._catalog, workout_id)
        return self._writer.update(
            user_id,
            workout_id,
            progress_tracker.toggle_bookmark,
            create_with=plan.shape,
        )


class RateWorkoutUseCase:
    """
    Rate a started workout and roll ratings up onto the catalog.

    Usage:
        >>> use_case = RateWorkoutUseCase(progress_repo, catalog)
        >>> record = use_case.execute("user-1", "workout-1", rating=4, review="Solid")
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        catalog: WorkoutCatalog,
        *,
        clock: Clock = utc_now,
        max_retries: int = DEFAULT_CONFLICT_RETRIES,
    ) -> None:
        self._progress_repo = progress_repo
        self._catalog = catalog
        self._writer = ProgressWriter(progress_repo, clock=clock, max_retries=max_retries)

    def execute(
        self,
        user_id: str,
        workout_id: str,
        *,
        rating: int,
        review: Optional[str] = None,
    ) -> ProgressRecord:
        """
        Raises:
            RatingRangeError: rating outside 1-5
            NoProgressRecordError: Workout never started by this user
        """
        record = self._writer.update(
            user_id,
            workout_id,
            lambda current, now: progress_tracker.rate_workout(
                current, rating, review, now=now
            ),
        )
        logger.info(f"User {user_id} rated workout {workout_id}: {rating}")

        # The rating is already stored; the next rating re-derives the rollup
        try:
            self._roll_up_ratings(workout_id)
        except (ConcurrencyConflictError, PersistenceError) as e:
            logger.warning(f"Rating rollup for workout {workout_id} failed: {e}")
        return record

    def _roll_up_ratings(self, workout_id: str) -> None:
        """
        Recompute the catalog rating from every user's stored rating.

        The write is conditional on the catalog still holding the rollup
        read before the ratings were listed, so a slower writer holding a
        stale list cannot overwrite a newer rollup.
        """
        for attempt in range(1, ROLLUP_ATTEMPTS + 1):
            current = self._catalog.get_rating(workout_id)
            if current is None:
                logger.warning(f"Workout {workout_id} vanished before rating rollup")
                return

            records = self._progress_repo.list_for_workout(workout_id)
            rating_sum, total_ratings = rating_rollup(records)
            if (rating_sum, total_ratings) == current:
                return

            if self._catalog.update_rating(
                workout_id,
                rating_sum=rating_sum,
                total_ratings=total_ratings,
                expected=current,
            ):
                logger.debug(
                    f"Workout {workout_id} rating rollup: sum={rating_sum}, count={total_ratings}"
                )
                return
            logger.warning(
                f"Rating rollup conflict on workout {workout_id} "
                f"(attempt {attempt}/{ROLLUP_ATTEMPTS})"
            )

        raise ConcurrencyConflictError(
            f"Rating rollup for workout {workout_id} kept conflicting"
        )


class UpdateReminderUseCase:
    """Update reminder preferences for a workout."""

    def __init__(
        self,
        progress_repo: ProgressRepository,
        catalog: WorkoutCatalog,
        *,
        clock: Clock = utc_now,
        max_retries: int = DEFAULT_CONFLICT_RETRIES,
    ) -> None:
        self._catalog = catalog
        self._writer = ProgressWriter(progress_repo, clock=clock, max_retries=max_retries)

    def execute(
        self,
        user_id: str,
        workout_id: str,
        *,
        reminder_time: Optional[str] = None,
        is_reminder_enabled: Optional[bool] = None,
        preferred_workout_time: Optional[str] = None,
    ) -> ProgressRecord:
        plan = require_plan(self._catalog, workout_id)
        return self._writer.update(
            user_id,
            workout_id,
            lambda current, now: progress_tracker.update_reminder(
                current,
                now=now,
                reminder_time=reminder_time,
                is_reminder_enabled=is_reminder_enabled,
                preferred_workout_time=preferred_workout_time,
            ),
            create_with=plan.shape,
        )
