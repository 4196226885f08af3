"""
Workout progress use cases: start, read and complete days.

StartWorkout creates the progress record lazily on first access. Day
completion never creates one; a user must start a workout before logging
days against it.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from application.exceptions import WorkoutNotFoundError
from application.ports import ProgressRepository, WorkoutCatalog
from application.use_cases.progress_writer import (
    DEFAULT_CONFLICT_RETRIES,
    Clock,
    ProgressWriter,
    utc_now,
)
from backend.core import progress_tracker
from domain.models import Difficulty, ProgressRecord, WorkoutPlan

logger = logging.getLogger(__name__)


def require_plan(catalog: WorkoutCatalog, workout_id: str) -> WorkoutPlan:
    """Fetch a published plan or raise WorkoutNotFoundError."""
    plan = catalog.get_plan(workout_id)
    if plan is None:
        raise WorkoutNotFoundError(workout_id)
    return plan


@dataclass
class StartWorkoutResult:
    """Result of starting or resuming a workout."""

    record: ProgressRecord
    plan: WorkoutPlan
    session_id: str


class StartWorkoutUseCase:
    """
    Start (or resume) a premade workout.

    Creates the progress record on first access, marks it started and
    returns the cursor the client should continue from, along with a fresh
    session id for the client's workout-session log.
    """

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

    def execute(self, user_id: str, workout_id: str) -> StartWorkoutResult:
        plan = require_plan(self._catalog, workout_id)

        record = self._writer.update(
            user_id,
            workout_id,
            progress_tracker.start_workout,
            create_with=plan.shape,
        )

        logger.info(
            f"User {user_id} started workout {workout_id} at "
            f"week {record.current_week}, day {record.current_day}"
        )
        return StartWorkoutResult(
            record=record,
            plan=plan,
            session_id=str(uuid.uuid4()),
        )


class GetProgressUseCase:
    """
    Read a user's progress on a workout without creating it.

    Reading refreshes last_accessed_at with an unconditional write. The
    returned streak is evaluated against the current time, not the last write.
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._progress_repo = progress_repo
        self._clock = clock

    def execute(self, user_id: str, workout_id: str) -> Optional[ProgressRecord]:
        record = self._progress_repo.get(user_id, workout_id)
        if record is None:
            return None

        now = self._clock()
        self._progress_repo.touch(user_id, workout_id, now)
        return progress_tracker.refresh_streaks(
            record.model_copy(update={"last_accessed_at": now}), now
        )


class CompleteDayUseCase:
    """
    Log completion of a (week, day) unit.

    Usage:
        >>> use_case = CompleteDayUseCase(progress_repo)
        >>> record = use_case.execute(
        ...     "user-1", "workout-1",
        ...     week=1, day=2, duration=35, difficulty="Medium",
        ... )
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        *,
        clock: Clock = utc_now,
        max_retries: int = DEFAULT_CONFLICT_RETRIES,
    ) -> None:
        self._writer = ProgressWriter(progress_repo, clock=clock, max_retries=max_retries)

    def execute(
        self,
        user_id: str,
        workout_id: str,
        *,
        week: int,
        day: int,
        duration: int,
        difficulty: Union[Difficulty, str],
        calories_burned: Optional[int] = None,
        notes: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ProgressRecord:
        """
        Raises:
            NoProgressRecordError: Workout never started by this user
            OutOfRangeError: week/day outside the pinned plan shape
            DuplicateCompletionError: Day already logged (possibly by
                a concurrent request from another device)
        """

        def _complete(record: ProgressRecord, now) -> ProgressRecord:
            return progress_tracker.complete_day(
                record,
                week,
                day,
                duration,
                difficulty,
                calories_burned,
                notes,
                session_id,
                now=now,
            )

        record = self._writer.update(user_id, workout_id, _complete)

        logger.info(
            f"User {user_id} completed week {week}, day {day} of workout {workout_id} "
            f"({record.total_completed_days} days total)"
        )
        return record
