"""
Read-only progress reports: user overview, per-workout statistics and
bookmarked workouts.
"""

import logging
from typing import List

from application.ports import ProgressRepository, WorkoutCatalog
from application.use_cases.progress_writer import Clock, utc_now
from application.use_cases.track_progress import require_plan
from backend.core.progress_overview import (
    UserOverview,
    WorkoutStats,
    summarize_user_overview,
    summarize_workout_stats,
)
from backend.core.progress_tracker import refresh_streaks
from domain.models import ProgressRecord

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 5


class ProgressReportsUseCase:
    """
    Read-only views across many progress records.

    Usage:
        >>> reports = ProgressReportsUseCase(progress_repo, catalog)
        >>> overview = reports.user_overview("user-1")
        >>> overview.stats.completed_workouts
        2
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        catalog: WorkoutCatalog,
        *,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        clock: Clock = utc_now,
    ) -> None:
        self._progress_repo = progress_repo
        self._catalog = catalog
        self._recent_limit = recent_limit
        self._clock = clock

    def _current(self, records: List[ProgressRecord]) -> List[ProgressRecord]:
        """Streaks lapse with time, so re-evaluate them as of now."""
        now = self._clock()
        return [refresh_streaks(r, now) for r in records]

    def user_overview(self, user_id: str) -> UserOverview:
        records = self._current(self._progress_repo.list_for_user(user_id))
        logger.debug(f"Building overview for user {user_id} from {len(records)} records")
        return summarize_user_overview(records, recent_limit=self._recent_limit)

    def workout_stats(self, workout_id: str) -> WorkoutStats:
        """
        Raises:
            WorkoutNotFoundError: Unknown or unpublished workout
        """
        require_plan(self._catalog, workout_id)
        records = self._progress_repo.list_for_workout(workout_id)
        return summarize_workout_stats(records)

    def bookmarked(self, user_id: str) -> List[ProgressRecord]:
        """Bookmarked records, most recently bookmarked first."""
        records = self._current(
            [r for r in self._progress_repo.list_for_user(user_id) if r.is_bookmarked]
        )
        records.sort(
            key=lambda r: r.bookmarked_at or r.last_accessed_at,
            reverse=True,
        )
        return records
