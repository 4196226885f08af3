"""
Cross-record progress summaries.

- User overview: totals across all of a user's progress records plus the
  most recently accessed ones.
- Workout statistics: how all users are doing on one workout.
- Rating rollup: the (sum, count) pair stored on the catalog workout.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from backend.core.weekly_projection import completion_percentage
from domain.models import ProgressRecord


@dataclass
class OverviewStats:
    """Totals across all progress records of one user."""
    total_workouts: int = 0
    started_workouts: int = 0
    completed_workouts: int = 0
    bookmarked_workouts: int = 0
    total_time_spent: int = 0
    total_calories_burned: int = 0
    total_completed_days: int = 0
    average_rating: Optional[float] = None
    longest_streak: int = 0


@dataclass
class UserOverview:
    """Overview returned by the progress overview endpoint."""
    stats: OverviewStats
    recent_progress: List[ProgressRecord] = field(default_factory=list)


@dataclass
class WorkoutStats:
    """How all users are progressing through one workout."""
    total_users: int = 0
    completed_users: int = 0
    average_completion_rate: float = 0
    average_rating: Optional[float] = None
    total_ratings: int = 0
    average_time_spent: float = 0
    bookmark_count: int = 0


def _mean(values: Sequence[float]) -> Optional[float]:
    """Mean rounded to one decimal, None for no values."""
    if not values:
        return None
    return round(sum(values) / len(values), 1)


def summarize_user_overview(
    records: Sequence[ProgressRecord],
    recent_limit: int = 5,
) -> UserOverview:
    """
    Aggregate a user's progress records.

    Args:
        records: All progress records of the user
        recent_limit: Number of most recently accessed records to include

    Returns:
        UserOverview with totals and recent records
    """
    ratings = [r.user_rating for r in records if r.user_rating is not None]

    stats = OverviewStats(
        total_workouts=len(records),
        started_workouts=sum(1 for r in records if r.is_started),
        completed_workouts=sum(1 for r in records if r.is_completed),
        bookmarked_workouts=sum(1 for r in records if r.is_bookmarked),
        total_time_spent=sum(r.total_time_spent for r in records),
        total_calories_burned=sum(r.total_calories_burned for r in records),
        total_completed_days=sum(r.total_completed_days for r in records),
        average_rating=_mean(ratings),
        longest_streak=max((r.longest_streak for r in records), default=0),
    )

    recent = sorted(records, key=lambda r: r.last_accessed_at, reverse=True)
    return UserOverview(stats=stats, recent_progress=recent[:recent_limit])


def summarize_workout_stats(records: Sequence[ProgressRecord]) -> WorkoutStats:
    """Aggregate every user's progress record for a single workout."""
    if not records:
        return WorkoutStats()

    ratings = [r.user_rating for r in records if r.user_rating is not None]
    return WorkoutStats(
        total_users=len(records),
        completed_users=sum(1 for r in records if r.is_completed),
        average_completion_rate=_mean([completion_percentage(r) for r in records]),
        average_rating=_mean(ratings),
        total_ratings=len(ratings),
        average_time_spent=_mean([r.total_time_spent for r in records]),
        bookmark_count=sum(1 for r in records if r.is_bookmarked),
    )


def rating_rollup(records: Sequence[ProgressRecord]) -> Tuple[int, int]:
    """
    Sum and count of user ratings for a workout.

    The catalog stores the sum as ``rating`` and the count as
    ``total_ratings``; the displayed average is derived from both.
    """
    ratings = [r.user_rating for r in records if r.user_rating is not None]
    return sum(ratings), len(ratings)
