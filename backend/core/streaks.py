"""
Workout streak calculation.

A streak counts consecutive completed days where each completion follows
the previous one by at most STREAK_MAX_GAP_DAYS whole days, so a single
rest day between sessions does not break it. The trailing streak is only
reported as current while the last completion is recent.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from domain.models import CompletedDayEntry


STREAK_MAX_GAP_DAYS = 2
STREAK_ACTIVE_WINDOW_DAYS = 3

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakSummary:
    """Streak state derived from completion timestamps."""
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: Optional[datetime] = None


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Number of full 24h periods from ``earlier`` to ``later`` (floored)."""
    return (later - earlier) // _ONE_DAY


def compute_streaks(
    completed_days: Iterable[CompletedDayEntry],
    now: datetime,
) -> StreakSummary:
    """
    Compute current and longest streaks.

    Args:
        completed_days: Completed-day log in any order
        now: Reference time for deciding whether the trailing streak lapsed

    Returns:
        StreakSummary; all zero for an empty log
    """
    timestamps = sorted(entry.completed_at for entry in completed_days)
    if not timestamps:
        return StreakSummary()

    running = 1
    longest = 1
    for previous, current in zip(timestamps, timestamps[1:]):
        if whole_days_between(previous, current) <= STREAK_MAX_GAP_DAYS:
            running += 1
        else:
            running = 1
        longest = max(longest, running)

    last = timestamps[-1]
    is_active = whole_days_between(last, now) <= STREAK_ACTIVE_WINDOW_DAYS

    return StreakSummary(
        current_streak=running if is_active else 0,
        longest_streak=longest,
        last_workout_date=last,
    )
