"""
Read-only views over a progress record.

Per-week progress, the next workout day and the overall completion
percentage are computed on read and never persisted.
"""
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from backend.core.progress_aggregates import count_days_per_week
from domain.models import PlanShape, ProgressRecord


@dataclass(frozen=True)
class WeekProgress:
    """Progress of a single plan week."""
    week: int
    completed_days: int
    total_days: int
    is_completed: bool
    is_unlocked: bool
    completion_percentage: int


@dataclass(frozen=True)
class NextWorkoutDay:
    """The next (week, day) unit the user should attempt."""
    week: int
    day: int
    is_unlocked: bool = True


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage, rounding halves up; 0 for an empty whole."""
    if whole <= 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def iter_plan_units(shape: PlanShape) -> Iterator[Tuple[int, int]]:
    """Yield every (week, day) of a plan in plan order."""
    for week in range(1, shape.total_weeks + 1):
        for day in range(1, shape.total_days_per_week + 1):
            yield (week, day)


def first_uncompleted_unit(record: ProgressRecord) -> Optional[Tuple[int, int]]:
    """Lowest (week, day) in plan order not yet logged, or None when all are."""
    done = record.completed_units
    for unit in iter_plan_units(record.shape):
        if unit not in done:
            return unit
    return None


def completion_percentage(record: ProgressRecord) -> int:
    """Share of plan units completed, 0-100."""
    return percentage(record.total_completed_days, record.shape.total_units)


def next_workout_day(record: ProgressRecord) -> Optional[NextWorkoutDay]:
    """Next unit to attempt, or None once the plan is fully completed."""
    unit = first_uncompleted_unit(record)
    if unit is None:
        return None
    week, day = unit
    return NextWorkoutDay(week=week, day=day, is_unlocked=True)


def project_weeks(record: ProgressRecord) -> List[WeekProgress]:
    """
    Build the per-week view of a record.

    A week is unlocked when it is at most one week past the cursor.
    """
    per_week = count_days_per_week(record.completed_days)
    total_days = record.total_days_per_week

    weeks = []
    for week in range(1, record.total_weeks + 1):
        completed = per_week.get(week, 0)
        weeks.append(WeekProgress(
            week=week,
            completed_days=completed,
            total_days=total_days,
            is_completed=completed == total_days,
            is_unlocked=week <= record.current_week + 1,
            completion_percentage=percentage(completed, total_days),
        ))
    return weeks
