"""
Aggregate recomputation for workout progress.

Turns the completed-day log of a progress record into its derived totals.
The reduction is order-independent: users may complete day 2 of a week
before day 1, so entries are never assumed to arrive in plan order.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from domain.models import CompletedDayEntry, Difficulty, PlanShape


# Linear 1-5 scale used for average difficulty. Kept as-is for
# compatibility with stored averages.
DIFFICULTY_SCORES: Dict[Difficulty, int] = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 5,
}


@dataclass(frozen=True)
class AggregateTotals:
    """Derived totals of a completed-day log."""
    total_completed_days: int = 0
    total_time_spent: int = 0
    total_calories_burned: int = 0
    average_difficulty: float = 0
    completed_weeks: List[int] = field(default_factory=list)
    is_completed: bool = False


def count_days_per_week(completed_days: Iterable[CompletedDayEntry]) -> Dict[int, int]:
    """Number of distinct completed days logged for each week."""
    days_by_week: Dict[int, set] = {}
    for entry in completed_days:
        days_by_week.setdefault(entry.week, set()).add(entry.day)
    return {week: len(days) for week, days in days_by_week.items()}


def compute_aggregates(
    completed_days: Iterable[CompletedDayEntry],
    shape: PlanShape,
) -> AggregateTotals:
    """
    Compute derived totals from a completed-day log.

    Args:
        completed_days: The full completed-day log, in any order
        shape: Plan shape the record is pinned to

    Returns:
        AggregateTotals for the log
    """
    entries = list(completed_days)
    if not entries:
        return AggregateTotals()

    total_time = sum(entry.duration for entry in entries)
    total_calories = sum(entry.calories_burned or 0 for entry in entries)
    total_difficulty = sum(DIFFICULTY_SCORES[Difficulty(entry.difficulty)] for entry in entries)

    per_week = count_days_per_week(entries)
    completed_weeks = sorted(
        week
        for week in range(1, shape.total_weeks + 1)
        if per_week.get(week, 0) == shape.total_days_per_week
    )

    return AggregateTotals(
        total_completed_days=len(entries),
        total_time_spent=total_time,
        total_calories_burned=total_calories,
        average_difficulty=total_difficulty / len(entries),
        completed_weeks=completed_weeks,
        is_completed=len(entries) == shape.total_units,
    )
