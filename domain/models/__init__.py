"""
Domain models for the FitCoach Progress API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

- ProgressRecord: per-user, per-workout progress through a plan
- CompletedDayEntry: one logged (week, day) completion
- PlanShape: the pinned (total_weeks, total_days_per_week) of a plan
- WorkoutPlan: catalog read model of a premade workout

Usage:
    >>> from domain.models import ProgressRecord, PlanShape

    >>> record = ProgressRecord.new("user-1", "workout-1", PlanShape(
    ...     total_weeks=4, total_days_per_week=3), now)
"""

from domain.models.progress import (
    MAX_DAYS_PER_WEEK,
    MAX_PLAN_WEEKS,
    CompletedDayEntry,
    Difficulty,
    PlanShape,
    PreferredWorkoutTime,
    ProgressRecord,
    WorkoutPlan,
)

__all__ = [
    "MAX_DAYS_PER_WEEK",
    "MAX_PLAN_WEEKS",
    "CompletedDayEntry",
    "Difficulty",
    "PlanShape",
    "PreferredWorkoutTime",
    "ProgressRecord",
    "WorkoutPlan",
]
