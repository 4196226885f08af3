"""
Domain layer for the FitCoach Progress API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    CompletedDayEntry,
    Difficulty,
    PlanShape,
    PreferredWorkoutTime,
    ProgressRecord,
    WorkoutPlan,
)

__all__ = [
    "CompletedDayEntry",
    "Difficulty",
    "PlanShape",
    "PreferredWorkoutTime",
    "ProgressRecord",
    "WorkoutPlan",
]
