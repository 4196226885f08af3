"""
Domain converters between Supabase rows and progress domain models.

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_progress, progress_to_db_row

    >>> record = db_row_to_progress(row)
    >>> row = progress_to_db_row(record)
"""

from domain.converters.db_converters import (
    PLAN_DURATION_WEEKS,
    db_row_to_progress,
    db_row_to_workout_plan,
    plan_duration_to_weeks,
    progress_to_db_row,
)

__all__ = [
    "PLAN_DURATION_WEEKS",
    "db_row_to_progress",
    "db_row_to_workout_plan",
    "plan_duration_to_weeks",
    "progress_to_db_row",
]
