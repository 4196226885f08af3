"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeProgressRepository, create_progress_record

    repo = FakeProgressRepository()
    repo.seed([create_progress_record(user_id="user1", workout_id="w1")])
"""
from datetime import datetime, timezone
from typing import Optional

from domain.models import PlanShape, ProgressRecord
from tests.fakes.progress_repository import FakeProgressRepository
from tests.fakes.workout_catalog import FakeWorkoutCatalog

DEFAULT_NOW = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


# =============================================================================
# Factory Functions
# =============================================================================


def create_progress_record(
    *,
    user_id: str = "test_user",
    workout_id: str = "workout-1",
    total_weeks: int = 4,
    total_days_per_week: int = 3,
    now: Optional[datetime] = None,
    **overrides,
) -> ProgressRecord:
    """
    Create a fresh ProgressRecord with optional field overrides.

    Args:
        user_id: Owner of the record
        workout_id: Workout the record tracks
        total_weeks: Plan weeks
        total_days_per_week: Plan days per week
        now: Creation time (defaults to a fixed timestamp)
        **overrides: Any other ProgressRecord fields

    Returns:
        ProgressRecord with version 0
    """
    record = ProgressRecord.new(
        user_id,
        workout_id,
        PlanShape(total_weeks=total_weeks, total_days_per_week=total_days_per_week),
        now or DEFAULT_NOW,
    )
    if overrides:
        record = record.model_copy(update=overrides)
    return record


def create_catalog(*workout_ids: str, **shape) -> FakeWorkoutCatalog:
    """Create a FakeWorkoutCatalog with one published plan per id."""
    catalog = FakeWorkoutCatalog()
    for workout_id in workout_ids:
        catalog.add_plan(workout_id, **shape)
    return catalog


__all__ = [
    # Fakes
    "FakeProgressRepository",
    "FakeWorkoutCatalog",
    # Factories
    "create_progress_record",
    "create_catalog",
    "DEFAULT_NOW",
]
