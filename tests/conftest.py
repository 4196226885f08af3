"""
Shared fixtures for the progress API test suite.
"""
from datetime import datetime, timedelta, timezone

import pytest

from tests.fakes import FakeProgressRepository, FakeWorkoutCatalog

T0 = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


class SteppingClock:
    """Deterministic clock; tests move it forward explicitly."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def progress_repo():
    repo = FakeProgressRepository()
    yield repo
    repo.reset()


@pytest.fixture
def catalog():
    """Catalog with a 4 week x 3 day plan, a 1 week x 2 day plan and a draft."""
    catalog = FakeWorkoutCatalog()
    catalog.add_plan("plan-4x3", total_weeks=4, total_days_per_week=3, title="Strength Base")
    catalog.add_plan("plan-1x2", total_weeks=1, total_days_per_week=2, title="Quick Start")
    catalog.add_plan("draft", total_weeks=2, total_days_per_week=2, published=False)
    yield catalog
    catalog.reset()
