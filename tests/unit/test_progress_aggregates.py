"""
Unit tests for backend/core/progress_aggregates.py and backend/core/streaks.py
"""
from datetime import datetime, timedelta, timezone

import pytest

from backend.core.progress_aggregates import (
    DIFFICULTY_SCORES,
    compute_aggregates,
    count_days_per_week,
)
from backend.core.streaks import compute_streaks, whole_days_between
from domain.models import CompletedDayEntry, Difficulty, PlanShape

T0 = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)
SHAPE_4X3 = PlanShape(total_weeks=4, total_days_per_week=3)


def entry(week, day, at=T0, duration=30, difficulty=Difficulty.MEDIUM, calories=None):
    return CompletedDayEntry(
        week=week,
        day=day,
        completed_at=at,
        duration=duration,
        difficulty=difficulty,
        calories_burned=calories,
    )


@pytest.mark.unit
class TestComputeAggregates:
    """Test the aggregate reduction over completed days."""

    def test_empty_log_has_zero_totals(self):
        totals = compute_aggregates([], SHAPE_4X3)

        assert totals.total_completed_days == 0
        assert totals.total_time_spent == 0
        assert totals.total_calories_burned == 0
        assert totals.average_difficulty == 0
        assert totals.completed_weeks == []
        assert totals.is_completed is False

    def test_sums_duration_and_calories(self):
        entries = [
            entry(1, 1, duration=30, calories=200),
            entry(1, 2, duration=45),
            entry(2, 1, duration=25, calories=150),
        ]
        totals = compute_aggregates(entries, SHAPE_4X3)

        assert totals.total_completed_days == 3
        assert totals.total_time_spent == 100
        assert totals.total_calories_burned == 350

    def test_average_difficulty_uses_linear_scale(self):
        entries = [
            entry(1, 1, difficulty=Difficulty.EASY),
            entry(1, 2, difficulty=Difficulty.HARD),
            entry(1, 3, difficulty=Difficulty.HARD),
        ]
        totals = compute_aggregates(entries, SHAPE_4X3)

        assert DIFFICULTY_SCORES[Difficulty.EASY] == 1
        assert DIFFICULTY_SCORES[Difficulty.MEDIUM] == 3
        assert totals.average_difficulty == pytest.approx((1 + 5 + 5) / 3)

    def test_week_complete_only_with_all_days(self):
        entries = [entry(1, 1), entry(1, 2), entry(1, 3), entry(2, 1), entry(2, 3)]
        totals = compute_aggregates(entries, SHAPE_4X3)

        assert totals.completed_weeks == [1]

    def test_order_independent(self):
        entries = [entry(2, 2), entry(1, 3), entry(1, 1), entry(2, 1), entry(1, 2)]

        forward = compute_aggregates(entries, SHAPE_4X3)
        backward = compute_aggregates(list(reversed(entries)), SHAPE_4X3)

        assert forward == backward

    def test_completed_when_every_unit_logged(self):
        shape = PlanShape(total_weeks=1, total_days_per_week=2)
        totals = compute_aggregates([entry(1, 2), entry(1, 1)], shape)

        assert totals.is_completed is True
        assert totals.completed_weeks == [1]

    def test_count_days_per_week(self):
        counts = count_days_per_week([entry(1, 1), entry(1, 3), entry(3, 2)])

        assert counts == {1: 2, 3: 1}


@pytest.mark.unit
class TestComputeStreaks:
    """Test streak calculation over completion timestamps."""

    def test_empty_log(self):
        summary = compute_streaks([], now=T0)

        assert summary.current_streak == 0
        assert summary.longest_streak == 0
        assert summary.last_workout_date is None

    def test_single_entry_is_streak_of_one(self):
        summary = compute_streaks([entry(1, 1, at=T0)], now=T0)

        assert summary.current_streak == 1
        assert summary.longest_streak == 1
        assert summary.last_workout_date == T0

    def test_one_rest_day_keeps_streak(self):
        entries = [
            entry(1, 1, at=T0),
            entry(1, 2, at=T0 + timedelta(days=2)),
            entry(1, 3, at=T0 + timedelta(days=4)),
        ]
        summary = compute_streaks(entries, now=T0 + timedelta(days=4))

        assert summary.current_streak == 3
        assert summary.longest_streak == 3

    def test_gap_over_two_days_breaks_streak(self):
        """Completions at t0, t0+1d, t0+4d: the streak breaks before the third."""
        entries = [
            entry(1, 1, at=T0),
            entry(1, 2, at=T0 + timedelta(days=1)),
            entry(1, 3, at=T0 + timedelta(days=4)),
        ]
        summary = compute_streaks(entries, now=T0 + timedelta(days=4, hours=1))

        assert summary.longest_streak == 2
        assert summary.current_streak == 1
        assert summary.last_workout_date == T0 + timedelta(days=4)

    def test_streak_lapses_after_activity_window(self):
        entries = [entry(1, 1, at=T0), entry(1, 2, at=T0 + timedelta(days=1))]

        summary = compute_streaks(entries, now=T0 + timedelta(days=5))

        assert summary.current_streak == 0
        assert summary.longest_streak == 2

    def test_streak_still_active_on_third_day(self):
        entries = [entry(1, 1, at=T0)]

        summary = compute_streaks(entries, now=T0 + timedelta(days=3, hours=23))

        assert summary.current_streak == 1

    def test_unsorted_input_is_sorted_by_completion_time(self):
        entries = [
            entry(1, 3, at=T0 + timedelta(days=2)),
            entry(1, 1, at=T0),
            entry(1, 2, at=T0 + timedelta(days=1)),
        ]
        summary = compute_streaks(entries, now=T0 + timedelta(days=2))

        assert summary.current_streak == 3
        assert summary.last_workout_date == T0 + timedelta(days=2)

    def test_whole_days_between_floors_partial_days(self):
        assert whole_days_between(T0, T0 + timedelta(hours=71)) == 2
        assert whole_days_between(T0, T0 + timedelta(hours=72)) == 3
