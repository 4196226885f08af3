"""
Fake Workout Catalog for Testing.

In-memory implementation of WorkoutCatalog.
"""
from typing import Dict, List, Optional, Tuple

from domain.models import PlanShape, WorkoutPlan


class FakeWorkoutCatalog:
    """
    In-memory fake implementation of WorkoutCatalog.

    Unpublished plans are stored but never returned by get_plan.
    """

    def __init__(self):
        self._plans: Dict[str, WorkoutPlan] = {}
        self._unpublished: set = set()
        self.rating_updates: List[Tuple[str, int, int]] = []

    def reset(self) -> None:
        """Clear all stored data."""
        self._plans.clear()
        self._unpublished.clear()
        self.rating_updates.clear()

    def seed(self, plans: List[WorkoutPlan]) -> None:
        for plan in plans:
            self._plans[plan.id] = plan

    def add_plan(
        self,
        workout_id: str,
        *,
        total_weeks: int = 4,
        total_days_per_week: int = 3,
        title: str = "Test Plan",
        published: bool = True,
    ) -> WorkoutPlan:
        """Add a plan with the given shape and return it."""
        plan = WorkoutPlan(
            id=workout_id,
            title=title,
            plan_duration=f"{total_weeks} weeks",
            workouts_per_week=total_days_per_week,
            shape=PlanShape(
                total_weeks=total_weeks,
                total_days_per_week=total_days_per_week,
            ),
        )
        self._plans[workout_id] = plan
        if not published:
            self._unpublished.add(workout_id)
        return plan

    def get_plan(self, workout_id: str) -> Optional[WorkoutPlan]:
        if workout_id in self._unpublished:
            return None
        return self._plans.get(workout_id)

    def get_rating(self, workout_id: str) -> Optional[Tuple[int, int]]:
        plan = self._plans.get(workout_id)
        if plan is None:
            return None
        return int(plan.rating), plan.total_ratings

    def update_rating(
        self,
        workout_id: str,
        *,
        rating_sum: int,
        total_ratings: int,
        expected: Tuple[int, int],
    ) -> bool:
        """Compare-and-set; only successful writes are recorded in rating_updates."""
        if self.get_rating(workout_id) != tuple(expected):
            return False
        self.rating_updates.append((workout_id, rating_sum, total_ratings))
        plan = self._plans[workout_id]
        self._plans[workout_id] = plan.model_copy(update={
            "rating": rating_sum,
            "total_ratings": total_ratings,
        })
        return True
