"""
Workout Catalog Interface (Port).

The premade workout catalog is owned by another subsystem. Progress
tracking reads a plan's shape from it and writes back one thing only:
the aggregate rating rolled up from users' progress records.
"""
from typing import Optional, Protocol, Tuple

from domain.models import WorkoutPlan


class WorkoutCatalog(Protocol):
    """
    Abstract interface for premade workout lookups.
    """

    def get_plan(
        self,
        workout_id: str,
    ) -> Optional[WorkoutPlan]:
        """
        Get a published workout plan.

        Args:
            workout_id: Catalog workout ID

        Returns:
            WorkoutPlan, or None when missing or unpublished
        """
        ...

    def get_rating(
        self,
        workout_id: str,
    ) -> Optional[Tuple[int, int]]:
        """
        Get the stored rating rollup, published or not.

        Returns:
            (rating_sum, total_ratings), or None when the workout is missing
        """
        ...

    def update_rating(
        self,
        workout_id: str,
        *,
        rating_sum: int,
        total_ratings: int,
        expected: Tuple[int, int],
    ) -> bool:
        """
        Store the rating rollup if the stored one still equals ``expected``.

        Args:
            workout_id: Catalog workout ID
            rating_sum: Sum of all users' ratings
            total_ratings: Number of users who rated
            expected: (rating_sum, total_ratings) the rollup was computed against

        Returns:
            True if written, False if another writer changed the rollup first
        """
        ...
