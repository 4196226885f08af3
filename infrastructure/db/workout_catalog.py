"""
Supabase implementation of WorkoutCatalog.

Reads published premade workouts from the workouts table and writes the
rating rollup back onto them.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from supabase import Client

from application.exceptions import PersistenceError
from domain.converters import db_row_to_workout_plan
from domain.models import WorkoutPlan

logger = logging.getLogger(__name__)

WORKOUTS_TABLE = "workouts"
PLAN_COLUMNS = "id, title, plan_duration, workouts_per_week, is_published, rating, total_ratings"
RATING_COLUMNS = "rating, total_ratings"


class SupabaseWorkoutCatalog:
    """
    Supabase implementation of WorkoutCatalog protocol.
    """

    def __init__(self, client: Client):
        self._client = client

    def get_plan(self, workout_id: str) -> Optional[WorkoutPlan]:
        """Get a published workout plan, or None."""
        try:
            result = (
                self._client.table(WORKOUTS_TABLE)
                .select(PLAN_COLUMNS)
                .eq("id", workout_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Failed to load workout {workout_id}: {e}")
            raise PersistenceError(f"Failed to load workout {workout_id}") from e

        if not result.data:
            return None

        try:
            return db_row_to_workout_plan(result.data[0])
        except ValueError as e:
            # Catalog rows with an unusable plan shape cannot be tracked
            logger.warning(f"Workout {workout_id} has an invalid plan shape: {e}")
            return None

    def get_rating(self, workout_id: str) -> Optional[Tuple[int, int]]:
        """Get (rating_sum, total_ratings) regardless of publish state."""
        try:
            result = (
                self._client.table(WORKOUTS_TABLE)
                .select(RATING_COLUMNS)
                .eq("id", workout_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Failed to load rating for workout {workout_id}: {e}")
            raise PersistenceError(f"Failed to load rating for workout {workout_id}") from e

        if not result.data:
            return None
        row = result.data[0]
        return int(row.get("rating") or 0), int(row.get("total_ratings") or 0)

    def update_rating(
        self,
        workout_id: str,
        *,
        rating_sum: int,
        total_ratings: int,
        expected: Tuple[int, int],
    ) -> bool:
        """
        Store the rating sum and count, conditional on the stored pair still
        matching ``expected``. Zero rows updated means another writer won.
        """
        expected_sum, expected_count = expected
        try:
            result = (
                self._client.table(WORKOUTS_TABLE)
                .update({
                    "rating": rating_sum,
                    "total_ratings": total_ratings,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                })
                .eq("id", workout_id)
                .eq("rating", expected_sum)
                .eq("total_ratings", expected_count)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Failed to update rating for workout {workout_id}: {e}")
            raise PersistenceError(f"Failed to update rating for workout {workout_id}") from e

        return bool(result.data)
