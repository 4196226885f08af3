"""
Converters: Database row format <-> progress domain models.

Provides bidirectional conversion between Supabase database rows
and the ProgressRecord domain model, plus the read-only mapping of
catalog rows to WorkoutPlan.

Database schema (user_workout_progress table):
- id: UUID
- user_id, workout_id: unique pair
- version: integer, incremented on every write
- completed_days: JSONB array of completed-day entries
- completed_weeks: integer array
- remaining columns mirror ProgressRecord field names

Database schema (workouts table, read here):
- id, title, is_published
- plan_duration: '2 weeks' | '4 weeks' | '6 weeks' | '8+ weeks'
- workouts_per_week: 1-7
- rating (sum of user ratings), total_ratings (count)
"""

import re
from typing import Any, Dict, Optional

from domain.models import PlanShape, ProgressRecord, WorkoutPlan


PLAN_DURATION_WEEKS: Dict[str, int] = {
    "2 weeks": 2,
    "4 weeks": 4,
    "6 weeks": 6,
    "8+ weeks": 8,
}

_LEADING_NUMBER = re.compile(r"^\s*(\d+)")


def plan_duration_to_weeks(plan_duration: Any) -> int:
    """
    Map a catalog ``plan_duration`` label to a number of weeks.

    Args:
        plan_duration: Label such as "4 weeks", or an integer.

    Returns:
        Number of weeks in the plan.

    Raises:
        ValueError: If the label cannot be interpreted.
    """
    if isinstance(plan_duration, int):
        return plan_duration
    if not isinstance(plan_duration, str):
        raise ValueError(f"Unsupported plan duration: {plan_duration!r}")

    weeks = PLAN_DURATION_WEEKS.get(plan_duration.strip().lower())
    if weeks is not None:
        return weeks

    match = _LEADING_NUMBER.match(plan_duration)
    if not match:
        raise ValueError(f"Unsupported plan duration: {plan_duration!r}")
    return int(match.group(1))


def db_row_to_progress(row: Dict[str, Any]) -> ProgressRecord:
    """
    Convert a user_workout_progress row to a ProgressRecord.

    Extra columns (created_at, updated_at) are ignored; ISO timestamps and
    the completed_days JSON are parsed by the model itself.
    """
    data = dict(row)
    if data.get("id") is not None:
        data["id"] = str(data["id"])
    data["completed_days"] = tuple(data.get("completed_days") or ())
    data["completed_weeks"] = list(data.get("completed_weeks") or [])
    if data.get("version") is None:
        data["version"] = 0
    return ProgressRecord.model_validate(data)


def progress_to_db_row(record: ProgressRecord) -> Dict[str, Any]:
    """
    Convert a ProgressRecord to a JSON-safe row for persistence.

    The id and version columns are left to the repository: id is assigned
    by the database and version is managed by the conditional write.
    """
    row = record.model_dump(mode="json", exclude={"id", "version"})
    row["completed_days"] = list(row["completed_days"])
    return row


def db_row_to_workout_plan(row: Dict[str, Any]) -> Optional[WorkoutPlan]:
    """
    Convert a workouts row to a WorkoutPlan.

    Returns:
        WorkoutPlan, or None when the workout is unpublished.
    """
    if not row.get("is_published", True):
        return None

    shape = PlanShape(
        total_weeks=plan_duration_to_weeks(row.get("plan_duration")),
        total_days_per_week=int(row.get("workouts_per_week") or 0),
    )
    return WorkoutPlan(
        id=str(row["id"]),
        title=row.get("title") or "",
        plan_duration=row.get("plan_duration"),
        workouts_per_week=row.get("workouts_per_week"),
        shape=shape,
        rating=row.get("rating") or 0,
        total_ratings=row.get("total_ratings") or 0,
    )
