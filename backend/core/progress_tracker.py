"""
Progress tracking engine.

Pure functions taking a ProgressRecord and returning a new one. Every
mutator finishes with ``recompute`` so derived fields are always written
together with the log they are derived from.

- complete_day: the only operation that appends to the completed-day log
- start_workout: mark a plan started / resumed
- toggle_bookmark / set_bookmark: bookmark state
- rate_workout: user rating and review
- update_reminder: reminder preferences
"""
import logging
import re
from datetime import datetime
from typing import Optional, Union

from application.exceptions import (
    DuplicateCompletionError,
    OutOfRangeError,
    RatingRangeError,
    ValidationError,
)
from backend.core.progress_aggregates import compute_aggregates
from backend.core.streaks import compute_streaks
from backend.core.weekly_projection import first_uncompleted_unit
from domain.models import (
    CompletedDayEntry,
    Difficulty,
    PreferredWorkoutTime,
    ProgressRecord,
)

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
MAX_NOTES_LENGTH = 500
MAX_REVIEW_LENGTH = 1000

REMINDER_TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


# =============================================================================
# Recompute
# =============================================================================


def recompute(record: ProgressRecord, now: datetime) -> ProgressRecord:
    """
    Rebuild every derived field of a record from its completed-day log.

    Deterministic for a given ``now``; running it twice yields the same
    record. ``completed_at`` is stamped only the first time the plan
    becomes complete.

    Args:
        record: Record whose log is authoritative
        now: Reference time (streak activity window, completion stamp)

    Returns:
        New record with aggregates, streaks and cursor refreshed
    """
    totals = compute_aggregates(record.completed_days, record.shape)
    streaks = compute_streaks(record.completed_days, now)

    completed_at = record.completed_at
    if totals.is_completed and completed_at is None:
        completed_at = now

    updated = record.model_copy(update={
        "total_completed_days": totals.total_completed_days,
        "total_time_spent": totals.total_time_spent,
        "total_calories_burned": totals.total_calories_burned,
        "average_difficulty": totals.average_difficulty,
        "completed_weeks": totals.completed_weeks,
        "is_completed": totals.is_completed,
        "completed_at": completed_at,
        "current_streak": streaks.current_streak,
        "longest_streak": streaks.longest_streak,
        "last_workout_date": streaks.last_workout_date,
    })
    return advance_cursor(updated)


def refresh_streaks(record: ProgressRecord, now: datetime) -> ProgressRecord:
    """
    Re-evaluate the streak fields against ``now`` for a read view.

    ``current_streak`` lapses with time alone, so the stored value is only
    exact as of the last write.
    """
    streaks = compute_streaks(record.completed_days, now)
    return record.model_copy(update={
        "current_streak": streaks.current_streak,
        "longest_streak": streaks.longest_streak,
        "last_workout_date": streaks.last_workout_date,
    })


def advance_cursor(record: ProgressRecord) -> ProgressRecord:
    """
    Point the cursor at the lowest (week, day) not yet completed.

    Once every unit is completed the cursor rests on the final unit.
    """
    unit = first_uncompleted_unit(record)
    if unit is None:
        unit = (record.total_weeks, record.total_days_per_week)

    week, day = unit
    if (week, day) == (record.current_week, record.current_day):
        return record
    return record.model_copy(update={"current_week": week, "current_day": day})


# =============================================================================
# Day Completion
# =============================================================================


def _coerce_difficulty(difficulty: Union[Difficulty, str]) -> Difficulty:
    try:
        return Difficulty(difficulty)
    except ValueError:
        allowed = ", ".join(d.value for d in Difficulty)
        raise ValidationError(f"Difficulty must be one of: {allowed}")


def complete_day(
    record: ProgressRecord,
    week: int,
    day: int,
    duration: int,
    difficulty: Union[Difficulty, str],
    calories_burned: Optional[int] = None,
    notes: Optional[str] = None,
    session_id: Optional[str] = None,
    *,
    now: datetime,
) -> ProgressRecord:
    """
    Log completion of one (week, day) unit.

    Args:
        record: Current record
        week: Plan week, 1..total_weeks
        day: Day within the week, 1..total_days_per_week
        duration: Minutes spent, at least 1
        difficulty: Easy, Medium or Hard
        calories_burned: Optional calories, not negative
        notes: Optional notes, up to 500 characters
        session_id: Optional id of an external workout-session log entry
        now: Completion time

    Returns:
        New record with the entry appended and derived fields recomputed

    Raises:
        OutOfRangeError: week/day outside the plan shape
        DuplicateCompletionError: (week, day) already logged
        ValidationError: invalid duration, calories, notes or difficulty
    """
    if not 1 <= week <= record.total_weeks:
        raise OutOfRangeError(
            f"Invalid week number {week}: plan has {record.total_weeks} weeks"
        )
    if not 1 <= day <= record.total_days_per_week:
        raise OutOfRangeError(
            f"Invalid day number {day}: plan has {record.total_days_per_week} days per week"
        )
    if record.has_completed(week, day):
        raise DuplicateCompletionError(week, day)
    if duration < 1:
        raise ValidationError("Duration must be at least 1 minute")
    if calories_burned is not None and calories_burned < 0:
        raise ValidationError("Calories burned cannot be negative")
    if notes is not None and len(notes) > MAX_NOTES_LENGTH:
        raise ValidationError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")

    entry = CompletedDayEntry(
        week=week,
        day=day,
        completed_at=now,
        duration=duration,
        difficulty=_coerce_difficulty(difficulty),
        calories_burned=calories_burned,
        notes=notes,
        session_id=session_id,
    )

    appended = record.model_copy(update={
        "completed_days": record.completed_days + (entry,),
        "is_started": True,
        "last_accessed_at": now,
    })
    updated = recompute(appended, now)

    if updated.is_completed and not record.is_completed:
        logger.info(
            f"Workout {record.workout_id} completed by user {record.user_id} "
            f"({updated.total_completed_days} days)"
        )
    return updated


# =============================================================================
# Start / Resume
# =============================================================================


def start_workout(record: ProgressRecord, now: datetime) -> ProgressRecord:
    """Mark the plan as started (first time only) and refresh last access."""
    update = {"is_started": True, "last_accessed_at": now}
    if not record.is_started:
        update["started_at"] = now
    return recompute(record.model_copy(update=update), now)


# =============================================================================
# Bookmark / Rating / Reminders
# =============================================================================


def toggle_bookmark(record: ProgressRecord, now: datetime) -> ProgressRecord:
    """Flip the bookmark; sets bookmarked_at when bookmarking, clears it otherwise."""
    return set_bookmark(record, not record.is_bookmarked, now)


def set_bookmark(record: ProgressRecord, bookmarked: bool, now: datetime) -> ProgressRecord:
    """Set the bookmark state explicitly. Re-bookmarking keeps the original timestamp."""
    update = {"last_accessed_at": now}
    if bookmarked != record.is_bookmarked:
        update["is_bookmarked"] = bookmarked
        update["bookmarked_at"] = now if bookmarked else None
    return recompute(record.model_copy(update=update), now)


def rate_workout(
    record: ProgressRecord,
    rating: int,
    review: Optional[str] = None,
    *,
    now: datetime,
) -> ProgressRecord:
    """
    Record the user's 1-5 rating and optional review.

    Raises:
        RatingRangeError: rating outside 1-5
        ValidationError: review too long
    """
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise RatingRangeError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    if review is not None and len(review) > MAX_REVIEW_LENGTH:
        raise ValidationError(f"Review cannot exceed {MAX_REVIEW_LENGTH} characters")

    return recompute(record.model_copy(update={
        "user_rating": rating,
        "user_review": review,
        "rated_at": now,
        "last_accessed_at": now,
    }), now)


def update_reminder(
    record: ProgressRecord,
    *,
    now: datetime,
    reminder_time: Optional[str] = None,
    is_reminder_enabled: Optional[bool] = None,
    preferred_workout_time: Optional[Union[PreferredWorkoutTime, str]] = None,
) -> ProgressRecord:
    """
    Update reminder preferences. Arguments left as None are unchanged.

    Raises:
        ValidationError: malformed HH:MM time or unknown time of day
    """
    update = {"last_accessed_at": now}

    if reminder_time is not None:
        if not REMINDER_TIME_PATTERN.match(reminder_time):
            raise ValidationError("Reminder time must be in HH:MM format")
        update["reminder_time"] = reminder_time

    if is_reminder_enabled is not None:
        update["is_reminder_enabled"] = is_reminder_enabled

    if preferred_workout_time is not None:
        try:
            update["preferred_workout_time"] = PreferredWorkoutTime(preferred_workout_time)
        except ValueError:
            allowed = ", ".join(t.value for t in PreferredWorkoutTime)
            raise ValidationError(f"Preferred workout time must be one of: {allowed}")

    return recompute(record.model_copy(update=update), now)
