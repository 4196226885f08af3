"""
Workout progress router.

This router provides endpoints for:
- Starting a premade workout and reading progress on it
- Logging day completions
- Bookmarks, ratings and reminder preferences
- Progress overview, bookmark list and per-workout statistics

Domain errors (ProgressError subclasses) propagate to the exception handler
registered in backend.main, which maps them to their HTTP status.
"""
import logging

from fastapi import APIRouter, Depends, Path

from api.deps import (
    get_bookmark_use_case,
    get_complete_day_use_case,
    get_current_user,
    get_progress_reports_use_case,
    get_progress_use_case,
    get_rate_workout_use_case,
    get_start_workout_use_case,
    get_update_reminder_use_case,
)
from api.schemas.progress import (
    BookmarkResponse,
    BookmarksResponse,
    CompleteDayRequest,
    CompleteDayResponse,
    OverviewResponse,
    ProgressReadResponse,
    ProgressRecordResponse,
    ProgressSummaryResponse,
    RateWorkoutRequest,
    RateWorkoutResponse,
    ReminderRequest,
    ReminderResponse,
    StartWorkoutResponse,
    WorkoutSummaryResponse,
    WorkoutStatsResponse,
)
from application.use_cases import (
    BookmarkWorkoutUseCase,
    CompleteDayUseCase,
    GetProgressUseCase,
    ProgressReportsUseCase,
    RateWorkoutUseCase,
    StartWorkoutUseCase,
    UpdateReminderUseCase,
)
from backend.core.weekly_projection import completion_percentage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Progress"],
)


# =============================================================================
# Start / Read
# =============================================================================


@router.post("/premade/{workout_id}/start", response_model=StartWorkoutResponse)
def start_workout(
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: StartWorkoutUseCase = Depends(get_start_workout_use_case),
) -> StartWorkoutResponse:
    """
    Start or resume a premade workout.

    Creates the progress record on first access and returns the day the
    user should continue from.
    """
    result = use_case.execute(user_id, workout_id)
    return StartWorkoutResponse(
        session_id=result.session_id,
        current_week=result.record.current_week,
        current_day=result.record.current_day,
        workout=WorkoutSummaryResponse.from_plan(result.plan),
    )


@router.get("/premade/{workout_id}/progress", response_model=ProgressReadResponse)
def get_progress(
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: GetProgressUseCase = Depends(get_progress_use_case),
) -> ProgressReadResponse:
    """Get the user's progress on a workout. Does not create a record."""
    record = use_case.execute(user_id, workout_id)
    if record is None:
        return ProgressReadResponse(has_progress=False)
    return ProgressReadResponse(
        has_progress=True,
        progress=ProgressRecordResponse.from_record(record),
    )


# =============================================================================
# Day Completion
# =============================================================================


@router.post("/premade/{workout_id}/complete-day", response_model=CompleteDayResponse)
def complete_day(
    body: CompleteDayRequest,
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: CompleteDayUseCase = Depends(get_complete_day_use_case),
) -> CompleteDayResponse:
    """
    Log completion of one day of the plan.

    Completing a day that is already logged returns 400 with error code
    DAY_ALREADY_COMPLETED; clients treat it as "already recorded".
    """
    record = use_case.execute(
        user_id,
        workout_id,
        week=body.week,
        day=body.day,
        duration=body.duration,
        difficulty=body.difficulty,
        calories_burned=body.calories_burned,
        notes=body.notes,
        session_id=body.session_id,
    )
    return CompleteDayResponse(
        week=body.week,
        day=body.day,
        completion_percentage=completion_percentage(record),
        current_streak=record.current_streak,
        total_completed_days=record.total_completed_days,
        is_workout_completed=record.is_completed,
    )


# =============================================================================
# Bookmark / Rating / Reminder
# =============================================================================


@router.post("/premade/{workout_id}/bookmark", response_model=BookmarkResponse)
def add_bookmark(
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: BookmarkWorkoutUseCase = Depends(get_bookmark_use_case),
) -> BookmarkResponse:
    """Bookmark a workout. Bookmarking twice keeps the original timestamp."""
    record = use_case.execute(user_id, workout_id, bookmarked=True)
    return BookmarkResponse(
        workout_id=workout_id,
        is_bookmarked=record.is_bookmarked,
        bookmarked_at=record.bookmarked_at,
    )


@router.delete("/premade/{workout_id}/bookmark", response_model=BookmarkResponse)
def remove_bookmark(
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: BookmarkWorkoutUseCase = Depends(get_bookmark_use_case),
) -> BookmarkResponse:
    """Remove a bookmark. Removing a missing bookmark is a no-op."""
    record = use_case.execute(user_id, workout_id, bookmarked=False)
    return BookmarkResponse(
        workout_id=workout_id,
        is_bookmarked=record.is_bookmarked,
        bookmarked_at=record.bookmarked_at,
    )


@router.post("/premade/{workout_id}/rate", response_model=RateWorkoutResponse)
def rate_workout(
    body: RateWorkoutRequest,
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: RateWorkoutUseCase = Depends(get_rate_workout_use_case),
) -> RateWorkoutResponse:
    """Rate a started workout from 1 to 5 with an optional review."""
    record = use_case.execute(
        user_id,
        workout_id,
        rating=body.rating,
        review=body.review,
    )
    return RateWorkoutResponse(
        workout_id=workout_id,
        rating=record.user_rating,
        review=record.user_review,
    )


@router.put("/premade/{workout_id}/reminder", response_model=ReminderResponse)
def update_reminder(
    body: ReminderRequest,
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: UpdateReminderUseCase = Depends(get_update_reminder_use_case),
) -> ReminderResponse:
    """Update reminder preferences. Omitted fields keep their current value."""
    record = use_case.execute(
        user_id,
        workout_id,
        reminder_time=body.reminder_time,
        is_reminder_enabled=body.is_reminder_enabled,
        preferred_workout_time=body.preferred_workout_time,
    )
    return ReminderResponse(
        workout_id=workout_id,
        reminder_time=record.reminder_time,
        is_reminder_enabled=record.is_reminder_enabled,
        preferred_workout_time=record.preferred_workout_time,
    )


# =============================================================================
# Reports
# =============================================================================


@router.get("/premade/{workout_id}/stats", response_model=WorkoutStatsResponse)
def get_workout_stats(
    workout_id: str = Path(..., description="Premade workout ID"),
    user_id: str = Depends(get_current_user),
    reports: ProgressReportsUseCase = Depends(get_progress_reports_use_case),
) -> WorkoutStatsResponse:
    """How all users are progressing through a workout."""
    stats = reports.workout_stats(workout_id)
    return WorkoutStatsResponse.from_stats(workout_id, stats)


@router.get("/progress/overview", response_model=OverviewResponse)
def get_overview(
    user_id: str = Depends(get_current_user),
    reports: ProgressReportsUseCase = Depends(get_progress_reports_use_case),
) -> OverviewResponse:
    """Totals across all of the user's workouts plus the most recently accessed ones."""
    overview = reports.user_overview(user_id)
    return OverviewResponse.from_overview(overview)


@router.get("/progress/bookmarks", response_model=BookmarksResponse)
def get_bookmarks(
    user_id: str = Depends(get_current_user),
    reports: ProgressReportsUseCase = Depends(get_progress_reports_use_case),
) -> BookmarksResponse:
    """Bookmarked workouts, most recently bookmarked first."""
    records = reports.bookmarked(user_id)
    return BookmarksResponse(
        bookmarks=[ProgressSummaryResponse.from_record(r) for r in records],
        total=len(records),
    )
