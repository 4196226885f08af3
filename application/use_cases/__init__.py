"""
Application Use Cases for the FitCoach Progress API.

Use cases orchestrate the pure progress engine in ``backend.core`` and the
repository ports. Dependencies are injected via constructors for
testability and use cases return domain models, not API responses.

Usage:
    from application.use_cases import CompleteDayUseCase, StartWorkoutUseCase

    start = StartWorkoutUseCase(progress_repo, catalog)
    result = start.execute("user-123", "workout-456")

    complete = CompleteDayUseCase(progress_repo)
    record = complete.execute(
        "user-123", "workout-456",
        week=1, day=1, duration=30, difficulty="Easy",
    )
"""

from application.use_cases.bookmark_rating import (
    BookmarkWorkoutUseCase,
    RateWorkoutUseCase,
    UpdateReminderUseCase,
)
from application.use_cases.progress_reports import ProgressReportsUseCase
from application.use_cases.progress_writer import ProgressWriter, utc_now
from application.use_cases.track_progress import (
    CompleteDayUseCase,
    GetProgressUseCase,
    StartWorkoutResult,
    StartWorkoutUseCase,
    require_plan,
)

__all__ = [
    # Writer
    "ProgressWriter",
    "utc_now",
    # Tracking
    "StartWorkoutUseCase",
    "StartWorkoutResult",
    "GetProgressUseCase",
    "CompleteDayUseCase",
    "require_plan",
    # Bookmark / rating / reminders
    "BookmarkWorkoutUseCase",
    "RateWorkoutUseCase",
    "UpdateReminderUseCase",
    # Reports
    "ProgressReportsUseCase",
]
