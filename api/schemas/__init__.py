"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- progress: Workout progress request and response models
"""

from api.schemas.progress import (
    APIModel,
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
    WorkoutStatsResponse,
    WorkoutSummaryResponse,
)

__all__ = [
    "APIModel",
    "BookmarkResponse",
    "BookmarksResponse",
    "CompleteDayRequest",
    "CompleteDayResponse",
    "OverviewResponse",
    "ProgressReadResponse",
    "ProgressRecordResponse",
    "ProgressSummaryResponse",
    "RateWorkoutRequest",
    "RateWorkoutResponse",
    "ReminderRequest",
    "ReminderResponse",
    "StartWorkoutResponse",
    "WorkoutStatsResponse",
    "WorkoutSummaryResponse",
]
