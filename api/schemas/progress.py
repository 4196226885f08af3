"""
Progress Schemas for the workout progress API.

Request and response bodies are camelCase on the wire; Python code uses
snake_case names. Derived views (completion percentage, weekly progress,
next workout day) are attached here and never persisted.
"""

from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from backend.core.progress_overview import OverviewStats, UserOverview, WorkoutStats
from backend.core.weekly_projection import (
    completion_percentage,
    next_workout_day,
    project_weeks,
)
from domain.models import (
    Difficulty,
    PreferredWorkoutTime,
    ProgressRecord,
    WorkoutPlan,
)


class APIModel(BaseModel):
    """Base model serialising field names as camelCase."""
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# =============================================================================
# Requests
# =============================================================================


class CompleteDayRequest(APIModel):
    """Request body for POST /workouts/premade/{id}/complete-day."""
    week: int = Field(..., description="Plan week, 1-based")
    day: int = Field(..., description="Day within the week, 1-based")
    duration: int = Field(..., ge=1, description="Workout duration in minutes")
    difficulty: Difficulty
    calories_burned: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)
    session_id: Optional[str] = Field(default=None, max_length=128)


class RateWorkoutRequest(APIModel):
    """Request body for POST /workouts/premade/{id}/rate."""
    rating: int = Field(..., description="Rating from 1 to 5")
    review: Optional[str] = Field(default=None, max_length=1000)


class ReminderRequest(APIModel):
    """Request body for PUT /workouts/premade/{id}/reminder. Omitted fields are unchanged."""
    reminder_time: Optional[str] = Field(
        default=None,
        pattern=r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$",
        description="24h reminder time, HH:MM",
    )
    is_reminder_enabled: Optional[bool] = None
    preferred_workout_time: Optional[PreferredWorkoutTime] = None


# =============================================================================
# Progress record views
# =============================================================================


class CompletedDayResponse(APIModel):
    week: int
    day: int
    completed_at: datetime
    duration: int
    difficulty: Difficulty
    calories_burned: Optional[int] = None
    notes: Optional[str] = None
    session_id: Optional[str] = None


class WeekProgressResponse(APIModel):
    week: int
    completed_days: int
    total_days: int
    is_completed: bool
    is_unlocked: bool
    completion_percentage: int


class NextWorkoutDayResponse(APIModel):
    week: int
    day: int
    is_unlocked: bool = True


class ProgressSummaryResponse(APIModel):
    """Compact view of a record, used in lists."""
    workout_id: str
    is_started: bool
    is_completed: bool
    current_week: int
    current_day: int
    total_weeks: int
    total_days_per_week: int
    total_completed_days: int
    completion_percentage: int
    current_streak: int
    is_bookmarked: bool
    bookmarked_at: Optional[datetime] = None
    last_accessed_at: datetime

    @classmethod
    def from_record(cls, record: ProgressRecord) -> "ProgressSummaryResponse":
        return cls(
            workout_id=record.workout_id,
            is_started=record.is_started,
            is_completed=record.is_completed,
            current_week=record.current_week,
            current_day=record.current_day,
            total_weeks=record.total_weeks,
            total_days_per_week=record.total_days_per_week,
            total_completed_days=record.total_completed_days,
            completion_percentage=completion_percentage(record),
            current_streak=record.current_streak,
            is_bookmarked=record.is_bookmarked,
            bookmarked_at=record.bookmarked_at,
            last_accessed_at=record.last_accessed_at,
        )


class ProgressRecordResponse(APIModel):
    """Full progress record with derived read-only views."""
    id: Optional[str] = None
    user_id: str
    workout_id: str

    is_started: bool
    is_completed: bool
    started_at: datetime
    completed_at: Optional[datetime] = None
    last_accessed_at: datetime

    current_week: int
    current_day: int
    total_weeks: int
    total_days_per_week: int

    completed_days: List[CompletedDayResponse] = Field(default_factory=list)
    completed_weeks: List[int] = Field(default_factory=list)
    total_completed_days: int = 0
    total_time_spent: int = 0
    total_calories_burned: int = 0
    average_difficulty: float = 0

    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: Optional[datetime] = None

    reminder_time: Optional[str] = None
    is_reminder_enabled: bool = False
    preferred_workout_time: Optional[PreferredWorkoutTime] = None

    is_bookmarked: bool = False
    bookmarked_at: Optional[datetime] = None

    user_rating: Optional[int] = None
    user_review: Optional[str] = None
    rated_at: Optional[datetime] = None

    completion_percentage: int = 0
    next_workout_day: Optional[NextWorkoutDayResponse] = None
    weekly_progress: List[WeekProgressResponse] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ProgressRecord) -> "ProgressRecordResponse":
        data = record.model_dump(exclude={"version"})
        next_day = next_workout_day(record)
        data.update(
            completion_percentage=completion_percentage(record),
            next_workout_day=asdict(next_day) if next_day else None,
            weekly_progress=[asdict(w) for w in project_weeks(record)],
        )
        return cls.model_validate(data)


class ProgressReadResponse(APIModel):
    """Response for GET /workouts/premade/{id}/progress."""
    has_progress: bool
    progress: Optional[ProgressRecordResponse] = None


# =============================================================================
# Operation responses
# =============================================================================


class WorkoutSummaryResponse(APIModel):
    id: str
    title: str
    plan_duration: Optional[str] = None
    workouts_per_week: Optional[int] = None
    total_weeks: int
    total_days_per_week: int
    average_rating: float = 0
    total_ratings: int = 0

    @classmethod
    def from_plan(cls, plan: WorkoutPlan) -> "WorkoutSummaryResponse":
        return cls(
            id=plan.id,
            title=plan.title,
            plan_duration=plan.plan_duration,
            workouts_per_week=plan.workouts_per_week,
            total_weeks=plan.shape.total_weeks,
            total_days_per_week=plan.shape.total_days_per_week,
            average_rating=plan.average_rating,
            total_ratings=plan.total_ratings,
        )


class StartWorkoutResponse(APIModel):
    """Response for POST /workouts/premade/{id}/start."""
    session_id: str
    current_week: int
    current_day: int
    workout: WorkoutSummaryResponse


class CompleteDayResponse(APIModel):
    """Response for POST /workouts/premade/{id}/complete-day."""
    week: int
    day: int
    completion_percentage: int
    current_streak: int
    total_completed_days: int
    is_workout_completed: bool


class BookmarkResponse(APIModel):
    workout_id: str
    is_bookmarked: bool
    bookmarked_at: Optional[datetime] = None


class RateWorkoutResponse(APIModel):
    workout_id: str
    rating: int
    review: Optional[str] = None


class ReminderResponse(APIModel):
    workout_id: str
    reminder_time: Optional[str] = None
    is_reminder_enabled: bool
    preferred_workout_time: Optional[PreferredWorkoutTime] = None


# =============================================================================
# Reports
# =============================================================================


class OverviewStatsResponse(APIModel):
    total_workouts: int
    started_workouts: int
    completed_workouts: int
    bookmarked_workouts: int
    total_time_spent: int
    total_calories_burned: int
    total_completed_days: int
    average_rating: Optional[float] = None
    longest_streak: int

    @classmethod
    def from_stats(cls, stats: OverviewStats) -> "OverviewStatsResponse":
        return cls(**asdict(stats))


class OverviewResponse(APIModel):
    """Response for GET /workouts/progress/overview."""
    stats: OverviewStatsResponse
    recent_progress: List[ProgressSummaryResponse]

    @classmethod
    def from_overview(cls, overview: UserOverview) -> "OverviewResponse":
        return cls(
            stats=OverviewStatsResponse.from_stats(overview.stats),
            recent_progress=[
                ProgressSummaryResponse.from_record(r) for r in overview.recent_progress
            ],
        )


class WorkoutStatsResponse(APIModel):
    """Response for GET /workouts/premade/{id}/stats."""
    workout_id: str
    total_users: int
    completed_users: int
    average_completion_rate: float
    average_rating: Optional[float] = None
    total_ratings: int
    average_time_spent: float
    bookmark_count: int

    @classmethod
    def from_stats(cls, workout_id: str, stats: WorkoutStats) -> "WorkoutStatsResponse":
        return cls(workout_id=workout_id, **asdict(stats))


class BookmarksResponse(APIModel):
    """Response for GET /workouts/progress/bookmarks."""
    bookmarks: List[ProgressSummaryResponse]
    total: int
