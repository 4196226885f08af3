"""
Workout progress domain models.

A ProgressRecord tracks one user's progress through one premade workout
plan. The ``completed_days`` log is the single source of truth; every other
numeric field on the record is derived from it by
``backend.core.progress_tracker.recompute`` and stored alongside it.

Records are immutable value objects. Domain operations return new
instances via ``model_copy`` so they can be tested without a datastore.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


MAX_PLAN_WEEKS = 52
MAX_DAYS_PER_WEEK = 7


class Difficulty(str, Enum):
    """Perceived difficulty reported for a completed day."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class PreferredWorkoutTime(str, Enum):
    """Time of day a user prefers to train."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class PlanShape(BaseModel):
    """
    Immutable (total_weeks, total_days_per_week) pair of a plan.

    Progress records copy the shape at creation time so later catalog edits
    never move the goalposts for users already on the plan.
    """

    total_weeks: int = Field(..., ge=1, le=MAX_PLAN_WEEKS)
    total_days_per_week: int = Field(..., ge=1, le=MAX_DAYS_PER_WEEK)

    model_config = {"frozen": True}

    @property
    def total_units(self) -> int:
        """Number of (week, day) units in the plan."""
        return self.total_weeks * self.total_days_per_week


class WorkoutPlan(BaseModel):
    """Read model of a published premade workout, as seen by progress tracking."""

    id: str
    title: str = ""
    plan_duration: Optional[str] = None
    workouts_per_week: Optional[int] = None
    shape: PlanShape
    rating: float = 0
    total_ratings: int = 0

    model_config = {"frozen": True}

    @property
    def average_rating(self) -> float:
        """Display rating; ``rating`` holds the sum of all user ratings."""
        if self.total_ratings <= 0:
            return 0.0
        return round(self.rating / self.total_ratings, 1)


class CompletedDayEntry(BaseModel):
    """One logged completion of a (week, day) unit. Never changed once appended."""

    week: int = Field(..., ge=1)
    day: int = Field(..., ge=1, le=MAX_DAYS_PER_WEEK)
    completed_at: datetime
    duration: int = Field(..., ge=1, description="Actual workout duration in minutes")
    difficulty: Difficulty
    calories_burned: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)
    session_id: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def unit(self) -> Tuple[int, int]:
        return (self.week, self.day)


class ProgressRecord(BaseModel):
    """
    Progress of one user through one workout plan.

    Unique per (user_id, workout_id). ``version`` increments on every
    persisted write and guards the conditional update in the repository.
    """

    id: Optional[str] = None
    user_id: str
    workout_id: str
    version: int = 0

    # Lifecycle
    is_started: bool = False
    is_completed: bool = False
    started_at: datetime
    completed_at: Optional[datetime] = None
    last_accessed_at: datetime

    # Cursor and pinned plan shape
    current_week: int = Field(default=1, ge=1)
    current_day: int = Field(default=1, ge=1)
    total_weeks: int = Field(..., ge=1, le=MAX_PLAN_WEEKS)
    total_days_per_week: int = Field(..., ge=1, le=MAX_DAYS_PER_WEEK)

    # Append-only log
    completed_days: Tuple[CompletedDayEntry, ...] = ()

    # Derived aggregates
    completed_weeks: List[int] = Field(default_factory=list)
    total_completed_days: int = 0
    total_time_spent: int = 0
    total_calories_burned: int = 0
    average_difficulty: float = 0

    # Derived streaks
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: Optional[datetime] = None

    # Reminder preferences
    reminder_time: Optional[str] = Field(
        default=None, pattern=r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"
    )
    is_reminder_enabled: bool = False
    preferred_workout_time: Optional[PreferredWorkoutTime] = None

    # Bookmark
    is_bookmarked: bool = False
    bookmarked_at: Optional[datetime] = None

    # Rating
    user_rating: Optional[int] = Field(default=None, ge=1, le=5)
    user_review: Optional[str] = Field(default=None, max_length=1000)
    rated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def new(
        cls,
        user_id: str,
        workout_id: str,
        shape: PlanShape,
        now: datetime,
    ) -> "ProgressRecord":
        """Fresh record seeded from the plan shape, cursor on (1, 1)."""
        return cls(
            user_id=user_id,
            workout_id=workout_id,
            started_at=now,
            last_accessed_at=now,
            total_weeks=shape.total_weeks,
            total_days_per_week=shape.total_days_per_week,
        )

    @property
    def shape(self) -> PlanShape:
        return PlanShape(
            total_weeks=self.total_weeks,
            total_days_per_week=self.total_days_per_week,
        )

    @property
    def completed_units(self) -> set:
        """Set of (week, day) pairs already logged."""
        return {entry.unit for entry in self.completed_days}

    def has_completed(self, week: int, day: int) -> bool:
        return (week, day) in self.completed_units
