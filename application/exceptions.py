"""
Application-layer exceptions.

These exceptions are used across domain, application and infrastructure
layers. Each carries the HTTP status and machine-readable error code the
API layer maps it to, so routers never translate errors by hand.
"""

from typing import Optional


class ProgressError(Exception):
    """Base class for workout progress errors."""

    status_code = 500
    error_code = "PROGRESS_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


class ValidationError(ProgressError):
    """Malformed input: a value outside its declared numeric range."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class OutOfRangeError(ValidationError):
    """Week or day outside the plan shape the record is pinned to."""

    error_code = "OUT_OF_RANGE"


class RatingRangeError(ValidationError):
    """Rating outside 1-5."""

    error_code = "RATING_OUT_OF_RANGE"


class NotFoundError(ProgressError):
    """Requested resource does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"


class WorkoutNotFoundError(NotFoundError):
    """Workout missing from the catalog or not published."""

    error_code = "WORKOUT_NOT_FOUND"

    def __init__(self, workout_id: str):
        super().__init__(f"Workout not found: {workout_id}")
        self.workout_id = workout_id


class NoProgressRecordError(NotFoundError):
    """Operation requires a progress record the user never created."""

    error_code = "NO_PROGRESS_RECORD"

    def __init__(self, workout_id: str):
        super().__init__(
            f"No progress found for workout {workout_id}. Start the workout first."
        )
        self.workout_id = workout_id


class DuplicateCompletionError(ProgressError):
    """The (week, day) unit has already been logged.

    Clients treat this as a non-fatal "already recorded" signal.
    """

    status_code = 400
    error_code = "DAY_ALREADY_COMPLETED"

    def __init__(self, week: int, day: int):
        super().__init__(f"Week {week}, day {day} has already been completed")
        self.week = week
        self.day = day


class ConcurrencyConflictError(ProgressError):
    """A conditional write lost the race against another writer."""

    status_code = 409
    error_code = "CONCURRENT_UPDATE"


class PersistenceError(ProgressError):
    """Unexpected datastore failure."""

    status_code = 500
    error_code = "PERSISTENCE_ERROR"
