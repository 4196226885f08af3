"""
FastAPI Dependency Providers for the FitCoach Progress API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and use case providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_complete_day_use_case, get_current_user

    @router.post("/workouts/premade/{workout_id}/complete-day")
    def complete_day(
        workout_id: str,
        user_id: str = Depends(get_current_user),
        use_case: CompleteDayUseCase = Depends(get_complete_day_use_case),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_progress_repo] = lambda: FakeProgressRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import ProgressRepository, WorkoutCatalog

# Concrete implementations
from infrastructure import SupabaseProgressRepository, SupabaseWorkoutCatalog

from application.use_cases import (
    BookmarkWorkoutUseCase,
    CompleteDayUseCase,
    GetProgressUseCase,
    ProgressReportsUseCase,
    RateWorkoutUseCase,
    StartWorkoutUseCase,
    UpdateReminderUseCase,
)
from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_progress_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgressRepository:
    """
    Get ProgressRepository implementation.

    Returns a SupabaseProgressRepository instance with injected client.
    The return type is the Protocol to enable easy faking.
    """
    return SupabaseProgressRepository(client)


def get_workout_catalog(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutCatalog:
    """Get WorkoutCatalog implementation."""
    return SupabaseWorkoutCatalog(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_start_workout_use_case(
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    catalog: WorkoutCatalog = Depends(get_workout_catalog),
    settings: Settings = Depends(get_settings),
) -> StartWorkoutUseCase:
    return StartWorkoutUseCase(
        progress_repo,
        catalog,
        max_retries=settings.progress_conflict_retries,
    )


def get_progress_use_case(
    progress_repo: ProgressRepository = Depends(get_progress_repo),
) -> GetProgressUseCase:
    return GetProgressUseCase(progress_repo)


def get_complete_day_use_case(
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    settings: Settings = Depends(get_settings),
) -> CompleteDayUseCase:
    return CompleteDayUseCase(
        progress_repo,
        max_retries=settings.progress_conflict_retries,
    )


def get_bookmark_use_case(
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    catalog: WorkoutCatalog = Depends(get_workout_catalog),
    settings: Settings = Depends(get_settings),
) -> BookmarkWorkoutUseCase:
    return BookmarkWorkoutUseCase(
        progress_repo,
        catalog,
        max_retries=settings.progress_conflict_retries,
    )


def get_rate_workout_use_case(
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    catalog: WorkoutCatalog = Depends(get_workout_catalog),
    settings: Settings = Depends(get_settings),
) -> RateWorkoutUseCase:
    return RateWorkoutUseCase(
        progress_repo,
        catalog,
        max_retries=settings.progress_conflict_retries,
    )


def get_update_reminder_use_case(
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    catalog: WorkoutCatalog = Depends(get_workout_catalog),
    settings: Settings = Depends(get_settings),
) -> UpdateReminderUseCase:
    return UpdateReminderUseCase(
        progress_repo,
        catalog,
        max_retries=settings.progress_conflict_retries,
    )


def get_progress_reports_use_case(
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    catalog: WorkoutCatalog = Depends(get_workout_catalog),
    settings: Settings = Depends(get_settings),
) -> ProgressReportsUseCase:
    return ProgressReportsUseCase(
        progress_repo,
        catalog,
        recent_limit=settings.recent_progress_limit,
    )


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_progress_repo",
    "get_workout_catalog",
    # Use cases
    "get_start_workout_use_case",
    "get_progress_use_case",
    "get_complete_day_use_case",
    "get_bookmark_use_case",
    "get_rate_workout_use_case",
    "get_update_reminder_use_case",
    "get_progress_reports_use_case",
    # Authentication
    "get_current_user",
]
