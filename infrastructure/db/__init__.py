"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. The client is injected so the same classes
serve the API, the recompute script and the tests.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseProgressRepository, SupabaseWorkoutCatalog

    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    progress_repo = SupabaseProgressRepository(client)
    catalog = SupabaseWorkoutCatalog(client)
"""

from infrastructure.db.progress_repository import SupabaseProgressRepository
from infrastructure.db.workout_catalog import SupabaseWorkoutCatalog

__all__ = [
    # Progress persistence
    "SupabaseProgressRepository",

    # Premade workout catalog
    "SupabaseWorkoutCatalog",
]
