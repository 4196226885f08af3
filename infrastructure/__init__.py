"""
Infrastructure Layer for the FitCoach Progress API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

from infrastructure.db import (
    SupabaseProgressRepository,
    SupabaseWorkoutCatalog,
)

__all__ = [
    "SupabaseProgressRepository",
    "SupabaseWorkoutCatalog",
]
