"""
Repository Interfaces (Ports) for the FitCoach Progress API.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ProgressRepository, WorkoutCatalog

    class CompleteDayUseCase:
        def __init__(self, progress_repo: ProgressRepository):
            self.progress_repo = progress_repo
"""

# Progress persistence
from application.ports.progress_repository import ProgressRepository

# Premade workout catalog
from application.ports.workout_catalog import WorkoutCatalog

__all__ = [
    "ProgressRepository",
    "WorkoutCatalog",
]
