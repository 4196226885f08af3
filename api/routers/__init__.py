"""
Router package for the FitCoach Progress API.

This package contains all API routers organized by domain:
- health: Liveness and readiness checks
- progress: Workout progress tracking, bookmarks, ratings and reports
"""

from api.routers.health import router as health_router
from api.routers.progress import router as progress_router

__all__ = [
    "health_router",
    "progress_router",
]
