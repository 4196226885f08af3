"""
Unit tests for api/deps.py dependency providers.

These tests verify that the dependency providers are properly wired and
return the correct types. Uses mocks for external dependencies.
"""

import pytest
from fastapi import HTTPException
from unittest.mock import MagicMock, patch

from api.deps import (
    get_complete_day_use_case,
    get_progress_reports_use_case,
    get_progress_repo,
    get_start_workout_use_case,
    get_supabase_client,
    get_supabase_client_required,
    get_workout_catalog,
)
from application.use_cases import (
    CompleteDayUseCase,
    ProgressReportsUseCase,
    StartWorkoutUseCase,
)
from backend.settings import Settings
from infrastructure import SupabaseProgressRepository, SupabaseWorkoutCatalog
from tests.fakes import FakeProgressRepository, FakeWorkoutCatalog

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clear_client_cache():
    get_supabase_client.cache_clear()
    yield
    get_supabase_client.cache_clear()


def settings(**overrides) -> Settings:
    return Settings(_env_file=None, environment="test", **overrides)


# =============================================================================
# Supabase Client Providers
# =============================================================================


class TestSupabaseClient:
    def test_none_without_credentials(self):
        with patch("api.deps._get_settings", return_value=settings()):
            assert get_supabase_client() is None

    def test_created_with_service_role_key(self):
        configured = settings(
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="service-key",
            supabase_anon_key="anon-key",
        )
        with patch("api.deps._get_settings", return_value=configured), \
             patch("api.deps.create_client") as mock_create:
            client = get_supabase_client()
            again = get_supabase_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "service-key")
        assert client is again

    def test_required_client_raises_503(self):
        with patch("api.deps.get_supabase_client", return_value=None):
            with pytest.raises(HTTPException) as exc_info:
                get_supabase_client_required()

        assert exc_info.value.status_code == 503

    def test_required_client_returns_client(self):
        client = MagicMock()
        with patch("api.deps.get_supabase_client", return_value=client):
            assert get_supabase_client_required() is client


# =============================================================================
# Repository and Use Case Providers
# =============================================================================


class TestRepositoryProviders:
    def test_progress_repo(self):
        assert isinstance(get_progress_repo(client=MagicMock()), SupabaseProgressRepository)

    def test_workout_catalog(self):
        assert isinstance(get_workout_catalog(client=MagicMock()), SupabaseWorkoutCatalog)


class TestUseCaseProviders:
    def test_conflict_retries_come_from_settings(self):
        use_case = get_complete_day_use_case(
            progress_repo=FakeProgressRepository(),
            settings=settings(progress_conflict_retries=3),
        )

        assert isinstance(use_case, CompleteDayUseCase)
        assert use_case._writer._max_retries == 3

    def test_start_use_case(self):
        use_case = get_start_workout_use_case(
            progress_repo=FakeProgressRepository(),
            catalog=FakeWorkoutCatalog(),
            settings=settings(),
        )

        assert isinstance(use_case, StartWorkoutUseCase)

    def test_recent_limit_comes_from_settings(self):
        use_case = get_progress_reports_use_case(
            progress_repo=FakeProgressRepository(),
            catalog=FakeWorkoutCatalog(),
            settings=settings(recent_progress_limit=9),
        )

        assert isinstance(use_case, ProgressReportsUseCase)
        assert use_case._recent_limit == 9
