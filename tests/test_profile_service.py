# =============================================================================
# tests/test_profile_service.py - Profile Service Tests
# =============================================================================
# Supabase is mocked at the SupabaseClient wrapper.
#
# Run with: pytest tests/test_profile_service.py -v
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import (
    ClientNotInitializedError,
    ProfileNotFoundError,
    ProfileUpdateFailedError,
)
from core.services.profile_service import ProfileService
from lib.supabase_client import SupabaseClientError, SupabaseNotConfiguredError


@pytest.fixture
def mock_supabase():
    with patch("core.services.profile_service.SupabaseClient") as mock:
        yield mock


class TestGetProfile:
    """Tests for ProfileService.get_profile()."""

    def test_found(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = {
            "id": "u1",
            "extraction_count": "2",
            "subscription_status": "free",
        }

        profile = ProfileService.get_profile("u1", access_token="tok")

        assert profile.id == "u1"
        assert profile.extraction_count == 2
        mock_supabase.fetch_profile.assert_called_once_with("u1", access_token="tok")

    def test_missing(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = None
        assert ProfileService.get_profile("u1") is None

    def test_not_configured(self, mock_supabase):
        mock_supabase.fetch_profile.side_effect = SupabaseNotConfiguredError()

        with pytest.raises(ClientNotInitializedError):
            ProfileService.get_profile("u1")

    def test_row_without_id(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = {"extraction_count": 1}

        with pytest.raises(SupabaseClientError) as exc_info:
            ProfileService.get_profile("u1")

        assert exc_info.value.code == "MALFORMED_PROFILE_ROW"


class TestGetOrCreateProfile:
    """Tests for ProfileService.get_or_create_profile()."""

    def test_existing_profile_not_recreated(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = {"id": "u1", "extraction_count": 1}

        profile = ProfileService.get_or_create_profile("u1")

        assert profile.extraction_count == 1
        mock_supabase.insert_profile.assert_not_called()

    def test_creates_free_profile(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = None
        mock_supabase.insert_profile.return_value = {
            "id": "u1",
            "extraction_count": 0,
            "subscription_status": "free",
        }

        profile = ProfileService.get_or_create_profile("u1", access_token="tok")

        assert profile.extraction_count == 0
        assert profile.is_free
        mock_supabase.insert_profile.assert_called_once_with(
            "u1",
            access_token="tok",
            extraction_count=0,
            subscription_status="free",
        )

    def test_insert_without_row(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = None
        mock_supabase.insert_profile.side_effect = SupabaseClientError(
            "Insert returned no data", code="INSERT_NO_DATA"
        )

        with pytest.raises(ProfileNotFoundError):
            ProfileService.get_or_create_profile("u1")


class TestIncrementExtractionCount:
    """Tests for ProfileService.increment_extraction_count()."""

    def test_increments(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = {"id": "u1", "extraction_count": 2}

        assert ProfileService.increment_extraction_count("u1", access_token="tok") == 3
        mock_supabase.update_profile.assert_called_once_with(
            "u1", {"extraction_count": 3}, access_token="tok"
        )

    def test_string_count(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = {"id": "u1", "extraction_count": "0"}

        assert ProfileService.increment_extraction_count("u1") == 1
        # Always written back as an integer
        args, _ = mock_supabase.update_profile.call_args
        assert args[1] == {"extraction_count": 1}

    def test_profile_not_found(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            ProfileService.increment_extraction_count("u1")

        assert exc_info.value.status_code == 404
        mock_supabase.update_profile.assert_not_called()

    def test_update_fails(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = {"id": "u1", "extraction_count": 0}
        mock_supabase.update_profile.side_effect = SupabaseClientError("timeout")

        with pytest.raises(ProfileUpdateFailedError) as exc_info:
            ProfileService.increment_extraction_count("u1")

        assert exc_info.value.details["error"] == "timeout"

    def test_row_without_id_not_updated(self, mock_supabase):
        mock_supabase.fetch_profile.return_value = {"id": "", "extraction_count": 1}

        with pytest.raises(ProfileUpdateFailedError):
            ProfileService.increment_extraction_count("u1")

        mock_supabase.update_profile.assert_not_called()

    def test_not_configured(self, mock_supabase):
        mock_supabase.fetch_profile.side_effect = SupabaseNotConfiguredError()

        with pytest.raises(ClientNotInitializedError):
            ProfileService.increment_extraction_count("u1")
