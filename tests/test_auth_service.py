# =============================================================================
# tests/test_auth_service.py - Auth Service Tests
# =============================================================================
# Supabase Auth is mocked at the SupabaseClient wrapper.
#
# Run with: pytest tests/test_auth_service.py -v
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import (
    AuthServiceError,
    ClientNotInitializedError,
    InvalidCredentialsError,
    PasswordMismatchError,
    PasswordTooWeakError,
    UserAlreadyRegisteredError,
)
from core.services.auth_service import AuthService
from lib.supabase_client import SupabaseAuthError, SupabaseNotConfiguredError


@pytest.fixture
def mock_supabase():
    with patch("core.services.auth_service.SupabaseClient") as mock:
        yield mock


# =============================================================================
# Sign-up
# =============================================================================

class TestSignUp:
    """Tests for AuthService.sign_up()."""

    def test_success_requires_confirmation(self, mock_supabase):
        mock_supabase.sign_up.return_value = {"id": "u1", "email": "cook@example.com"}

        result = AuthService.sign_up("cook@example.com", "secret1", "secret1")

        assert result.user_id == "u1"
        assert result.email == "cook@example.com"
        assert result.confirmation_required is True
        mock_supabase.sign_up.assert_called_once_with(
            "cook@example.com", "secret1", redirect_to="recipegenie://auth/callback"
        )

    def test_email_trimmed(self, mock_supabase):
        mock_supabase.sign_up.return_value = None

        result = AuthService.sign_up("  cook@example.com ", "secret1", "secret1")

        assert result.email == "cook@example.com"
        assert result.user_id is None

    def test_password_mismatch_checked_first(self, mock_supabase):
        # Short AND mismatched: the mismatch is reported
        with pytest.raises(PasswordMismatchError):
            AuthService.sign_up("cook@example.com", "abc", "abd")

        mock_supabase.sign_up.assert_not_called()

    def test_password_too_short(self, mock_supabase):
        with pytest.raises(PasswordTooWeakError) as exc_info:
            AuthService.sign_up("cook@example.com", "12345", "12345")

        assert exc_info.value.details == {"min_length": 6}
        mock_supabase.sign_up.assert_not_called()

    def test_minimum_length_accepted(self, mock_supabase):
        mock_supabase.sign_up.return_value = {"id": "u1", "email": "cook@example.com"}
        AuthService.sign_up("cook@example.com", "123456", "123456")
        mock_supabase.sign_up.assert_called_once()

    @pytest.mark.parametrize("email,password", [("", "secret1"), ("   ", "secret1"), ("a@b.c", "")])
    def test_blank_fields(self, mock_supabase, email, password):
        with pytest.raises(InvalidCredentialsError):
            AuthService.sign_up(email, password, password)

    @pytest.mark.parametrize("auth_code,message", [
        ("user_already_exists", "User already registered"),
        (None, "User already registered"),
    ])
    def test_already_registered(self, mock_supabase, auth_code, message):
        mock_supabase.sign_up.side_effect = SupabaseAuthError(
            message, operation="sign_up", status=422, auth_code=auth_code
        )

        with pytest.raises(UserAlreadyRegisteredError) as exc_info:
            AuthService.sign_up("cook@example.com", "secret1", "secret1")

        assert exc_info.value.message == (
            "This email is already registered. Please try logging in instead."
        )

    def test_other_rejection(self, mock_supabase):
        mock_supabase.sign_up.side_effect = SupabaseAuthError(
            "Email rate limit exceeded", operation="sign_up", status=429
        )

        with pytest.raises(AuthServiceError, match="rate limit"):
            AuthService.sign_up("cook@example.com", "secret1", "secret1")

    def test_not_configured(self, mock_supabase):
        mock_supabase.sign_up.side_effect = SupabaseNotConfiguredError()

        with pytest.raises(ClientNotInitializedError):
            AuthService.sign_up("cook@example.com", "secret1", "secret1")


# =============================================================================
# Sign-in
# =============================================================================

class TestSignIn:
    """Tests for AuthService.sign_in()."""

    def test_success(self, mock_supabase):
        mock_supabase.sign_in.return_value = {
            "access_token": "access",
            "refresh_token": "refresh",
            "expires_in": 3600,
            "expires_at": 1700000000,
            "user": {"id": "u1", "email": "cook@example.com"},
        }

        session = AuthService.sign_in("cook@example.com", "secret1")

        assert session.access_token == "access"
        assert session.refresh_token == "refresh"
        assert session.token_type == "bearer"
        assert session.user_id == "u1"

    @pytest.mark.parametrize("auth_code,status", [
        ("invalid_credentials", 400),
        (None, 400),
        ("email_not_confirmed", 400),
    ])
    def test_rejected_credentials(self, mock_supabase, auth_code, status):
        mock_supabase.sign_in.side_effect = SupabaseAuthError(
            "Invalid login credentials", operation="sign_in", status=status, auth_code=auth_code
        )

        with pytest.raises(InvalidCredentialsError) as exc_info:
            AuthService.sign_in("cook@example.com", "wrong")

        assert exc_info.value.status_code == 401

    def test_blank_password(self, mock_supabase):
        with pytest.raises(InvalidCredentialsError):
            AuthService.sign_in("cook@example.com", "")

        mock_supabase.sign_in.assert_not_called()

    def test_server_error(self, mock_supabase):
        mock_supabase.sign_in.side_effect = SupabaseAuthError(
            "Service unavailable", operation="sign_in", status=503
        )

        with pytest.raises(AuthServiceError):
            AuthService.sign_in("cook@example.com", "secret1")


# =============================================================================
# Sign-out / Resend
# =============================================================================

class TestOtherOperations:
    """Tests for sign_out() and resend_confirmation()."""

    def test_sign_out(self, mock_supabase):
        AuthService.sign_out("access")
        mock_supabase.sign_out.assert_called_once_with("access")

    def test_sign_out_rejected(self, mock_supabase):
        mock_supabase.sign_out.side_effect = SupabaseAuthError(
            "Session not found", operation="sign_out", status=404
        )

        with pytest.raises(AuthServiceError):
            AuthService.sign_out("access")

    def test_resend(self, mock_supabase):
        AuthService.resend_confirmation(" cook@example.com ")

        mock_supabase.resend_confirmation.assert_called_once_with(
            "cook@example.com", redirect_to="recipegenie://auth/callback"
        )

    def test_resend_blank_email(self, mock_supabase):
        with pytest.raises(InvalidCredentialsError):
            AuthService.resend_confirmation("  ")
