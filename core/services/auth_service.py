# =============================================================================
# core/services/auth_service.py - Account Operations
# =============================================================================
# Sign-up, login, logout and confirmation resend on top of Supabase Auth.
#
# Input checks happen here, before any network call:
#   - blank email or password  -> InvalidCredentialsError
#   - password != confirmation -> PasswordMismatchError
#   - password too short       -> PasswordTooWeakError
#
# Supabase rejections are mapped onto the named auth errors.
# =============================================================================

import logging

from app.auth.models import AuthSession, SignupResult
from app.config import settings
from app.exceptions import (
    AuthServiceError,
    ClientNotInitializedError,
    InvalidCredentialsError,
    PasswordMismatchError,
    PasswordTooWeakError,
    UserAlreadyRegisteredError,
)
from lib.supabase_client import (
    SupabaseAuthError,
    SupabaseClient,
    SupabaseNotConfiguredError,
)

logger = logging.getLogger(__name__)

_INVALID_LOGIN_CODES = {"invalid_credentials", "invalid_grant", "email_not_confirmed"}
_ALREADY_REGISTERED_CODES = {"user_already_exists", "email_exists"}


def _map_auth_error(e: SupabaseAuthError, email: str | None = None) -> Exception:
    """Translate a Supabase Auth rejection into a named error."""
    message = e.message.lower()

    if e.auth_code in _ALREADY_REGISTERED_CODES or "already registered" in message:
        return UserAlreadyRegisteredError(email or "")

    if e.operation == "sign_in" and (
        e.auth_code in _INVALID_LOGIN_CODES
        or e.status == 400
        or "invalid login credentials" in message
    ):
        return InvalidCredentialsError()

    return AuthServiceError(e.message, e.operation)


def _require(email: str, password: str) -> str:
    email = email.strip()
    if not email or not password:
        raise InvalidCredentialsError()
    return email


class AuthService:
    """
    Account operations.

    All methods are static; the Supabase client is created per call.
    """

    @staticmethod
    def sign_up(email: str, password: str, confirm_password: str) -> SignupResult:
        """
        Register a new account.

        The user is NOT signed in afterwards: Supabase sends a confirmation
        email that redirects to AUTH_REDIRECT_URL.

        Raises:
            InvalidCredentialsError: Blank email or password
            PasswordMismatchError: Password and confirmation differ
            PasswordTooWeakError: Password shorter than MIN_PASSWORD_LENGTH
            UserAlreadyRegisteredError: Email already has an account
            AuthServiceError: Any other rejection
        """
        email = _require(email, password)

        if password != confirm_password:
            raise PasswordMismatchError()
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise PasswordTooWeakError(settings.MIN_PASSWORD_LENGTH)

        try:
            user = SupabaseClient.sign_up(
                email, password, redirect_to=settings.AUTH_REDIRECT_URL
            )
        except SupabaseNotConfiguredError:
            raise ClientNotInitializedError()
        except SupabaseAuthError as e:
            logger.warning(f"Sign-up rejected: {e.message}")
            raise _map_auth_error(e, email)

        logger.info(f"Sign-up requested for {email}")
        return SignupResult(
            user_id=user["id"] if user else None,
            email=email,
        )

    @staticmethod
    def sign_in(email: str, password: str) -> AuthSession:
        """
        Log in with email and password.

        Raises:
            InvalidCredentialsError: Blank fields or rejected credentials
            AuthServiceError: Any other rejection
        """
        email = _require(email, password)

        try:
            session = SupabaseClient.sign_in(email, password)
        except SupabaseNotConfiguredError:
            raise ClientNotInitializedError()
        except SupabaseAuthError as e:
            logger.warning(f"Login rejected: {e.message}")
            raise _map_auth_error(e, email)

        return AuthSession(
            access_token=session["access_token"],
            refresh_token=session.get("refresh_token"),
            expires_in=session.get("expires_in"),
            expires_at=session.get("expires_at"),
            user_id=session["user"]["id"],
            email=session["user"].get("email"),
        )

    @staticmethod
    def sign_out(access_token: str) -> None:
        """Revoke the session behind an access token."""
        try:
            SupabaseClient.sign_out(access_token)
        except SupabaseNotConfiguredError:
            raise ClientNotInitializedError()
        except SupabaseAuthError as e:
            raise _map_auth_error(e)

    @staticmethod
    def resend_confirmation(email: str) -> None:
        """Send the sign-up confirmation email again."""
        email = email.strip()
        if not email:
            raise InvalidCredentialsError()

        try:
            SupabaseClient.resend_confirmation(
                email, redirect_to=settings.AUTH_REDIRECT_URL
            )
        except SupabaseNotConfiguredError:
            raise ClientNotInitializedError()
        except SupabaseAuthError as e:
            raise _map_auth_error(e, email)

        logger.info(f"Confirmation email resent to {email}")
