# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the two Supabase surfaces the
# service uses:
# - Auth: sign-up, sign-in, sign-out, resend confirmation, token lookup
# - The `profiles` table: one row per user (id, extraction_count,
#   subscription_status)
#
# A shared client serves anonymous reads such as health probes. Auth calls
# get a fresh client each time so one caller's session never leaks into
# another's. Table calls made on behalf of a user use a client carrying
# that user's access token, so Row Level Security applies.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_profile(user_id, access_token=token)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import AuthApiError, Client, create_client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
PROFILE_COLUMNS = "id, extraction_count, subscription_status"


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class SupabaseNotConfiguredError(SupabaseClientError):
    """SUPABASE_URL or SUPABASE_KEY is missing."""

    def __init__(self):
        super().__init__(
            message="Supabase URL or key not found in environment variables",
            code="CLIENT_NOT_CONFIGURED",
            suggestion="Set SUPABASE_URL and SUPABASE_KEY in your .env file",
        )


class SupabaseAuthError(SupabaseClientError):
    """
    Supabase Auth rejected a request.

    `auth_code` holds the GoTrue error code when the server sends one
    (e.g. "invalid_credentials", "user_already_exists").
    """

    def __init__(
        self,
        message: str,
        operation: str,
        status: int | None = None,
        auth_code: str | None = None,
    ):
        super().__init__(
            message=message,
            code="AUTH_REQUEST_FAILED",
            details={"operation": operation, "status": status, "auth_code": auth_code},
        )
        self.operation = operation
        self.status = status
        self.auth_code = auth_code


def _user_to_dict(user: Any) -> dict[str, Any]:
    """Reduce a GoTrue user object to the fields the service needs."""
    return {
        "id": str(user.id),
        "email": user.email or "",
    }


def _auth_error(e: AuthApiError, operation: str) -> SupabaseAuthError:
    return SupabaseAuthError(
        message=getattr(e, "message", None) or str(e),
        operation=operation,
        status=getattr(e, "status", None),
        auth_code=getattr(e, "code", None),
    )


class SupabaseClient:
    """
    Typed wrapper for Supabase auth and profile operations.

    All methods are class methods for easy access without instantiation.

    Example:
        session = SupabaseClient.sign_in("cook@example.com", "secret123")
        row = SupabaseClient.fetch_profile(
            session["user"]["id"],
            access_token=session["access_token"],
        )
    """

    _instance: Client | None = None

    # -------------------------------------------------------------------------
    # Client Construction
    # -------------------------------------------------------------------------

    @classmethod
    def new_client(cls) -> Client:
        """
        Create a fresh Supabase client.

        Raises:
            SupabaseNotConfiguredError: If URL or key is missing
            SupabaseClientError: If client creation fails
        """
        if not settings.supabase_configured:
            raise SupabaseNotConfiguredError()

        try:
            return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_KEY in your .env file"
            )

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the shared Supabase client.

        Only used for requests that carry no user session.
        """
        if cls._instance is None:
            cls._instance = cls.new_client()
            logger.info("Supabase client initialized successfully")
        return cls._instance

    @classmethod
    def user_client(cls, access_token: str) -> Client:
        """Create a client whose table queries run as the given user."""
        client = cls.new_client()
        client.postgrest.auth(access_token)
        return client

    @classmethod
    def _table_client(cls, access_token: str | None) -> Client:
        return cls.user_client(access_token) if access_token else cls.get_client()

    # -------------------------------------------------------------------------
    # Auth Operations
    # -------------------------------------------------------------------------

    @classmethod
    def sign_up(
        cls,
        email: str,
        password: str,
        redirect_to: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Register a new user.

        Supabase sends a confirmation email by default, so no session is
        returned here even when the call succeeds.

        Returns:
            {"id", "email"} of the new user, or None if Supabase returned no user

        Raises:
            SupabaseAuthError: If Supabase rejects the sign-up
        """
        client = cls.new_client()
        credentials: dict[str, Any] = {"email": email, "password": password}
        if redirect_to:
            credentials["options"] = {"email_redirect_to": redirect_to}

        try:
            response = client.auth.sign_up(credentials)
        except AuthApiError as e:
            raise _auth_error(e, "sign_up")

        if response.user is None:
            return None

        logger.info(f"Signed up user {response.user.id}")
        return _user_to_dict(response.user)

    @classmethod
    def sign_in(cls, email: str, password: str) -> dict[str, Any]:
        """
        Sign in with email and password.

        Returns:
            Dict with access_token, refresh_token, expires_in, expires_at
            and user ({"id", "email"})

        Raises:
            SupabaseAuthError: If the credentials are rejected
        """
        client = cls.new_client()

        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthApiError as e:
            raise _auth_error(e, "sign_in")

        session = response.session
        if session is None or response.user is None:
            raise SupabaseAuthError(
                message="Sign-in returned no session",
                operation="sign_in",
            )

        logger.info(f"Signed in user {response.user.id}")
        return {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "expires_in": session.expires_in,
            "expires_at": session.expires_at,
            "user": _user_to_dict(response.user),
        }

    @classmethod
    def sign_out(cls, access_token: str) -> None:
        """
        Revoke the session belonging to an access token.

        Raises:
            SupabaseAuthError: If Supabase rejects the request
        """
        client = cls.new_client()

        try:
            client.auth.admin.sign_out(access_token)
        except AuthApiError as e:
            raise _auth_error(e, "sign_out")

    @classmethod
    def resend_confirmation(cls, email: str, redirect_to: str | None = None) -> None:
        """
        Send the sign-up confirmation email again.

        Raises:
            SupabaseAuthError: If Supabase rejects the request
        """
        client = cls.new_client()
        params: dict[str, Any] = {"type": "signup", "email": email}
        if redirect_to:
            params["options"] = {"email_redirect_to": redirect_to}

        try:
            client.auth.resend(params)
        except AuthApiError as e:
            raise _auth_error(e, "resend_confirmation")

    @classmethod
    def get_user(cls, access_token: str) -> dict[str, Any] | None:
        """
        Look up the user an access token belongs to.

        Returns:
            {"id", "email"} or None if the token is not valid
        """
        client = cls.new_client()

        try:
            response = client.auth.get_user(access_token)
        except AuthApiError as e:
            logger.debug(f"Token lookup failed: {e}")
            return None

        if response is None or response.user is None:
            return None
        return _user_to_dict(response.user)

    # -------------------------------------------------------------------------
    # Profile Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_profile(
        cls,
        user_id: str | UUID,
        access_token: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch a user's profile row.

        Returns:
            Row dict with id, extraction_count, subscription_status,
            or None if the user has no profile yet

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls._table_client(access_token)
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table(PROFILES_TABLE)
                .select(PROFILE_COLUMNS)
                .eq("id", user_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            # PostgREST code for "no rows" on a .single() query
            if "PGRST116" in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch profile: {e}",
                code="FETCH_PROFILE_FAILED",
                suggestion="Check that the profiles table exists and RLS allows reads",
                details={"user_id": user_id_str}
            )

    @classmethod
    def insert_profile(
        cls,
        user_id: str | UUID,
        access_token: str | None = None,
        extraction_count: int = 0,
        subscription_status: str = "free",
    ) -> dict[str, Any]:
        """
        Insert a new profile row.

        Returns:
            The inserted row

        Raises:
            SupabaseClientError: If the insert fails or returns no data
        """
        client = cls._table_client(access_token)
        user_id_str = normalize_uuid(user_id)

        data = {
            "id": user_id_str,
            "extraction_count": extraction_count,
            "subscription_status": subscription_status,
        }

        try:
            response = (
                client.table(PROFILES_TABLE)
                .insert(data)
                .execute()
            )

            if response.data:
                logger.info(f"Created profile for user {user_id_str}")
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"user_id": user_id_str}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert profile: {e}",
                code="INSERT_PROFILE_FAILED",
                details={"user_id": user_id_str}
            )

    @classmethod
    def update_profile(
        cls,
        user_id: str | UUID,
        values: dict[str, Any],
        access_token: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Update columns on a profile row.

        Returns:
            The updated row, or None if no row matched

        Raises:
            SupabaseClientError: If the update fails
        """
        client = cls._table_client(access_token)
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table(PROFILES_TABLE)
                .update(values)
                .eq("id", user_id_str)
                .execute()
            )

            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update profile: {e}",
                code="UPDATE_PROFILE_FAILED",
                details={"user_id": user_id_str, "columns": sorted(values)}
            )

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    @classmethod
    def check_connection(cls) -> None:
        """
        Run a one-row query against the profiles table.

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()

        try:
            client.table(PROFILES_TABLE).select("id").limit(1).execute()
        except Exception as e:
            suggestion = None
            if "does not exist" in str(e):
                suggestion = "Create the profiles table before using the service"
            raise SupabaseClientError(
                message=f"Database check failed: {e}",
                code="CONNECTION_CHECK_FAILED",
                suggestion=suggestion,
            )
