# =============================================================================
# core/services/profile_service.py - Profile Business Logic
# =============================================================================
# Reads, creates and updates rows in the `profiles` table and translates
# Supabase errors into the named profile errors.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    SupabaseNotConfiguredError,
)
from core.models.profile import Profile, SubscriptionStatus
from app.exceptions import (
    ClientNotInitializedError,
    ProfileNotFoundError,
    ProfileUpdateFailedError,
)

logger = logging.getLogger(__name__)


def _profile_from_row(row: dict) -> Profile:
    try:
        return Profile.from_db_row(row)
    except ValueError as e:
        raise SupabaseClientError(
            message=f"Malformed profile row: {e}",
            code="MALFORMED_PROFILE_ROW",
            suggestion="Check that every profiles row has an id",
        )


class ProfileService:
    """
    Service for profile operations.

    Provides a clean interface between API routes and the database.
    `access_token` is the caller's Supabase token; when given, queries run
    as that user.
    """

    @staticmethod
    def get_profile(
        user_id: UUID | str,
        access_token: str | None = None,
    ) -> Profile | None:
        """
        Get a user's profile.

        Returns:
            The Profile, or None if the user has none yet

        Raises:
            ClientNotInitializedError: Supabase is not configured
            SupabaseClientError: The query failed or the row has no id
        """
        try:
            row = SupabaseClient.fetch_profile(user_id, access_token=access_token)
        except SupabaseNotConfiguredError:
            raise ClientNotInitializedError()

        if row is None:
            return None
        return _profile_from_row(row)

    @staticmethod
    def create_profile(
        user_id: UUID | str,
        access_token: str | None = None,
    ) -> Profile:
        """
        Create a free profile with zero extractions.

        Raises:
            ClientNotInitializedError: Supabase is not configured
            ProfileNotFoundError: The insert returned no row
        """
        try:
            row = SupabaseClient.insert_profile(
                user_id,
                access_token=access_token,
                extraction_count=0,
                subscription_status=SubscriptionStatus.FREE.value,
            )
        except SupabaseNotConfiguredError:
            raise ClientNotInitializedError()
        except SupabaseClientError as e:
            logger.error(f"Error creating profile: {e}")
            if e.code == "INSERT_NO_DATA":
                raise ProfileNotFoundError(str(user_id))
            raise

        return _profile_from_row(row)

    @staticmethod
    def get_or_create_profile(
        user_id: UUID | str,
        access_token: str | None = None,
    ) -> Profile:
        """Get the user's profile, creating it on first use."""
        profile = ProfileService.get_profile(user_id, access_token=access_token)
        if profile is not None:
            return profile

        logger.info(f"No profile for user {user_id}, creating one")
        return ProfileService.create_profile(user_id, access_token=access_token)

    @staticmethod
    def increment_extraction_count(
        user_id: UUID | str,
        access_token: str | None = None,
    ) -> int:
        """
        Add one to the user's extraction count.

        Reads the current count, then writes count + 1.

        Returns:
            The new count

        Raises:
            ClientNotInitializedError: Supabase is not configured
            ProfileNotFoundError: The user has no profile
            ProfileUpdateFailedError: The read or write failed
        """
        user_id_str = str(user_id)

        try:
            row = SupabaseClient.fetch_profile(user_id, access_token=access_token)
        except SupabaseNotConfiguredError:
            raise ClientNotInitializedError()
        except SupabaseClientError as e:
            raise ProfileUpdateFailedError(user_id_str, e.message)

        if row is None:
            raise ProfileNotFoundError(user_id_str)

        try:
            new_count = _profile_from_row(row).extraction_count + 1
            SupabaseClient.update_profile(
                user_id,
                {"extraction_count": new_count},
                access_token=access_token,
            )
        except SupabaseClientError as e:
            logger.error(f"Error incrementing extraction count: {e}")
            raise ProfileUpdateFailedError(user_id_str, e.message)

        logger.info(f"Extraction count for user {user_id_str} is now {new_count}")
        return new_count
