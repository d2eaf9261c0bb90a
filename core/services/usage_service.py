# =============================================================================
# core/services/usage_service.py - Extraction Allowance
# =============================================================================
# Decides whether a caller may run another extraction and records the ones
# that succeed.
#
# Allowances:
#   - Anonymous caller: FREE_LIMIT_ANON extractions, then must sign in
#   - Free account:     FREE_LIMIT_AUTH extractions, then must upgrade
#   - Paid account:     unlimited
#
# Anonymous counters live in the local AnonymousUsageStore; account counters
# live in the profiles table.
# =============================================================================

import logging

from app.config import settings
from app.exceptions import (
    ExtractionLimitReachedError,
    RecipeGenieException,
    SignInRequiredError,
)
from core.models.profile import Profile
from core.models.usage import UsageStatus, UsageTier
from core.services.profile_service import ProfileService
from lib.usage_store import AnonymousUsageStore

logger = logging.getLogger(__name__)


def _limited(tier: UsageTier, used: int, limit: int) -> UsageStatus:
    return UsageStatus(
        tier=tier,
        used=used,
        limit=limit,
        remaining=max(limit - used, 0),
    )


class UsageService:
    """
    Usage checks for anonymous callers and signed-in users.

    Example:
        usage = UsageService(AnonymousUsageStore(settings.ANON_USAGE_FILE))
        usage.check_anonymous("device-123")   # raises once the allowance is used
        usage.record_anonymous("device-123")
    """

    def __init__(
        self,
        store: AnonymousUsageStore,
        anonymous_limit: int | None = None,
        free_limit: int | None = None,
    ):
        self.store = store
        self.anonymous_limit = (
            anonymous_limit if anonymous_limit is not None else settings.FREE_LIMIT_ANON
        )
        self.free_limit = free_limit if free_limit is not None else settings.FREE_LIMIT_AUTH

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def usage_for_anonymous(self, client_id: str) -> UsageStatus:
        return _limited(UsageTier.ANONYMOUS, self.store.get(client_id), self.anonymous_limit)

    def usage_for_profile(self, profile: Profile) -> UsageStatus:
        if not profile.is_free:
            return UsageStatus(tier=UsageTier.ACTIVE, used=profile.extraction_count)
        return _limited(UsageTier.FREE, profile.extraction_count, self.free_limit)

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def check_anonymous(self, client_id: str) -> UsageStatus:
        """
        Make sure an anonymous caller has an extraction left.

        Raises:
            SignInRequiredError: The anonymous allowance is used up
        """
        status = self.usage_for_anonymous(client_id)
        if status.exhausted:
            logger.info(f"Anonymous client {client_id} reached the limit ({status.used})")
            raise SignInRequiredError(used=status.used, limit=self.anonymous_limit)
        return status

    def check_profile(self, profile: Profile) -> UsageStatus:
        """
        Make sure a signed-in user has an extraction left.

        Raises:
            ExtractionLimitReachedError: A free account used all its extractions
        """
        status = self.usage_for_profile(profile)
        if status.exhausted:
            logger.info(f"User {profile.id} reached the free limit ({status.used})")
            raise ExtractionLimitReachedError(used=status.used, limit=self.free_limit)
        return status

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def record_anonymous(self, client_id: str) -> UsageStatus:
        """Count one extraction against an anonymous caller."""
        used = self.store.increment(client_id)
        return _limited(UsageTier.ANONYMOUS, used, self.anonymous_limit)

    def record_for_user(self, profile: Profile, access_token: str | None = None) -> UsageStatus:
        """
        Count one extraction against a signed-in user.

        A failed write is logged and the usage is reported from the count
        the user had before; the extraction itself already succeeded.
        """
        try:
            used = ProfileService.increment_extraction_count(profile.id, access_token=access_token)
        except RecipeGenieException as e:
            logger.warning(f"Failed to record extraction for user {profile.id}: {e}")
            used = profile.extraction_count

        return self.usage_for_profile(profile.model_copy(update={"extraction_count": used}))
