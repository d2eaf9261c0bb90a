# =============================================================================
# app/routers/profile.py - Profile & Usage Endpoints
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.dependencies import ClientIdDep, UsageServiceDep
from core.models.profile import Profile
from core.models.usage import UsageStatus
from core.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ProfileResponse(BaseModel):
    """A user's profile together with their remaining allowance."""
    profile: Profile
    usage: UsageStatus


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=ProfileResponse)
async def get_profile(
    usage: UsageServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> ProfileResponse:
    """
    Get the current user's profile.

    A free profile is created on first access.
    """
    profile = await run_in_threadpool(
        ProfileService.get_or_create_profile, user.id, user.access_token or None
    )
    return ProfileResponse(profile=profile, usage=usage.usage_for_profile(profile))


@router.get("/usage", response_model=UsageStatus)
async def get_usage(
    usage: UsageServiceDep,
    client_id: ClientIdDep,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> UsageStatus:
    """
    How many extractions the caller has used and has left.

    Signed-in callers are looked up by profile; anonymous callers by
    their X-Client-Id header.
    """
    if user is None:
        return usage.usage_for_anonymous(client_id)

    profile = await run_in_threadpool(
        ProfileService.get_or_create_profile, user.id, user.access_token or None
    )
    return usage.usage_for_profile(profile)
