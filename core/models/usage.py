# =============================================================================
# core/models/usage.py - Usage Status Schema
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class UsageTier(str, Enum):
    """Who the counter belongs to, which decides the allowance."""
    ANONYMOUS = "anonymous"
    FREE = "free"
    ACTIVE = "active"


class UsageStatus(BaseModel):
    """
    How many extractions a caller has used and how many are left.

    `limit` and `remaining` are None for unlimited (paid) accounts.
    """
    tier: UsageTier
    used: int = Field(..., ge=0)
    limit: int | None = Field(default=None, ge=0)
    remaining: int | None = Field(default=None, ge=0)

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0
