# =============================================================================
# core/models/profile.py - User Profile Schemas
# =============================================================================
# A Profile is the `profiles` row that tracks a user's subscription tier and
# how many extractions they have used. The row id is the auth user id.
#
# Rows written by older clients store extraction_count as a string ("2"),
# so from_db_row() accepts both forms.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SubscriptionStatus(str, Enum):
    """
    Subscription tiers stored in profiles.subscription_status.

    - free: limited number of extractions
    - active: paid subscription, unlimited extractions
    """
    FREE = "free"
    ACTIVE = "active"


def _coerce_count(value: Any) -> int:
    """Read extraction_count stored as int or numeric string; default 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, str):
        try:
            return max(int(value.strip()), 0)
        except ValueError:
            return 0
    return 0


class Profile(BaseModel):
    """
    A user's usage profile.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "extraction_count": 2,
            "subscription_status": "free"
        }
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Auth user id this profile belongs to"
    )

    extraction_count: int = Field(
        default=0,
        ge=0,
        description="Number of extractions performed"
    )

    # Kept as a plain string: unknown tiers coming from the database are
    # treated as paid rather than rejected.
    subscription_status: str = Field(
        default=SubscriptionStatus.FREE.value,
        description="'free' or 'active'"
    )

    @property
    def is_free(self) -> bool:
        return self.subscription_status == SubscriptionStatus.FREE.value

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Profile":
        """
        Build a Profile from a loosely-typed database row.

        Raises:
            ValueError: The row has no id
        """
        row_id = str(row.get("id") or "").strip()
        if not row_id:
            raise ValueError(f"profile row has no id: {row!r}")

        status = row.get("subscription_status")
        return cls(
            id=row_id,
            extraction_count=_coerce_count(row.get("extraction_count")),
            subscription_status=status if isinstance(status, str) and status else SubscriptionStatus.FREE.value,
        )
