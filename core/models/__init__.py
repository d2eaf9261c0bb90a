# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - recipe.py: Recipe, export formats, extraction result
# - profile.py: User profile row (usage count + subscription tier)
# - usage.py: Usage status reported to callers
#
# These models define the "contract" between API and clients.
# =============================================================================

from .usage import UsageStatus, UsageTier
from .profile import Profile, SubscriptionStatus
from .recipe import (
    ExtractionResult,
    FormatInfo,
    FormatRequest,
    FormattedRecipe,
    Recipe,
    RecipeFormat,
)

__all__ = [
    # Usage
    "UsageStatus",
    "UsageTier",
    # Profile
    "Profile",
    "SubscriptionStatus",
    # Recipe
    "ExtractionResult",
    "FormatInfo",
    "FormatRequest",
    "FormattedRecipe",
    "Recipe",
    "RecipeFormat",
]
