# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for all Pydantic models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Loosely-typed database rows are coerced
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

# Import all models from the core package
from core.models import (
    FormatInfo,
    FormatRequest,
    Profile,
    Recipe,
    RecipeFormat,
    SubscriptionStatus,
    UsageStatus,
    UsageTier,
)


# =============================================================================
# Recipe Model Tests
# =============================================================================

class TestRecipe:
    """Tests for Recipe model."""

    def test_valid_recipe(self, sample_recipe):
        """Test creating a valid Recipe."""
        assert sample_recipe.title == "Grandma's Scones"
        assert len(sample_recipe.ingredients) == 3
        assert sample_recipe.instructions[0] == "Preheat oven to 220C."

    def test_defaults(self):
        """Lists default to empty."""
        recipe = Recipe(title="Toast")
        assert recipe.ingredients == []
        assert recipe.instructions == []

    def test_title_required(self):
        with pytest.raises(ValidationError):
            Recipe(ingredients=["bread"])

    def test_frozen(self, sample_recipe):
        with pytest.raises(ValidationError):
            sample_recipe.title = "Other"

    def test_order_preserved(self):
        steps = [f"Step {i}" for i in range(10, 0, -1)]
        assert Recipe(title="Steps", instructions=steps).instructions == steps

    @pytest.mark.parametrize("fields", [
        {"title": ""},
        {"title": "Toast", "ingredients": ["bread", ""]},
        {"title": "Toast", "instructions": [""]},
    ])
    def test_blank_text_rejected(self, fields):
        with pytest.raises(ValidationError):
            Recipe(**fields)


class TestRecipeFormat:
    """Tests for RecipeFormat enum."""

    @pytest.mark.parametrize("fmt,name,ext,media", [
        (RecipeFormat.TEXT, "Text", "txt", "text/plain"),
        (RecipeFormat.MARKDOWN, "Markdown", "md", "text/markdown"),
        (RecipeFormat.HTML, "HTML", "html", "text/html"),
        (RecipeFormat.JSON, "JSON", "json", "application/json"),
    ])
    def test_attributes(self, fmt, name, ext, media):
        assert fmt.display_name == name
        assert fmt.file_extension == ext
        assert fmt.media_type == media

    def test_format_request_default(self, sample_recipe):
        request = FormatRequest(recipe=sample_recipe)
        assert request.format == RecipeFormat.TEXT

    def test_format_request_rejects_unknown(self, sample_recipe):
        with pytest.raises(ValidationError):
            FormatRequest(recipe=sample_recipe, format="pdf")

    def test_format_info(self):
        info = FormatInfo.from_format(RecipeFormat.MARKDOWN)
        assert info.format == RecipeFormat.MARKDOWN
        assert info.file_extension == "md"


# =============================================================================
# Profile Model Tests
# =============================================================================

class TestProfile:
    """Tests for Profile model."""

    def test_from_row_with_int_count(self):
        profile = Profile.from_db_row({
            "id": "abc",
            "extraction_count": 2,
            "subscription_status": "free",
        })
        assert profile.extraction_count == 2
        assert profile.is_free

    def test_from_row_with_string_count(self):
        """Older rows store the count as a string."""
        profile = Profile.from_db_row({
            "id": "abc",
            "extraction_count": "3",
            "subscription_status": "free",
        })
        assert profile.extraction_count == 3

    @pytest.mark.parametrize("raw", [None, "", "lots", -4, True, 1.5])
    def test_from_row_with_bad_count(self, raw):
        profile = Profile.from_db_row({"id": "abc", "extraction_count": raw})
        assert profile.extraction_count == 0

    @pytest.mark.parametrize("row", [
        {"extraction_count": 1},
        {"id": None, "extraction_count": 1},
        {"id": "   "},
    ])
    def test_from_row_without_id(self, row):
        with pytest.raises(ValueError):
            Profile.from_db_row(row)

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError):
            Profile(id="")

    def test_missing_status_defaults_to_free(self):
        profile = Profile.from_db_row({"id": "abc"})
        assert profile.subscription_status == SubscriptionStatus.FREE.value
        assert profile.is_free

    def test_active_is_not_free(self):
        profile = Profile(id="abc", subscription_status="active")
        assert not profile.is_free

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            Profile(id="abc", extraction_count=-1)


# =============================================================================
# Usage Model Tests
# =============================================================================

class TestUsageStatus:
    """Tests for UsageStatus model."""

    def test_exhausted(self):
        status = UsageStatus(tier=UsageTier.FREE, used=3, limit=3, remaining=0)
        assert status.exhausted

    def test_not_exhausted(self):
        status = UsageStatus(tier=UsageTier.ANONYMOUS, used=0, limit=1, remaining=1)
        assert not status.exhausted

    def test_unlimited_never_exhausted(self):
        status = UsageStatus(tier=UsageTier.ACTIVE, used=500)
        assert status.limit is None
        assert not status.exhausted

    def test_negative_used_rejected(self):
        with pytest.raises(ValidationError):
            UsageStatus(tier=UsageTier.FREE, used=-1)
