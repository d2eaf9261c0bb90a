# =============================================================================
# agents/ - AI Agent Definitions
# =============================================================================
# This package contains the AI side of recipe extraction:
# - recipe_extractor.py: Sends a recipe-card photo to Gemini and validates
#   the structured recipe it returns
#
# Prompts:
# - prompts/recipe_extraction.py: Instruction text and JSON response schema
# =============================================================================

from agents.recipe_extractor import RecipeExtractorAgent

__all__ = [
    "RecipeExtractorAgent",
]
