# =============================================================================
# agents/prompts/ - Prompts for AI Agents
# =============================================================================
# This package contains the prompts sent to the model:
# - recipe_extraction.py: Recipe-card prompt and response schema
# =============================================================================

from agents.prompts.recipe_extraction import (
    RECIPE_EXTRACTION_PROMPT,
    RECIPE_RESPONSE_SCHEMA,
    build_generation_request,
)

__all__ = [
    "RECIPE_EXTRACTION_PROMPT",
    "RECIPE_RESPONSE_SCHEMA",
    "build_generation_request",
]
