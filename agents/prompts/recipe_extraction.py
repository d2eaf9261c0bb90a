# =============================================================================
# agents/prompts/recipe_extraction.py - Recipe Extraction Prompt
# =============================================================================
# The instruction sent alongside the recipe-card photo, and the JSON schema
# the model's answer must follow.
#
# The schema uses the Gemini OpenAPI-subset notation (upper-case type names).
# Field descriptions double as guidance for the model: a missing title must
# be invented, and ingredients keep their quantities and notes.
#
# Usage:
#   body = build_generation_request(image_base64, "image/jpeg")
# =============================================================================

from __future__ import annotations

from typing import Any

# =============================================================================
# Prompt
# =============================================================================

RECIPE_EXTRACTION_PROMPT = (
    "Analyze this image of a handwritten recipe. Extract the title, a complete "
    "list of ingredients, and all preparation instructions. Ensure the output is "
    "well-structured and follows the provided JSON schema. If the handwriting is "
    "unclear, make your best guess."
)

# =============================================================================
# Response Schema
# =============================================================================

RECIPE_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": "The title of the recipe. If no title is found, create a suitable one.",
        },
        "ingredients": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": (
                "A list of all ingredients, including quantities and preparation "
                "notes (e.g., '1 cup flour, sifted')."
            ),
        },
        "instructions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "The step-by-step instructions for preparing the recipe.",
        },
    },
    "required": ["title", "ingredients", "instructions"],
}


def build_generation_request(
    image_base64: str,
    mime_type: str,
    prompt: str = RECIPE_EXTRACTION_PROMPT,
) -> dict[str, Any]:
    """
    Build the generateContent request body for one recipe photo.

    Args:
        image_base64: Base64-encoded image bytes
        mime_type: Image MIME type, e.g. "image/jpeg"
        prompt: Instruction text (defaults to RECIPE_EXTRACTION_PROMPT)

    Returns:
        JSON-serializable request body
    """
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": prompt},
                    {
                        "inlineData": {
                            "mimeType": mime_type,
                            "data": image_base64,
                        }
                    },
                ],
            }
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RECIPE_RESPONSE_SCHEMA,
        },
    }
