#!/usr/bin/env python3
# =============================================================================
# scripts/extract_recipe.py - Extract a Recipe from the Command Line
# =============================================================================
# Sends one recipe-card photo to the vision model and prints the recipe in
# the chosen format. No usage limits apply here; this talks to the model
# directly.
#
# Usage:
#   python scripts/extract_recipe.py card.jpg
#   python scripts/extract_recipe.py card.jpg --format markdown
#   python scripts/extract_recipe.py card.jpg --format html --output card.html
#
# Prerequisites:
#   - GEMINI_API_KEY set in the environment or .env file
# =============================================================================

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from agents.recipe_extractor import RecipeExtractorAgent
from app.config import settings
from app.exceptions import RecipeGenieException
from core.models.recipe import RecipeFormat
from core.services.extraction_service import resolve_mime_type
from core.services.recipe_formatter import format_recipe


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Extract a recipe from a photo.")
    parser.add_argument("image", help="Path to the recipe-card photo")
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in RecipeFormat],
        default=RecipeFormat.TEXT.value,
        help="Output format (default: text)",
    )
    parser.add_argument("--output", help="Write to this file instead of stdout")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        with open(args.image, "rb") as f:
            image = f.read()
    except OSError as e:
        print(f"Cannot read {args.image}: {e}", file=sys.stderr)
        return 1

    mime_type = resolve_mime_type(image, filename=args.image)
    if mime_type not in settings.allowed_image_types_list:
        print(f"Unsupported image type: {mime_type or 'unknown'}", file=sys.stderr)
        return 1

    agent = RecipeExtractorAgent()
    try:
        recipe = agent.extract_recipe_from_bytes(image, mime_type)
    except RecipeGenieException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.suggestion:
            print(f"Suggestion: {e.suggestion}", file=sys.stderr)
        return 1
    finally:
        agent.close()

    document = format_recipe(recipe, RecipeFormat(args.format))

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(document)
        print(f"Saved '{recipe.title}' to {args.output}")
    else:
        print(document)

    return 0


if __name__ == "__main__":
    sys.exit(main())
