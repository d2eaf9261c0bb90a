# =============================================================================
# core/services/recipe_formatter.py - Recipe Export Formats
# =============================================================================
# Renders a Recipe as plain text, Markdown, HTML or JSON.
#
# All renderers are pure: the same recipe always yields the same string, and
# every ingredient and instruction appears in its original order. The HTML
# renderer escapes field text, so "<" in a recipe shows up as "<" in the
# browser.
# =============================================================================

import json

from jinja2 import Environment

from core.models.recipe import Recipe, RecipeFormat
from lib.utils import slugify

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ recipe.title }}</title>
    <style>
        body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
        h1 { color: #8B4513; border-bottom: 2px solid #8B4513; padding-bottom: 10px; }
        h2 { color: #CD853F; margin-top: 30px; }
        ol { padding-left: 20px; }
        li { margin-bottom: 8px; line-height: 1.5; }
    </style>
</head>
<body>
    <h1>{{ recipe.title }}</h1>

    <h2>Ingredients</h2>
    <ol>
{% for ingredient in recipe.ingredients %}        <li>{{ ingredient }}</li>
{% endfor %}    </ol>

    <h2>Instructions</h2>
    <ol>
{% for instruction in recipe.instructions %}        <li>{{ instruction }}</li>
{% endfor %}    </ol>
</body>
</html>
"""

_TEMPLATES = Environment(autoescape=True, keep_trailing_newline=True)
_HTML = _TEMPLATES.from_string(_HTML_TEMPLATE)


def _numbered(items: list[str]) -> str:
    return "".join(f"{i}. {item}\n" for i, item in enumerate(items, start=1))


def format_as_text(recipe: Recipe) -> str:
    """Plain text with upper-case section headings and numbered lists."""
    return (
        f"{recipe.title}\n\n"
        "INGREDIENTS:\n"
        f"{_numbered(recipe.ingredients)}"
        "\nINSTRUCTIONS:\n"
        f"{_numbered(recipe.instructions)}"
    )


def format_as_markdown(recipe: Recipe) -> str:
    """Markdown with an H1 title and H2 sections."""
    return (
        f"# {recipe.title}\n\n"
        "## Ingredients\n\n"
        f"{_numbered(recipe.ingredients)}"
        "\n## Instructions\n\n"
        f"{_numbered(recipe.instructions)}"
    )


def format_as_html(recipe: Recipe) -> str:
    """A standalone, printable HTML5 document."""
    return _HTML.render(recipe=recipe)


def format_as_json(recipe: Recipe) -> str:
    """Pretty-printed JSON with sorted keys."""
    return json.dumps(
        recipe.model_dump(include={"title", "ingredients", "instructions"}),
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
    )


_RENDERERS = {
    RecipeFormat.TEXT: format_as_text,
    RecipeFormat.MARKDOWN: format_as_markdown,
    RecipeFormat.HTML: format_as_html,
    RecipeFormat.JSON: format_as_json,
}


def format_recipe(recipe: Recipe, fmt: RecipeFormat) -> str:
    """
    Render a recipe in the requested format.

    Args:
        recipe: The recipe to render
        fmt: One of RecipeFormat

    Returns:
        The rendered document as a string

    Example:
        text = format_recipe(recipe, RecipeFormat.MARKDOWN)
    """
    return _RENDERERS[RecipeFormat(fmt)](recipe)


def export_filename(recipe: Recipe, fmt: RecipeFormat) -> str:
    """
    Suggested download filename, e.g. "grandmas-scones.md".
    """
    return f"{slugify(recipe.title)}.{RecipeFormat(fmt).file_extension}"
