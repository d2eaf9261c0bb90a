# =============================================================================
# core/models/recipe.py - Recipe Schemas
# =============================================================================
# These models define the structured recipe returned by an extraction and
# the export formats a recipe can be rendered into.
#
# A Recipe is created fresh for every extraction and never stored; clients
# keep it for as long as they display it.
# =============================================================================

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from .usage import UsageStatus

# A recipe line with at least one character
RecipeText = Annotated[str, StringConstraints(min_length=1)]


class RecipeFormat(str, Enum):
    """
    Export formats for a recipe.

    Each format knows its display name, file extension and HTTP media type.
    """
    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"
    JSON = "json"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def file_extension(self) -> str:
        return _FILE_EXTENSIONS[self]

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_DISPLAY_NAMES = {
    RecipeFormat.TEXT: "Text",
    RecipeFormat.MARKDOWN: "Markdown",
    RecipeFormat.HTML: "HTML",
    RecipeFormat.JSON: "JSON",
}

_FILE_EXTENSIONS = {
    RecipeFormat.TEXT: "txt",
    RecipeFormat.MARKDOWN: "md",
    RecipeFormat.HTML: "html",
    RecipeFormat.JSON: "json",
}

_MEDIA_TYPES = {
    RecipeFormat.TEXT: "text/plain",
    RecipeFormat.MARKDOWN: "text/markdown",
    RecipeFormat.HTML: "text/html",
    RecipeFormat.JSON: "application/json",
}


class Recipe(BaseModel):
    """
    A recipe read off a photographed recipe card.

    Example:
        {
            "title": "Grandma's Scones",
            "ingredients": ["2 cups flour", "1/2 cup butter, cold"],
            "instructions": ["Preheat oven to 220C.", "Rub butter into flour."]
        }
    """

    model_config = ConfigDict(frozen=True)

    title: RecipeText = Field(
        ...,
        description="The title of the recipe"
    )

    ingredients: list[RecipeText] = Field(
        default_factory=list,
        description="Ingredients with quantities and preparation notes, in card order"
    )

    instructions: list[RecipeText] = Field(
        default_factory=list,
        description="Step-by-step instructions, in order"
    )


class FormatRequest(BaseModel):
    """Request body for rendering a recipe."""
    recipe: Recipe
    format: RecipeFormat = Field(
        default=RecipeFormat.TEXT,
        description="Output format"
    )


class FormattedRecipe(BaseModel):
    """A recipe rendered into one export format."""
    format: RecipeFormat
    content: str
    media_type: str
    filename: str


class FormatInfo(BaseModel):
    """Describes one export format."""
    format: RecipeFormat
    display_name: str
    file_extension: str
    media_type: str

    @classmethod
    def from_format(cls, fmt: RecipeFormat) -> "FormatInfo":
        return cls(
            format=fmt,
            display_name=fmt.display_name,
            file_extension=fmt.file_extension,
            media_type=fmt.media_type,
        )


class ExtractionResult(BaseModel):
    """Outcome of a successful extraction."""
    recipe: Recipe
    usage: UsageStatus
