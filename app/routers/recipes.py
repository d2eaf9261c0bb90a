# =============================================================================
# app/routers/recipes.py - Recipe Extraction & Export Endpoints
# =============================================================================
# Handles recipe-card uploads and renders recipes into export formats.
#
# Extraction works with or without a bearer token. Anonymous callers send an
# X-Client-Id header so their allowance can be tracked.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Response, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.auth import AuthUser, get_current_user_optional
from app.dependencies import ClientIdDep, ExtractionServiceDep
from app.exceptions import ImageProcessingError, NoImageError
from core.models.recipe import (
    ExtractionResult,
    FormatInfo,
    FormatRequest,
    FormattedRecipe,
    RecipeFormat,
)
from core.services.recipe_formatter import export_filename, format_recipe

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Extraction
# =============================================================================

@router.post("/extract", response_model=ExtractionResult)
async def extract_recipe(
    service: ExtractionServiceDep,
    client_id: ClientIdDep,
    image: Annotated[Optional[UploadFile], File(description="Photo of the recipe card")] = None,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> ExtractionResult:
    """
    Extract a structured recipe from a photo.

    This endpoint:
    1. Checks the caller's remaining extractions
    2. Validates the image (type, size)
    3. Sends it to the vision model
    4. Records the extraction

    Returns the recipe and the caller's updated usage.
    """
    if image is None:
        raise NoImageError()

    try:
        content = await image.read()
    except OSError as e:
        logger.error(f"Failed to read upload: {e}")
        raise ImageProcessingError(str(e))

    return await run_in_threadpool(
        service.extract,
        content,
        image.content_type,
        image.filename,
        user,
        client_id,
    )


# =============================================================================
# Formatting
# =============================================================================

def _render(body: FormatRequest) -> FormattedRecipe:
    return FormattedRecipe(
        format=body.format,
        content=format_recipe(body.recipe, body.format),
        media_type=body.format.media_type,
        filename=export_filename(body.recipe, body.format),
    )


@router.get("/formats", response_model=list[FormatInfo])
async def list_formats() -> list[FormatInfo]:
    """List the export formats a recipe can be rendered into."""
    return [FormatInfo.from_format(fmt) for fmt in RecipeFormat]


@router.post("/format", response_model=FormattedRecipe)
async def format_recipe_endpoint(body: FormatRequest) -> FormattedRecipe:
    """Render a recipe and return the document as a string."""
    return _render(body)


@router.post("/export")
async def export_recipe(body: FormatRequest) -> Response:
    """Render a recipe and return it as a file download."""
    rendered = _render(body)
    return Response(
        content=rendered.content,
        media_type=f"{rendered.media_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{rendered.filename}"'},
    )
