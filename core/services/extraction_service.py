# =============================================================================
# core/services/extraction_service.py - Extraction Workflow
# =============================================================================
# Runs one recipe extraction end to end:
#
#   1. Reject an empty upload
#   2. Check the caller's allowance (before any image work)
#   3. Validate the image (type, size)
#   4. Ask the extractor agent for the recipe
#   5. Record the extraction against the caller
#
# Usage is only recorded after a successful extraction, so a failed call
# never costs the caller an extraction.
# =============================================================================

import logging
import mimetypes

from agents.recipe_extractor import RecipeExtractorAgent
from app.auth.models import AuthUser
from app.config import settings
from app.exceptions import FileTooLargeError, InvalidFileTypeError, NoImageError
from core.models.recipe import ExtractionResult
from core.models.usage import UsageStatus
from core.services.profile_service import ProfileService
from core.services.usage_service import UsageService

logger = logging.getLogger(__name__)

ANONYMOUS_CLIENT_ID = "anonymous"

# Some clients send non-standard names for JPEG
_MIME_ALIASES = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
}


# =============================================================================
# Image Type Detection
# =============================================================================

def sniff_image_type(data: bytes) -> str | None:
    """
    Detect JPEG, PNG, WEBP or HEIC from the leading bytes.

    Returns:
        The MIME type, or None if the bytes are not recognized
    """
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[4:8] == b"ftyp" and data[8:12] in (b"heic", b"heix", b"mif1", b"msf1"):
        return "image/heic"
    return None


def resolve_mime_type(
    data: bytes,
    content_type: str | None = None,
    filename: str | None = None,
) -> str | None:
    """
    Work out the image MIME type of an upload.

    Tries, in order: the declared content type (when it names an image),
    a guess from the filename, then the file's magic bytes.
    """
    if content_type:
        declared = content_type.split(";")[0].strip().lower()
        declared = _MIME_ALIASES.get(declared, declared)
        if declared.startswith("image/"):
            return declared

    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed and guessed.startswith("image/"):
            return _MIME_ALIASES.get(guessed, guessed)

    return sniff_image_type(data)


# =============================================================================
# Service
# =============================================================================

class ExtractionService:
    """
    Orchestrates usage checks, image validation and the extractor agent.

    Example:
        service = ExtractionService(RecipeExtractorAgent(), usage_service)
        result = service.extract(photo_bytes, "image/jpeg", "card.jpg", client_id="device-1")
        print(result.recipe.title, result.usage.remaining)
    """

    def __init__(self, agent: RecipeExtractorAgent, usage: UsageService):
        self.agent = agent
        self.usage = usage

    def _validate_image(
        self,
        image_bytes: bytes,
        content_type: str | None,
        filename: str | None,
    ) -> str:
        allowed = settings.allowed_image_types_list
        mime_type = resolve_mime_type(image_bytes, content_type, filename)

        if mime_type is None or mime_type not in allowed:
            raise InvalidFileTypeError(filename, mime_type or content_type, allowed)

        if len(image_bytes) > settings.max_upload_size_bytes:
            size_mb = len(image_bytes) / (1024 * 1024)
            raise FileTooLargeError(size_mb, settings.MAX_UPLOAD_SIZE_MB)

        return mime_type

    def extract(
        self,
        image_bytes: bytes | None,
        content_type: str | None = None,
        filename: str | None = None,
        user: AuthUser | None = None,
        client_id: str | None = None,
    ) -> ExtractionResult:
        """
        Extract a recipe from an uploaded photo.

        Args:
            image_bytes: Raw image data
            content_type: Declared MIME type of the upload
            filename: Original filename of the upload
            user: The signed-in caller, or None for anonymous
            client_id: Identifies an anonymous caller (default "anonymous")

        Returns:
            ExtractionResult with the recipe and the caller's updated usage

        Raises:
            NoImageError: Empty upload
            SignInRequiredError: Anonymous allowance used up
            ExtractionLimitReachedError: Free account allowance used up
            InvalidFileTypeError: Not a supported image
            FileTooLargeError: Over MAX_UPLOAD_SIZE_MB
            RecipeExtractionError: The agent failed (see its subclasses)
        """
        if not image_bytes:
            raise NoImageError()

        # ---------------------------------------------------------------------
        # Allowance
        # ---------------------------------------------------------------------
        profile = None
        anon_id = client_id or ANONYMOUS_CLIENT_ID

        if user is None:
            self.usage.check_anonymous(anon_id)
        else:
            profile = ProfileService.get_or_create_profile(
                user.id, access_token=user.access_token or None
            )
            self.usage.check_profile(profile)

        # ---------------------------------------------------------------------
        # Extraction
        # ---------------------------------------------------------------------
        mime_type = self._validate_image(image_bytes, content_type, filename)
        logger.info(
            f"Extracting recipe from {filename or 'upload'} "
            f"({mime_type}, {len(image_bytes)} bytes)"
        )

        recipe = self.agent.extract_recipe_from_bytes(image_bytes, mime_type)

        # ---------------------------------------------------------------------
        # Record usage
        # ---------------------------------------------------------------------
        if profile is None:
            usage: UsageStatus = self.usage.record_anonymous(anon_id)
        else:
            usage = self.usage.record_for_user(
                profile, access_token=user.access_token or None
            )

        return ExtractionResult(recipe=recipe, usage=usage)
