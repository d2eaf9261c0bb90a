# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Every named failure case of the service lives here. Each one carries a
# human-readable message (shown to the user as-is), a machine-readable code,
# an HTTP status and an optional suggestion telling HOW to fix it.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class RecipeGenieException(Exception):
    """
    Base exception for the RecipeGenie API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "RECIPEGENIE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Image / Upload Exceptions
# =============================================================================

class NoImageError(RecipeGenieException):
    """Raised when an extraction is requested without an image."""

    def __init__(self):
        super().__init__(
            message="Please select an image first.",
            code="NO_IMAGE",
            status_code=400,
            suggestion="Attach a photo of the recipe card as the 'image' form field",
        )


class ImageProcessingError(RecipeGenieException):
    """Raised when the uploaded image cannot be read or encoded."""

    def __init__(self, error: str | None = None):
        super().__init__(
            message="Failed to process image.",
            code="IMAGE_PROCESSING_FAILED",
            status_code=400,
            suggestion="Try a different photo in JPEG or PNG format",
            details={"error": error} if error else None,
        )


class InvalidFileTypeError(RecipeGenieException):
    """Raised when the uploaded file is not a supported image type."""

    def __init__(self, filename: str | None, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename or content_type or 'unknown'}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these image types are supported: {', '.join(allowed)}",
            details={
                "filename": filename,
                "content_type": content_type,
                "allowed_types": allowed,
            }
        )


class FileTooLargeError(RecipeGenieException):
    """Raised when the uploaded image exceeds the size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


# =============================================================================
# Extraction Exceptions
# =============================================================================

class RecipeExtractionError(RecipeGenieException):
    """Base class for failures talking to the generative-AI service."""


class MissingAPIKeyError(RecipeExtractionError):
    """Raised when GEMINI_API_KEY is not configured."""

    def __init__(self):
        super().__init__(
            message="API key is not set.",
            code="MISSING_API_KEY",
            status_code=503,
            suggestion="Set GEMINI_API_KEY in your environment or .env file",
        )


class InvalidAIResponseError(RecipeExtractionError):
    """Raised when the AI service answers with something unusable."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__(
            message="Invalid response from AI service.",
            code="INVALID_RESPONSE",
            status_code=502,
            suggestion="Try again with a clearer photo, or check the AI service status",
            details=details,
        )


class InvalidResponseStructureError(RecipeExtractionError):
    """Raised when the AI service response has an unexpected shape."""

    def __init__(self, response: str):
        super().__init__(
            message=f"Unexpected response structure from AI service: {response}",
            code="INVALID_RESPONSE_STRUCTURE",
            status_code=502,
            details={"response": response},
        )


class RecipeParsingError(RecipeExtractionError):
    """Raised when the model text cannot be decoded into a recipe."""

    def __init__(self, error: str | None = None):
        super().__init__(
            message="Failed to parse recipe from response.",
            code="PARSING_FAILED",
            status_code=502,
            suggestion="Try again; if it keeps failing, retake the photo with better lighting",
            details={"error": error} if error else None,
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidCredentialsError(RecipeGenieException):
    """Raised when sign-in fails or credentials are blank."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Check your email and password; confirm your email if you just signed up",
        )


class UserAlreadyRegisteredError(RecipeGenieException):
    """Raised when signing up with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            message="This email is already registered. Please try logging in instead.",
            code="USER_ALREADY_REGISTERED",
            status_code=409,
            details={"email": email},
        )


class PasswordMismatchError(RecipeGenieException):
    """Raised when password and confirmation differ at sign-up."""

    def __init__(self):
        super().__init__(
            message="Passwords do not match",
            code="PASSWORDS_DO_NOT_MATCH",
            status_code=422,
        )


class PasswordTooWeakError(RecipeGenieException):
    """Raised when the sign-up password is too short."""

    def __init__(self, min_length: int):
        super().__init__(
            message=f"Password must be at least {min_length} characters long",
            code="PASSWORD_TOO_WEAK",
            status_code=422,
            details={"min_length": min_length},
        )


class AuthServiceError(RecipeGenieException):
    """Raised when the auth backend rejects a request for another reason."""

    def __init__(self, error: str, operation: str):
        super().__init__(
            message=error,
            code="AUTH_FAILED",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation},
        )


# =============================================================================
# Profile Exceptions
# =============================================================================

class ProfileNotFoundError(RecipeGenieException):
    """Raised when a user has no row in the profiles table."""

    def __init__(self, user_id: str):
        super().__init__(
            message="Profile not found",
            code="PROFILE_NOT_FOUND",
            status_code=404,
            suggestion="Fetch GET /profile once to create the profile",
            details={"user_id": user_id},
        )


class ProfileUpdateFailedError(RecipeGenieException):
    """Raised when writing to the profiles table fails."""

    def __init__(self, user_id: str, error: str | None = None):
        details = {"user_id": user_id}
        if error:
            details["error"] = error
        super().__init__(
            message="Failed to update profile",
            code="PROFILE_UPDATE_FAILED",
            status_code=500,
            details=details,
        )


class ClientNotInitializedError(RecipeGenieException):
    """Raised when Supabase credentials are missing."""

    def __init__(self):
        super().__init__(
            message="Client not properly initialized",
            code="CLIENT_NOT_INITIALIZED",
            status_code=503,
            suggestion="Set SUPABASE_URL and SUPABASE_KEY in your environment or .env file",
        )


# =============================================================================
# Usage Limit Exceptions
# =============================================================================

class SignInRequiredError(RecipeGenieException):
    """Raised when an anonymous caller has used up the free allowance."""

    def __init__(self, used: int, limit: int):
        super().__init__(
            message=(
                "To continue extracting recipes, please log in or create an account. "
                "As a registered user, you get more free recipe extractions."
            ),
            code="SIGN_IN_REQUIRED",
            status_code=401,
            suggestion="Sign up via POST /auth/signup or log in via POST /auth/login",
            details={"used": used, "limit": limit},
        )


class ExtractionLimitReachedError(RecipeGenieException):
    """Raised when a free account has used up its extractions."""

    def __init__(self, used: int, limit: int):
        super().__init__(
            message="You've used your free extractions. Upgrade to Pro to extract unlimited recipes!",
            code="UPGRADE_REQUIRED",
            status_code=402,
            details={"used": used, "limit": limit},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def recipegenie_exception_handler(
    request: Request,
    exc: RecipeGenieException
) -> JSONResponse:
    """
    Convert RecipeGenieException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Convert library-level errors (lib.utils.ApplicationError) to JSON.

    These come from the Supabase wrapper when the backend itself fails,
    so they are reported as a bad gateway.
    """
    content = {
        "detail": getattr(exc, "message", str(exc)),
        "code": getattr(exc, "code", "BACKEND_ERROR"),
    }
    suggestion = getattr(exc, "suggestion", None)
    if suggestion:
        content["suggestion"] = suggestion
    return JSONResponse(status_code=502, content=content)


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
