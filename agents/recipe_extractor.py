# =============================================================================
# agents/recipe_extractor.py - Recipe Extractor Agent
# =============================================================================
# This module turns a photo of a handwritten recipe card into a Recipe by
# calling the Gemini generateContent endpoint once.
#
# The flow:
# 1. Build the request (prompt + inline image + JSON response schema)
# 2. POST it to the model
# 3. Pull the text out of candidates[0].content.parts[0]
# 4. Strip any markdown fences, decode, and validate the recipe shape
#
# Every failure maps to one of the named extraction errors in
# app.exceptions; nothing is retried.
#
# Usage:
#   from agents.recipe_extractor import RecipeExtractorAgent
#   agent = RecipeExtractorAgent()
#   recipe = agent.extract_recipe_from_bytes(photo_bytes, "image/jpeg")
# =============================================================================

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from app.config import settings
from app.exceptions import (
    InvalidAIResponseError,
    InvalidResponseStructureError,
    MissingAPIKeyError,
    RecipeParsingError,
)
from agents.prompts.recipe_extraction import build_generation_request
from core.models.recipe import Recipe, RecipeText
from lib.response_parsing import extract_json_object

# Set up logging for this module
logger = logging.getLogger(__name__)


class _ExtractedRecipe(BaseModel):
    """Strict shape of the model's JSON answer; extra keys are ignored."""

    model_config = ConfigDict(strict=True, extra="ignore")

    title: RecipeText
    ingredients: list[RecipeText]
    instructions: list[RecipeText]


class RecipeExtractorAgent:
    """
    Reads recipe cards with a Gemini vision model.

    Example:
        agent = RecipeExtractorAgent()
        with open("card.jpg", "rb") as f:
            recipe = agent.extract_recipe_from_bytes(f.read(), "image/jpeg")
        print(recipe.title)

    Attributes:
        model: Gemini model id (default from settings)
        base_url: API root (default from settings)
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the extractor.

        Args:
            api_key: Gemini API key (default: settings.GEMINI_API_KEY)
            model: Model id (default: settings.GEMINI_MODEL)
            base_url: API root (default: settings.GEMINI_BASE_URL)
            timeout: Request timeout in seconds (default: settings.GEMINI_TIMEOUT_SECONDS)
            http_client: Pre-built httpx client, mainly for tests
        """
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.GEMINI_TIMEOUT_SECONDS
        self._client = http_client or httpx.Client(timeout=self.timeout)

        logger.info(f"RecipeExtractorAgent initialized with model={self.model}")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def close(self) -> None:
        self._client.close()

    # -------------------------------------------------------------------------
    # Main Entry Points
    # -------------------------------------------------------------------------

    def extract_recipe_from_bytes(self, image: bytes, mime_type: str) -> Recipe:
        """Base64-encode raw image bytes and extract the recipe."""
        encoded = base64.b64encode(image).decode("ascii")
        return self.extract_recipe(encoded, mime_type)

    def extract_recipe(self, image_base64: str, mime_type: str) -> Recipe:
        """
        Extract a structured recipe from a base64-encoded image.

        Args:
            image_base64: Base64 image data
            mime_type: Image MIME type

        Returns:
            The Recipe read from the card

        Raises:
            MissingAPIKeyError: No API key configured
            InvalidAIResponseError: Transport failure, non-2xx status, or no text part
            InvalidResponseStructureError: The service reported an error or blocked the prompt
            RecipeParsingError: The text is not a valid recipe object
        """
        if not self.api_key:
            raise MissingAPIKeyError()

        body = build_generation_request(image_base64, mime_type)
        data = self._post(body)
        text = self._response_text(data)
        logger.debug(f"Model response: {text[:200]}...")

        recipe = self._parse_recipe(text)
        logger.info(
            f"Extracted recipe '{recipe.title}' with {len(recipe.ingredients)} ingredients "
            f"and {len(recipe.instructions)} steps"
        )
        return recipe

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _post(self, body: dict[str, Any]) -> Any:
        try:
            response = self._client.post(
                self.endpoint,
                json=body,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.api_key,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {e}")
            raise InvalidAIResponseError(details={"error": str(e)})

        logger.debug(f"Gemini response status: {response.status_code}")

        if response.is_error:
            raise InvalidAIResponseError(details={
                "status_code": response.status_code,
                "error": _error_message(response),
            })

        try:
            return response.json()
        except ValueError as e:
            raise RecipeParsingError(f"Response body is not JSON: {e}")

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _response_text(self, data: Any) -> str:
        """
        Return candidates[0].content.parts[0].text.

        Raises:
            InvalidResponseStructureError: Error payload or blocked prompt
            InvalidAIResponseError: The path to the text does not exist
        """
        if not isinstance(data, dict):
            raise InvalidAIResponseError(details={"error": "response is not a JSON object"})

        if "error" in data:
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise InvalidResponseStructureError(str(message))

        feedback = data.get("promptFeedback")
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            raise InvalidResponseStructureError(f"prompt blocked ({feedback['blockReason']})")

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Failed to extract text from response")
            raise InvalidAIResponseError(details={"keys": sorted(data)})

        if not isinstance(text, str):
            raise InvalidAIResponseError(details={"error": "text part is not a string"})
        return text

    def _parse_recipe(self, text: str) -> Recipe:
        try:
            payload = extract_json_object(text)
        except ValueError as e:
            logger.warning(f"JSON decoding error: {e}")
            raise RecipeParsingError(str(e))

        try:
            extracted = _ExtractedRecipe.model_validate(payload)
        except ValidationError as e:
            errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise RecipeParsingError("; ".join(errors))

        return Recipe(
            title=extracted.title,
            ingredients=extracted.ingredients,
            instructions=extracted.instructions,
        )


def _error_message(response: httpx.Response) -> str:
    """Best-effort error message from a failed API response."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return str(data["error"].get("message", ""))[:200]
    return response.text[:200]
