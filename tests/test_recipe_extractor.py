# =============================================================================
# tests/test_recipe_extractor.py - Recipe Extractor Agent Tests
# =============================================================================
# The Gemini API is never called: requests go to an httpx.MockTransport that
# records them and answers with canned responses.
#
# Run with: pytest tests/test_recipe_extractor.py -v
# =============================================================================

import base64
import json

import httpx
import pytest

from agents.prompts.recipe_extraction import (
    RECIPE_EXTRACTION_PROMPT,
    RECIPE_RESPONSE_SCHEMA,
    build_generation_request,
)
from agents.recipe_extractor import RecipeExtractorAgent
from app.exceptions import (
    InvalidAIResponseError,
    InvalidResponseStructureError,
    MissingAPIKeyError,
    RecipeExtractionError,
    RecipeParsingError,
)


# =============================================================================
# Helpers
# =============================================================================

def make_agent(handler, api_key="test-key"):
    """Agent whose HTTP calls are answered by `handler`."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return RecipeExtractorAgent(
        api_key=api_key,
        model="gemini-test",
        base_url="https://example.test/v1beta/",
        http_client=client,
    )


def respond_with(status_code=200, json_body=None, text=None, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if json_body is not None:
            return httpx.Response(status_code, json=json_body)
        return httpx.Response(status_code, text=text or "")
    return handler


# =============================================================================
# Request Building
# =============================================================================

class TestBuildGenerationRequest:
    """Tests for build_generation_request()."""

    def test_parts(self):
        body = build_generation_request("aGVsbG8=", "image/png")

        parts = body["contents"][0]["parts"]
        assert parts[0] == {"text": RECIPE_EXTRACTION_PROMPT}
        assert parts[1] == {"inlineData": {"mimeType": "image/png", "data": "aGVsbG8="}}

    def test_json_response_schema(self):
        config = build_generation_request("x", "image/jpeg")["generationConfig"]

        assert config["responseMimeType"] == "application/json"
        assert config["responseSchema"] is RECIPE_RESPONSE_SCHEMA
        assert RECIPE_RESPONSE_SCHEMA["required"] == ["title", "ingredients", "instructions"]


# =============================================================================
# Agent
# =============================================================================

class TestRecipeExtractorAgent:
    """Tests for RecipeExtractorAgent."""

    def test_success(self, gemini_response, sample_recipe_json, sample_recipe, jpeg_bytes):
        calls = []
        agent = make_agent(respond_with(json_body=gemini_response(sample_recipe_json), calls=calls))

        recipe = agent.extract_recipe_from_bytes(jpeg_bytes, "image/jpeg")

        assert recipe == sample_recipe

        request = calls[0]
        assert str(request.url) == "https://example.test/v1beta/models/gemini-test:generateContent"
        assert request.headers["x-goog-api-key"] == "test-key"
        body = json.loads(request.content)
        inline = body["contents"][0]["parts"][1]["inlineData"]
        assert inline["mimeType"] == "image/jpeg"
        assert base64.b64decode(inline["data"]) == jpeg_bytes

    def test_fenced_response(self, gemini_response, sample_recipe_json):
        agent = make_agent(respond_with(json_body=gemini_response(f"```json\n{sample_recipe_json}\n```")))

        recipe = agent.extract_recipe("aGk=", "image/jpeg")

        assert recipe.title == "Grandma's Scones"
        assert len(recipe.instructions) == 3

    def test_extra_fields_ignored(self, gemini_response):
        text = json.dumps({
            "title": "Tea",
            "ingredients": ["tea bag", "water"],
            "instructions": ["Boil water.", "Steep."],
            "servings": 1,
        })
        agent = make_agent(respond_with(json_body=gemini_response(text)))

        assert agent.extract_recipe("aGk=", "image/jpeg").ingredients == ["tea bag", "water"]

    def test_missing_api_key_makes_no_request(self):
        calls = []
        agent = make_agent(respond_with(json_body={}, calls=calls), api_key="")

        with pytest.raises(MissingAPIKeyError):
            agent.extract_recipe("aGk=", "image/jpeg")

        assert calls == []

    def test_http_error_status(self):
        agent = make_agent(respond_with(
            status_code=400,
            json_body={"error": {"code": 400, "message": "API key not valid"}},
        ))

        with pytest.raises(InvalidAIResponseError) as exc_info:
            agent.extract_recipe("aGk=", "image/jpeg")

        assert exc_info.value.details["status_code"] == 400
        assert exc_info.value.details["error"] == "API key not valid"

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        agent = make_agent(handler)

        with pytest.raises(InvalidAIResponseError):
            agent.extract_recipe("aGk=", "image/jpeg")

    def test_error_payload(self):
        agent = make_agent(respond_with(json_body={"error": {"message": "quota exceeded"}}))

        with pytest.raises(InvalidResponseStructureError, match="quota exceeded"):
            agent.extract_recipe("aGk=", "image/jpeg")

    def test_blocked_prompt(self):
        agent = make_agent(respond_with(json_body={"promptFeedback": {"blockReason": "SAFETY"}}))

        with pytest.raises(InvalidResponseStructureError, match="SAFETY"):
            agent.extract_recipe("aGk=", "image/jpeg")

    @pytest.mark.parametrize("body", [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
    ])
    def test_missing_text(self, body):
        agent = make_agent(respond_with(json_body=body))

        with pytest.raises(InvalidAIResponseError):
            agent.extract_recipe("aGk=", "image/jpeg")

    def test_non_json_body(self):
        agent = make_agent(respond_with(text="<html>oops</html>"))

        with pytest.raises(RecipeParsingError):
            agent.extract_recipe("aGk=", "image/jpeg")

    @pytest.mark.parametrize("text", [
        "Sorry, I can't read that.",
        '["not", "an", "object"]',
        '{"title": "No lists"}',
        '{"title": 7, "ingredients": [], "instructions": []}',
        '{"title": "X", "ingredients": "flour", "instructions": []}',
        '{"title": "", "ingredients": [""], "instructions": []}',
        '{"title": "Toast", "ingredients": ["bread"], "instructions": [""]}',
    ])
    def test_unparseable_recipe(self, gemini_response, text):
        agent = make_agent(respond_with(json_body=gemini_response(text)))

        with pytest.raises(RecipeParsingError):
            agent.extract_recipe("aGk=", "image/jpeg")

    def test_all_failures_share_base_class(self):
        agent = make_agent(respond_with(status_code=500, text="boom"))

        with pytest.raises(RecipeExtractionError):
            agent.extract_recipe("aGk=", "image/jpeg")
