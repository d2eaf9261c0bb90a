# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides common fixtures for testing
# =============================================================================

import os
import sys
import tempfile
import time
import uuid

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

TEST_JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault(
    "ANON_USAGE_FILE",
    os.path.join(tempfile.mkdtemp(prefix="recipegenie-tests-"), "anonymous_usage.json"),
)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

# Make the project root importable when pytest runs from elsewhere
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from jose import jwt

from app.auth.models import AuthUser
from core.models.recipe import Recipe


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_recipe():
    """A small recipe as read off a card."""
    return Recipe(
        title="Grandma's Scones",
        ingredients=["2 cups flour, sifted", "1/2 cup butter, cold", "3/4 cup milk"],
        instructions=[
            "Preheat oven to 220C.",
            "Rub butter into flour.",
            "Stir in milk and bake for 12 minutes.",
        ],
    )


@pytest.fixture
def sample_recipe_json():
    """The JSON text a model returns for sample_recipe."""
    return (
        '{"title": "Grandma\'s Scones", '
        '"ingredients": ["2 cups flour, sifted", "1/2 cup butter, cold", "3/4 cup milk"], '
        '"instructions": ["Preheat oven to 220C.", "Rub butter into flour.", '
        '"Stir in milk and bake for 12 minutes."]}'
    )


@pytest.fixture
def gemini_response():
    """Build a generateContent response body wrapping the given text."""
    def _build(text: str) -> dict:
        return {
            "candidates": [
                {
                    "content": {
                        "role": "model",
                        "parts": [{"text": text}],
                    },
                    "finishReason": "STOP",
                }
            ]
        }
    return _build


@pytest.fixture
def jpeg_bytes():
    """Bytes that start with a JPEG signature."""
    return b"\xff\xd8\xff\xe0" + b"\x00" * 64


@pytest.fixture
def png_bytes():
    """Bytes that start with a PNG signature."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def make_token():
    """Mint an HS256 access token signed with the test secret."""
    def _make(sub: str, email: str = "cook@example.com", expires_in: int = 3600) -> str:
        now = int(time.time())
        claims = {
            "sub": sub,
            "email": email,
            "aud": "authenticated",
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
        }
        return jwt.encode(claims, TEST_JWT_SECRET, algorithm="HS256")
    return _make


@pytest.fixture
def auth_user(user_id):
    """A signed-in user as resolved by the auth dependency."""
    return AuthUser(id=uuid.UUID(user_id), email="cook@example.com", access_token="user-token")
