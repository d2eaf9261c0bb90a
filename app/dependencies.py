# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), and tests replace
# them through app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from agents.recipe_extractor import RecipeExtractorAgent
from app.config import settings
from core.services.extraction_service import ANONYMOUS_CLIENT_ID, ExtractionService
from core.services.usage_service import UsageService
from lib.usage_store import AnonymousUsageStore


@lru_cache
def get_usage_store() -> AnonymousUsageStore:
    """Shared anonymous usage store (one file per process)."""
    return AnonymousUsageStore(settings.ANON_USAGE_FILE)


@lru_cache
def get_extractor() -> RecipeExtractorAgent:
    """Shared extractor agent; its HTTP client is reused across requests."""
    return RecipeExtractorAgent()


def get_usage_service(
    store: AnonymousUsageStore = Depends(get_usage_store),
) -> UsageService:
    return UsageService(store)


def get_extraction_service(
    agent: RecipeExtractorAgent = Depends(get_extractor),
    usage: UsageService = Depends(get_usage_service),
) -> ExtractionService:
    return ExtractionService(agent, usage)


def get_client_id(
    x_client_id: Annotated[str | None, Header(description="Stable per-device id for anonymous callers; callers without one share a single counter")] = None,
) -> str:
    """Anonymous caller id from the X-Client-Id header."""
    client_id = (x_client_id or "").strip()
    return client_id or ANONYMOUS_CLIENT_ID


# Type aliases for dependency injection
UsageServiceDep = Annotated[UsageService, Depends(get_usage_service)]
ExtractionServiceDep = Annotated[ExtractionService, Depends(get_extraction_service)]
ClientIdDep = Annotated[str, Depends(get_client_id)]
