# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers, plus a
# configuration report for diagnosing setup problems.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import mask_secret

router = APIRouter()

API_VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    ai_service: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


class ConfigReport(BaseModel):
    """
    Which settings are present.

    Secrets are never echoed; only their length is reported.
    """
    supabase_url: str | None
    supabase_key: str | None
    supabase_jwt_secret: str | None
    gemini_api_key: str | None
    gemini_model: str
    free_limit_anonymous: int
    free_limit_authenticated: int
    max_upload_size_mb: int
    allowed_image_types: list[str]
    environment: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept requests.
    Probes the profiles table and checks that an AI key is configured.
    """
    checks = ChecksResponse(database="unknown", ai_service="unknown")

    # Check database
    try:
        await run_in_threadpool(SupabaseClient.check_connection)
        checks.database = "healthy"
    except SupabaseClientError as e:
        checks.database = f"unhealthy: {e.message[:50]}"

    # Check AI configuration
    checks.ai_service = "configured" if settings.GEMINI_API_KEY else "unconfigured"

    all_healthy = checks.database == "healthy" and checks.ai_service == "configured"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    Used by Kubernetes/Docker for restart decisions.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )


@router.get("/health/config", response_model=ConfigReport)
async def config_report():
    """
    Report which configuration values are set.

    The Supabase URL is shown as-is; keys and secrets only by length.
    """
    return ConfigReport(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=mask_secret(settings.SUPABASE_KEY),
        supabase_jwt_secret=mask_secret(settings.SUPABASE_JWT_SECRET),
        gemini_api_key=mask_secret(settings.GEMINI_API_KEY),
        gemini_model=settings.GEMINI_MODEL,
        free_limit_anonymous=settings.FREE_LIMIT_ANON,
        free_limit_authenticated=settings.FREE_LIMIT_AUTH,
        max_upload_size_mb=settings.MAX_UPLOAD_SIZE_MB,
        allowed_image_types=settings.allowed_image_types_list,
        environment=settings.ENVIRONMENT,
    )
