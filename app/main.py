# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the RecipeGenie API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import get_extractor
from app.exceptions import (
    RecipeGenieException,
    application_error_handler,
    recipegenie_exception_handler,
    validation_exception_handler,
)
from app.routers import health, recipes, profile
from app.auth import routes as auth_routes
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Report configuration gaps
    - Shutdown: Close the extractor's HTTP client
    """
    # Startup
    logger.info(f"Starting RecipeGenie API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if not settings.supabase_configured:
        logger.warning("SUPABASE_URL/SUPABASE_KEY not set; auth and profiles are unavailable")
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set; extraction requests will fail")

    yield

    # Shutdown
    logger.info("Shutting down RecipeGenie API")
    if get_extractor.cache_info().currsize:
        get_extractor().close()


# Create FastAPI application
app = FastAPI(
    title="RecipeGenie API",
    description="""
## Handwritten Recipe Extraction API

RecipeGenie reads a photo of a handwritten recipe card and returns the
recipe as structured data: a title, the ingredients and the instructions.

### How It Works

1. **Upload a photo** - `POST /api/v1/recipes/extract`
2. **Get the recipe** - title, ingredients and steps in order
3. **Export it** - as text, Markdown, HTML or JSON

### Usage Limits

| Caller | Free extractions |
|--------|------------------|
| **Anonymous** | 1, then sign-in is required |
| **Free account** | 3, then an upgrade is required |
| **Subscriber** | Unlimited |

Anonymous callers are counted per `X-Client-Id` header, so clients should
send a stable id for each device. Requests without the header all share
one anonymous counter: once any of them has extracted a recipe, every
header-less caller is asked to sign in.

### Quick Start

```bash
# 1. Extract a recipe anonymously
curl -X POST http://localhost:8000/api/v1/recipes/extract \\
  -H "X-Client-Id: my-device" \\
  -F "image=@card.jpg"

# 2. Export it as Markdown
curl -X POST http://localhost:8000/api/v1/recipes/export \\
  -H "Content-Type: application/json" \\
  -d '{"recipe": {...}, "format": "markdown"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Sign-up, login and token verification",
        },
        {
            "name": "Recipes",
            "description": "Extract recipes from photos and export them",
        },
        {
            "name": "Profile",
            "description": "Profile and remaining extractions",
        },
        {
            "name": "Health",
            "description": "API health, readiness and configuration checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(RecipeGenieException)
async def handle_recipegenie_exception(request: Request, exc: RecipeGenieException):
    """Handle custom RecipeGenie exceptions."""
    return await recipegenie_exception_handler(request, exc)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    """Handle backend failures raised by the lib/ wrappers."""
    logger.error(f"Backend error: {exc}")
    return await application_error_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints (router carries its own /auth prefix)
app.include_router(
    auth_routes.router,
    prefix="/api/v1",
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Recipe endpoints
app.include_router(
    recipes.router,
    prefix="/api/v1/recipes",
    tags=["Recipes"]
)

# Profile endpoints
app.include_router(
    profile.router,
    prefix="/api/v1/profile",
    tags=["Profile"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "RecipeGenie API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
