# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .profile_service import ProfileService
from .usage_service import UsageService
from .auth_service import AuthService
from .extraction_service import ExtractionService
from .recipe_formatter import export_filename, format_recipe

__all__ = [
    "ProfileService",
    "UsageService",
    "AuthService",
    "ExtractionService",
    "export_filename",
    "format_recipe",
]
