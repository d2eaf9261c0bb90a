# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for auth and the profiles table
# - response_parsing.py: Code-fence cleanup and JSON decoding of model output
# - usage_store.py: JSON-file counters for anonymous callers
# - utils.py: Shared utilities (error handling, UUID normalization, slugs)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    SupabaseAuthError,
    SupabaseClient,
    SupabaseClientError,
    SupabaseNotConfiguredError,
)
from lib.response_parsing import decode_json, extract_json_object, strip_code_fences
from lib.usage_store import AnonymousUsageStore
from lib.utils import ApplicationError, mask_secret, normalize_uuid, slugify

__all__ = [
    # Supabase
    "SupabaseAuthError",
    "SupabaseClient",
    "SupabaseClientError",
    "SupabaseNotConfiguredError",
    # Response parsing
    "decode_json",
    "extract_json_object",
    "strip_code_fences",
    # Usage
    "AnonymousUsageStore",
    # Utils
    "ApplicationError",
    "mask_secret",
    "normalize_uuid",
    "slugify",
]
