#!/usr/bin/env python3
# =============================================================================
# scripts/check_setup.py - Configuration Diagnostics
# =============================================================================
# Reports which settings are present and whether the profiles table can be
# reached. Secrets are shown by length only.
#
# Usage:
#   python scripts/check_setup.py
#
# Exit code is 0 when everything is configured and reachable, 1 otherwise.
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import mask_secret


def _line(name: str, value: str | None) -> bool:
    status = "OK  " if value else "MISSING"
    print(f"  [{status}] {name}: {value or '-'}")
    return bool(value)


def main() -> int:
    print("=" * 60)
    print("RecipeGenie Setup Check")
    print("=" * 60)
    print()

    print("Environment:")
    ok = _line("SUPABASE_URL", settings.SUPABASE_URL)
    ok &= _line("SUPABASE_KEY", mask_secret(settings.SUPABASE_KEY))
    ok &= _line("GEMINI_API_KEY", mask_secret(settings.GEMINI_API_KEY))
    _line("SUPABASE_JWT_SECRET (optional)", mask_secret(settings.SUPABASE_JWT_SECRET))
    print(f"  Model: {settings.GEMINI_MODEL}")
    print(f"  Limits: anonymous={settings.FREE_LIMIT_ANON}, free={settings.FREE_LIMIT_AUTH}")
    print()

    print("Database:")
    if not settings.supabase_configured:
        print("  Skipped (Supabase not configured)")
        ok = False
    else:
        try:
            SupabaseClient.check_connection()
            print("  profiles table reachable")
        except SupabaseClientError as e:
            print(f"  FAILED: {e}")
            ok = False

    print()
    print("All checks passed" if ok else "Some checks failed")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
