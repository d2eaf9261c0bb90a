# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the RecipeGenie API:
# - test_models.py: Pydantic model validation
# - test_response_parsing.py: Code-fence cleanup and JSON decoding
# - test_recipe_formatter.py: Text / Markdown / HTML / JSON export
# - test_recipe_extractor.py: Gemini agent against a mock transport
# - test_usage.py: Anonymous store and allowance rules
# - test_profile_service.py, test_auth_service.py: Supabase-backed services
# - test_extraction_service.py: The end-to-end extraction workflow
# - test_api.py: HTTP endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================
