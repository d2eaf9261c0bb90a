# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: Pydantic schemas for recipes, profiles and usage
# - services/: Extraction workflow, usage limits, profiles, auth, formatting
#
# Route handlers stay thin and delegate here, so everything in this package
# can be tested without an HTTP server.
# =============================================================================
