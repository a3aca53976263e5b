# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the portfolio's business logic:
# - models/: Pydantic schemas for project data
# - services/: Project table, screenshot storage and admin identity services
#
# Services receive their Supabase client through the constructor, so tests
# can run them against a mocked client.
# =============================================================================
