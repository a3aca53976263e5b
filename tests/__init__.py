# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Portfolio API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_batch.py: Tests for the best-effort batch runner
# - test_media_service.py: Tests for screenshot upload/delete
# - test_project_service.py: Tests for project CRUD
# - test_auth.py: Tests for token verification and the admin allowlist
# - test_routes.py: Integration tests for API endpoints
#
# Run tests with: poetry run pytest
# =============================================================================
