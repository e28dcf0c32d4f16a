# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Site Catalog API:
# - test_cache.py / test_data_loader.py: TTL cache and JSON file loading
# - test_models.py: Unit tests for Pydantic model validation
# - test_website_service.py / test_tech_stack.py: Service-layer logic
# - test_middleware.py: CORS and security headers
# - test_api.py: End-to-end tests for the API endpoints
#
# Run tests with: poetry run pytest
# =============================================================================
