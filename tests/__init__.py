# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for Tricolore:
# - test_view.py, test_exception_presenter.py: view layer and error pages
# - test_translation.py, test_routing.py, test_cookie_jar.py: collaborators
# - test_app.py: HTTP layer through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
