# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Blog API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_security.py: Password hashing and token helpers
# - test_document_store.py: DocumentStore against mongomock
# - test_auth.py: Signup, login and the bearer-token gate
# - test_posts.py / test_comments.py / test_users.py: API endpoints
# - test_errors.py: Error shaping and health endpoints
# - test_utils.py: Query string and time helpers
# - test_dependencies.py: Shared store creation
#
# Run tests with: pytest
# =============================================================================
