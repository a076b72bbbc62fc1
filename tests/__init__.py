# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the content admin API:
# - test_validator.py / test_registry.py: content schemas and validation
# - test_forms.py: admin form generation and decoding
# - test_auth_guard.py: bearer token verification
# - test_document_store.py / test_object_storage.py: Supabase gateways
# - test_media_service.py / test_revalidation.py: upload and revalidation
# - test_*_routes.py: API and admin panel through TestClient
#
# Run tests with: pytest
# =============================================================================
