# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the content logic behind the API:
# - schemas/: content type schemas and the payload validator
# - forms/: admin form generation and decoding from schemas
# - models/: Pydantic response envelopes
# - services/: document store, object storage, media pipeline, revalidation
#
# Code in this package should NOT import routers or request objects.
# This keeps the logic testable and reusable.
# =============================================================================
