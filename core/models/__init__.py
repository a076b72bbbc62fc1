# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# - media.py: MediaReference, the embedded {id?, url, alt} value
# - responses.py: JSON envelopes returned by the API
#
# These models define the "contract" between API and clients.
# =============================================================================

from .media import MediaReference
from .responses import (
    DocumentListResponse,
    DocumentResponse,
    ErrorResponse,
    MediaUploadResponse,
    MutationResponse,
    RevalidateResponse,
)

__all__ = [
    "MediaReference",
    "DocumentListResponse",
    "DocumentResponse",
    "ErrorResponse",
    "MediaUploadResponse",
    "MutationResponse",
    "RevalidateResponse",
]
