# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .document_store import DocumentStore
from .media_service import MediaUploadService, UploadResult, UploadState
from .object_storage import ObjectStorage
from .revalidation import RevalidationError, Revalidator

__all__ = [
    "DocumentStore",
    "MediaUploadService",
    "ObjectStorage",
    "RevalidationError",
    "Revalidator",
    "UploadResult",
    "UploadState",
]
