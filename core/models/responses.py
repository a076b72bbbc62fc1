# =============================================================================
# core/models/responses.py - API Response Envelopes
# =============================================================================
# Every response carries a `success` flag plus either a payload
# (`data` / `id` / `url`) or a human-readable `message`.
#
#   GET    list     -> DocumentListResponse   {success, data: [...]}
#   GET    one      -> DocumentResponse       {success, data: {...}}
#   POST   create   -> MutationResponse       {success, message, id}
#   PUT    update   -> MutationResponse       {success, message, id}
#   DELETE          -> MutationResponse       {success, message}
#   POST   media    -> MediaUploadResponse    {success, id, url, alt}
#                      (206 adds partial, message, error)
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class DocumentListResponse(BaseModel):
    """All documents of a collection."""
    success: bool = True
    data: list[dict[str, Any]] = Field(default_factory=list)


class DocumentResponse(BaseModel):
    """A single document, flattened with its id."""
    success: bool = True
    data: dict[str, Any]


class MutationResponse(BaseModel):
    """Result of create / update / delete."""
    success: bool = True
    message: str
    id: str | None = None


class MediaUploadResponse(BaseModel):
    """
    Result of a media upload.

    On partial success `id` is absent, `partial` is true and `error` holds
    the metadata failure; `url` is still the real public URL.
    """
    success: bool = True
    url: str
    alt: str = ""
    id: str | None = None
    partial: bool | None = None
    message: str | None = None
    error: str | None = None


class RevalidateResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Failure envelope produced by the exception handlers."""
    success: bool = False
    message: str
    code: str | None = None
    error: str | None = None
    errors: list[dict[str, str]] | None = None
