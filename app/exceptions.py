# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure leaves the service as a JSON envelope:
#   {"success": false, "message": "...", "code": "..."}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class CMSException(Exception):
    """
    Base exception for the content admin API.

    All custom exceptions inherit from this class and carry the HTTP status
    they map to.
    """

    def __init__(
        self,
        message: str,
        code: str = "CMS_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(CMSException):
    """Raised when the request carries no verifiable bearer token."""

    def __init__(self):
        super().__init__(
            message="Unauthorized",
            code="UNAUTHORIZED",
            status_code=401,
        )


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingParameterError(CMSException):
    """Raised when a required query parameter is absent."""

    def __init__(self, name: str, message: str | None = None):
        super().__init__(
            message=message or f"Query parameter '{name}' is required",
            code="MISSING_PARAMETER",
            status_code=400,
            details={"parameter": name},
        )


class UnknownContentTypeError(CMSException):
    """Raised when a write targets a collection without a registered schema."""

    def __init__(self, collection: str):
        super().__init__(
            message=f"Unknown content type: {collection}",
            code="UNKNOWN_CONTENT_TYPE",
            status_code=400,
            details={"collection": collection},
        )


class SchemaValidationError(CMSException):
    """Raised when a payload does not match its content schema."""

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_ERROR",
            status_code=400,
        )
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["error"] = ", ".join(f"{e['path']}: {e['message']}" for e in self.errors)
        result["errors"] = self.errors
        return result


# =============================================================================
# Document Exceptions
# =============================================================================

class DocumentNotFoundError(CMSException):
    """Raised when a document ID doesn't exist in its collection."""

    def __init__(self, collection: str, document_id: str):
        super().__init__(
            message=f"Document with ID {document_id} not found",
            code="DOCUMENT_NOT_FOUND",
            status_code=404,
            details={"collection": collection, "id": document_id},
        )


class CollectionEmptyError(CMSException):
    """Raised when a collection holds no documents at all."""

    def __init__(self, collection: str):
        super().__init__(
            message=f"No {collection}s found",
            code="COLLECTION_EMPTY",
            status_code=404,
        )
        self.collection = collection


class DocumentStoreError(CMSException):
    """Raised when the document database call itself fails."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message="Internal server error",
            code="DOCUMENT_STORE_ERROR",
            status_code=500,
        )
        self.operation = operation
        self.error = error


# =============================================================================
# Upload Exceptions
# =============================================================================

class MissingFileError(CMSException):
    """Raised when a multipart upload has no file part."""

    def __init__(self):
        super().__init__(
            message="No file provided",
            code="NO_FILE",
            status_code=400,
        )


class FileTooLargeError(CMSException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, max_mb: int):
        super().__init__(
            message=f"File too large (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            details={"max_mb": max_mb},
        )


class StorageNotConfiguredError(CMSException):
    """Raised when no storage bucket is configured for uploads."""

    def __init__(self):
        super().__init__(
            message="Storage bucket not configured",
            code="STORAGE_NOT_CONFIGURED",
            status_code=400,
        )


class StorageUploadError(CMSException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message="Failed to upload file to storage",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
        )
        self.error = error

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["error"] = self.error
        return result


# =============================================================================
# Exception Handlers
# =============================================================================

async def cms_exception_handler(
    request: Request,
    exc: CMSException
) -> JSONResponse:
    """Convert CMSException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (404 route, 405 method) in the envelope."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 405:
        message = "Method not allowed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing errors (bad query types, malformed JSON body)."""
    errors = [
        {
            "path": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Invalid request",
            "code": "BAD_REQUEST",
            "errors": errors,
        }
    )
