# =============================================================================
# app/routers/media.py - Media Upload Endpoint
# =============================================================================
# Accepts a multipart image upload, stores it publicly and indexes it in the
# media collection. See core/services/media_service.py for the pipeline.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from app.auth import AuthenticatedIdentity, require_identity
from app.dependencies import MediaServiceDep
from core.models.responses import MediaUploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()

PARTIAL_MESSAGE = "File uploaded but metadata could not be saved to database"


@router.post(
    "/media",
    status_code=201,
    response_model=MediaUploadResponse,
    response_model_exclude_none=True,
    responses={206: {"model": MediaUploadResponse, "description": "Stored without metadata"}},
)
async def upload_media(
    media: MediaServiceDep,
    identity: AuthenticatedIdentity = Depends(require_identity),
    file: Annotated[UploadFile | None, File(description="Image file to upload")] = None,
    alt: Annotated[str, Form(description="Alternative text")] = "",
    folder: Annotated[str | None, Form(description="Top-level storage folder")] = None,
):
    """
    Upload an image file.

    The object is stored at `{folder}/{uid}/{random}{ext}` and made public.
    If recording the metadata document fails after the object is stored, the
    response is 206 with the real URL and `partial: true`.

    Raises:
        400: No file, empty file, or no storage bucket configured
        401: Missing or invalid bearer token
        413: File larger than MAX_UPLOAD_SIZE_MB
        500: Storage write failed
    """
    result = await media.upload(file, uid=identity.uid, alt=alt, folder=folder)

    if result.partial:
        body = MediaUploadResponse(
            url=result.url,
            alt=result.alt,
            partial=True,
            message=PARTIAL_MESSAGE,
            error=result.error,
        )
        return JSONResponse(status_code=206, content=body.model_dump(exclude_none=True))

    return MediaUploadResponse(id=result.id, url=result.url, alt=result.alt)
