# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# External clients are built once at startup into a Services container held
# on app.state, and injected into route handlers using Depends().
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Annotated

import httpx
from fastapi import Depends, Request

from app.auth.guard import AuthGuard, TokenVerifier
from app.config import Settings
from core.services.document_store import DocumentStore
from core.services.media_service import MediaUploadService
from core.services.object_storage import ObjectStorage
from core.services.revalidation import Revalidator
from lib.supabase_client import create_supabase_client

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Process-lifetime clients shared by every request."""

    documents: DocumentStore
    media: MediaUploadService
    auth_guard: AuthGuard
    revalidator: Revalidator
    http: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Services":
        """Connect to Supabase and build every service from configuration."""
        client = create_supabase_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        http = httpx.AsyncClient(timeout=settings.REVALIDATE_TIMEOUT)

        documents = DocumentStore(client, table=settings.DOCUMENTS_TABLE)
        storage = ObjectStorage(client, settings.STORAGE_BUCKET, settings.SUPABASE_URL)
        media = MediaUploadService(
            storage=storage,
            documents=documents,
            media_collection=settings.MEDIA_COLLECTION,
            max_bytes=settings.max_upload_size_bytes,
            temp_dir=settings.UPLOAD_TEMP_DIR,
        )
        auth_guard = AuthGuard(TokenVerifier(settings.SUPABASE_JWT_SECRET, settings.jwks_url))
        revalidator = Revalidator(
            http=http,
            url=settings.REVALIDATE_URL,
            paths=settings.revalidate_paths_list,
            secret=settings.REVALIDATE_SECRET,
        )

        if not storage.configured:
            logger.warning("STORAGE_BUCKET is not set; media uploads are disabled")

        return cls(
            documents=documents,
            media=media,
            auth_guard=auth_guard,
            revalidator=revalidator,
            http=http,
        )

    async def aclose(self) -> None:
        if self.http is not None:
            await self.http.aclose()


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_document_store(services: Services = Depends(get_services)) -> DocumentStore:
    return services.documents


def get_media_service(services: Services = Depends(get_services)) -> MediaUploadService:
    return services.media


def get_revalidator(services: Services = Depends(get_services)) -> Revalidator:
    return services.revalidator


# Type aliases for dependency injection
DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]
MediaServiceDep = Annotated[MediaUploadService, Depends(get_media_service)]
RevalidatorDep = Annotated[Revalidator, Depends(get_revalidator)]
