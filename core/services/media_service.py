# =============================================================================
# core/services/media_service.py - Media Upload Pipeline
# =============================================================================
# Moves one uploaded file through:
#
#   RECEIVED -> STORED -> METADATA_RECORDED
#                      \-> METADATA_FAILED   (partial success)
#
# 1. RECEIVED: the multipart file is streamed to a temp file; oversize files
#    are rejected before storage is touched.
# 2. STORED: the file is written to `{folder}/{uid}/{uuid}{ext}` and made
#    public. A storage failure aborts the upload.
# 3. The `{url, alt}` metadata document is recorded in the media collection.
#    If that write fails the object is already usable, so the upload is
#    reported as a partial success carrying the real URL.
#
# The temp file is removed on every exit path.
# =============================================================================

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Protocol
from uuid import uuid4

from app.exceptions import (
    FileTooLargeError,
    MissingFileError,
    StorageNotConfiguredError,
)
from core.services.document_store import DocumentStore
from core.services.object_storage import ObjectStorage
from lib.utils import safe_path_segment

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
DEFAULT_FOLDER = "media"
DEFAULT_EXTENSION = ".jpg"


class UploadState(str, Enum):
    """Where an upload ended up."""
    RECEIVED = "received"
    STORED = "stored"
    METADATA_RECORDED = "metadata_recorded"
    METADATA_FAILED = "metadata_failed"


class UploadedFile(Protocol):
    """The parts of fastapi.UploadFile the pipeline uses."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


@dataclass
class ReceivedUpload:
    """A file spooled to local disk, not yet in storage."""

    temp_path: Path
    filename: str
    content_type: str | None
    size: int

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename)[1].lower() or DEFAULT_EXTENSION

    def cleanup(self) -> None:
        try:
            self.temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temp upload {self.temp_path}: {e}")


@dataclass
class UploadResult:
    """
    Outcome of a media upload.

    `partial=True` means the object is stored and public but its metadata
    document was not recorded; `error` holds the metadata failure.
    """

    url: str
    path: str
    alt: str
    state: UploadState
    id: str | None = None
    error: str | None = None

    @property
    def partial(self) -> bool:
        return self.state == UploadState.METADATA_FAILED


OrphanHook = Callable[[str, str], None]


class MediaUploadService:
    """
    Upload files to object storage and index them in the media collection.

    `on_orphaned_object(path, url)` is called whenever a stored object ends up
    without a metadata document, so a reconciliation job can pick it up.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        documents: DocumentStore,
        media_collection: str = "media",
        max_bytes: int = 10 * 1024 * 1024,
        temp_dir: str | None = None,
        on_orphaned_object: OrphanHook | None = None,
    ):
        self.storage = storage
        self.documents = documents
        self.media_collection = media_collection
        self.max_bytes = max_bytes
        self.temp_dir = temp_dir
        self.on_orphaned_object = on_orphaned_object

    # -------------------------------------------------------------------------
    # RECEIVED
    # -------------------------------------------------------------------------

    async def receive(self, upload: UploadedFile | None) -> ReceivedUpload:
        """
        Spool an uploaded file to disk, enforcing the size ceiling.

        Raises:
            MissingFileError: If there is no file or it is empty
            FileTooLargeError: If the file exceeds `max_bytes`
        """
        if upload is None or not upload.filename:
            raise MissingFileError()

        filename = upload.filename
        handle = tempfile.NamedTemporaryFile(
            delete=False,
            dir=self.temp_dir,
            prefix="upload-",
            suffix=os.path.splitext(filename)[1],
        )
        temp_path = Path(handle.name)
        size = 0

        try:
            with handle:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise FileTooLargeError(self.max_bytes // (1024 * 1024))
                    handle.write(chunk)

            if size == 0:
                raise MissingFileError()
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug(f"Received upload {filename} ({size} bytes) at {temp_path}")
        return ReceivedUpload(
            temp_path=temp_path,
            filename=filename,
            content_type=upload.content_type,
            size=size,
        )

    # -------------------------------------------------------------------------
    # STORED
    # -------------------------------------------------------------------------

    def store(self, received: ReceivedUpload, uid: str, folder: str | None) -> tuple[str, str]:
        """
        Write a received file to storage and publish it.

        Returns:
            (storage path, public URL)

        Raises:
            StorageUploadError: If the write or publish fails
        """
        folder = safe_path_segment(folder, DEFAULT_FOLDER)
        path = f"{folder}/{uid}/{uuid4().hex}{received.extension}"

        self.storage.upload(path, received.temp_path.read_bytes(), received.content_type)
        url = self.storage.make_public(path)
        return path, url

    # -------------------------------------------------------------------------
    # Full pipeline
    # -------------------------------------------------------------------------

    async def upload(
        self,
        upload: UploadedFile | None,
        uid: str,
        alt: str = "",
        folder: str | None = None,
    ) -> UploadResult:
        """
        Run an upload from RECEIVED to a terminal state.

        Raises:
            StorageNotConfiguredError: If no bucket is configured
            MissingFileError / FileTooLargeError: Rejected while receiving
            StorageUploadError: If the object could not be stored
        """
        if not self.storage.configured:
            raise StorageNotConfiguredError()

        received = await self.receive(upload)
        try:
            path, url = self.store(received, uid, folder)

            try:
                media_id = self.documents.create(self.media_collection, {"url": url, "alt": alt})
            except Exception as e:
                logger.warning(f"Stored {path} but failed to record metadata: {e}")
                self._report_orphan(path, url)
                return UploadResult(
                    url=url,
                    path=path,
                    alt=alt,
                    state=UploadState.METADATA_FAILED,
                    error=str(e),
                )

            logger.info(f"Uploaded media {media_id}: {path}")
            return UploadResult(
                url=url,
                path=path,
                alt=alt,
                state=UploadState.METADATA_RECORDED,
                id=media_id,
            )
        finally:
            received.cleanup()

    def _report_orphan(self, path: str, url: str) -> None:
        if self.on_orphaned_object is None:
            return
        try:
            self.on_orphaned_object(path, url)
        except Exception as e:
            logger.error(f"Orphaned object hook failed for {path}: {e}")
