# =============================================================================
# core/services/object_storage.py - Supabase Storage Operations
# =============================================================================
# Writes media files to a public Supabase Storage bucket.
# =============================================================================

import logging

from supabase import Client

from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """
    Service for Supabase Storage operations.

    Public URLs are derived from the project URL, bucket and object path:
        {SUPABASE_URL}/storage/v1/object/public/{bucket}/{path}
    """

    def __init__(self, client: Client, bucket: str | None, project_url: str):
        self._client = client
        self.bucket = bucket
        self._project_url = project_url.rstrip("/")
        self._bucket_public = False

    @property
    def configured(self) -> bool:
        return bool(self.bucket)

    def upload(self, path: str, content: bytes, content_type: str | None = None) -> None:
        """
        Upload raw file content.

        Raises:
            StorageUploadError: If upload fails
        """
        file_options = {"content-type": content_type or "application/octet-stream"}

        try:
            self._client.storage.from_(self.bucket).upload(
                path=path,
                file=content,
                file_options=file_options,
            )
        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise StorageUploadError(str(e)) from e

        logger.info(f"Uploaded file to storage: {path} ({len(content)} bytes)")

    def make_public(self, path: str) -> str:
        """
        Make an object publicly readable and return its public URL.

        Supabase grants public reads per bucket, so the bucket is switched to
        public the first time an object is published.

        Raises:
            StorageUploadError: If the bucket cannot be made public
        """
        if not self._bucket_public:
            try:
                bucket = self._client.storage.get_bucket(self.bucket)
                if not getattr(bucket, "public", False):
                    self._client.storage.update_bucket(self.bucket, {"public": True})
                    logger.info(f"Marked storage bucket {self.bucket} as public")
            except Exception as e:
                logger.error(f"Failed to make {path} public: {e}")
                raise StorageUploadError(str(e)) from e
            self._bucket_public = True

        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self._project_url}/storage/v1/object/public/{self.bucket}/{path}"

    def ping(self) -> None:
        """List buckets; raises if storage is unreachable."""
        self._client.storage.list_buckets()
