# =============================================================================
# core/services/document_store.py - Content Document Gateway
# =============================================================================
# CRUD over named collections in the document database.
#
# Every collection lives in one Supabase table:
#
#   content_documents(
#       id          uuid primary key default gen_random_uuid(),
#       collection  text not null,
#       data        jsonb not null,
#       created_at  timestamptz default now(),
#       updated_at  timestamptz default now()
#   )
#
# Documents are handed out flattened: {"id": <row id>, **data}.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from supabase import Client

from app.exceptions import (
    CollectionEmptyError,
    DocumentNotFoundError,
    DocumentStoreError,
)
from lib.utils import is_uuid

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "content_documents"


def _strip_id(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if key != "id"}


class DocumentStore:
    """
    Gateway between route handlers and the document table.

    The collection name always comes from the caller; the store never
    assigns meaning to it beyond scoping queries.
    """

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        self._client = client
        self._table_name = table

    def _table(self):
        return self._client.table(self._table_name)

    @staticmethod
    def _to_document(row: dict[str, Any]) -> dict[str, Any]:
        return {"id": str(row["id"]), **(row.get("data") or {})}

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_all(self, collection: str) -> list[dict[str, Any]]:
        """
        Fetch every document in a collection, oldest first.

        Raises:
            CollectionEmptyError: If the collection has no documents
            DocumentStoreError: If the query fails
        """
        try:
            response = (
                self._table()
                .select("id, data")
                .eq("collection", collection)
                .order("created_at")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list {collection}: {e}")
            raise DocumentStoreError("list", str(e)) from e

        rows = response.data or []
        if not rows:
            raise CollectionEmptyError(collection)

        logger.debug(f"Fetched {len(rows)} documents from {collection}")
        return [self._to_document(row) for row in rows]

    def get_one(self, collection: str, document_id: str) -> dict[str, Any]:
        """
        Fetch a single document.

        Raises:
            DocumentNotFoundError: If no document has this ID in the collection
            DocumentStoreError: If the query fails
        """
        # Malformed ids can't exist; skip the round trip
        if not is_uuid(document_id):
            raise DocumentNotFoundError(collection, document_id)

        try:
            response = (
                self._table()
                .select("id, data")
                .eq("collection", collection)
                .eq("id", document_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch {collection}/{document_id}: {e}")
            raise DocumentStoreError("get", str(e)) from e

        rows = response.data or []
        if not rows:
            raise DocumentNotFoundError(collection, document_id)

        return self._to_document(rows[0])

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, collection: str, payload: dict[str, Any]) -> str:
        """
        Insert a document and return the store-assigned ID.

        Any `id` in the payload is discarded.

        Raises:
            DocumentStoreError: If the insert fails
        """
        try:
            response = (
                self._table()
                .insert({"collection": collection, "data": _strip_id(payload)})
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to create {collection} document: {e}")
            raise DocumentStoreError("create", str(e)) from e

        if not response.data:
            raise DocumentStoreError("create", "Insert returned no data")

        document_id = str(response.data[0]["id"])
        logger.info(f"Created {collection} document: {document_id}")
        return document_id

    def update(
        self,
        collection: str,
        document_id: str,
        partial: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Merge `partial` into an existing document.

        Supplied fields overwrite in place; omitted fields are untouched.
        Concurrent updates are last-write-wins.

        Returns:
            The merged document

        Raises:
            DocumentNotFoundError: If the document doesn't exist
            DocumentStoreError: If the update fails
        """
        existing = self.get_one(collection, document_id)
        merged = {**_strip_id(existing), **_strip_id(partial)}

        try:
            (
                self._table()
                .update({
                    "data": merged,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                })
                .eq("collection", collection)
                .eq("id", document_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update {collection}/{document_id}: {e}")
            raise DocumentStoreError("update", str(e)) from e

        logger.info(f"Updated {collection} document: {document_id}")
        return {"id": document_id, **merged}

    def delete(self, collection: str, document_id: str) -> None:
        """
        Delete a document. Deleting a missing document is not an error.

        Raises:
            DocumentStoreError: If the delete fails
        """
        if not is_uuid(document_id):
            logger.debug(f"Ignoring delete of malformed id {document_id!r} in {collection}")
            return

        try:
            (
                self._table()
                .delete()
                .eq("collection", collection)
                .eq("id", document_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete {collection}/{document_id}: {e}")
            raise DocumentStoreError("delete", str(e)) from e

        logger.info(f"Deleted {collection} document: {document_id}")

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        self._table().select("id").limit(1).execute()
