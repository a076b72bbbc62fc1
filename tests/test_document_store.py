# =============================================================================
# tests/test_document_store.py - Document Gateway Tests
# =============================================================================
# DocumentStore against a mocked Supabase client. The query builder is a
# fluent chain, so a single MagicMock whose methods return itself stands in
# for every table call.
# =============================================================================

from unittest.mock import MagicMock

import pytest

from app.exceptions import (
    CollectionEmptyError,
    DocumentNotFoundError,
    DocumentStoreError,
)
from core.services.document_store import DocumentStore

DOC_ID = "6f1c1d2e-8a4b-4c55-9e0f-2b7c3d4e5f60"


@pytest.fixture
def query():
    """Fluent query builder mock: every builder method returns itself."""
    builder = MagicMock()
    for method in ("select", "eq", "order", "limit", "insert", "update", "delete"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value = MagicMock(data=[])
    return builder


@pytest.fixture
def client(query):
    supabase = MagicMock()
    supabase.table.return_value = query
    return supabase


@pytest.fixture
def store(client):
    return DocumentStore(client, table="content_documents")


class TestReads:
    """Tests for list_all / get_one."""

    def test_list_flattens_rows(self, store, client, query):
        query.execute.return_value = MagicMock(data=[
            {"id": DOC_ID, "data": {"name": "Acme"}},
        ])

        documents = store.list_all("brand")

        assert documents == [{"id": DOC_ID, "name": "Acme"}]
        client.table.assert_called_with("content_documents")
        query.eq.assert_called_with("collection", "brand")
        query.order.assert_called_with("created_at")

    def test_empty_collection_raises(self, store):
        with pytest.raises(CollectionEmptyError) as exc_info:
            store.list_all("doesnotexist")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "No doesnotexists found"

    def test_list_failure_is_wrapped(self, store, query):
        query.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DocumentStoreError) as exc_info:
            store.list_all("brand")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal server error"

    def test_get_one(self, store, query):
        query.execute.return_value = MagicMock(data=[{"id": DOC_ID, "data": {"name": "Acme"}}])

        assert store.get_one("brand", DOC_ID) == {"id": DOC_ID, "name": "Acme"}
        query.eq.assert_any_call("id", DOC_ID)

    def test_get_one_missing(self, store):
        with pytest.raises(DocumentNotFoundError) as exc_info:
            store.get_one("brand", DOC_ID)

        assert exc_info.value.message == f"Document with ID {DOC_ID} not found"

    def test_malformed_id_is_not_found_without_query(self, store, client):
        with pytest.raises(DocumentNotFoundError):
            store.get_one("brand", "not-a-uuid")

        client.table.assert_not_called()


class TestWrites:
    """Tests for create / update / delete."""

    def test_create_strips_client_id(self, store, query):
        query.execute.return_value = MagicMock(data=[{"id": DOC_ID}])

        document_id = store.create("brand", {"id": "client-chosen", "name": "Acme"})

        assert document_id == DOC_ID
        query.insert.assert_called_once_with({"collection": "brand", "data": {"name": "Acme"}})

    def test_create_without_returned_row(self, store):
        with pytest.raises(DocumentStoreError):
            store.create("brand", {"name": "Acme"})

    def test_update_merges_fields(self, store, query):
        query.execute.return_value = MagicMock(data=[
            {"id": DOC_ID, "data": {"name": "Acme", "description": "Old"}},
        ])

        merged = store.update("brand", DOC_ID, {"description": "New"})

        assert merged == {"id": DOC_ID, "name": "Acme", "description": "New"}
        written = query.update.call_args.args[0]
        assert written["data"] == {"name": "Acme", "description": "New"}
        assert "updated_at" in written

    def test_update_missing_document(self, store, query):
        with pytest.raises(DocumentNotFoundError):
            store.update("brand", DOC_ID, {"description": "New"})

        query.update.assert_not_called()

    def test_delete(self, store, query):
        store.delete("brand", DOC_ID)

        query.delete.assert_called_once()
        query.eq.assert_any_call("id", DOC_ID)

    def test_delete_malformed_id_is_noop(self, store, client):
        store.delete("brand", "not-a-uuid")

        client.table.assert_not_called()

    def test_delete_failure_is_wrapped(self, store, query):
        query.execute.side_effect = RuntimeError("timeout")

        with pytest.raises(DocumentStoreError):
            store.delete("brand", DOC_ID)
