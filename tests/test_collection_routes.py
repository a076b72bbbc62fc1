# =============================================================================
# tests/test_collection_routes.py - Collection API Tests
# =============================================================================
# End-to-end tests through the FastAPI app with in-memory backends.
# =============================================================================

import json

COLLECTION_URL = "/api/admin/collection"
DOCUMENT_URL = "/api/admin/collection/put"


def create(client, auth_headers, collection, payload):
    response = client.post(COLLECTION_URL, params={"collection": collection}, json=payload, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestAuthentication:
    """Mutations without a valid token are rejected and change nothing."""

    def test_create_without_header(self, client, document_store, brand_payload, revalidator):
        response = client.post(COLLECTION_URL, params={"collection": "brand"}, json=brand_payload)

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["message"] == "Unauthorized"
        assert document_store.count("brand") == 0
        assert revalidator.calls == 0

    def test_create_with_bad_token(self, client, document_store, brand_payload):
        response = client.post(
            COLLECTION_URL,
            params={"collection": "brand"},
            json=brand_payload,
            headers={"Authorization": "Bearer forged"},
        )

        assert response.status_code == 401
        assert document_store.count("brand") == 0

    def test_update_without_header(self, client, auth_headers, document_store, brand_payload):
        document_id = create(client, auth_headers, "brand", brand_payload)

        response = client.put(
            DOCUMENT_URL,
            params={"collection": "brand", "id": document_id},
            json={"name": "Hijacked"},
        )

        assert response.status_code == 401
        assert document_store.get_one("brand", document_id)["name"] == "Acme"

    def test_delete_without_header(self, client, auth_headers, document_store, brand_payload):
        document_id = create(client, auth_headers, "brand", brand_payload)

        response = client.delete(DOCUMENT_URL, params={"collection": "brand", "id": document_id})

        assert response.status_code == 401
        assert document_store.count("brand") == 1

    def test_get_one_requires_auth(self, client, auth_headers, brand_payload):
        document_id = create(client, auth_headers, "brand", brand_payload)

        response = client.get(DOCUMENT_URL, params={"collection": "brand", "id": document_id})

        assert response.status_code == 401

    def test_list_is_public(self, client, auth_headers, brand_payload):
        create(client, auth_headers, "brand", brand_payload)

        response = client.get(COLLECTION_URL, params={"collection": "brand"})

        assert response.status_code == 200


class TestCreate:

    def test_create_then_get(self, client, auth_headers, brand_payload, revalidator):
        response = client.post(
            COLLECTION_URL,
            params={"collection": "brand"},
            json=brand_payload,
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "brand document created successfully"

        fetched = client.get(DOCUMENT_URL, params={"collection": "brand", "id": body["id"]}, headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json() == {"success": True, "data": {"id": body["id"], **brand_payload}}
        assert revalidator.calls == 1

    def test_client_id_is_ignored(self, client, auth_headers, brand_payload):
        document_id = create(client, auth_headers, "brand", {"id": "chosen-by-client", **brand_payload})

        assert document_id != "chosen-by-client"

    def test_invalid_payload(self, client, auth_headers, brand_payload, document_store, revalidator):
        del brand_payload["name"]

        response = client.post(COLLECTION_URL, params={"collection": "brand"}, json=brand_payload, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["errors"] == [{"path": "name", "message": "Required"}]
        assert "name: Required" in body["error"]
        assert document_store.count("brand") == 0
        assert revalidator.calls == 0

    def test_unknown_content_type(self, client, auth_headers):
        response = client.post(COLLECTION_URL, params={"collection": "blogPost"}, json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Unknown content type: blogPost"

    def test_missing_collection(self, client, auth_headers, brand_payload):
        response = client.post(COLLECTION_URL, json=brand_payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid collection name"

    def test_infinite_number_is_rejected(self, client, auth_headers, treatment_payload, document_store):
        body = json.dumps({**treatment_payload, "price": float("inf")})

        response = client.post(
            COLLECTION_URL,
            params={"collection": "treatment"},
            content=body.encode(),
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [{"path": "price", "message": "Number must be finite"}]
        assert document_store.count("treatment") == 0

    def test_malformed_json(self, client, auth_headers):
        response = client.post(
            COLLECTION_URL,
            params={"collection": "brand"},
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestList:

    def test_list_returns_all_documents(self, client, auth_headers, brand_payload):
        first = create(client, auth_headers, "brand", brand_payload)
        second = create(client, auth_headers, "brand", {**brand_payload, "name": "Bolt"})

        response = client.get(COLLECTION_URL, params={"collection": "brand"})

        body = response.json()
        assert body["success"] is True
        assert {doc["id"] for doc in body["data"]} == {first, second}

    def test_empty_collection_is_404(self, client):
        response = client.get(COLLECTION_URL, params={"collection": "doesnotexist"})

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["message"] == "No doesnotexists found"

    def test_missing_collection(self, client):
        response = client.get(COLLECTION_URL)

        assert response.status_code == 400


class TestUpdate:

    def test_partial_update_merges(self, client, auth_headers, brand_payload, revalidator):
        document_id = create(client, auth_headers, "brand", brand_payload)

        response = client.put(
            DOCUMENT_URL,
            params={"collection": "brand", "id": document_id},
            json={"description": "Updated"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "brand document updated successfully",
            "id": document_id,
        }
        fetched = client.get(DOCUMENT_URL, params={"collection": "brand", "id": document_id}, headers=auth_headers)
        assert fetched.json()["data"] == {"id": document_id, **brand_payload, "description": "Updated"}
        assert revalidator.calls == 2

    def test_patch_is_accepted(self, client, auth_headers, brand_payload):
        document_id = create(client, auth_headers, "brand", brand_payload)

        response = client.patch(
            DOCUMENT_URL,
            params={"collection": "brand", "id": document_id},
            json={"name": "Bolt"},
            headers=auth_headers,
        )

        assert response.status_code == 200

    def test_invalid_field(self, client, auth_headers, brand_payload):
        document_id = create(client, auth_headers, "brand", brand_payload)

        response = client.put(
            DOCUMENT_URL,
            params={"collection": "brand", "id": document_id},
            json={"name": "x" * 101},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["path"] == "name"

    def test_missing_document(self, client, auth_headers):
        response = client.put(
            DOCUMENT_URL,
            params={"collection": "brand", "id": "6f1c1d2e-8a4b-4c55-9e0f-2b7c3d4e5f60"},
            json={"name": "Bolt"},
            headers=auth_headers,
        )

        assert response.status_code == 404

    def test_missing_id(self, client, auth_headers):
        response = client.put(DOCUMENT_URL, params={"collection": "brand"}, json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Document ID is required for updates"


class TestDelete:

    def test_delete_then_get_is_404(self, client, auth_headers, brand_payload):
        document_id = create(client, auth_headers, "brand", brand_payload)

        response = client.delete(DOCUMENT_URL, params={"collection": "brand", "id": document_id}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Document deleted successfully"}
        fetched = client.get(DOCUMENT_URL, params={"collection": "brand", "id": document_id}, headers=auth_headers)
        assert fetched.status_code == 404
        assert fetched.json()["message"] == f"Document with ID {document_id} not found"

    def test_delete_is_idempotent(self, client, auth_headers, brand_payload):
        document_id = create(client, auth_headers, "brand", brand_payload)
        params = {"collection": "brand", "id": document_id}

        client.delete(DOCUMENT_URL, params=params, headers=auth_headers)
        response = client.delete(DOCUMENT_URL, params=params, headers=auth_headers)

        assert response.status_code == 200


class TestMethods:

    def test_unsupported_method(self, client):
        response = client.post(DOCUMENT_URL, params={"collection": "brand"}, json={})

        assert response.status_code == 405
        assert response.json() == {"success": False, "message": "Method not allowed"}
