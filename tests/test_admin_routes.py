# =============================================================================
# tests/test_admin_routes.py - Admin Panel Tests
# =============================================================================
# Server-rendered screens, exercised through TestClient. Redirects are not
# followed so the Location header can be checked.
# =============================================================================

from tests.conftest import make_token


class TestSession:

    def test_unauthenticated_redirects_to_login(self, client):
        response = client.get("/admin", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/login"

    def test_login_page(self, client):
        response = client.get("/admin/login")

        assert response.status_code == 200
        assert 'name="token"' in response.text

    def test_login_sets_cookie(self, client, token):
        response = client.post("/admin/login", data={"token": token}, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/admin"
        assert "access_token=" in response.headers["set-cookie"]
        assert "httponly" in response.headers["set-cookie"].lower()

    def test_login_with_bad_token(self, client):
        response = client.post("/admin/login", data={"token": make_token(expires_in=-10)})

        assert response.status_code == 401
        assert "Invalid or expired token" in response.text

    def test_expired_cookie_redirects(self, client):
        client.cookies.set("access_token", make_token(expires_in=-10))

        response = client.get("/admin/brand", follow_redirects=False)

        assert response.headers["location"] == "/admin/login"

    def test_logout(self, admin_client):
        response = admin_client.post("/admin/logout", follow_redirects=False)

        assert response.headers["location"] == "/admin/login"


class TestScreens:

    def test_dashboard_lists_content_types(self, admin_client):
        response = admin_client.get("/admin")

        assert response.status_code == 200
        for name in ("brand", "treatment", "navigation"):
            assert f'href="/admin/{name}"' in response.text

    def test_empty_list_offers_first_item(self, admin_client):
        response = admin_client.get("/admin/brand")

        assert response.status_code == 200
        assert "Create the first one" in response.text

    def test_list_shows_items(self, admin_client, document_store, brand_payload):
        document_id = document_store.create("brand", brand_payload)

        response = admin_client.get("/admin/brand")

        assert f"/admin/brand/{document_id}/edit" in response.text
        assert "Acme" in response.text

    def test_unknown_type_redirects(self, admin_client):
        response = admin_client.get("/admin/blogPost", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/admin?notice=")

    def test_new_form_renders_controls(self, admin_client):
        response = admin_client.get("/admin/treatment/new")

        assert response.status_code == 200
        assert 'name="image.url"' in response.text
        assert 'name="isPopular"' in response.text
        assert 'name="id"' not in response.text

    def test_edit_form_prefilled(self, admin_client, document_store, brand_payload):
        document_id = document_store.create("brand", brand_payload)

        response = admin_client.get(f"/admin/brand/{document_id}/edit")

        assert response.status_code == 200
        assert 'value="Acme"' in response.text

    def test_media_library_in_picker(self, admin_client, document_store):
        document_store.create("media", {"url": "https://cdn.example.com/x.png", "alt": "X"})

        response = admin_client.get("/admin/brand/new")

        assert 'value="https://cdn.example.com/x.png"' in response.text


class TestMutations:

    def brand_form(self, **overrides):
        form = {
            "name": "Acme",
            "logo.url": "https://cdn.example.com/l.png",
            "logo.alt": "Acme logo",
            "description": "Skincare",
            "image.url": "https://cdn.example.com/i.png",
            "image.alt": "Product",
        }
        form.update(overrides)
        return form

    def test_create(self, admin_client, document_store, revalidator, brand_payload):
        response = admin_client.post("/admin/brand/new", data=self.brand_form(), follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/admin/brand")
        [stored] = document_store.list_all("brand")
        stored.pop("id")
        assert stored == brand_payload
        assert revalidator.calls == 1

    def test_create_invalid_rerenders_with_errors(self, admin_client, document_store):
        response = admin_client.post("/admin/brand/new", data=self.brand_form(name="x" * 101))

        assert response.status_code == 400
        assert "String must contain at most 100 character(s)" in response.text
        assert document_store.count("brand") == 0

    def test_update(self, admin_client, document_store, brand_payload):
        document_id = document_store.create("brand", brand_payload)

        response = admin_client.post(
            f"/admin/brand/{document_id}/edit",
            data=self.brand_form(description="Updated"),
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert document_store.get_one("brand", document_id)["description"] == "Updated"

    def test_delete(self, admin_client, document_store, brand_payload):
        document_id = document_store.create("brand", brand_payload)

        response = admin_client.post(f"/admin/brand/{document_id}/delete", follow_redirects=False)

        assert response.status_code == 303
        assert document_store.count("brand") == 0

    def test_mutation_requires_session(self, client, document_store):
        response = client.post("/admin/brand/new", data=self.brand_form(), follow_redirects=False)

        assert response.headers["location"] == "/admin/login"
        assert document_store.count("brand") == 0

    def test_media_upload_returns_to_form(self, admin_client, document_store, object_storage):
        response = admin_client.post(
            "/admin/media/upload",
            files={"file": ("logo.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            data={"alt": "Logo", "return_to": "/admin/brand/new"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"].startswith("/admin/brand/new?notice=")
        assert document_store.count("media") == 1

    def test_media_upload_rejects_external_return(self, admin_client):
        response = admin_client.post(
            "/admin/media/upload",
            files={"file": ("logo.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            data={"return_to": "https://evil.example.com"},
            follow_redirects=False,
        )

        assert response.headers["location"].startswith("/admin?notice=")

    def test_revalidate(self, admin_client, revalidator):
        response = admin_client.post("/admin/revalidate", follow_redirects=False)

        assert response.status_code == 303
        assert revalidator.calls == 1
