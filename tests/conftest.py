# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-ins for the document table, storage bucket and site
#   webhook so the full app can run under TestClient
# - Real token verification against a test HS256 secret
# =============================================================================

import copy
import os
import time
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.auth.guard import AuthGuard, TokenVerifier
from app.dependencies import Services
from app.exceptions import (
    CollectionEmptyError,
    DocumentNotFoundError,
    DocumentStoreError,
    StorageUploadError,
)
from app.main import create_app
from core.services.media_service import MediaUploadService
from core.services.revalidation import RevalidationError

TEST_JWT_SECRET = "test-jwt-secret"
TEST_PROJECT_URL = "https://test-project.supabase.co"
TEST_UID = "user-123"
TEST_MAX_BYTES = 64 * 1024


# =============================================================================
# In-memory backends
# =============================================================================

class InMemoryDocumentStore:
    """Same contract as DocumentStore, backed by dicts."""

    def __init__(self):
        self.collections: dict[str, dict[str, dict]] = {}
        self.failing_collections: set[str] = set()

    def list_all(self, collection):
        documents = self.collections.get(collection)
        if not documents:
            raise CollectionEmptyError(collection)
        return [{"id": doc_id, **copy.deepcopy(data)} for doc_id, data in documents.items()]

    def get_one(self, collection, document_id):
        data = self.collections.get(collection, {}).get(document_id)
        if data is None:
            raise DocumentNotFoundError(collection, document_id)
        return {"id": document_id, **copy.deepcopy(data)}

    def create(self, collection, payload):
        if collection in self.failing_collections:
            raise DocumentStoreError("create", "insert failed")
        document_id = str(uuid4())
        data = {key: value for key, value in payload.items() if key != "id"}
        self.collections.setdefault(collection, {})[document_id] = copy.deepcopy(data)
        return document_id

    def update(self, collection, document_id, partial):
        existing = self.get_one(collection, document_id)
        existing.pop("id")
        merged = {**existing, **{k: v for k, v in partial.items() if k != "id"}}
        self.collections[collection][document_id] = copy.deepcopy(merged)
        return {"id": document_id, **merged}

    def delete(self, collection, document_id):
        self.collections.get(collection, {}).pop(document_id, None)

    def ping(self):
        return None

    def count(self, collection) -> int:
        return len(self.collections.get(collection, {}))


class InMemoryStorage:
    """Same contract as ObjectStorage, keeping objects in a dict."""

    def __init__(self, bucket: str | None = "site-media", fail: bool = False):
        self.bucket = bucket
        self.fail = fail
        self.objects: dict[str, bytes] = {}
        self.upload_calls = 0

    @property
    def configured(self) -> bool:
        return bool(self.bucket)

    def upload(self, path, content, content_type=None):
        self.upload_calls += 1
        if self.fail:
            raise StorageUploadError("bucket unavailable")
        self.objects[path] = content

    def make_public(self, path):
        return self.public_url(path)

    def public_url(self, path):
        return f"{TEST_PROJECT_URL}/storage/v1/object/public/{self.bucket}/{path}"

    def ping(self):
        return None


class RecordingRevalidator:
    """Counts revalidation requests instead of calling the site."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = 0

    async def revalidate(self, paths=None):
        self.calls += 1
        if self.fail:
            raise RevalidationError("site unreachable")

    async def revalidate_quietly(self):
        try:
            await self.revalidate()
        except RevalidationError:
            return False
        return True


# =============================================================================
# Fixtures
# =============================================================================

def make_token(
    sub: str | None = TEST_UID,
    email: str | None = "editor@example.com",
    expires_in: int = 3600,
    secret: str = TEST_JWT_SECRET,
    audience: str = "authenticated",
) -> str:
    """Mint a Supabase-style HS256 access token."""
    claims = {"aud": audience, "exp": int(time.time()) + expires_in}
    if sub is not None:
        claims["sub"] = sub
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def auth_guard():
    return AuthGuard(TokenVerifier(TEST_JWT_SECRET, f"{TEST_PROJECT_URL}/auth/v1/.well-known/jwks.json"))


@pytest.fixture
def token():
    return make_token()


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def document_store():
    return InMemoryDocumentStore()


@pytest.fixture
def object_storage():
    return InMemoryStorage()


@pytest.fixture
def revalidator():
    return RecordingRevalidator()


@pytest.fixture
def media_service(object_storage, document_store, tmp_path):
    return MediaUploadService(
        storage=object_storage,
        documents=document_store,
        max_bytes=TEST_MAX_BYTES,
        temp_dir=str(tmp_path),
    )


@pytest.fixture
def services(document_store, media_service, auth_guard, revalidator):
    return Services(
        documents=document_store,
        media=media_service,
        auth_guard=auth_guard,
        revalidator=revalidator,
    )


@pytest.fixture
def client(services):
    with TestClient(create_app(services)) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client, token):
    """Client holding an admin panel session cookie."""
    client.cookies.set("access_token", token)
    return client


@pytest.fixture
def treatment_payload():
    """A complete, valid treatment document."""
    return {
        "slug": "chemical-peel",
        "category": "Facial",
        "name": "Chemical peel",
        "subtitle": "Renew your skin",
        "description": "A gentle peel.",
        "isPopular": True,
        "duration": 30,
        "price": 95,
        "image": {"url": "https://cdn.example.com/peel.jpg", "alt": "Peel"},
        "description2": "Aftercare advice.",
        "image2": {"url": "https://cdn.example.com/peel2.jpg", "alt": "Result"},
    }


@pytest.fixture
def brand_payload():
    """The minimal brand document: every optional field left out."""
    return {
        "name": "Acme",
        "logo": {"url": "https://cdn.example.com/l.png", "alt": "Acme logo"},
        "description": "Skincare",
        "image": {"url": "https://cdn.example.com/i.png", "alt": "Product"},
    }
