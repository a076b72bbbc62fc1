# =============================================================================
# app/routers/collection.py - Collection CRUD Endpoints
# =============================================================================
# Generic document endpoints addressed by query parameters:
#
#   GET    /collection?collection=X              list (open)
#   POST   /collection?collection=X              create (auth)
#   GET    /collection/put?collection=X&id=Y     read one (auth)
#   PUT    /collection/put?collection=X&id=Y     merge update (auth)
#   PATCH  /collection/put?collection=X&id=Y     merge update (auth)
#   DELETE /collection/put?collection=X&id=Y     delete (auth)
#
# Writes are validated against the collection's content schema before they
# reach the store, and schedule a site revalidation once committed.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Query

from app.auth import AuthenticatedIdentity, require_identity
from app.dependencies import DocumentStoreDep, RevalidatorDep
from app.exceptions import (
    MissingParameterError,
    SchemaValidationError,
    UnknownContentTypeError,
)
from core.models.responses import (
    DocumentListResponse,
    DocumentResponse,
    ErrorResponse,
    MutationResponse,
)
from core.schemas import ContentSchema, get_schema, validate, validate_partial

logger = logging.getLogger(__name__)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad request or invalid payload"},
        401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
        404: {"model": ErrorResponse, "description": "Document or collection not found"},
    },
)

CollectionParam = Annotated[str | None, Query(description="Content type / collection name")]
IdParam = Annotated[str | None, Query(alias="id", description="Document ID")]


# =============================================================================
# Helper Functions
# =============================================================================

def _require(value: str | None, name: str, message: str | None = None) -> str:
    if not value or not value.strip():
        raise MissingParameterError(name, message)
    return value.strip()


def _schema_for(collection: str) -> ContentSchema:
    schema = get_schema(collection)
    if schema is None:
        raise UnknownContentTypeError(collection)
    return schema


def _without_id(payload: Any) -> Any:
    if isinstance(payload, dict):
        return {key: value for key, value in payload.items() if key != "id"}
    return payload


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/collection", response_model=DocumentListResponse)
async def list_documents(
    store: DocumentStoreDep,
    collection: CollectionParam = None,
):
    """
    List every document in a collection.

    Raises:
        400: If `collection` is missing
        404: If the collection holds no documents
    """
    collection = _require(collection, "collection", "Invalid collection name")
    return DocumentListResponse(data=store.list_all(collection))


@router.post(
    "/collection",
    status_code=201,
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def create_document(
    store: DocumentStoreDep,
    revalidator: RevalidatorDep,
    background_tasks: BackgroundTasks,
    payload: Annotated[Any, Body()],
    identity: AuthenticatedIdentity = Depends(require_identity),
    collection: CollectionParam = None,
):
    """
    Validate and insert a new document. Any client-supplied `id` is ignored.

    Raises:
        400: Missing collection, unknown content type or invalid payload
        401: Missing or invalid bearer token
    """
    collection = _require(collection, "collection", "Invalid collection name")
    schema = _schema_for(collection)

    result = validate(schema, _without_id(payload))
    if not result.ok:
        raise SchemaValidationError(result.error_dicts())

    document_id = store.create(collection, result.value)
    logger.info(f"User {identity.uid} created {collection}/{document_id}")

    background_tasks.add_task(revalidator.revalidate_quietly)

    return MutationResponse(
        message=f"{collection} document created successfully",
        id=document_id,
    )


@router.get("/collection/put", response_model=DocumentResponse)
async def get_document(
    store: DocumentStoreDep,
    identity: AuthenticatedIdentity = Depends(require_identity),
    collection: CollectionParam = None,
    document_id: IdParam = None,
):
    """
    Fetch one document.

    Raises:
        400: If `collection` or `id` is missing
        404: If the document doesn't exist
    """
    collection = _require(collection, "collection", "Invalid collection name")
    document_id = _require(document_id, "id", "Document ID is required")
    return DocumentResponse(data=store.get_one(collection, document_id))


@router.put("/collection/put", response_model=MutationResponse, response_model_exclude_none=True)
@router.patch("/collection/put", response_model=MutationResponse, response_model_exclude_none=True)
async def update_document(
    store: DocumentStoreDep,
    revalidator: RevalidatorDep,
    background_tasks: BackgroundTasks,
    payload: Annotated[Any, Body()],
    identity: AuthenticatedIdentity = Depends(require_identity),
    collection: CollectionParam = None,
    document_id: IdParam = None,
):
    """
    Merge a partial payload into an existing document.

    Only the supplied fields are validated and written; everything else is
    kept as stored.

    Raises:
        400: Missing parameters, unknown content type or invalid fields
        404: If the document doesn't exist
    """
    collection = _require(collection, "collection", "Invalid collection name")
    document_id = _require(document_id, "id", "Document ID is required for updates")
    schema = _schema_for(collection)

    result = validate_partial(schema, _without_id(payload))
    if not result.ok:
        raise SchemaValidationError(result.error_dicts())

    store.update(collection, document_id, result.value)
    logger.info(f"User {identity.uid} updated {collection}/{document_id}")

    background_tasks.add_task(revalidator.revalidate_quietly)

    return MutationResponse(
        message=f"{collection} document updated successfully",
        id=document_id,
    )


@router.delete(
    "/collection/put",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def delete_document(
    store: DocumentStoreDep,
    revalidator: RevalidatorDep,
    background_tasks: BackgroundTasks,
    identity: AuthenticatedIdentity = Depends(require_identity),
    collection: CollectionParam = None,
    document_id: IdParam = None,
):
    """
    Delete a document. Deleting an absent document succeeds.

    Raises:
        400: If `collection` or `id` is missing
    """
    collection = _require(collection, "collection", "Invalid collection name")
    document_id = _require(document_id, "id", "Document ID is required for deletion")

    store.delete(collection, document_id)
    logger.info(f"User {identity.uid} deleted {collection}/{document_id}")

    background_tasks.add_task(revalidator.revalidate_quietly)

    return MutationResponse(message="Document deleted successfully")
