# =============================================================================
# app/routers/admin.py - Server-Rendered Admin Panel
# =============================================================================
# HTML screens for editors:
#
#   /admin                          dashboard, one card per content type
#   /admin/login, /admin/logout     cookie session around a Supabase token
#   /admin/{type}                   list items of a content type
#   /admin/{type}/new               create form
#   /admin/{type}/{id}/edit         edit form
#   /admin/{type}/{id}/delete       delete (POST)
#   /admin/media/upload             upload from a form's media picker (POST)
#   /admin/revalidate               regenerate the public site (POST)
#
# Forms are generated from the content schemas (core/forms) and submissions
# go through the same validator and store as the JSON API.
# =============================================================================

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.auth import AuthenticatedIdentity, admin_identity, get_auth_guard
from app.config import settings
from app.dependencies import DocumentStoreDep, MediaServiceDep, RevalidatorDep
from app.exceptions import CMSException, CollectionEmptyError, DocumentNotFoundError
from core.forms import build_form, decode_form
from core.models.media import MediaReference
from core.schemas import ContentSchema, get_schema, schema_names, validate
from core.services.revalidation import RevalidationError

logger = logging.getLogger(__name__)

router = APIRouter()

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

SUMMARY_LENGTH = 80

AdminIdentity = Optional[AuthenticatedIdentity]


# =============================================================================
# Helper Functions
# =============================================================================

def _redirect(url: str, notice: str | None = None) -> RedirectResponse:
    if notice:
        url = f"{url}?notice={quote(notice)}"
    return RedirectResponse(url, status_code=303)


def _login_redirect() -> RedirectResponse:
    return _redirect("/admin/login")


def _summary(item: dict[str, Any]) -> str:
    """First couple of text values of an item, for the list view."""
    texts = [
        value for key, value in item.items()
        if key != "id" and isinstance(value, str) and value
    ]
    summary = " / ".join(texts[:2])
    if len(summary) > SUMMARY_LENGTH:
        summary = summary[: SUMMARY_LENGTH - 1] + "…"
    return summary


def _thumbnail(item: dict[str, Any]) -> str | None:
    """URL of the first embedded image of an item, if any."""
    if isinstance(item.get("url"), str) and "alt" in item:
        return item["url"]
    for value in item.values():
        if isinstance(value, dict) and isinstance(value.get("url"), str) and value["url"]:
            return value["url"]
    return None


def _media_library(store) -> list[MediaReference]:
    try:
        documents = store.list_all(settings.MEDIA_COLLECTION)
    except CollectionEmptyError:
        return []
    return [MediaReference.from_document(doc) for doc in documents]


def _safe_return_path(path: str | None) -> str:
    if path and path.startswith("/admin") and "//" not in path:
        return path
    return "/admin"


def _render_form(
    request: Request,
    store,
    identity: AuthenticatedIdentity,
    content_type: str,
    schema: ContentSchema,
    item: dict[str, Any] | None,
    action: str,
    document_id: str | None = None,
    errors: list[dict[str, str]] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "admin/form.html",
        {
            "identity": identity,
            "content_type": content_type,
            "controls": build_form(schema, item),
            "action": action,
            "document_id": document_id,
            "errors": errors or [],
            "media_library": _media_library(store),
            "notice": request.query_params.get("notice"),
        },
        status_code=status_code,
    )


# =============================================================================
# Session
# =============================================================================

@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    return templates.TemplateResponse(request, "admin/login.html", {"error": None})


@router.post("/login", response_class=HTMLResponse)
async def login(request: Request, token: str = Form("")):
    """
    Start an admin session from a Supabase access token.

    The token is verified the same way as API bearer tokens and kept in an
    HttpOnly cookie.
    """
    result = get_auth_guard(request).verify_token(token.strip())
    if not result.authenticated:
        return templates.TemplateResponse(
            request,
            "admin/login.html",
            {"error": "Invalid or expired token"},
            status_code=401,
        )

    logger.info(f"Admin session started for {result.uid}")
    response = _redirect("/admin")
    response.set_cookie(
        settings.ADMIN_COOKIE_NAME,
        token.strip(),
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return response


@router.post("/logout")
async def logout():
    response = _login_redirect()
    response.delete_cookie(settings.ADMIN_COOKIE_NAME)
    return response


# =============================================================================
# Dashboard
# =============================================================================

@router.get("", response_class=HTMLResponse)
async def dashboard(request: Request, identity: AdminIdentity = Depends(admin_identity)):
    if identity is None:
        return _login_redirect()

    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        {
            "identity": identity,
            "content_types": schema_names(),
            "notice": request.query_params.get("notice"),
        },
    )


@router.post("/revalidate")
async def revalidate_site(
    revalidator: RevalidatorDep,
    identity: AdminIdentity = Depends(admin_identity),
):
    if identity is None:
        return _login_redirect()

    try:
        await revalidator.revalidate()
    except RevalidationError as e:
        logger.error(str(e))
        return _redirect("/admin", "Failed to revalidate pages")
    return _redirect("/admin", "Site revalidated")


# =============================================================================
# Media
# =============================================================================

@router.post("/media/upload")
async def upload_media(
    media: MediaServiceDep,
    identity: AdminIdentity = Depends(admin_identity),
    file: Optional[UploadFile] = File(None),
    alt: str = Form(""),
    return_to: str = Form("/admin"),
):
    """Upload into the media library, then return to the form that asked."""
    if identity is None:
        return _login_redirect()

    target = _safe_return_path(return_to)
    try:
        result = await media.upload(file, uid=identity.uid, alt=alt, folder="media")
    except CMSException as e:
        return _redirect(target, e.message)

    if result.partial:
        return _redirect(target, "File uploaded but metadata could not be saved to database")
    return _redirect(target, "Image uploaded")


# =============================================================================
# Content
# =============================================================================

@router.get("/{content_type}", response_class=HTMLResponse)
async def list_items(
    request: Request,
    content_type: str,
    store: DocumentStoreDep,
    identity: AdminIdentity = Depends(admin_identity),
):
    if identity is None:
        return _login_redirect()
    if get_schema(content_type) is None:
        return _redirect("/admin", f"Unknown content type: {content_type}")

    try:
        items = store.list_all(content_type)
    except CollectionEmptyError:
        items = []

    rows = [
        {"id": item["id"], "summary": _summary(item), "thumbnail": _thumbnail(item)}
        for item in items
    ]
    return templates.TemplateResponse(
        request,
        "admin/list.html",
        {
            "identity": identity,
            "content_type": content_type,
            "rows": rows,
            "notice": request.query_params.get("notice"),
        },
    )


@router.get("/{content_type}/new", response_class=HTMLResponse)
async def new_item(
    request: Request,
    content_type: str,
    store: DocumentStoreDep,
    identity: AdminIdentity = Depends(admin_identity),
):
    if identity is None:
        return _login_redirect()
    schema = get_schema(content_type)
    if schema is None:
        return _redirect("/admin", f"Unknown content type: {content_type}")

    return _render_form(
        request, store, identity, content_type, schema,
        item=None,
        action=f"/admin/{content_type}/new",
    )


@router.post("/{content_type}/new", response_class=HTMLResponse)
async def create_item(
    request: Request,
    content_type: str,
    store: DocumentStoreDep,
    revalidator: RevalidatorDep,
    background_tasks: BackgroundTasks,
    identity: AdminIdentity = Depends(admin_identity),
):
    if identity is None:
        return _login_redirect()
    schema = get_schema(content_type)
    if schema is None:
        return _redirect("/admin", f"Unknown content type: {content_type}")

    payload = decode_form(schema, await request.form())
    result = validate(schema, payload)
    if not result.ok:
        return _render_form(
            request, store, identity, content_type, schema,
            item=payload,
            action=f"/admin/{content_type}/new",
            errors=result.error_dicts(),
            status_code=400,
        )

    document_id = store.create(content_type, result.value)
    logger.info(f"Admin {identity.uid} created {content_type}/{document_id}")
    background_tasks.add_task(revalidator.revalidate_quietly)
    return _redirect(f"/admin/{content_type}", f"{content_type} created")


@router.get("/{content_type}/{document_id}/edit", response_class=HTMLResponse)
async def edit_item(
    request: Request,
    content_type: str,
    document_id: str,
    store: DocumentStoreDep,
    identity: AdminIdentity = Depends(admin_identity),
):
    if identity is None:
        return _login_redirect()
    schema = get_schema(content_type)
    if schema is None:
        return _redirect("/admin", f"Unknown content type: {content_type}")

    try:
        item = store.get_one(content_type, document_id)
    except DocumentNotFoundError as e:
        return _redirect(f"/admin/{content_type}", e.message)

    return _render_form(
        request, store, identity, content_type, schema,
        item=item,
        action=f"/admin/{content_type}/{document_id}/edit",
        document_id=document_id,
    )


@router.post("/{content_type}/{document_id}/edit", response_class=HTMLResponse)
async def update_item(
    request: Request,
    content_type: str,
    document_id: str,
    store: DocumentStoreDep,
    revalidator: RevalidatorDep,
    background_tasks: BackgroundTasks,
    identity: AdminIdentity = Depends(admin_identity),
):
    if identity is None:
        return _login_redirect()
    schema = get_schema(content_type)
    if schema is None:
        return _redirect("/admin", f"Unknown content type: {content_type}")

    payload = decode_form(schema, await request.form())
    result = validate(schema, payload)
    if not result.ok:
        return _render_form(
            request, store, identity, content_type, schema,
            item=payload,
            action=f"/admin/{content_type}/{document_id}/edit",
            document_id=document_id,
            errors=result.error_dicts(),
            status_code=400,
        )

    try:
        store.update(content_type, document_id, result.value)
    except DocumentNotFoundError as e:
        return _redirect(f"/admin/{content_type}", e.message)

    logger.info(f"Admin {identity.uid} updated {content_type}/{document_id}")
    background_tasks.add_task(revalidator.revalidate_quietly)
    return _redirect(f"/admin/{content_type}", f"{content_type} updated")


@router.post("/{content_type}/{document_id}/delete")
async def delete_item(
    content_type: str,
    document_id: str,
    store: DocumentStoreDep,
    revalidator: RevalidatorDep,
    background_tasks: BackgroundTasks,
    identity: AdminIdentity = Depends(admin_identity),
):
    if identity is None:
        return _login_redirect()

    store.delete(content_type, document_id)
    logger.info(f"Admin {identity.uid} deleted {content_type}/{document_id}")
    background_tasks.add_task(revalidator.revalidate_quietly)
    return _redirect(f"/admin/{content_type}", f"{content_type} deleted")
