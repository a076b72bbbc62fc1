# =============================================================================
# core/forms/decoder.py - Form Submission Decoding
# =============================================================================
# Turns the flat fields posted by an admin form back into a JSON payload
# shaped like the schema. Decoding never rejects input: values that can't be
# coerced are passed through as strings so the validator reports them
# against the right field path.
# =============================================================================

from __future__ import annotations

import json
import math
from typing import Any, Mapping

from core.schemas.fields import MEDIA_SHAPE, FieldSpec, ObjectField, is_media_shape

from .renderer import MAX_FIELDSET_DEPTH

_OMIT = object()
_TRUTHY = {"on", "true", "1", "yes"}


def decode_form(schema: ObjectField, form: Mapping[str, str]) -> dict[str, Any]:
    """
    Decode posted form fields into a payload for `schema`.

    Example:
        decode_form(TREATMENT, {"name": "Peel", "duration": "30", "isPopular": "on"})
        # {"name": "Peel", "duration": 30, "isPopular": True, ...}
    """
    return _decode_fields(schema, form, prefix="", depth=0)


def _decode_fields(schema: ObjectField, form: Mapping[str, str], prefix: str, depth: int) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for name, spec in schema.fields.items():
        if name == "id":
            continue
        value = _decode(spec, f"{prefix}{name}", form, depth)
        if value is not _OMIT:
            payload[name] = value
    return payload


def _decode(spec: FieldSpec, key: str, form: Mapping[str, str], depth: int) -> Any:
    if is_media_shape(spec):
        return _decode_media(spec, key, form)

    if isinstance(spec, ObjectField):
        if depth >= MAX_FIELDSET_DEPTH:
            return _OMIT
        if not spec.required and not any(name.startswith(f"{key}.") and form.get(name) for name in form):
            return _OMIT
        return _decode_fields(spec, form, prefix=f"{key}.", depth=depth + 1)

    raw = form.get(key)

    if spec.kind == "boolean":
        return raw is not None and raw.strip().lower() in _TRUTHY

    if raw is None or raw.strip() == "":
        if not spec.required:
            return _OMIT
        if spec.kind == "array":
            return []
        return "" if raw is None else raw

    if spec.kind == "number":
        return _parse_number(raw.strip())
    if spec.kind == "array":
        return _parse_json(raw)
    if spec.kind == "union":
        stripped = raw.strip()
        return _parse_json(raw) if stripped[:1] in ("{", "[") else raw
    return raw


def _decode_media(spec: FieldSpec, key: str, form: Mapping[str, str]) -> Any:
    url = (form.get(f"{key}.url") or "").strip()
    alt = form.get(f"{key}.alt") or ""
    if not url and not alt and not spec.required:
        return _OMIT

    media: dict[str, Any] = {"url": url, "alt": alt}
    shape = spec if isinstance(spec, ObjectField) else MEDIA_SHAPE
    media_id = form.get(f"{key}.id")
    if media_id and "id" in shape.fields:
        media["id"] = media_id
    return media


def _parse_number(raw: str) -> Any:
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        value = float(raw)
    except ValueError:
        return raw
    return value if math.isfinite(value) else raw


def _parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw
