# =============================================================================
# core/forms/renderer.py - Schema-Driven Form Controls
# =============================================================================
# Maps every field of a content schema to one editable control:
#
#   string              -> "text"      single-line input
#   number              -> "number"    numeric input
#   boolean             -> "checkbox"
#   media-shaped object -> "media"     picker over the media library
#   other object        -> "fieldset"  recursing one level only
#   array               -> "json"      raw JSON textarea
#   union               -> "union"     text box, JSON for object values
#
# Objects nested inside a fieldset are not rendered. The templates in
# app/templates/admin turn the resulting control tree into HTML.
# =============================================================================

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any

from core.schemas.fields import FieldSpec, ObjectField, StringField, is_media_shape

MAX_FIELDSET_DEPTH = 1

_SIMPLE_CONTROLS = {
    "string": "text",
    "number": "number",
    "boolean": "checkbox",
    "array": "json",
    "union": "union",
}


@dataclass
class FormControl:
    """One rendered input. `name` is the dotted form field name."""

    name: str
    label: str
    kind: str
    required: bool
    value: Any = None
    max_length: int | None = None
    children: list[FormControl] = field(default_factory=list)


# =============================================================================
# Initial values
# =============================================================================

def default_value(spec: FieldSpec) -> Any:
    """Zero value shown in a fresh form for one field."""
    if spec.has_default:
        return copy.deepcopy(spec.default)
    if is_media_shape(spec):
        return {"url": "", "alt": ""}
    if isinstance(spec, ObjectField):
        return default_values(spec)
    if spec.kind == "string":
        return ""
    if spec.kind == "number":
        return 0
    if spec.kind == "boolean":
        return False
    if spec.kind == "array":
        return []
    if spec.kind == "union":
        has_string = any(isinstance(alt, StringField) for alt in spec.alternatives)
        return "" if has_string else {}
    return None


def default_values(schema: ObjectField) -> dict[str, Any]:
    """Zero values for every field except the store-assigned `id`."""
    return {
        name: default_value(spec)
        for name, spec in schema.fields.items()
        if name != "id"
    }


def initial_values(schema: ObjectField, item: dict[str, Any] | None = None) -> dict[str, Any]:
    """Existing item data when editing, zero values when creating."""
    if item:
        return copy.deepcopy(item)
    return default_values(schema)


# =============================================================================
# Control tree
# =============================================================================

def build_form(schema: ObjectField, item: dict[str, Any] | None = None) -> list[FormControl]:
    """Build the control tree for creating (item=None) or editing an item."""
    return _controls(schema, initial_values(schema, item), prefix="", depth=0)


def _controls(schema: ObjectField, values: dict[str, Any], prefix: str, depth: int) -> list[FormControl]:
    controls = []
    for name, spec in schema.fields.items():
        if name == "id":
            continue
        control = _control(name, spec, values.get(name), prefix, depth)
        if control is not None:
            controls.append(control)
    return controls


def _control(name: str, spec: FieldSpec, value: Any, prefix: str, depth: int) -> FormControl | None:
    field_name = f"{prefix}{name}"

    if is_media_shape(spec):
        media = value if isinstance(value, dict) else {"url": "", "alt": ""}
        return FormControl(field_name, name, "media", spec.required, media)

    if isinstance(spec, ObjectField):
        if depth >= MAX_FIELDSET_DEPTH:
            return None
        nested = value if isinstance(value, dict) else default_values(spec)
        children = _controls(spec, nested, prefix=f"{field_name}.", depth=depth + 1)
        return FormControl(field_name, name, "fieldset", spec.required, children=children)

    kind = _SIMPLE_CONTROLS.get(spec.kind)
    if kind is None:
        return None

    return FormControl(
        field_name,
        name,
        kind,
        spec.required,
        _display_value(kind, value),
        max_length=getattr(spec, "max_length", None),
    )


def _display_value(kind: str, value: Any) -> Any:
    if kind == "text":
        return "" if value is None else str(value)
    if kind == "number":
        return value if isinstance(value, (int, float)) and not isinstance(value, bool) else 0
    if kind == "checkbox":
        return bool(value)
    if kind == "json":
        return json.dumps(value if value is not None else [], ensure_ascii=False)
    # union
    if isinstance(value, str):
        return value
    return json.dumps(value if value is not None else "", ensure_ascii=False)
