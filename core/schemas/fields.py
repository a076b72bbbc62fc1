# =============================================================================
# core/schemas/fields.py - Content Field Descriptors
# =============================================================================
# A content schema is a tree of field descriptors. Each descriptor carries a
# `kind` tag that the validator and the form renderer dispatch on:
#
#   StringField(max_length)   -> "string"
#   NumberField               -> "number"
#   BoolField                 -> "boolean"
#   ObjectField(fields)       -> "object"
#   ArrayField(element)       -> "array"
#   UnionField(alternatives)  -> "union"
#   MediaField                -> "media"   ({id?, url, alt} by value)
#
# Descriptors are frozen; schemas are built once at import time.
# =============================================================================

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, ClassVar


class _Missing:
    """Marker for "no default declared"."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FieldSpec:
    """Base descriptor. `required=False` makes the key optional."""

    kind: ClassVar[str] = "unknown"

    required: bool = True
    default: Any = MISSING

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclass(frozen=True)
class StringField(FieldSpec):
    kind: ClassVar[str] = "string"

    max_length: int | None = None


@dataclass(frozen=True)
class NumberField(FieldSpec):
    kind: ClassVar[str] = "number"


@dataclass(frozen=True)
class BoolField(FieldSpec):
    kind: ClassVar[str] = "boolean"


@dataclass(frozen=True)
class ObjectField(FieldSpec):
    kind: ClassVar[str] = "object"

    fields: dict[str, FieldSpec] = field(default_factory=dict)


@dataclass(frozen=True)
class ArrayField(FieldSpec):
    kind: ClassVar[str] = "array"

    element: FieldSpec = field(default_factory=lambda: ObjectField())


@dataclass(frozen=True)
class UnionField(FieldSpec):
    """Accepts the first alternative that validates."""

    kind: ClassVar[str] = "union"

    alternatives: tuple[FieldSpec, ...] = ()


@dataclass(frozen=True)
class MediaField(FieldSpec):
    """An embedded MediaReference: {id?: str, url: str, alt: str}."""

    kind: ClassVar[str] = "media"

    @property
    def shape(self) -> ObjectField:
        return MEDIA_SHAPE


@dataclass(frozen=True)
class ContentSchema(ObjectField):
    """Top-level schema of one content type."""

    name: str = ""


MEDIA_SHAPE = ObjectField(
    fields={
        "id": StringField(required=False),
        "url": StringField(),
        "alt": StringField(),
    }
)


def optional(spec: FieldSpec) -> FieldSpec:
    """Return a copy of `spec` whose key may be absent."""
    return dataclasses.replace(spec, required=False)


def is_media_shape(spec: FieldSpec) -> bool:
    """
    True for media descriptors and for plain objects shaped like one.

    An object declaring both `url` and `alt` is edited through the media
    picker rather than as a free-form fieldset.
    """
    if isinstance(spec, MediaField):
        return True
    return isinstance(spec, ObjectField) and "url" in spec.fields and "alt" in spec.fields
