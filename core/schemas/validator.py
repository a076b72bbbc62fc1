# =============================================================================
# core/schemas/validator.py - Payload Validation Against Content Schemas
# =============================================================================
# Pure, side-effect-free checking of a JSON payload against a schema.
#
# Usage:
#   result = validate(BRAND, payload)
#   if result.ok:
#       store.create("brand", result.value)
#   else:
#       for err in result.errors:
#           print(err.path, err.message)
#
# Error messages keep the wording the admin front-end already displays
# ("Required", "Expected string, received number", ...).
# =============================================================================

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Any, Callable

from .fields import (
    ArrayField,
    FieldSpec,
    MediaField,
    ObjectField,
    UnionField,
)

Path = tuple[str | int, ...]

# Returned by checkers when the value did not validate
_INVALID = object()


@dataclass(frozen=True)
class FieldError:
    """One validation failure, addressed by a dot-separated path."""

    path: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


@dataclass
class ValidationResult:
    """Either a normalized value or an ordered list of field errors."""

    value: dict[str, Any] | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_dicts(self) -> list[dict[str, str]]:
        return [err.to_dict() for err in self.errors]


def validate(schema: ObjectField, payload: Any) -> ValidationResult:
    """
    Validate a full document payload.

    Every required field must be present. Optional fields that are absent stay
    absent unless their descriptor declares a default.
    """
    return _run(schema, payload, partial=False)


def validate_partial(schema: ObjectField, payload: Any) -> ValidationResult:
    """
    Validate a partial update.

    Same checks as `validate`, except top-level required fields may be absent.
    Nested objects supplied in the payload are still checked in full, since
    they replace the stored value wholesale.
    """
    return _run(schema, payload, partial=True)


def _run(schema: ObjectField, payload: Any, partial: bool) -> ValidationResult:
    errors: list[FieldError] = []
    value = _check_object(schema, payload, (), errors, partial=partial)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(value=value)


# =============================================================================
# Checkers
# =============================================================================

def _format_path(path: Path) -> str:
    return ".".join(str(part) for part in path)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float) and math.isnan(value):
        return "nan"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _expected(kind: str, value: Any, path: Path, errors: list[FieldError]) -> Any:
    errors.append(FieldError(_format_path(path), f"Expected {kind}, received {_type_name(value)}"))
    return _INVALID


def _check(spec: FieldSpec, value: Any, path: Path, errors: list[FieldError]) -> Any:
    checker = _CHECKERS.get(spec.kind)
    if checker is None:
        raise TypeError(f"No validator for field kind {spec.kind!r}")
    return checker(spec, value, path, errors)


def _check_string(spec, value, path, errors):
    if not isinstance(value, str):
        return _expected("string", value, path, errors)
    if spec.max_length is not None and len(value) > spec.max_length:
        errors.append(FieldError(
            _format_path(path),
            f"String must contain at most {spec.max_length} character(s)",
        ))
        return _INVALID
    return value


def _check_number(spec, value, path, errors):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _expected("number", value, path, errors)
    if isinstance(value, float) and math.isnan(value):
        return _expected("number", value, path, errors)
    if isinstance(value, float) and not math.isfinite(value):
        errors.append(FieldError(_format_path(path), "Number must be finite"))
        return _INVALID
    return value


def _check_boolean(spec, value, path, errors):
    if not isinstance(value, bool):
        return _expected("boolean", value, path, errors)
    return value


def _check_object(
    spec: ObjectField,
    value: Any,
    path: Path,
    errors: list[FieldError],
    partial: bool = False,
) -> Any:
    if not isinstance(value, dict):
        return _expected("object", value, path, errors)

    start = len(errors)
    result: dict[str, Any] = {}

    for name, child in spec.fields.items():
        child_path = path + (name,)
        if name not in value:
            if child.has_default:
                result[name] = copy.deepcopy(child.default)
            elif child.required and not partial:
                errors.append(FieldError(_format_path(child_path), "Required"))
            continue

        checked = _check(child, value[name], child_path, errors)
        if checked is not _INVALID:
            result[name] = checked

    unknown = [key for key in value if key not in spec.fields]
    if unknown:
        keys = ", ".join(f"'{key}'" for key in unknown)
        errors.append(FieldError(_format_path(path), f"Unrecognized key(s) in object: {keys}"))

    return _INVALID if len(errors) > start else result


def _check_media(spec: MediaField, value, path, errors):
    return _check_object(spec.shape, value, path, errors)


def _check_array(spec: ArrayField, value, path, errors):
    if not isinstance(value, list):
        return _expected("array", value, path, errors)

    start = len(errors)
    items = [_check(spec.element, item, path + (index,), errors) for index, item in enumerate(value)]
    return _INVALID if len(errors) > start else items


def _check_union(spec: UnionField, value, path, errors):
    for alternative in spec.alternatives:
        scratch: list[FieldError] = []
        checked = _check(alternative, value, path, scratch)
        if not scratch:
            return checked

    errors.append(FieldError(_format_path(path), "Invalid input"))
    return _INVALID


_CHECKERS: dict[str, Callable[..., Any]] = {
    "string": _check_string,
    "number": _check_number,
    "boolean": _check_boolean,
    "object": _check_object,
    "media": _check_media,
    "array": _check_array,
    "union": _check_union,
}
