# =============================================================================
# core/schemas/ - Content Schemas and Validation
# =============================================================================
# - fields.py: tagged field descriptors (string, number, media, ...)
# - registry.py: the fixed content-type -> schema mapping
# - validator.py: pure payload validation returning field-path errors
# =============================================================================

from .fields import (
    ArrayField,
    BoolField,
    ContentSchema,
    FieldSpec,
    MediaField,
    NumberField,
    ObjectField,
    StringField,
    UnionField,
    is_media_shape,
    optional,
)
from .registry import SCHEMAS, get_schema, schema_names
from .validator import FieldError, ValidationResult, validate, validate_partial

__all__ = [
    # Descriptors
    "ArrayField",
    "BoolField",
    "ContentSchema",
    "FieldSpec",
    "MediaField",
    "NumberField",
    "ObjectField",
    "StringField",
    "UnionField",
    "is_media_shape",
    "optional",
    # Registry
    "SCHEMAS",
    "get_schema",
    "schema_names",
    # Validation
    "FieldError",
    "ValidationResult",
    "validate",
    "validate_partial",
]
