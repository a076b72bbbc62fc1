# =============================================================================
# core/forms/ - Admin Form Generation
# =============================================================================
# - renderer.py: schema -> tree of form controls with initial values
# - decoder.py: posted form fields -> JSON payload for validation
# =============================================================================

from .decoder import decode_form
from .renderer import FormControl, build_form, default_values, initial_values

__all__ = [
    "FormControl",
    "build_form",
    "decode_form",
    "default_values",
    "initial_values",
]
