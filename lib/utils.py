# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def is_uuid(value: str) -> bool:
    """Check whether a string parses as a UUID."""
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


# =============================================================================
# Path Utilities
# =============================================================================

_UNSAFE_SEGMENT_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def safe_path_segment(value: str | None, fallback: str) -> str:
    """
    Reduce user input to a single storage path segment.

    Slashes, dots and other separators are dropped so the value can never
    climb out of, or add levels to, the storage namespace.

    Example:
        safe_path_segment("../etc", "media")  # "etc"
        safe_path_segment("", "media")        # "media"
    """
    cleaned = _UNSAFE_SEGMENT_CHARS.sub("", value or "")
    return cleaned or fallback
