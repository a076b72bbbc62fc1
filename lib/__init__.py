# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase client factory
# - utils.py: Shared utilities (UUID checks, storage path sanitizing)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClientError, create_supabase_client
from lib.utils import is_uuid, safe_path_segment

__all__ = [
    # Supabase
    "SupabaseClientError",
    "create_supabase_client",
    # Utils
    "is_uuid",
    "safe_path_segment",
]
