# =============================================================================
# lib/supabase_client.py - Supabase Client Factory
# =============================================================================
# Builds the Supabase client shared by the document store and object storage.
#
# The client is created once in the application lifespan and handed to the
# services that need it; nothing in the codebase reaches for a module-level
# instance.
#
# Usage:
#   from lib.supabase_client import create_supabase_client
#   client = create_supabase_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
# =============================================================================

from __future__ import annotations

import logging

from supabase import Client, create_client

logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error while setting up or talking to Supabase.

    Carries a short code and a suggestion on how to fix the problem.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def create_supabase_client(url: str, service_key: str) -> Client:
    """
    Create a Supabase client using the service_role key.

    The service key bypasses Row Level Security, which is appropriate for
    server-side admin operations; every route is gated by the auth guard.

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = create_client(url, service_key)
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase client: {e}",
            code="CLIENT_INIT_FAILED",
            suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
        ) from e

    logger.info("Supabase client initialized successfully")
    return client
