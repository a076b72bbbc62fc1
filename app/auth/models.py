# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel


class AuthenticatedIdentity(BaseModel):
    """
    Principal extracted from a verified Supabase access token.

    Valid for the duration of one request; never persisted.
    """
    uid: str
    email: Optional[str] = None

    model_config = {"frozen": True}


class AuthResult(BaseModel):
    """
    Outcome of checking a request's bearer token.

    Callers branch on `authenticated`. `reason` records why a token was
    rejected for server-side logs only; clients always see a plain 401.
    """
    authenticated: bool
    uid: Optional[str] = None
    email: Optional[str] = None
    reason: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def rejected(cls, reason: str) -> "AuthResult":
        return cls(authenticated=False, reason=reason)

    @property
    def identity(self) -> Optional[AuthenticatedIdentity]:
        if not self.authenticated or not self.uid:
            return None
        return AuthenticatedIdentity(uid=self.uid, email=self.email)
