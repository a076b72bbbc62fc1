# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication against Supabase Auth.
#
# Usage:
#   from app.auth import require_identity, AuthenticatedIdentity
#
#   @router.post("/protected")
#   async def protected(identity: AuthenticatedIdentity = Depends(require_identity)):
#       return {"uid": identity.uid}
# =============================================================================

from app.auth.dependencies import admin_identity, get_auth_guard, require_identity
from app.auth.guard import AuthGuard, TokenVerifier
from app.auth.models import AuthenticatedIdentity, AuthResult

__all__ = [
    "AuthGuard",
    "AuthResult",
    "AuthenticatedIdentity",
    "TokenVerifier",
    "admin_identity",
    "get_auth_guard",
    "require_identity",
]
