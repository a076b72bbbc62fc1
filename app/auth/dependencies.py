# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Usage:
#   from app.auth import require_identity, AuthenticatedIdentity
#
#   @router.post("/protected")
#   async def protected(identity: AuthenticatedIdentity = Depends(require_identity)):
#       return {"uid": identity.uid}
# =============================================================================

from typing import Optional

from fastapi import Request

from app.auth.guard import AuthGuard
from app.auth.models import AuthenticatedIdentity
from app.config import settings
from app.exceptions import AuthenticationError


def get_auth_guard(request: Request) -> AuthGuard:
    """The guard built at startup and held on app.state."""
    return request.app.state.services.auth_guard


async def require_identity(request: Request) -> AuthenticatedIdentity:
    """
    Verify the request's bearer token.

    Raises:
        AuthenticationError: 401 if the token is absent or invalid
    """
    result = get_auth_guard(request).verify(request.headers)
    identity = result.identity
    if identity is None:
        raise AuthenticationError()
    return identity


async def admin_identity(request: Request) -> Optional[AuthenticatedIdentity]:
    """
    Identity of an admin UI browser session, or None.

    The admin screens are plain page loads, so the token travels in a cookie
    instead of the Authorization header.
    """
    token = request.cookies.get(settings.ADMIN_COOKIE_NAME)
    if not token:
        return None
    return get_auth_guard(request).verify_token(token).identity
