# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login is handled by Supabase Auth client-side.
# This route lets the admin front-end check a stored token.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import require_identity
from app.auth.models import AuthenticatedIdentity

router = APIRouter()


@router.get("/verify")
async def verify_token(
    identity: AuthenticatedIdentity = Depends(require_identity)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "success": True,
        "uid": identity.uid,
        "email": identity.email,
    }
