# =============================================================================
# app/routers/revalidate.py - Manual Revalidation Endpoint
# =============================================================================

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.dependencies import RevalidatorDep
from core.models.responses import RevalidateResponse
from core.services.revalidation import RevalidationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/revalidate", response_model=RevalidateResponse)
async def revalidate_site(revalidator: RevalidatorDep):
    """
    Regenerate the site's statically rendered routes now.

    Returns 500 with `{"success": false, "error": ...}` if the site could not
    be revalidated.
    """
    try:
        await revalidator.revalidate()
    except RevalidationError as e:
        logger.error(str(e))
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to revalidate pages"},
        )

    return RevalidateResponse()
