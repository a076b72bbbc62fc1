# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the content admin API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import settings
from app.dependencies import Services
from app.exceptions import (
    CMSException,
    cms_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.routers import admin, collection, health, media, revalidate

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


DESCRIPTION = """
## Content Admin API

Schema-validated document storage and image uploads behind a small
server-rendered admin panel. The public site reads content from the open
list endpoint and is regenerated after every change.

### Content Types

brand, contact, footer, homepage, media, medicalSkinExpertPage, navigation,
orthomolecularTherapistPage, ourTeamPage, treatment, treatmentsPage

### Quick Start

```bash
# List a collection (no auth)
curl "http://localhost:8000/api/admin/collection?collection=treatment"

# Create a document
curl -X POST "http://localhost:8000/api/admin/collection?collection=brand" \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Acme", "description": "Skincare",
       "logo": {"url": "https://cdn.example.com/logo.png", "alt": "Acme logo"},
       "image": {"url": "https://cdn.example.com/hero.jpg", "alt": "Products"}}'

# Upload an image
curl -X POST http://localhost:8000/api/media \\
  -H "Authorization: Bearer $TOKEN" \\
  -F "file=@logo.png" -F "alt=Logo"
```
"""


def create_app(services: Services | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        services: Pre-built service container. When omitted the clients are
            created from settings at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: connect to Supabase and build the shared services
        - Shutdown: close the HTTP client used for revalidation
        """
        logger.info(f"Starting content admin API in {settings.ENVIRONMENT} mode")
        logger.info(f"CORS origins: {settings.cors_origins_list}")

        owned = services is None
        app.state.services = Services.from_settings(settings) if owned else services

        yield

        logger.info("Shutting down content admin API")
        if owned:
            await app.state.services.aclose()

    app = FastAPI(
        title="Content Admin API",
        description=DESCRIPTION,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Auth",
                "description": "Verify Supabase access tokens",
            },
            {
                "name": "Collections",
                "description": "Create, read, update and delete content documents",
            },
            {
                "name": "Media",
                "description": "Upload images to public storage",
            },
            {
                "name": "Revalidate",
                "description": "Regenerate the public site",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    if services is not None:
        app.state.services = services

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(CMSException, cms_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Internal server error",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(collection.router, prefix="/api/admin", tags=["Collections"])
    app.include_router(media.router, prefix="/api", tags=["Media"])
    app.include_router(revalidate.router, prefix="/api", tags=["Revalidate"])

    # Admin panel (HTML)
    app.include_router(admin.router, prefix="/admin", include_in_schema=False)

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Content Admin API",
            "version": "1.0.0",
            "docs": "/docs",
            "admin": "/admin",
            "health": "/api/health",
        }

    return app


app = create_app()
