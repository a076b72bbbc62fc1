# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - dependencies.py: Service container shared by all requests
# - auth/: Bearer-token verification
# - routers/: API and admin panel endpoints organized by feature
# - templates/: Jinja2 templates for the admin panel
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
