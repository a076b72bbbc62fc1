# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Database, storage and auth all live in one Supabase project

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret used to verify access tokens"
    )

    # -------------------------------------------------------------------------
    # Content Storage
    # -------------------------------------------------------------------------

    DOCUMENTS_TABLE: str = Field(
        default="content_documents",
        description="Table holding every content document (collection, data jsonb)"
    )

    MEDIA_COLLECTION: str = Field(
        default="media",
        description="Collection where uploaded media metadata is recorded"
    )

    STORAGE_BUCKET: str | None = Field(
        default=None,
        description="Public storage bucket for media uploads"
    )

    # -------------------------------------------------------------------------
    # File Upload Settings
    # -------------------------------------------------------------------------

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum media upload size in MB"
    )

    UPLOAD_TEMP_DIR: str | None = Field(
        default=None,
        description="Directory for temporary upload copies (system temp dir if unset)"
    )

    # -------------------------------------------------------------------------
    # Static Site Revalidation
    # -------------------------------------------------------------------------

    REVALIDATE_URL: str | None = Field(
        default=None,
        description="Webhook on the public site that regenerates static pages"
    )

    REVALIDATE_SECRET: str | None = Field(
        default=None,
        description="Shared secret sent with revalidation requests"
    )

    REVALIDATE_PATHS: str = Field(
        default="/,/about",
        description="Routes to regenerate after a mutation (comma-separated)"
    )

    REVALIDATE_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for revalidation requests"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    ADMIN_COOKIE_NAME: str = Field(
        default="access_token",
        description="Cookie carrying the admin UI access token"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS string into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def revalidate_paths_list(self) -> list[str]:
        """
        Parse REVALIDATE_PATHS into a list of routes.

        Example: "/, /about" -> ["/", "/about"]
        """
        return [path.strip() for path in self.REVALIDATE_PATHS.split(",") if path.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def jwks_url(self) -> str:
        """JWKS endpoint of the Supabase Auth server."""
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()


# Global settings instance for easy importing
settings = get_settings()
