# =============================================================================
# core/models/media.py - Media Reference
# =============================================================================
# An image is embedded by value wherever it is used, and separately indexed
# in the `media` collection so the admin media picker can list it. Deleting
# the index document does not touch documents that embed the image.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class MediaReference(BaseModel):
    """
    Embedded image value.

    Example:
        {"id": "1f0c...", "url": "https://.../media/uid/abc.png", "alt": "Logo"}
    """

    id: str | None = Field(default=None, description="Media document id, if indexed")
    url: str = Field(..., description="Public URL of the stored object")
    alt: str = Field(default="", description="Alternative text")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "MediaReference":
        """Build from a media collection document, ignoring unknown keys."""
        return cls(
            id=document.get("id"),
            url=document.get("url", ""),
            alt=document.get("alt", ""),
        )
