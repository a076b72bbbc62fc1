# =============================================================================
# core/services/revalidation.py - Static Page Revalidation
# =============================================================================
# After content changes, ask the public site to regenerate its statically
# rendered routes. This is best-effort: mutations never fail because of it,
# and a deployment without a revalidation webhook simply skips it.
# =============================================================================

import logging

import httpx

logger = logging.getLogger(__name__)


class RevalidationError(Exception):
    """Raised when the site rejects or cannot be reached for revalidation."""


class Revalidator:
    """
    Client for the site's revalidation webhook.

    Sends `POST {url}` with `{"paths": [...]}` and, when configured, the
    shared secret in the `x-revalidate-secret` header.
    """

    def __init__(
        self,
        http: httpx.AsyncClient | None,
        url: str | None,
        paths: list[str],
        secret: str | None = None,
    ):
        self._http = http
        self.url = url
        self.paths = list(paths)
        self._secret = secret

    @property
    def enabled(self) -> bool:
        return bool(self.url) and self._http is not None

    async def revalidate(self, paths: list[str] | None = None) -> None:
        """
        Request regeneration of `paths` (default: the configured routes).

        Raises:
            RevalidationError: If the request fails or is rejected
        """
        if not self.enabled:
            logger.debug("Revalidation not configured; skipping")
            return

        targets = paths or self.paths
        headers = {"x-revalidate-secret": self._secret} if self._secret else {}

        try:
            response = await self._http.post(self.url, json={"paths": targets}, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RevalidationError(f"Failed to revalidate {targets}: {e}") from e

        logger.info(f"Revalidated {len(targets)} routes")

    async def revalidate_quietly(self) -> bool:
        """Best-effort revalidation after a mutation; never raises."""
        try:
            await self.revalidate()
        except RevalidationError as e:
            logger.warning(str(e))
            return False
        return True
