# =============================================================================
# app/auth/guard.py - Bearer Token Verification
# =============================================================================
# Verifies Supabase access tokens.
#
# Supports both:
# - ES256/RS256 (Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Every failure (no header, expired, bad signature, JWKS unreachable)
# collapses into AuthResult(authenticated=False); the guard never raises.
# =============================================================================

import logging
import time
from typing import Any, Mapping

import httpx
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JOSEError

from app.auth.models import AuthResult

logger = logging.getLogger(__name__)

JWKS_CACHE_TTL = 3600  # 1 hour
TOKEN_AUDIENCE = "authenticated"


class TokenVerifier:
    """
    Decode and verify a Supabase JWT.

    JWKS keys are fetched lazily and cached; if a refresh fails the last
    known key set is reused.
    """

    def __init__(self, jwt_secret: str, jwks_url: str, timeout: float = 10.0):
        self._jwt_secret = jwt_secret
        self._jwks_url = jwks_url
        self._timeout = timeout
        self._jwks_cache: dict[str, Any] = {}
        self._jwks_cache_time: float = 0

    def _fetch_jwks(self) -> dict[str, Any]:
        """Fetch JWKS from Supabase with caching."""
        current_time = time.time()

        if self._jwks_cache and (current_time - self._jwks_cache_time) < JWKS_CACHE_TTL:
            return self._jwks_cache

        try:
            response = httpx.get(self._jwks_url, timeout=self._timeout)
            response.raise_for_status()
            self._jwks_cache = response.json()
            self._jwks_cache_time = current_time
            logger.debug(f"Fetched JWKS from {self._jwks_url}")
            return self._jwks_cache
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to fetch JWKS: {e}")
            # Return cached even if expired, as fallback
            return self._jwks_cache or {"keys": []}

    def _get_signing_key(self, token: str) -> tuple[Any, str]:
        """
        Get the appropriate signing key for a token.

        Returns:
            Tuple of (key, algorithm) to use for verification
        """
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError:
            return self._jwt_secret, "HS256"

        alg = unverified_header.get("alg", "HS256")
        kid = unverified_header.get("kid")

        if alg == "HS256":
            return self._jwt_secret, "HS256"

        if kid:
            for key in self._fetch_jwks().get("keys", []):
                if key.get("kid") == kid:
                    return key, alg

        logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
        return self._jwt_secret, "HS256"

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature, expiry and audience; return the claims.

        Raises:
            ExpiredSignatureError: If the token has expired
            JWTError: If the token is invalid
        """
        signing_key, algorithm = self._get_signing_key(token)
        if not signing_key:
            raise JWTError("No key available to verify token")

        return jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; Starlette's Headers are not
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


class AuthGuard:
    """
    Turns request headers into an AuthResult.

    Usage:
        result = guard.verify(request.headers)
        if not result.authenticated:
            raise AuthenticationError()
    """

    def __init__(self, verifier: TokenVerifier):
        self._verifier = verifier

    def verify(self, headers: Mapping[str, str]) -> AuthResult:
        """Check the `Authorization: Bearer <token>` header."""
        auth_header = _get_header(headers, "authorization")
        if not auth_header:
            return self._reject("missing_token")

        scheme, _, token = auth_header.partition(" ")
        if scheme != "Bearer" or not token.strip():
            return self._reject("malformed_header")

        return self.verify_token(token.strip())

    def verify_token(self, token: str) -> AuthResult:
        """Verify a raw access token."""
        if not token:
            return self._reject("missing_token")

        try:
            claims = self._verifier.decode(token)
        except ExpiredSignatureError:
            return self._reject("expired")
        except JOSEError as e:
            return self._reject("invalid_token", e)
        except Exception as e:
            # Key material or transport problems; same outcome for the caller
            return self._reject("verification_error", e)

        uid = claims.get("sub")
        if not uid:
            return self._reject("missing_subject")

        logger.debug(f"Authenticated user: {uid}")
        return AuthResult(authenticated=True, uid=str(uid), email=claims.get("email"))

    @staticmethod
    def _reject(reason: str, error: Exception | None = None) -> AuthResult:
        if error is not None:
            logger.warning(f"Token rejected ({reason}): {error}")
        elif reason != "missing_token":
            logger.warning(f"Token rejected ({reason})")
        return AuthResult.rejected(reason)
