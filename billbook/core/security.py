"""Security utilities: identity-provider access token validation.

Users sign in against the backend-as-a-service; this API never sees a
password. It only verifies the bearer token the provider issued and reads
the user's identity from its claims.
"""

import time
from dataclasses import dataclass, field

import httpx
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from billbook.config import settings
from billbook.core.exceptions import AuthenticationError

logger = structlog.get_logger()

JWKS_CACHE_TTL = 300  # 5 minutes


@dataclass
class AuthUser:
    """The authenticated caller, as described by the token claims."""

    id: str
    email: str | None = None
    username: str | None = None
    avatar_url: str | None = None
    claims: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_claims(cls, payload: dict) -> "AuthUser":
        metadata = payload.get("user_metadata") or {}
        email = payload.get("email") or None
        username = metadata.get("username")
        if not username and email:
            username = email.split("@")[0]
        return cls(
            id=payload["sub"],
            email=email,
            username=username,
            avatar_url=metadata.get("avatar_url"),
            claims=payload,
        )


class JWKSCache:
    """Time-bounded cache of the provider's JSON Web Key Set."""

    def __init__(self, url: str, ttl: float = JWKS_CACHE_TTL):
        self.url = url
        self.ttl = ttl
        self._jwks: dict | None = None
        self._fetched_at: float = 0

    async def get(self, force: bool = False) -> dict:
        now = time.time()
        if not force and self._jwks and (now - self._fetched_at) < self.ttl:
            return self._jwks

        async with httpx.AsyncClient() as client:
            response = await client.get(self.url, timeout=10)
            response.raise_for_status()
            self._jwks = response.json()
            self._fetched_at = now
            logger.info("JWKS fetched", url=self.url)
            return self._jwks

    async def find_key(self, kid: str) -> dict | None:
        key = _find_signing_key(await self.get(), kid)
        if key is None:
            # Key may have rotated
            key = _find_signing_key(await self.get(force=True), kid)
        return key


def _find_signing_key(jwks: dict, kid: str) -> dict | None:
    """Find the signing key matching the token's kid."""
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key
    return None


jwks_cache = JWKSCache(settings.auth_jwks_url)


async def decode_access_token(token: str, cache: JWKSCache | None = None) -> dict:
    """Decode and validate an access token.

    HS256 tokens are checked against the shared secret when one is configured;
    otherwise the key is looked up in the provider's JWKS by ``kid``.
    """
    if settings.auth_jwt_secret:
        key: str | dict = settings.auth_jwt_secret
        algorithms = ["HS256"]
    else:
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise AuthenticationError("Invalid token header") from e

        kid = unverified_header.get("kid")
        if not kid:
            raise AuthenticationError("Token missing key ID")

        signing_key = await (cache or jwks_cache).find_key(kid)
        if not signing_key:
            raise AuthenticationError("Unable to find matching signing key")
        key = signing_key
        algorithms = settings.auth_jwks_algorithms_list

    try:
        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=settings.auth_audience or None,
            issuer=settings.auth_issuer_url or None,
            options={"verify_aud": bool(settings.auth_audience), "verify_at_hash": False},
        )
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e


# ── Auth Dependencies ─────────────────────────────
security_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> AuthUser:
    """FastAPI dependency: validate the bearer token and return its user."""
    if credentials is None:
        raise AuthenticationError()

    payload = await decode_access_token(credentials.credentials)
    if not payload.get("sub"):
        raise AuthenticationError("Token missing subject")

    user = AuthUser.from_claims(payload)
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user
