"""
Bearer-token authentication for the API.

Tokens are Supabase Auth access tokens. They are checked against the
project's published signing keys (JWKS); the caller's user id is the
token's ``sub`` claim.
"""
import time
import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import HTTPException, Header
from jose import jwk, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from app import config

logger = logging.getLogger(__name__)

JWT_AUDIENCE = "authenticated"
JWT_ALGORITHMS = ["ES256", "RS256"]
JWKS_TTL_SECONDS = 60 * 60

_jwks_cache: Optional[dict] = None
_jwks_cache_time: float = 0


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


def _auth_base_url() -> str:
    if not config.SUPABASE_URL:
        raise ValueError("SUPABASE_URL must be set")
    return f"{config.SUPABASE_URL.rstrip('/')}/auth/v1"


def get_jwks_url() -> str:
    return f"{_auth_base_url()}/.well-known/jwks.json"


def get_jwt_issuer() -> str:
    return _auth_base_url()


async def get_jwks(force_refresh: bool = False) -> dict:
    """
    Signing keys of the Supabase project, cached for an hour.

    A stale cache is still served when the refresh request fails.
    """
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    fresh = _jwks_cache and (now - _jwks_cache_time) < JWKS_TTL_SECONDS
    if fresh and not force_refresh:
        return _jwks_cache

    url = get_jwks_url()
    logger.info(f"Fetching JWKS: {url}")

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"JWKS fetch failed: {e}")
        if _jwks_cache:
            logger.warning("Serving stale JWKS")
            return _jwks_cache
        raise HTTPException(status_code=500, detail="Failed to fetch authentication keys")

    _jwks_cache = response.json()
    _jwks_cache_time = now
    return _jwks_cache


def reset_jwks_cache() -> None:
    """Drop cached keys"""
    global _jwks_cache, _jwks_cache_time
    _jwks_cache = None
    _jwks_cache_time = 0


def _find_key(jwks: dict, kid: str) -> Optional[Dict[str, Any]]:
    return next((k for k in jwks.get("keys", []) if k.get("kid") == kid), None)


async def _signing_key(token: str):
    try:
        kid = jwt.get_unverified_header(token).get("kid")
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {e}")

    if not kid:
        raise _unauthorized("Token missing key ID (kid)")

    key_data = _find_key(await get_jwks(), kid)
    if key_data is None:
        # Keys may have been rotated since the cache was filled
        key_data = _find_key(await get_jwks(force_refresh=True), kid)
    if key_data is None:
        raise _unauthorized(f"Key with ID '{kid}' not found in JWKS")

    return jwk.construct(key_data)


async def verify_token(token: str) -> dict:
    """
    Verify signature, audience, issuer and expiry of a Supabase access token.

    Returns:
        The token's claims

    Raises:
        HTTPException: 401 for any invalid token
    """
    key = await _signing_key(token)

    try:
        return jwt.decode(
            token,
            key,
            algorithms=JWT_ALGORITHMS,
            audience=JWT_AUDIENCE,
            issuer=get_jwt_issuer(),
        )
    except ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTClaimsError as e:
        raise _unauthorized(f"Token validation failed: {e}")
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {e}")


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Raw token of an ``Authorization: Bearer <token>`` header"""
    if not authorization:
        raise _unauthorized("Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()

    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Invalid authorization header. Expected 'Bearer <token>'")

    return token


async def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """FastAPI dependency: id of the authenticated caller"""
    claims = await verify_token(get_bearer_token(authorization))

    user_id = claims.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token: no user ID")

    return user_id
