# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The browser signs in with Supabase Auth (OAuth popup) and sends the access
# token as a Bearer header. Tokens are verified with either:
# - ES256 (Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# get_current_admin then applies the single-address allowlist.
#
# Usage:
#   from app.auth import get_current_admin, AuthUser
#
#   @router.post("/projects")
#   async def create(user: AuthUser = Depends(get_current_admin)):
#       ...
# =============================================================================

import asyncio
import logging
import time
from typing import Any
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AuthUser
from app.dependencies import get_identity_service
from app.exceptions import UnauthorizedEmailError
from core.services.identity_service import IdentityService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """Get the JWKS URL from Supabase URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except Exception as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _legacy_secret() -> tuple[str, str]:
    """
    The HS256 secret, if one is configured.

    Raises:
        JWTError: If SUPABASE_JWT_SECRET is empty. An empty HMAC key would
            accept tokens anyone can sign.
    """
    if not settings.SUPABASE_JWT_SECRET:
        raise JWTError("HS256 token rejected: SUPABASE_JWT_SECRET is not set")
    return settings.SUPABASE_JWT_SECRET, "HS256"


async def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the appropriate signing key for a token.

    The JWKS fetch is blocking, so it runs in a worker thread.

    Returns:
        Tuple of (key, algorithm) to use for verification

    Raises:
        JWTError: If the token needs the HS256 secret and none is configured
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        return _legacy_secret()

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return _legacy_secret()

    if kid:
        jwks = await asyncio.to_thread(_fetch_jwks)
        for key in jwks.get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return _legacy_secret()


def _display_name(payload: dict) -> str | None:
    """Pick a display name out of the token's user metadata."""
    metadata = payload.get("user_metadata") or {}
    return metadata.get("full_name") or metadata.get("name")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate user from Supabase JWT token.

    Returns:
        AuthUser: The authenticated user

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials

    try:
        signing_key, algorithm = await _get_signing_key(token)

        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated"
        )

    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")

    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise _unauthorized("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(
        id=user_uuid,
        email=payload.get("email"),
        display_name=_display_name(payload),
        access_token=token,
    )


async def get_current_admin(
    user: AuthUser = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service),
) -> AuthUser:
    """
    Require the signed-in user to be the configured admin.

    Any other account has its session revoked on the spot and gets
    UnauthorizedEmailError.

    Raises:
        UnauthorizedEmailError: 403 if the email is not the admin address
    """
    if identity.is_admin(user.email):
        return user

    logger.warning(f"Rejected non-admin sign-in: {user.email}")
    await identity.sign_out(user.access_token)
    raise UnauthorizedEmailError(user.email)
