# portal/core/auth.py
import logging
import uuid
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from supabase import Client

from portal.core.config import get_settings
from portal.core.supabase_client import supabase_for_token
from portal.schemas.session import Identity

settings = get_settings()
logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so the session gate can resolve "Anonymous".
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def identity_from_token(token: str) -> Identity:
    """Build an Identity from a verified access token."""
    payload = decode_access_token(token)
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub",
        )

    # Supabase provides sub as a string; enforce UUID
    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    return Identity(id=user_id, email=payload.get("email"), access_token=token)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity | None:
    """
    Resolve the current identity from a Supabase JWT.

    Returns None when no Authorization header is present (anonymous
    visitor). A present but invalid token is rejected with 401.
    """
    if credentials is None:
        return None
    return identity_from_token(credentials.credentials)


def require_identity(
    identity: Identity | None = Depends(get_current_identity),
) -> Identity:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if no identity is present.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return identity


def require_admin_access(identity: Identity = Depends(require_identity)) -> Identity:
    """
    Gate for the admin surface.

    Any authenticated account is let through; there is no role model
    yet. This is a known gap pending a product decision, so every grant
    is logged.
    """
    logger.warning("Admin access granted without role check for user %s", identity.email)
    return identity


def get_db(identity: Identity | None = Depends(get_current_identity)) -> Client | None:
    """
    FastAPI dependency yielding a Supabase client for the caller.

    Anonymous callers get None; flows treat that as "no session".
    """
    if identity is None:
        return None
    return supabase_for_token(identity.access_token)
