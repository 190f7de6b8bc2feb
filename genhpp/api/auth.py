"""
Supabase JWT authentication for FastAPI.

Supports two modes:
1. Supabase mode: Verifies HS256 access tokens signed with the project's JWT
   secret (when SUPABASE_JWT_SECRET is set)
2. Single-user mode: Falls back to user_id=1 for self-hosted usage

Also provides the admin guard and the maintenance gate applied to
user-facing routers.
"""

import logging
import os
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from genhpp.db.connection import get_db_session
from genhpp.db.models import User
from genhpp.db.repositories.site_status_repository import SiteStatusRepository
from genhpp.db.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_AUDIENCE = "authenticated"
SINGLE_USER_ID = 1

MAINTENANCE_MESSAGE = "Situs sedang dalam perbaikan. Silakan coba lagi nanti."
UPDATE_MESSAGE = "Situs sedang diperbarui. Silakan coba lagi nanti."

# Security scheme - optional so it doesn't fail when no auth is configured
security = HTTPBearer(auto_error=False)


def _jwt_secret() -> Optional[str]:
    return os.getenv("SUPABASE_JWT_SECRET")


def _verify_supabase_token(token: str, secret: str) -> dict:
    """
    Verify a Supabase access token and return the decoded payload.

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience=os.getenv("SUPABASE_JWT_AUDIENCE", DEFAULT_AUDIENCE),
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db_session),
) -> User:
    """
    FastAPI dependency that returns the current authenticated user.

    In Supabase mode (SUPABASE_JWT_SECRET set):
        - Verifies JWT from Authorization header
        - Returns user mapped to the token's ``sub`` (auto-creates on first auth)

    In single-user mode (no SUPABASE_JWT_SECRET):
        - Returns user with id=1
        - No authentication required
    """
    secret = _jwt_secret()
    if not secret:
        user = db.query(User).filter_by(id=SINGLE_USER_ID).first()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Default user (id=1) not found. Run database initialization first.",
            )
        return user

    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = _verify_supabase_token(credentials.credentials, secret)
    auth_id = payload.get("sub")
    if not auth_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing subject",
        )

    metadata = payload.get("user_metadata") or {}
    user = UserRepository(db).get_or_create_by_auth_id(
        auth_id,
        email=payload.get("email"),
        name=metadata.get("full_name") or metadata.get("name"),
        photo_url=metadata.get("avatar_url"),
    )
    if user.is_active is False:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is disabled")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency that only lets administrators through."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def ensure_site_available(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> None:
    """
    Router-level dependency that answers 503 while the site is in
    maintenance or update mode. Administrators bypass the gate.
    """
    if current_user.is_admin:
        return

    site_status = SiteStatusRepository(db).get_status()
    if site_status.is_maintenance_mode:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=MAINTENANCE_MESSAGE)
    if site_status.is_update_mode:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=UPDATE_MESSAGE)
