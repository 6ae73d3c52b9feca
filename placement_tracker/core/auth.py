"""
Authentication Utility - JWT verification and role resolution.

Tokens are issued by the external identity provider (HS256, user id in
`sub`); this service only verifies them. Roles come from the user_roles
table:
- admin, editor: may create and edit companies (can_edit)
- viewer: read access, may share experiences and questions
"""

import logging
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError

from placement_tracker.core.config import get_settings
from placement_tracker.core.errors import StoreError
from placement_tracker.db.postgres import execute_raw_sql
from placement_tracker.schemas.schemas import AppRole

logger = logging.getLogger(__name__)

settings = get_settings()

EDIT_ROLES = {AppRole.admin, AppRole.editor}

# Bearer token extractor; optional so read routes work without a token
bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_aud": False},
        )
    except JWTError as e:
        logger.info("Rejected token: %s", e)
        return None


def can_edit(role: AppRole) -> bool:
    return role in EDIT_ROLES


def resolve_role(user_id: str) -> AppRole:
    """Highest role recorded for the user; viewer when none is recorded."""
    try:
        rows = execute_raw_sql(
            "SELECT role FROM user_roles WHERE user_id::text = :id",
            {"id": user_id}
        )
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to resolve user role: {e}") from e

    roles = {AppRole(r["role"]) for r in rows}
    for role in (AppRole.admin, AppRole.editor):
        if role in roles:
            return role
    return AppRole.viewer


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[dict]:
    """
    FastAPI dependency - current user, or None for anonymous requests.
    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub") if payload else None
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    role = resolve_role(user_id)
    return {
        "user_id": user_id,
        "email": payload.get("email"),
        "role": role,
        "can_edit": can_edit(role),
    }


async def get_current_user(user: Optional[dict] = Depends(get_optional_user)) -> dict:
    """
    FastAPI dependency - require an authenticated user.

    Usage:
        @router.post("/experiences")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_editor(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - require admin or editor role."""
    if not user["can_edit"]:
        raise HTTPException(status_code=403, detail="Editors only")
    return user
