"""FastAPI dependency injection functions for authentication, services and database access."""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from blog_backend.core.exceptions import UnauthorizedError
from blog_backend.core.permissions import ensure_admin
from blog_backend.core.security import decode_token
from blog_backend.database import get_db
from blog_backend.models.user import User
from blog_backend.services import Services

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/users/login", auto_error=False)


def get_services(request: Request) -> Services:
    """Services built once at startup by ``create_app``."""
    return request.app.state.services


def _user_from_token(token: str, db: Session, services: Services) -> User:
    payload = decode_token(token)
    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        logger.warning("[AUTH] Token has no usable subject")
        raise UnauthorizedError()

    user = services.users.users.get(db, user_id)
    if user is None:
        logger.warning(f"[AUTH] User not found for id: {user_id}")
        raise UnauthorizedError()
    return user


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Raises:
        UnauthorizedError: 401 if token is missing, invalid or user not found
    """
    if not token:
        raise UnauthorizedError("Not authenticated")
    return _user_from_token(token, db, services)


def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Optional[User]:
    """
    Dependency to optionally get current authenticated user.
    Returns None if no valid token provided.
    """
    if not token:
        return None
    try:
        return _user_from_token(token, db, services)
    except UnauthorizedError:
        return None


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency restricting an endpoint to administrators."""
    ensure_admin(current_user)
    return current_user


__all__ = [
    "oauth2_scheme",
    "get_db",
    "get_services",
    "get_current_user",
    "get_optional_current_user",
    "require_admin",
]
