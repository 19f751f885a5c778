"""User registration, authentication and profile management."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from blog_backend.config import settings
from blog_backend.core.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from blog_backend.core.permissions import ensure_can_mutate, is_admin
from blog_backend.core.security import create_user_token, get_password_hash
from blog_backend.crud.user import CRUDUser, normalize_email
from blog_backend.models.audit_log import EntityType
from blog_backend.models.user import User, UserRole
from blog_backend.schemas.user import UserCreate, UserLogin, UserUpdate
from blog_backend.services.audit_service import AuditAction, AuditService
from blog_backend.utils.pagination import normalize_page_params, page_offset

logger = logging.getLogger(__name__)

# Fields that may not be cleared with an explicit null
_REQUIRED_FIELDS = {"name", "email", "password", "role"}


class UserService:
    def __init__(self, audit: AuditService):
        self.audit = audit
        self.users = CRUDUser(User)

    def register(self, db: Session, user_in: UserCreate) -> Tuple[User, str]:
        """Create an account and return it with a fresh access token.

        Raises:
            ConflictError: If the email is already registered
            ForbiddenError: If an admin account is requested while
                ``ALLOW_ADMIN_REGISTRATION`` is off
        """
        if self.users.get_by_email(db, user_in.email):
            raise ConflictError("User already exists")
        if user_in.role == UserRole.ADMIN and not settings.ALLOW_ADMIN_REGISTRATION:
            raise ForbiddenError("Admin accounts cannot be self-registered")

        user = self.users.create_user(db, user_in=user_in)
        logger.info(f"User registered: id={user.id}, role={user.role.value}")
        token = create_user_token(user)
        self.audit.log(db, user.id, AuditAction.REGISTER, EntityType.USER, user.id)
        return user, token

    def login(self, db: Session, credentials: UserLogin) -> str:
        user = self.users.authenticate(db, email=credentials.email, password=credentials.password)
        if user is None:
            logger.warning(f"[AUTH] Failed login for email={normalize_email(credentials.email)}")
            raise UnauthorizedError("Invalid credentials")
        token = create_user_token(user)
        self.audit.log(db, user.id, AuditAction.LOGIN, EntityType.USER, user.id)
        return token

    def get(self, db: Session, user_id: int) -> User:
        user = self.users.get(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[User], int]:
        page, page_size = normalize_page_params(page, page_size)
        users = self.users.search(db, search=search, skip=page_offset(page, page_size), limit=page_size)
        return users, self.users.count_search(db, search=search)

    def update(self, db: Session, user_id: int, actor: User, user_in: UserUpdate) -> User:
        """Update a profile. Users edit themselves; admins edit anyone.

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the actor is neither the user nor an admin, or
                a non-admin tries to change a role
            ConflictError: If the new email belongs to another account
        """
        user = self.get(db, user_id)
        ensure_can_mutate(actor, user.id, "You can only update your own profile")

        data = {
            field: value
            for field, value in user_in.model_dump(exclude_unset=True).items()
            if not (value is None and field in _REQUIRED_FIELDS)
        }
        if "role" in data and data["role"] != user.role and not is_admin(actor):
            raise ForbiddenError("Only administrators can change roles")
        if "email" in data:
            data["email"] = normalize_email(data["email"])
            other = self.users.get_by_email(db, data["email"])
            if other is not None and other.id != user.id:
                raise ConflictError("Email already registered")
        if "password" in data:
            data["password_hash"] = get_password_hash(data.pop("password"))

        user = self.users.update(db, db_obj=user, obj_in=data)
        logger.info(f"User updated: id={user.id}, by={actor.id}")
        self.audit.log(db, actor.id, AuditAction.UPDATE, EntityType.USER, user.id)
        return user
