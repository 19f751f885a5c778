"""CRUD operations for `User` model."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from blog_backend.core.security import get_password_hash, verify_password
from blog_backend.crud.base import CRUDBase
from blog_backend.models.user import User
from blog_backend.schemas.user import UserCreate, UserUpdate


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        stmt = select(User).where(User.email == normalize_email(email)).limit(1)
        return db.scalars(stmt).first()

    def create_user(self, db: Session, *, user_in: UserCreate) -> User:
        user_data = user_in.model_dump()
        raw_password = user_data.pop("password")
        user_data["password_hash"] = get_password_hash(raw_password)
        user_data["email"] = normalize_email(user_data["email"])
        return self.save(db, User(**user_data))

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        """Authenticate user by email and password."""
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def _search_criteria(self, search: Optional[str]) -> list:
        if not search:
            return []
        pattern = f"%{search.strip()}%"
        return [or_(User.name.ilike(pattern), User.email.ilike(pattern))]

    def search(
        self, db: Session, *, search: Optional[str] = None, skip: int = 0, limit: int = 10
    ) -> List[User]:
        stmt = (
            select(User)
            .where(*self._search_criteria(search))
            .order_by(User.name.asc(), User.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def count_search(self, db: Session, *, search: Optional[str] = None) -> int:
        return self.count(db, *self._search_criteria(search))
