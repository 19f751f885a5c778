"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blog_backend.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Reusable CRUD helper for SQLAlchemy models.

	All methods operate on model instances and return database objects, not schemas.
	Every write commits, and rolls the session back before re-raising on failure.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_many_by_ids(self, db: Session, ids: Sequence[int]) -> List[ModelType]:
		"""Get every record whose primary key is in ``ids`` (missing ones are skipped)."""
		if not ids:
			return []
		stmt = select(self.model).where(self.model.id.in_(list(set(ids))))
		return list(db.scalars(stmt).all())

	def count(self, db: Session, *criteria: Any) -> int:
		"""Count records matching optional where-criteria."""
		stmt = select(func.count()).select_from(self.model)
		if criteria:
			stmt = stmt.where(*criteria)
		return db.scalar(stmt) or 0

	# ----- Create -----
	def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
		"""Create a new record from a Pydantic schema or dict."""
		obj_in_data: Dict[str, Any] = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		db_obj = self.model(**obj_in_data)  # type: ignore[arg-type]
		return self.save(db, db_obj)

	# ----- Update -----
	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Update a record with fields from a Pydantic schema or dict.

		Fields not set on the schema are left unchanged.
		"""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

		for field, value in update_data.items():
			if hasattr(db_obj, field):
				setattr(db_obj, field, value)

		return self.save(db, db_obj)

	def save(self, db: Session, db_obj: ModelType) -> ModelType:
		"""Add, commit and refresh a (new or modified) record."""
		try:
			db.add(db_obj)
			db.commit()
			db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj

	# ----- Delete -----
	def remove(self, db: Session, db_obj: ModelType) -> None:
		"""Delete an already loaded record."""
		try:
			db.delete(db_obj)
			db.commit()
		except Exception:
			db.rollback()
			raise


class CRUDNamed(CRUDBase[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""CRUD helper for models with a unique ``name`` column (tags, categories)."""

	def get_by_name_insensitive(
		self, db: Session, name: str, *, exclude_id: Optional[int] = None
	) -> Optional[ModelType]:
		stmt = select(self.model).where(func.lower(self.model.name) == name.strip().lower())
		if exclude_id is not None:
			stmt = stmt.where(self.model.id != exclude_id)
		return db.scalars(stmt.limit(1)).first()

	def _search_criteria(self, search: Optional[str]) -> list:
		if not search:
			return []
		return [self.model.name.ilike(f"%{search.strip()}%")]

	def search(
		self,
		db: Session,
		*,
		search: Optional[str] = None,
		skip: int = 0,
		limit: int = 10,
	) -> List[ModelType]:
		"""Name-ascending page of records whose name contains ``search``."""
		stmt = (
			select(self.model)
			.where(*self._search_criteria(search))
			.order_by(self.model.name.asc())
			.offset(skip)
			.limit(limit)
		)
		return list(db.scalars(stmt).all())

	def count_search(self, db: Session, *, search: Optional[str] = None) -> int:
		return self.count(db, *self._search_criteria(search))
