"""CRUD operations for AuditLog (append and read only)."""

from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from blog_backend.crud.base import CRUDBase
from blog_backend.models.audit_log import AuditLog, EntityType


class CRUDAuditLog(CRUDBase[AuditLog, dict, dict]):

    def append(
        self,
        db: Session,
        *,
        user_id: int,
        action: str,
        entity_type: Optional[EntityType] = None,
        entity_id: Optional[int] = None,
    ) -> AuditLog:
        entry = AuditLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
        )
        try:
            db.add(entry)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return entry

    def _page(self, db: Session, criteria: list, skip: int, limit: int) -> Tuple[List[AuditLog], int]:
        stmt = (
            select(AuditLog)
            .where(*criteria)
            .order_by(desc(AuditLog.timestamp), desc(AuditLog.id))
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all()), self.count(db, *criteria)

    def list_for_user(self, db: Session, *, user_id: int, skip: int = 0, limit: int = 10) -> Tuple[List[AuditLog], int]:
        return self._page(db, [AuditLog.user_id == user_id], skip, limit)

    def list_for_entity(
        self,
        db: Session,
        *,
        entity_type: EntityType,
        entity_id: int,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[AuditLog], int]:
        return self._page(
            db,
            [AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id],
            skip,
            limit,
        )
