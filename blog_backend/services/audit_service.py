"""Audit recorder: append-only trail of who did what to which entity."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from blog_backend.crud.audit_log import CRUDAuditLog
from blog_backend.models.audit_log import AuditLog, EntityType
from blog_backend.utils.pagination import normalize_page_params, page_offset

logger = logging.getLogger(__name__)


class AuditAction:
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    DELETE_MANY = "DELETE_MANY"
    REGISTER = "REGISTER"
    LOGIN = "LOGIN"


class AuditService:
    """
    Records audit entries for state-changing and state-reading operations.

    Writing is best effort: a failure is logged and swallowed so the primary
    operation, which has already committed, is unaffected.
    """

    def __init__(self, gateway: Optional[CRUDAuditLog] = None):
        self.logs = gateway or CRUDAuditLog(AuditLog)

    def log(
        self,
        db: Session,
        actor_id: int,
        action: str,
        entity_type: Optional[EntityType] = None,
        entity_id: Optional[int] = None,
    ) -> None:
        try:
            self.logs.append(
                db,
                user_id=actor_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
            )
        except Exception:
            logger.exception(
                f"Audit logging failed: user_id={actor_id}, action={action}, "
                f"entity_type={entity_type}, entity_id={entity_id}"
            )

    def get_user_logs(
        self,
        db: Session,
        user_id: int,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[AuditLog], int]:
        """Newest-first audit entries recorded for an actor."""
        page, page_size = normalize_page_params(page, page_size)
        return self.logs.list_for_user(
            db, user_id=user_id, skip=page_offset(page, page_size), limit=page_size
        )

    def get_entity_logs(
        self,
        db: Session,
        entity_type: EntityType,
        entity_id: int,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[AuditLog], int]:
        """Newest-first audit entries recorded against one entity."""
        page, page_size = normalize_page_params(page, page_size)
        return self.logs.list_for_entity(
            db,
            entity_type=entity_type,
            entity_id=entity_id,
            skip=page_offset(page, page_size),
            limit=page_size,
        )
