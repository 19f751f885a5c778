"""CRUD operations for Reaction."""

from typing import Dict, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from blog_backend.crud.base import CRUDBase
from blog_backend.models.audit_log import EntityType
from blog_backend.models.reaction import Reaction, ReactionType


class CRUDReaction(CRUDBase[Reaction, dict, dict]):
    """CRUD operations for Reaction."""

    def get_for_target(
        self,
        db: Session,
        *,
        user_id: int,
        entity_type: EntityType,
        entity_id: int,
        for_update: bool = False,
    ) -> Optional[Reaction]:
        """Get the user's reaction on an entity, optionally row-locked."""
        stmt = select(Reaction).where(
            Reaction.user_id == user_id,
            Reaction.entity_type == entity_type,
            Reaction.entity_id == entity_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return db.scalars(stmt).first()

    def count_by_kind(
        self,
        db: Session,
        *,
        entity_type: EntityType,
        entity_id: int
    ) -> Dict[ReactionType, int]:
        stmt = (
            select(Reaction.reaction, func.count(Reaction.id))
            .where(Reaction.entity_type == entity_type, Reaction.entity_id == entity_id)
            .group_by(Reaction.reaction)
        )
        return {kind: count for kind, count in db.execute(stmt).all()}

    def delete_for_target(self, db: Session, *, entity_type: EntityType, entity_id: int) -> None:
        """Queue removal of every reaction on an entity; the caller commits."""
        db.execute(
            delete(Reaction).where(
                Reaction.entity_type == entity_type,
                Reaction.entity_id == entity_id,
            )
        )
