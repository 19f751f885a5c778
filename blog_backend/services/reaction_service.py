"""Reaction toggle state machine.

Per (actor, entity) the state is either no reaction or one reaction kind:

- none -> kind: insert, audit CREATE
- kind -> none (same kind again): delete, audit DELETE
- kind_a -> kind_b: update in place, audit UPDATE
"""

import logging
from typing import Dict, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_backend.core.exceptions import ConflictError, NotFoundError
from blog_backend.crud.comment import CRUDComment
from blog_backend.crud.post import CRUDPost
from blog_backend.crud.reaction import CRUDReaction
from blog_backend.models.audit_log import EntityType
from blog_backend.models.comment import Comment
from blog_backend.models.post import Post
from blog_backend.models.reaction import Reaction, ReactionType
from blog_backend.models.user import User
from blog_backend.schemas.reaction import CommentTarget, PostTarget
from blog_backend.services.audit_service import AuditAction, AuditService

logger = logging.getLogger(__name__)

Target = Union[PostTarget, CommentTarget]


class ReactionService:
    def __init__(self, audit: AuditService):
        self.audit = audit
        self.reactions = CRUDReaction(Reaction)
        self.posts = CRUDPost(Post)
        self.comments = CRUDComment(Comment)

    def _require_target(self, db: Session, target: Target) -> None:
        entity_type, entity_id = target.as_key()
        gateway = self.posts if entity_type == EntityType.POST else self.comments
        if gateway.get(db, entity_id) is None:
            raise NotFoundError(f"{entity_type.value} not found")

    def toggle(self, db: Session, actor: User, target: Target, kind: ReactionType) -> Optional[Reaction]:
        """Apply one toggle and return the resulting reaction (None when removed).

        Raises:
            NotFoundError: If the target post or comment does not exist
            ConflictError: If a concurrent toggle inserted the same row first
        """
        self._require_target(db, target)
        entity_type, entity_id = target.as_key()

        existing = self.reactions.get_for_target(
            db, user_id=actor.id, entity_type=entity_type, entity_id=entity_id, for_update=True
        )

        if existing is None:
            try:
                reaction = self.reactions.create(
                    db,
                    obj_in={
                        "user_id": actor.id,
                        "entity_type": entity_type,
                        "entity_id": entity_id,
                        "reaction": kind,
                    },
                )
            except IntegrityError as e:
                logger.warning(
                    f"Concurrent reaction toggle: user_id={actor.id}, "
                    f"entity={entity_type.value}:{entity_id}"
                )
                raise ConflictError("Reaction changed concurrently, please retry") from e
            self.audit.log(db, actor.id, AuditAction.CREATE, EntityType.REACTION, reaction.id)
            return reaction

        if existing.reaction == kind:
            reaction_id = existing.id
            self.reactions.remove(db, existing)
            self.audit.log(db, actor.id, AuditAction.DELETE, EntityType.REACTION, reaction_id)
            return None

        reaction = self.reactions.update(db, db_obj=existing, obj_in={"reaction": kind})
        self.audit.log(db, actor.id, AuditAction.UPDATE, EntityType.REACTION, reaction.id)
        return reaction

    def summary(self, db: Session, target: Target) -> Dict[ReactionType, int]:
        """Reaction counts per kind on a target."""
        self._require_target(db, target)
        entity_type, entity_id = target.as_key()
        return self.reactions.count_by_kind(db, entity_type=entity_type, entity_id=entity_id)

    def get_user_reaction(self, db: Session, actor: User, target: Target) -> Optional[Reaction]:
        entity_type, entity_id = target.as_key()
        return self.reactions.get_for_target(
            db, user_id=actor.id, entity_type=entity_type, entity_id=entity_id
        )
