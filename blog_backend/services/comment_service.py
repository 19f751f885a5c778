"""Comment business rules: post/parent existence, one reply level, ownership."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from blog_backend.core.exceptions import NotFoundError, ValidationError
from blog_backend.core.permissions import ensure_can_mutate
from blog_backend.crud.comment import CRUDComment
from blog_backend.crud.post import CRUDPost
from blog_backend.crud.reaction import CRUDReaction
from blog_backend.models.audit_log import EntityType
from blog_backend.models.comment import Comment
from blog_backend.models.post import Post
from blog_backend.models.reaction import Reaction
from blog_backend.models.user import User
from blog_backend.schemas.comment import CommentCreate, CommentUpdate
from blog_backend.services.audit_service import AuditAction, AuditService
from blog_backend.utils.pagination import normalize_page_params, page_offset

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, audit: AuditService):
        self.audit = audit
        self.comments = CRUDComment(Comment)
        self.posts = CRUDPost(Post)
        self.reactions = CRUDReaction(Reaction)

    def _require_post(self, db: Session, post_id: int) -> Post:
        post = self.posts.get(db, post_id)
        if not post:
            raise NotFoundError("Post not found")
        return post

    def _load(self, db: Session, comment_id: int) -> Comment:
        comment = self.comments.get(db, comment_id)
        if not comment:
            raise NotFoundError("Comment not found")
        return comment

    def list(
        self,
        db: Session,
        *,
        post_id: int,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[Comment], int]:
        """Top-level comments of a post, newest first, each carrying its replies."""
        page, page_size = normalize_page_params(page, page_size)
        self._require_post(db, post_id)
        comments = self.comments.get_top_level(
            db, post_id=post_id, skip=page_offset(page, page_size), limit=page_size
        )
        return comments, self.comments.count_top_level(db, post_id=post_id)

    def get(self, db: Session, comment_id: int, actor: Optional[User] = None) -> Comment:
        comment = self._load(db, comment_id)
        if actor is not None:
            self.audit.log(db, actor.id, AuditAction.READ, EntityType.COMMENT, comment.id)
        return comment

    def create(self, db: Session, actor: User, comment_in: CommentCreate) -> Comment:
        """Create a comment or a reply.

        Raises:
            NotFoundError: If the post or the parent comment does not exist, or
                the parent belongs to another post
            ValidationError: If the parent is itself a reply
        """
        self._require_post(db, comment_in.post_id)

        if comment_in.parent_id is not None:
            parent = self.comments.get(db, comment_in.parent_id)
            if not parent or parent.post_id != comment_in.post_id:
                raise NotFoundError("Parent comment not found")
            if parent.parent_id is not None:
                raise ValidationError("Replies can only be one level deep")

        comment = self.comments.create_comment(db, user_id=actor.id, comment_in=comment_in)
        logger.info(f"Comment created: id={comment.id}, post_id={comment.post_id}, user_id={actor.id}")
        self.audit.log(db, actor.id, AuditAction.CREATE, EntityType.COMMENT, comment.id)
        return comment

    def update(self, db: Session, comment_id: int, actor: User, comment_in: CommentUpdate) -> Comment:
        comment = self._load(db, comment_id)
        ensure_can_mutate(actor, comment.user_id, "You can only update your own comments")
        comment = self.comments.update(db, db_obj=comment, obj_in=comment_in)
        self.audit.log(db, actor.id, AuditAction.UPDATE, EntityType.COMMENT, comment_id)
        return comment

    def delete(self, db: Session, comment_id: int, actor: User) -> None:
        comment = self._load(db, comment_id)
        ensure_can_mutate(actor, comment.user_id, "You can only delete your own comments")
        for reply in comment.replies:
            self.reactions.delete_for_target(db, entity_type=EntityType.COMMENT, entity_id=reply.id)
        self.reactions.delete_for_target(db, entity_type=EntityType.COMMENT, entity_id=comment_id)
        self.comments.remove(db, comment)
        logger.info(f"Comment deleted: id={comment_id}, by={actor.id}")
        self.audit.log(db, actor.id, AuditAction.DELETE, EntityType.COMMENT, comment_id)
