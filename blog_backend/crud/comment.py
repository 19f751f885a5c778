"""CRUD operations for Comment."""

from typing import List

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from blog_backend.crud.base import CRUDBase
from blog_backend.models.comment import Comment
from blog_backend.schemas.comment import CommentCreate, CommentUpdate


class CRUDComment(CRUDBase[Comment, CommentCreate, CommentUpdate]):
    """CRUD operations for Comment."""

    def get_top_level(
        self,
        db: Session,
        *,
        post_id: int,
        skip: int = 0,
        limit: int = 10
    ) -> List[Comment]:
        """Newest-first top-level comments of a post; replies load via relationship."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id, Comment.parent_id.is_(None))
            .order_by(desc(Comment.created_at), desc(Comment.id))
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def count_top_level(self, db: Session, *, post_id: int) -> int:
        return self.count(db, Comment.post_id == post_id, Comment.parent_id.is_(None))

    def create_comment(
        self,
        db: Session,
        *,
        user_id: int,
        comment_in: CommentCreate
    ) -> Comment:
        comment = Comment(
            user_id=user_id,
            post_id=comment_in.post_id,
            parent_id=comment_in.parent_id,
            content=comment_in.content,
        )
        return self.save(db, comment)
