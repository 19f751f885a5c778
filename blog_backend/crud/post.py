"""CRUD operations for Post."""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session

from blog_backend.crud.base import CRUDBase
from blog_backend.models.category import Category
from blog_backend.models.post import Post, PostStatus
from blog_backend.models.tag import Tag
from blog_backend.schemas.post import PostCreate, PostFilter, PostUpdate


def visible_at(now: datetime):
    """Criterion hiding published posts whose publish_at is still in the future."""
    return or_(
        Post.status != PostStatus.PUBLISHED,
        Post.publish_at.is_(None),
        Post.publish_at <= now,
    )


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    def _filter_criteria(self, filters: PostFilter, now: datetime) -> list:
        criteria = [visible_at(now)]
        if filters.status is not None:
            criteria.append(Post.status == filters.status)
        if filters.user_id is not None:
            criteria.append(Post.user_id == filters.user_id)
        if filters.tag_id is not None:
            criteria.append(Post.tags.any(Tag.id == filters.tag_id))
        if filters.category_id is not None:
            criteria.append(Post.categories.any(Category.id == filters.category_id))
        if filters.search:
            criteria.append(Post.title.ilike(f"%{filters.search.strip()}%"))
        return criteria

    def list_posts(
        self,
        db: Session,
        *,
        filters: PostFilter,
        now: datetime,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Post], int]:
        """Newest-first page of visible posts plus the total match count."""
        criteria = self._filter_criteria(filters, now)
        stmt = (
            select(Post)
            .where(*criteria)
            .order_by(desc(Post.created_at), desc(Post.id))
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all()), self.count(db, *criteria)

    def create_post(
        self,
        db: Session,
        *,
        user_id: int,
        post_in: PostCreate,
        tags: Sequence[Tag] = (),
        categories: Sequence[Category] = (),
    ) -> Post:
        """Create a new post linked to already loaded tags and categories."""
        post = Post(
            user_id=user_id,
            title=post_in.title,
            content=post_in.content,
            status=post_in.status,
            publish_at=post_in.publish_at,
        )
        post.tags = list(tags)
        post.categories = list(categories)
        return self.save(db, post)

    def update_post(
        self,
        db: Session,
        *,
        db_obj: Post,
        post_in: PostUpdate,
        tags: Optional[Sequence[Tag]] = None,
        categories: Optional[Sequence[Category]] = None,
    ) -> Post:
        """Apply a partial update; ``tags``/``categories`` replace links when given."""
        fields = post_in.model_dump(exclude_unset=True, exclude={"tags", "categories"})
        for field, value in fields.items():
            if value is None and field != "publish_at":
                continue  # title, content and status are not nullable
            setattr(db_obj, field, value)
        if tags is not None:
            db_obj.tags = list(tags)
        if categories is not None:
            db_obj.categories = list(categories)
        return self.save(db, db_obj)
