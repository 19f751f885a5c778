"""Post business rules: visibility gate, ownership and taxonomy links."""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from blog_backend.core.exceptions import ForbiddenError, NotFoundError
from blog_backend.core.permissions import ensure_can_mutate
from blog_backend.crud.base import CRUDBase
from blog_backend.crud.category import CRUDCategory
from blog_backend.crud.post import CRUDPost
from blog_backend.crud.reaction import CRUDReaction
from blog_backend.crud.tag import CRUDTag
from blog_backend.database import utcnow
from blog_backend.models.audit_log import EntityType
from blog_backend.models.category import Category
from blog_backend.models.post import Post, PostStatus
from blog_backend.models.reaction import Reaction
from blog_backend.models.tag import Tag
from blog_backend.models.user import User
from blog_backend.schemas.post import PostCreate, PostFilter, PostUpdate
from blog_backend.services.audit_service import AuditAction, AuditService
from blog_backend.utils.pagination import normalize_page_params, page_offset

logger = logging.getLogger(__name__)


def is_embargoed(post: Post, now=None) -> bool:
    """A published post with a future ``publish_at`` is hidden from readers."""
    now = now or utcnow()
    return (
        post.status == PostStatus.PUBLISHED
        and post.publish_at is not None
        and post.publish_at > now
    )


def resolve_ids(db: Session, gateway: CRUDBase, ids: Sequence[int], label: str) -> list:
    """Load every referenced row or fail naming the missing ids."""
    found = gateway.get_many_by_ids(db, ids)
    missing = sorted(set(ids) - {row.id for row in found})
    if missing:
        raise NotFoundError(f"{label} not found: {', '.join(str(i) for i in missing)}")
    return found


class PostService:
    def __init__(self, audit: AuditService):
        self.audit = audit
        self.posts = CRUDPost(Post)
        self.tags = CRUDTag(Tag)
        self.categories = CRUDCategory(Category)
        self.reactions = CRUDReaction(Reaction)

    def list(
        self,
        db: Session,
        *,
        filters: Optional[PostFilter] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[Post], int]:
        page, page_size = normalize_page_params(page, page_size)
        return self.posts.list_posts(
            db,
            filters=filters or PostFilter(),
            now=utcnow(),
            skip=page_offset(page, page_size),
            limit=page_size,
        )

    def _load(self, db: Session, post_id: int) -> Post:
        post = self.posts.get(db, post_id)
        if not post:
            raise NotFoundError("Post not found")
        return post

    def get(self, db: Session, post_id: int, actor: Optional[User] = None) -> Post:
        """Fetch a readable post.

        Raises:
            NotFoundError: If the post does not exist
            ForbiddenError: If the post is published with a future ``publish_at``
        """
        post = self._load(db, post_id)
        if is_embargoed(post):
            raise ForbiddenError("This post is not yet published")
        if actor is not None:
            self.audit.log(db, actor.id, AuditAction.READ, EntityType.POST, post.id)
        return post

    def create(self, db: Session, actor: User, post_in: PostCreate) -> Post:
        tags = resolve_ids(db, self.tags, post_in.tags, "Tags")
        categories = resolve_ids(db, self.categories, post_in.categories, "Categories")
        post = self.posts.create_post(
            db, user_id=actor.id, post_in=post_in, tags=tags, categories=categories
        )
        logger.info(f"Post created: id={post.id}, user_id={actor.id}")
        self.audit.log(db, actor.id, AuditAction.CREATE, EntityType.POST, post.id)
        return post

    def update(self, db: Session, post_id: int, actor: User, post_in: PostUpdate) -> Post:
        post = self._load(db, post_id)
        ensure_can_mutate(actor, post.user_id, "You are not authorized to update this post")

        tags = resolve_ids(db, self.tags, post_in.tags, "Tags") if post_in.tags is not None else None
        categories = (
            resolve_ids(db, self.categories, post_in.categories, "Categories")
            if post_in.categories is not None
            else None
        )
        post = self.posts.update_post(db, db_obj=post, post_in=post_in, tags=tags, categories=categories)
        logger.info(f"Post updated: id={post.id}, by={actor.id}")
        self.audit.log(db, actor.id, AuditAction.UPDATE, EntityType.POST, post.id)
        return post

    def delete(self, db: Session, post_id: int, actor: User) -> None:
        post = self._load(db, post_id)
        ensure_can_mutate(actor, post.user_id, "Not authorized to delete this post")

        comment_ids = [comment.id for comment in post.comments]
        self.reactions.delete_for_target(db, entity_type=EntityType.POST, entity_id=post_id)
        for comment_id in comment_ids:
            self.reactions.delete_for_target(db, entity_type=EntityType.COMMENT, entity_id=comment_id)
        self.posts.remove(db, post)
        logger.info(f"Post deleted: id={post_id}, by={actor.id}")
        self.audit.log(db, actor.id, AuditAction.DELETE, EntityType.POST, post_id)
