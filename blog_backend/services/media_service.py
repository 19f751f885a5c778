"""Media attached to posts. Ownership follows the owning post."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from blog_backend.core.exceptions import NotFoundError
from blog_backend.core.permissions import ensure_can_mutate
from blog_backend.crud.media import CRUDMedia
from blog_backend.crud.post import CRUDPost
from blog_backend.models.audit_log import EntityType
from blog_backend.models.media import Media, MediaType
from blog_backend.models.post import Post
from blog_backend.models.user import User
from blog_backend.schemas.media import MediaBulkCreate, MediaCreate, MediaUpdate
from blog_backend.services.audit_service import AuditAction, AuditService
from blog_backend.utils.pagination import normalize_page_params, page_offset

logger = logging.getLogger(__name__)


class MediaService:
    def __init__(self, audit: AuditService):
        self.audit = audit
        self.media = CRUDMedia(Media)
        self.posts = CRUDPost(Post)

    def _require_owned_post(self, db: Session, post_id: int, actor: User) -> Post:
        post = self.posts.get(db, post_id)
        if not post:
            raise NotFoundError("Post not found")
        ensure_can_mutate(actor, post.user_id, "You can only manage media of your own posts")
        return post

    def _load(self, db: Session, media_id: int) -> Media:
        media = self.media.get(db, media_id)
        if not media:
            raise NotFoundError("Media not found")
        return media

    def create(self, db: Session, actor: User, media_in: MediaCreate) -> Media:
        self._require_owned_post(db, media_in.post_id, actor)
        media = self.media.create(db, obj_in=media_in)
        logger.info(f"Media created: id={media.id}, post_id={media.post_id}")
        self.audit.log(db, actor.id, AuditAction.CREATE, EntityType.MEDIA, media.id)
        return media

    def bulk_create(self, db: Session, actor: User, bulk_in: MediaBulkCreate) -> List[Media]:
        self._require_owned_post(db, bulk_in.post_id, actor)
        media = self.media.bulk_create(db, post_id=bulk_in.post_id, items=bulk_in.media)
        media_ids = [item.id for item in media]
        logger.info(f"Media bulk created: post_id={bulk_in.post_id}, count={len(media_ids)}")
        for media_id in media_ids:
            self.audit.log(db, actor.id, AuditAction.CREATE, EntityType.MEDIA, media_id)
        return media

    def list(
        self,
        db: Session,
        actor: User,
        *,
        post_id: Optional[int] = None,
        media_type: Optional[MediaType] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[Media], int]:
        page, page_size = normalize_page_params(page, page_size)
        media, total = self.media.list_media(
            db,
            post_id=post_id,
            media_type=media_type,
            skip=page_offset(page, page_size),
            limit=page_size,
        )
        for media_id in [item.id for item in media]:
            self.audit.log(db, actor.id, AuditAction.READ, EntityType.MEDIA, media_id)
        return media, total

    def find_by_post(self, db: Session, post_id: int) -> List[Media]:
        post = self.posts.get(db, post_id)
        if not post:
            raise NotFoundError("Post not found")
        return list(post.media)

    def get(self, db: Session, media_id: int, actor: User) -> Media:
        media = self._load(db, media_id)
        self.audit.log(db, actor.id, AuditAction.READ, EntityType.MEDIA, media.id)
        return media

    def update(self, db: Session, media_id: int, actor: User, media_in: MediaUpdate) -> Media:
        media = self._load(db, media_id)
        self._require_owned_post(db, media.post_id, actor)
        data = {k: v for k, v in media_in.model_dump(exclude_unset=True).items() if v is not None}
        media = self.media.update(db, db_obj=media, obj_in=data)
        self.audit.log(db, actor.id, AuditAction.UPDATE, EntityType.MEDIA, media.id)
        return media

    def delete(self, db: Session, media_id: int, actor: User) -> None:
        media = self._load(db, media_id)
        self._require_owned_post(db, media.post_id, actor)
        self.media.remove(db, media)
        self.audit.log(db, actor.id, AuditAction.DELETE, EntityType.MEDIA, media_id)

    def delete_by_post(self, db: Session, post_id: int, actor: User) -> int:
        self._require_owned_post(db, post_id, actor)
        removed = self.media.delete_by_post(db, post_id=post_id)
        logger.info(f"Media deleted for post: post_id={post_id}, count={removed}")
        self.audit.log(db, actor.id, AuditAction.DELETE_MANY, EntityType.MEDIA, post_id)
        return removed
