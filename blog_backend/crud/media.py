"""CRUD operations for Media."""

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from blog_backend.crud.base import CRUDBase
from blog_backend.models.media import Media, MediaType
from blog_backend.schemas.media import MediaCreate, MediaItem, MediaUpdate


class CRUDMedia(CRUDBase[Media, MediaCreate, MediaUpdate]):
    """CRUD operations for Media."""

    def _criteria(self, post_id: Optional[int], media_type: Optional[MediaType]) -> list:
        criteria = []
        if post_id is not None:
            criteria.append(Media.post_id == post_id)
        if media_type is not None:
            criteria.append(Media.type == media_type)
        return criteria

    def list_media(
        self,
        db: Session,
        *,
        post_id: Optional[int] = None,
        media_type: Optional[MediaType] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Media], int]:
        criteria = self._criteria(post_id, media_type)
        stmt = select(Media).where(*criteria).order_by(Media.id).offset(skip).limit(limit)
        return list(db.scalars(stmt).all()), self.count(db, *criteria)

    def bulk_create(self, db: Session, *, post_id: int, items: Sequence[MediaItem]) -> List[Media]:
        """Insert all items in a single transaction."""
        media = [Media(post_id=post_id, file_url=item.file_url, type=item.type) for item in items]
        try:
            db.add_all(media)
            db.commit()
            for item in media:
                db.refresh(item)
        except Exception:
            db.rollback()
            raise
        return media

    def delete_by_post(self, db: Session, *, post_id: int) -> int:
        """Delete every media item of a post, returning how many were removed."""
        media = list(db.scalars(select(Media).where(Media.post_id == post_id)).all())
        try:
            for item in media:
                db.delete(item)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return len(media)
