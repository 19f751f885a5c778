"""CRUD operations for Tag."""

from blog_backend.crud.base import CRUDNamed
from blog_backend.models.tag import Tag
from blog_backend.schemas.tag import TagCreate, TagUpdate


class CRUDTag(CRUDNamed[Tag, TagCreate, TagUpdate]):
    """CRUD operations for Tag."""
