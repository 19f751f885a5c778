"""CRUD operations for Category."""

from blog_backend.crud.base import CRUDNamed
from blog_backend.models.category import Category
from blog_backend.schemas.category import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDNamed[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""
