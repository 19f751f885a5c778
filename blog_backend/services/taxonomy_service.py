"""Tag and category management. Both are admin-only and unique by name."""

import logging
from typing import Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_backend.core.exceptions import ConflictError, NotFoundError
from blog_backend.core.permissions import ensure_can_manage_taxonomy
from blog_backend.crud.base import CRUDNamed
from blog_backend.crud.category import CRUDCategory
from blog_backend.crud.tag import CRUDTag
from blog_backend.models.audit_log import EntityType
from blog_backend.models.category import Category
from blog_backend.models.tag import Tag
from blog_backend.models.user import User
from blog_backend.services.audit_service import AuditAction, AuditService
from blog_backend.utils.pagination import normalize_page_params, page_offset

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", Tag, Category)


class TaxonomyService(Generic[ModelType]):
    """Shared rules for named, ownerless entities."""

    entity_type: EntityType
    label: str

    def __init__(self, audit: AuditService, gateway: CRUDNamed):
        self.audit = audit
        self.gateway = gateway

    def list(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[ModelType], int]:
        page, page_size = normalize_page_params(page, page_size)
        items = self.gateway.search(db, search=search, skip=page_offset(page, page_size), limit=page_size)
        return items, self.gateway.count_search(db, search=search)

    def get(self, db: Session, item_id: int) -> ModelType:
        item = self.gateway.get(db, item_id)
        if not item:
            raise NotFoundError(f"{self.label} not found")
        return item

    def _ensure_unique(self, db: Session, name: str, exclude_id: Optional[int] = None) -> None:
        if self.gateway.get_by_name_insensitive(db, name, exclude_id=exclude_id):
            raise ConflictError(f"{self.label} name already exists")

    def create(self, db: Session, actor: User, item_in: BaseModel) -> ModelType:
        ensure_can_manage_taxonomy(actor)
        self._ensure_unique(db, item_in.name)
        try:
            item = self.gateway.create(db, obj_in=item_in)
        except IntegrityError as e:
            raise ConflictError(f"{self.label} name already exists") from e
        logger.info(f"{self.label} created: id={item.id}, name={item.name}")
        self.audit.log(db, actor.id, AuditAction.CREATE, self.entity_type, item.id)
        return item

    def update(self, db: Session, item_id: int, actor: User, item_in: BaseModel) -> ModelType:
        ensure_can_manage_taxonomy(actor)
        item = self.get(db, item_id)
        data = item_in.model_dump(exclude_unset=True)
        if data.get("name") is None:
            data.pop("name", None)
        elif data["name"].lower() != item.name.lower():
            self._ensure_unique(db, data["name"], exclude_id=item.id)
        try:
            item = self.gateway.update(db, db_obj=item, obj_in=data)
        except IntegrityError as e:
            raise ConflictError(f"{self.label} name already exists") from e
        logger.info(f"{self.label} updated: id={item.id}")
        self.audit.log(db, actor.id, AuditAction.UPDATE, self.entity_type, item.id)
        return item

    def delete(self, db: Session, item_id: int, actor: User) -> None:
        ensure_can_manage_taxonomy(actor)
        item = self.get(db, item_id)
        self.gateway.remove(db, item)
        logger.info(f"{self.label} deleted: id={item_id}")
        self.audit.log(db, actor.id, AuditAction.DELETE, self.entity_type, item_id)


class TagService(TaxonomyService[Tag]):
    entity_type = EntityType.TAG
    label = "Tag"

    def __init__(self, audit: AuditService):
        super().__init__(audit, CRUDTag(Tag))


class CategoryService(TaxonomyService[Category]):
    entity_type = EntityType.CATEGORY
    label = "Category"

    def __init__(self, audit: AuditService):
        super().__init__(audit, CRUDCategory(Category))
