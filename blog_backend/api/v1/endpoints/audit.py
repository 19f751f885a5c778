"""Audit log endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_services, require_admin
from blog_backend.core.permissions import ensure_can_mutate
from blog_backend.models.audit_log import EntityType
from blog_backend.models.user import User
from blog_backend.schemas.audit_log import AuditLogResponse
from blog_backend.schemas.common import Page
from blog_backend.services import Services
from blog_backend.utils.pagination import normalize_page_params

router = APIRouter(
    prefix="/audit",
    tags=["Audit"],
)


@router.get(
    "/users/{user_id}",
    response_model=Page[AuditLogResponse],
    summary="Audit logs of a user",
    description="**Access:** The user themselves or an admin",
)
def get_user_logs(
    user_id: int,
    page: int = Query(1),
    page_size: int = Query(10),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[AuditLogResponse]:
    ensure_can_mutate(current_user, user_id, "You can only view your own audit trail")
    services.users.get(db, user_id)
    page, page_size = normalize_page_params(page, page_size)
    logs, total = services.audit.get_user_logs(db, user_id, page, page_size)
    return Page[AuditLogResponse].build(
        [AuditLogResponse.model_validate(entry) for entry in logs],
        page=page,
        page_size=page_size,
        total=total,
    )


@router.get(
    "/{entity_type}/{entity_id}",
    response_model=Page[AuditLogResponse],
    summary="Audit logs of an entity",
    description="**Access:** Admin only",
)
def get_entity_logs(
    entity_type: EntityType,
    entity_id: int,
    page: int = Query(1),
    page_size: int = Query(10),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[AuditLogResponse]:
    page, page_size = normalize_page_params(page, page_size)
    logs, total = services.audit.get_entity_logs(db, entity_type, entity_id, page, page_size)
    return Page[AuditLogResponse].build(
        [AuditLogResponse.model_validate(entry) for entry in logs],
        page=page,
        page_size=page_size,
        total=total,
    )
