"""Tag endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_services
from blog_backend.models.user import User
from blog_backend.schemas.common import Page
from blog_backend.schemas.tag import TagCreate, TagResponse, TagUpdate
from blog_backend.services import Services
from blog_backend.utils.pagination import normalize_page_params

router = APIRouter(
    prefix="/tags",
    tags=["Tags"],
)


@router.get(
    "",
    response_model=Page[TagResponse],
    status_code=status.HTTP_200_OK,
    summary="List tags",
)
def list_tags(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    page: int = Query(1),
    page_size: int = Query(10),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[TagResponse]:
    """Tags sorted by name, each with the number of posts using it."""
    page, page_size = normalize_page_params(page, page_size)
    tags, total = services.tags.list(db, search=search, page=page, page_size=page_size)
    return Page[TagResponse].build(
        [TagResponse.model_validate(t) for t in tags], page=page, page_size=page_size, total=total
    )


@router.get("/{tag_id}", response_model=TagResponse, summary="Get tag")
def get_tag(
    tag_id: int,
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> TagResponse:
    return TagResponse.model_validate(services.tags.get(db, tag_id))


@router.post(
    "",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create tag",
    description="**Access:** Admin only. Names are unique ignoring case.",
)
def create_tag(
    tag_in: TagCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> TagResponse:
    return TagResponse.model_validate(services.tags.create(db, current_user, tag_in))


@router.put(
    "/{tag_id}",
    response_model=TagResponse,
    summary="Update tag",
    description="**Access:** Admin only",
)
def update_tag(
    tag_id: int,
    tag_in: TagUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> TagResponse:
    return TagResponse.model_validate(services.tags.update(db, tag_id, current_user, tag_in))


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete tag",
    description="**Access:** Admin only",
)
def delete_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Response:
    services.tags.delete(db, tag_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
