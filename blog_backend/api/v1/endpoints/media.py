"""Media endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_services
from blog_backend.models.media import MediaType
from blog_backend.models.user import User
from blog_backend.schemas.common import Page
from blog_backend.schemas.media import MediaBulkCreate, MediaCreate, MediaResponse, MediaUpdate
from blog_backend.services import Services
from blog_backend.utils.pagination import normalize_page_params

router = APIRouter(
    prefix="/media",
    tags=["Media"],
)


@router.get(
    "",
    response_model=Page[MediaResponse],
    summary="List media",
)
def list_media(
    post_id: Optional[int] = Query(None),
    media_type: Optional[MediaType] = Query(None, alias="type"),
    page: int = Query(1),
    page_size: int = Query(10),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[MediaResponse]:
    page, page_size = normalize_page_params(page, page_size)
    media, total = services.media.list(
        db, current_user, post_id=post_id, media_type=media_type, page=page, page_size=page_size
    )
    return Page[MediaResponse].build(
        [MediaResponse.model_validate(m) for m in media], page=page, page_size=page_size, total=total
    )


@router.get("/post/{post_id}", response_model=List[MediaResponse], summary="Media of a post")
def list_post_media(
    post_id: int,
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> List[MediaResponse]:
    return [MediaResponse.model_validate(m) for m in services.media.find_by_post(db, post_id)]


@router.get("/{media_id}", response_model=MediaResponse, summary="Get media")
def get_media(
    media_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> MediaResponse:
    return MediaResponse.model_validate(services.media.get(db, media_id, current_user))


@router.post(
    "",
    response_model=MediaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach media to a post",
    description="**Access:** Post author or admin",
)
def create_media(
    media_in: MediaCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> MediaResponse:
    return MediaResponse.model_validate(services.media.create(db, current_user, media_in))


@router.post(
    "/bulk",
    response_model=List[MediaResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Attach several media to a post",
    description="**Access:** Post author or admin",
)
def bulk_create_media(
    bulk_in: MediaBulkCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> List[MediaResponse]:
    media = services.media.bulk_create(db, current_user, bulk_in)
    return [MediaResponse.model_validate(m) for m in media]


@router.patch(
    "/{media_id}",
    response_model=MediaResponse,
    summary="Update media",
    description="**Access:** Post author or admin",
)
def update_media(
    media_id: int,
    media_in: MediaUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> MediaResponse:
    return MediaResponse.model_validate(services.media.update(db, media_id, current_user, media_in))


@router.delete(
    "/post/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete all media of a post",
)
def delete_post_media(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Response:
    services.media.delete_by_post(db, post_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{media_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete media",
)
def delete_media(
    media_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Response:
    services.media.delete(db, media_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
