"""Comment endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_optional_current_user, get_services
from blog_backend.models.user import User
from blog_backend.schemas.comment import (
    CommentCreate,
    CommentDetailResponse,
    CommentResponse,
    CommentUpdate,
)
from blog_backend.schemas.common import Page
from blog_backend.services import Services
from blog_backend.utils.pagination import normalize_page_params

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
)


@router.get(
    "",
    response_model=Page[CommentDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List comments of a post",
    description="""
    Top-level comments of a post, newest first, each with its replies.

    **Access:** Public
    """,
)
def list_comments(
    post_id: int = Query(..., description="Post whose comments are listed"),
    page: int = Query(1),
    page_size: int = Query(10),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[CommentDetailResponse]:
    page, page_size = normalize_page_params(page, page_size)
    comments, total = services.comments.list(db, post_id=post_id, page=page, page_size=page_size)
    return Page[CommentDetailResponse].build(
        [CommentDetailResponse.model_validate(c) for c in comments],
        page=page,
        page_size=page_size,
        total=total,
    )


@router.get("/{comment_id}", response_model=CommentDetailResponse, summary="Get comment")
def get_comment(
    comment_id: int,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> CommentDetailResponse:
    comment = services.comments.get(db, comment_id, current_user)
    return CommentDetailResponse.model_validate(comment)


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create comment or reply",
)
def create_comment(
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> CommentResponse:
    """Set `parent_id` to reply to a top-level comment of the same post."""
    comment = services.comments.create(db, current_user, comment_in)
    return CommentResponse.model_validate(comment)


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Update comment",
    description="**Access:** Comment author or admin",
)
def update_comment(
    comment_id: int,
    comment_in: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> CommentResponse:
    comment = services.comments.update(db, comment_id, current_user, comment_in)
    return CommentResponse.model_validate(comment)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete comment",
    description="**Access:** Comment author or admin. Replies are deleted too.",
)
def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Response:
    services.comments.delete(db, comment_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
