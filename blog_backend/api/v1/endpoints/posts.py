"""Blog post endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_optional_current_user, get_services
from blog_backend.models.post import PostStatus
from blog_backend.models.user import User
from blog_backend.schemas.common import Page
from blog_backend.schemas.post import PostCreate, PostFilter, PostResponse, PostUpdate
from blog_backend.services import Services
from blog_backend.utils.pagination import normalize_page_params

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)


@router.get(
    "",
    response_model=Page[PostResponse],
    status_code=status.HTTP_200_OK,
    summary="List posts",
    description="""
    List posts, newest first.

    Published posts whose `publish_at` is still in the future are never listed.

    **Access:** Public
    """,
)
def list_posts(
    status_filter: Optional[PostStatus] = Query(None, alias="status"),
    tag_id: Optional[int] = Query(None),
    category_id: Optional[int] = Query(None),
    user_id: Optional[int] = Query(None, description="Author ID"),
    search: Optional[str] = Query(None, description="Match against the title"),
    page: int = Query(1),
    page_size: int = Query(10),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[PostResponse]:
    page, page_size = normalize_page_params(page, page_size)
    filters = PostFilter(
        status=status_filter,
        tag_id=tag_id,
        category_id=category_id,
        user_id=user_id,
        search=search,
    )
    posts, total = services.posts.list(db, filters=filters, page=page, page_size=page_size)
    return Page[PostResponse].build(
        [PostResponse.model_validate(p) for p in posts], page=page, page_size=page_size, total=total
    )


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post detail",
)
def get_post(
    post_id: int,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> PostResponse:
    """Returns 403 while a published post is still scheduled for the future."""
    post = services.posts.get(db, post_id, current_user)
    return PostResponse.model_validate(post)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> PostResponse:
    post = services.posts.create(db, current_user, post_in)
    return PostResponse.model_validate(post)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Update post",
    description="""
    Update a post. Omitted fields are left unchanged; `tags` and `categories`
    replace the current links when present.

    **Access:** Post author or admin
    """,
)
def update_post(
    post_id: int,
    post_in: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> PostResponse:
    post = services.posts.update(db, post_id, current_user, post_in)
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete post",
    description="""
    Delete a post with its comments and media.

    **Access:** Post author or admin
    """,
)
def delete_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Response:
    services.posts.delete(db, post_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
