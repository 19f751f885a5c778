"""Category endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_services
from blog_backend.models.user import User
from blog_backend.schemas.common import Page
from blog_backend.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from blog_backend.services import Services
from blog_backend.utils.pagination import normalize_page_params

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


@router.get(
    "",
    response_model=Page[CategoryResponse],
    status_code=status.HTTP_200_OK,
    summary="List categories",
)
def list_categories(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    page: int = Query(1),
    page_size: int = Query(10),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[CategoryResponse]:
    """Categories sorted by name, each with its post count."""
    page, page_size = normalize_page_params(page, page_size)
    categories, total = services.categories.list(db, search=search, page=page, page_size=page_size)
    return Page[CategoryResponse].build(
        [CategoryResponse.model_validate(c) for c in categories], page=page, page_size=page_size, total=total
    )


@router.get("/{category_id}", response_model=CategoryResponse, summary="Get category")
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> CategoryResponse:
    return CategoryResponse.model_validate(services.categories.get(db, category_id))


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    description="**Access:** Admin only. Names are unique ignoring case.",
)
def create_category(
    category_in: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> CategoryResponse:
    return CategoryResponse.model_validate(services.categories.create(db, current_user, category_in))


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update category",
    description="**Access:** Admin only",
)
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> CategoryResponse:
    return CategoryResponse.model_validate(services.categories.update(db, category_id, current_user, category_in))


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete category",
    description="**Access:** Admin only",
)
def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Response:
    services.categories.delete(db, category_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
