"""User endpoints: registration, login and profiles."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_services
from blog_backend.models.user import User
from blog_backend.schemas.common import Page
from blog_backend.schemas.user import (
    RegisterResponse,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from blog_backend.services import Services
from blog_backend.utils.pagination import normalize_page_params

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> RegisterResponse:
    """
    Register a new user.

    Returns the created user together with an access token.

    Raises:
        ConflictError: 409 if email already registered
    """
    user, token = services.users.register(db, user_in)
    return RegisterResponse(user=UserResponse.model_validate(user), access_token=token)


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> TokenResponse:
    """Login with email and password and receive a bearer token."""
    token = services.users.login(db, credentials)
    return TokenResponse(access_token=token)


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user info",
)
def get_current_user_info(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.get(
    "",
    response_model=Page[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="List users",
)
def list_users(
    search: Optional[str] = Query(None, description="Match against name or email"),
    page: int = Query(1, description="Page number, starting at 1"),
    page_size: int = Query(10, description="Items per page"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Page[UserResponse]:
    page, page_size = normalize_page_params(page, page_size)
    users, total = services.users.list(db, search=search, page=page, page_size=page_size)
    return Page[UserResponse].build(
        [UserResponse.model_validate(u) for u in users], page=page, page_size=page_size, total=total
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get user by ID",
)
def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> UserResponse:
    return UserResponse.model_validate(services.users.get(db, user_id))


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Update profile",
    description="""
    Update a user profile. Omitted fields are left unchanged.

    **Access:** The user themselves or an admin. Only admins can change roles.
    """,
)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> UserResponse:
    user = services.users.update(db, user_id, current_user, user_in)
    return UserResponse.model_validate(user)
