"""Core module exports."""

from .security import (
    create_access_token,
    create_user_token,
    decode_token,
    get_password_hash,
    verify_password,
    ALGORITHM,
)
from .permissions import (
    can_mutate,
    can_manage_taxonomy,
    ensure_can_mutate,
    ensure_can_manage_taxonomy,
    ensure_admin,
)

__all__ = [
    "create_access_token",
    "create_user_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
    "ALGORITHM",
    "can_mutate",
    "can_manage_taxonomy",
    "ensure_can_mutate",
    "ensure_can_manage_taxonomy",
    "ensure_admin",
]
