"""Authorization policy.

Pure decisions about whether an actor may mutate a resource. Services call
the ``ensure_*`` variants before any mutating persistence call.
"""

from typing import Optional

from blog_backend.core.exceptions import ForbiddenError
from blog_backend.models.user import User, UserRole


def is_admin(actor: User) -> bool:
    return actor.role == UserRole.ADMIN


def can_mutate(actor: User, owner_id: Optional[int]) -> bool:
    """Admins may mutate anything; everyone else only what they own."""
    return is_admin(actor) or (owner_id is not None and owner_id == actor.id)


def can_manage_taxonomy(actor: User) -> bool:
    """Tags and categories have no owner: only admins manage them."""
    return is_admin(actor)


def ensure_can_mutate(actor: User, owner_id: Optional[int], message: str = "You are not authorized to modify this resource") -> None:
    if not can_mutate(actor, owner_id):
        raise ForbiddenError(message)


def ensure_can_manage_taxonomy(actor: User) -> None:
    if not can_manage_taxonomy(actor):
        raise ForbiddenError("Only administrators can manage tags and categories")


def ensure_admin(actor: User, message: str = "Administrator privileges required") -> None:
    if not is_admin(actor):
        raise ForbiddenError(message)
