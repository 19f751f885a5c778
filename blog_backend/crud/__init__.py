"""Persistence gateways, one per entity."""

from .base import CRUDBase, CRUDNamed
from .user import CRUDUser
from .tag import CRUDTag
from .category import CRUDCategory
from .post import CRUDPost
from .comment import CRUDComment
from .reaction import CRUDReaction
from .media import CRUDMedia
from .audit_log import CRUDAuditLog


__all__ = [
    # Base
    "CRUDBase",
    "CRUDNamed",
    # Gateways
    "CRUDUser",
    "CRUDTag",
    "CRUDCategory",
    "CRUDPost",
    "CRUDComment",
    "CRUDReaction",
    "CRUDMedia",
    "CRUDAuditLog",
]
