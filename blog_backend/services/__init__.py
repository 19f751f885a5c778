"""Services package: business rules on top of the persistence gateways.

Services are built once per process by :func:`build_services` and handed to
request handlers through the ``get_services`` dependency.
"""

from dataclasses import dataclass
from typing import Optional

from .audit_service import AuditAction, AuditService
from .user_service import UserService
from .post_service import PostService
from .taxonomy_service import TaxonomyService, TagService, CategoryService
from .comment_service import CommentService
from .reaction_service import ReactionService
from .media_service import MediaService


@dataclass(frozen=True)
class Services:
    audit: AuditService
    users: UserService
    posts: PostService
    tags: TagService
    categories: CategoryService
    comments: CommentService
    reactions: ReactionService
    media: MediaService


def build_services(audit: Optional[AuditService] = None) -> Services:
    audit = audit or AuditService()
    return Services(
        audit=audit,
        users=UserService(audit),
        posts=PostService(audit),
        tags=TagService(audit),
        categories=CategoryService(audit),
        comments=CommentService(audit),
        reactions=ReactionService(audit),
        media=MediaService(audit),
    )


__all__ = [
    "AuditAction",
    "AuditService",
    "UserService",
    "PostService",
    "TaxonomyService",
    "TagService",
    "CategoryService",
    "CommentService",
    "ReactionService",
    "MediaService",
    "Services",
    "build_services",
]
