"""API v1 router aggregator."""

from fastapi import APIRouter

from blog_backend.api.v1.endpoints import audit, categories, comments, media, posts, reactions, tags, users

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(users.router)
api_router.include_router(posts.router)
api_router.include_router(tags.router)
api_router.include_router(categories.router)
api_router.include_router(comments.router)
api_router.include_router(reactions.router)
api_router.include_router(media.router)
api_router.include_router(audit.router)

__all__ = ["api_router"]
