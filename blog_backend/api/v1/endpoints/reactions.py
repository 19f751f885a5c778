"""Reaction endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_backend.api.deps import get_current_user, get_db, get_services
from blog_backend.models.user import User
from blog_backend.schemas.reaction import (
    ReactionResponse,
    ReactionSummary,
    ReactionToggle,
    ReactionToggleResponse,
    parse_target,
)
from blog_backend.services import Services

router = APIRouter(
    prefix="/reactions",
    tags=["Reactions"],
)


@router.post(
    "",
    response_model=ReactionToggleResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle reaction",
    description="""
    React to a post or comment.

    - No reaction yet: the reaction is created.
    - Same reaction again: the reaction is removed (`active` is false).
    - Different reaction: the existing reaction is changed.

    **Access:** All authenticated users
    """,
)
def toggle_reaction(
    reaction_in: ReactionToggle,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> ReactionToggleResponse:
    reaction = services.reactions.toggle(db, current_user, reaction_in.target, reaction_in.reaction)
    if reaction is None:
        return ReactionToggleResponse(reaction=None, active=False)
    return ReactionToggleResponse(reaction=ReactionResponse.model_validate(reaction), active=True)


@router.get(
    "/{entity_type}/{entity_id}",
    response_model=ReactionSummary,
    summary="Reaction counts for a post or comment",
)
def get_reactions(
    entity_type: str,
    entity_id: int,
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> ReactionSummary:
    target = parse_target(entity_type, entity_id)
    counts = services.reactions.summary(db, target)
    kind, target_id = target.as_key()
    return ReactionSummary(
        entity_type=kind,
        entity_id=target_id,
        counts=counts,
        total=sum(counts.values()),
    )


@router.get(
    "/{entity_type}/{entity_id}/me",
    response_model=Optional[ReactionResponse],
    summary="Current user's reaction on a post or comment",
)
def get_my_reaction(
    entity_type: str,
    entity_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    services: Services = Depends(get_services),
) -> Optional[ReactionResponse]:
    reaction = services.reactions.get_user_reaction(db, current_user, parse_target(entity_type, entity_id))
    return ReactionResponse.model_validate(reaction) if reaction else None
