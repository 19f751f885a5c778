"""Pydantic schemas for Reaction.

The reaction target is a tagged union at the API boundary and a flat
``(entity_type, entity_id)`` pair in storage.
"""

from datetime import datetime
from typing import Annotated, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from blog_backend.core.exceptions import ValidationError
from blog_backend.models.audit_log import EntityType
from blog_backend.models.reaction import ReactionType


class PostTarget(BaseModel):
    entity_type: Literal["Post"] = "Post"
    entity_id: int = Field(..., gt=0)

    def as_key(self) -> Tuple[EntityType, int]:
        return EntityType.POST, self.entity_id


class CommentTarget(BaseModel):
    entity_type: Literal["Comment"] = "Comment"
    entity_id: int = Field(..., gt=0)

    def as_key(self) -> Tuple[EntityType, int]:
        return EntityType.COMMENT, self.entity_id


ReactionTarget = Annotated[Union[PostTarget, CommentTarget], Field(discriminator="entity_type")]

_target_adapter = TypeAdapter(ReactionTarget)


def parse_target(entity_type: str, entity_id: int) -> Union[PostTarget, CommentTarget]:
    """Build a target from path parameters."""
    try:
        return _target_adapter.validate_python({"entity_type": entity_type, "entity_id": entity_id})
    except PydanticValidationError as e:
        raise ValidationError(
            "Reactions can only target a Post or a Comment",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


class ReactionToggle(BaseModel):
    target: ReactionTarget
    reaction: ReactionType

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "target": {"entity_type": "Post", "entity_id": 1},
            "reaction": "LIKE",
        }
    })


class ReactionResponse(BaseModel):
    id: int
    user_id: int
    entity_type: EntityType
    entity_id: int
    reaction: ReactionType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReactionToggleResponse(BaseModel):
    """``reaction`` is null when the toggle removed the reaction."""
    reaction: Optional[ReactionResponse] = None
    active: bool


class ReactionSummary(BaseModel):
    entity_type: EntityType
    entity_id: int
    counts: Dict[ReactionType, int]
    total: int
