from .common import Page
from .user import (
	UserCreate,
	UserUpdate,
	UserResponse,
	UserSummary,
	UserLogin,
	TokenResponse,
	RegisterResponse,
)
from .tag import TagCreate, TagUpdate, TagResponse, TagSummary
from .category import CategoryCreate, CategoryUpdate, CategoryResponse, CategorySummary
from .post import PostCreate, PostUpdate, PostFilter, PostResponse
from .comment import CommentCreate, CommentUpdate, CommentResponse, CommentDetailResponse
from .reaction import (
	PostTarget,
	CommentTarget,
	ReactionTarget,
	ReactionToggle,
	ReactionResponse,
	ReactionToggleResponse,
	ReactionSummary,
	parse_target,
)
from .media import MediaItem, MediaCreate, MediaBulkCreate, MediaUpdate, MediaResponse
from .audit_log import AuditLogResponse

__all__ = [
	# Envelopes
	"Page",
	# User
	"UserCreate",
	"UserUpdate",
	"UserResponse",
	"UserSummary",
	"UserLogin",
	"TokenResponse",
	"RegisterResponse",
	# Taxonomy
	"TagCreate",
	"TagUpdate",
	"TagResponse",
	"TagSummary",
	"CategoryCreate",
	"CategoryUpdate",
	"CategoryResponse",
	"CategorySummary",
	# Post
	"PostCreate",
	"PostUpdate",
	"PostFilter",
	"PostResponse",
	# Comment
	"CommentCreate",
	"CommentUpdate",
	"CommentResponse",
	"CommentDetailResponse",
	# Reaction
	"PostTarget",
	"CommentTarget",
	"ReactionTarget",
	"ReactionToggle",
	"ReactionResponse",
	"ReactionToggleResponse",
	"ReactionSummary",
	"parse_target",
	# Media
	"MediaItem",
	"MediaCreate",
	"MediaBulkCreate",
	"MediaUpdate",
	"MediaResponse",
	# Audit
	"AuditLogResponse",
]
