"""Tests for the service layer business rules, run against in-memory SQLite."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from blog_backend.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from blog_backend.core.security import get_password_hash, verify_password
from blog_backend.crud.audit_log import CRUDAuditLog
from blog_backend.database import utcnow
from blog_backend.models.audit_log import AuditLog, EntityType
from blog_backend.models.media import MediaType
from blog_backend.models.post import PostStatus
from blog_backend.models.reaction import Reaction, ReactionType
from blog_backend.models.user import UserRole
from blog_backend.schemas.category import CategoryCreate, CategoryUpdate
from blog_backend.schemas.comment import CommentCreate, CommentUpdate
from blog_backend.schemas.media import MediaBulkCreate, MediaCreate, MediaItem
from blog_backend.schemas.post import PostCreate, PostFilter, PostUpdate
from blog_backend.schemas.reaction import CommentTarget, PostTarget
from blog_backend.schemas.tag import TagCreate, TagUpdate
from blog_backend.schemas.user import UserCreate, UserLogin, UserUpdate
from blog_backend.services import AuditAction, AuditService, build_services


def _post_in(**overrides):
    data = {"title": "A first post", "content": "Some meaningful content here."}
    data.update(overrides)
    return PostCreate(**data)


def _audit_actions(db, entity_type):
    stmt = select(AuditLog).where(AuditLog.entity_type == entity_type).order_by(AuditLog.id)
    return [entry.action for entry in db.scalars(stmt).all()]


@pytest.fixture
def post(db, services, author):
    return services.posts.create(db, author, _post_in())


# ----- Users -----

def test_register_returns_token_and_audits(db, services):
    user, token = services.users.register(
        db, UserCreate(name="New Writer", email="New@Example.com", password="secret123")
    )
    assert token
    assert user.email == "new@example.com"
    assert _audit_actions(db, EntityType.USER) == [AuditAction.REGISTER]


def test_register_duplicate_email_conflicts(db, services, author):
    with pytest.raises(ConflictError):
        services.users.register(
            db, UserCreate(name="Copycat", email="ALICE@example.com", password="secret123")
        )


def test_register_admin_forbidden_by_default(db, services):
    with pytest.raises(ForbiddenError):
        services.users.register(
            db, UserCreate(name="Sneaky", email="sneaky@example.com", password="secret123", role=UserRole.ADMIN)
        )


def test_login_with_wrong_password_is_unauthorized(db, services, author):
    with pytest.raises(UnauthorizedError):
        services.users.login(db, UserLogin(email="alice@example.com", password="wrong-password"))


def test_login_succeeds(db, services, author):
    assert services.users.login(db, UserLogin(email="alice@example.com", password="secret123"))


def test_user_cannot_update_someone_else(db, services, author, other_user):
    with pytest.raises(ForbiddenError):
        services.users.update(db, author.id, other_user, UserUpdate(name="Hijacked"))
    db.expire_all()
    assert services.users.get(db, author.id).name == "Alice Author"


def test_user_cannot_promote_themselves(db, services, author):
    with pytest.raises(ForbiddenError):
        services.users.update(db, author.id, author, UserUpdate(role=UserRole.ADMIN))


def test_admin_can_change_role(db, services, author, admin):
    user = services.users.update(db, author.id, admin, UserUpdate(role=UserRole.ADMIN))
    assert user.role == UserRole.ADMIN


def test_update_email_to_taken_address_conflicts(db, services, author, other_user):
    with pytest.raises(ConflictError):
        services.users.update(db, author.id, author, UserUpdate(email="bob@example.com"))


# ----- Tags and categories -----

def test_tag_names_unique_ignoring_case(db, services, admin):
    services.tags.create(db, admin, TagCreate(name="Python"))
    with pytest.raises(ConflictError):
        services.tags.create(db, admin, TagCreate(name="python"))


def test_category_names_unique_ignoring_case(db, services, admin):
    services.categories.create(db, admin, CategoryCreate(name="News"))
    with pytest.raises(ConflictError):
        services.categories.create(db, admin, CategoryCreate(name="  NEWS "))


def test_tag_rename_keeps_own_name_in_other_case(db, services, admin):
    tag = services.tags.create(db, admin, TagCreate(name="python"))
    renamed = services.tags.update(db, tag.id, admin, TagUpdate(name="Python"))
    assert renamed.name == "Python"


def test_tag_rename_onto_existing_name_conflicts(db, services, admin):
    services.tags.create(db, admin, TagCreate(name="Go"))
    rust = services.tags.create(db, admin, TagCreate(name="Rust"))
    with pytest.raises(ConflictError):
        services.tags.update(db, rust.id, admin, TagUpdate(name="go"))


def test_regular_user_cannot_create_tag(db, services, author):
    with pytest.raises(ForbiddenError):
        services.tags.create(db, author, TagCreate(name="Python"))
    items, total = services.tags.list(db)
    assert items == []
    assert total == 0


def test_tag_posts_count(db, services, admin, author):
    tag = services.tags.create(db, admin, TagCreate(name="Python"))
    services.posts.create(db, author, _post_in(tags=[tag.id]))
    db.expire_all()
    assert services.tags.get(db, tag.id).posts_count == 1


# ----- Posts -----

def test_create_post_with_unknown_tag_is_not_found(db, services, author):
    with pytest.raises(NotFoundError):
        services.posts.create(db, author, _post_in(tags=[999]))


def test_non_owner_update_leaves_post_unchanged(db, services, post, other_user):
    with pytest.raises(ForbiddenError):
        services.posts.update(db, post.id, other_user, PostUpdate(title="Defaced title"))
    db.expire_all()
    assert services.posts.get(db, post.id).title == "A first post"


def test_admin_can_update_any_post(db, services, post, admin):
    updated = services.posts.update(db, post.id, admin, PostUpdate(title="Edited by admin"))
    assert updated.title == "Edited by admin"


def test_update_replaces_tags(db, services, admin, author):
    python = services.tags.create(db, admin, TagCreate(name="Python"))
    go = services.tags.create(db, admin, TagCreate(name="Go"))
    post = services.posts.create(db, author, _post_in(tags=[python.id]))
    updated = services.posts.update(db, post.id, author, PostUpdate(tags=[go.id]))
    assert [tag.name for tag in updated.tags] == ["Go"]


def test_future_published_post_is_hidden(db, services, author):
    future = services.posts.create(
        db,
        author,
        _post_in(title="Coming soon", status=PostStatus.PUBLISHED, publish_at=utcnow() + timedelta(days=1)),
    )
    with pytest.raises(ForbiddenError):
        services.posts.get(db, future.id)
    posts, total = services.posts.list(db)
    assert future.id not in [p.id for p in posts]
    assert total == 0


def test_past_or_unset_publish_at_is_visible(db, services, author):
    past = services.posts.create(
        db,
        author,
        _post_in(title="Already out", status=PostStatus.PUBLISHED, publish_at=utcnow() - timedelta(days=1)),
    )
    draft = services.posts.create(db, author, _post_in(title="Just a draft"))
    assert services.posts.get(db, past.id).id == past.id
    assert services.posts.get(db, draft.id).id == draft.id
    _, total = services.posts.list(db)
    assert total == 2


def test_list_filters_by_status(db, services, author):
    services.posts.create(db, author, _post_in(title="Published one", status=PostStatus.PUBLISHED))
    services.posts.create(db, author, _post_in(title="Draft one"))
    posts, total = services.posts.list(db, filters=PostFilter(status=PostStatus.PUBLISHED))
    assert total == 1
    assert posts[0].title == "Published one"


def test_get_missing_post_is_not_found(db, services):
    with pytest.raises(NotFoundError):
        services.posts.get(db, 12345)


def test_delete_post_removes_its_reactions(db, services, post, author, other_user):
    comment = services.comments.create(db, other_user, CommentCreate(content="Nice", post_id=post.id))
    services.reactions.toggle(db, other_user, PostTarget(entity_id=post.id), ReactionType.LIKE)
    services.reactions.toggle(db, author, CommentTarget(entity_id=comment.id), ReactionType.LOVE)

    services.posts.delete(db, post.id, author)

    assert db.scalars(select(Reaction)).all() == []
    with pytest.raises(NotFoundError):
        services.posts.get(db, post.id)


# ----- Comments -----

def test_comment_on_missing_post_is_not_found(db, services, author):
    with pytest.raises(NotFoundError):
        services.comments.create(db, author, CommentCreate(content="Hello", post_id=999))


def test_reply_to_parent_of_other_post_is_not_found(db, services, author, post):
    other_post = services.posts.create(db, author, _post_in(title="Another post"))
    parent = services.comments.create(db, author, CommentCreate(content="Top", post_id=other_post.id))
    with pytest.raises(NotFoundError):
        services.comments.create(
            db, author, CommentCreate(content="Lost reply", post_id=post.id, parent_id=parent.id)
        )


def test_replies_are_one_level_deep(db, services, author, post):
    top = services.comments.create(db, author, CommentCreate(content="Top", post_id=post.id))
    reply = services.comments.create(
        db, author, CommentCreate(content="Reply", post_id=post.id, parent_id=top.id)
    )
    with pytest.raises(ValidationError):
        services.comments.create(
            db, author, CommentCreate(content="Too deep", post_id=post.id, parent_id=reply.id)
        )


def test_list_returns_top_level_with_replies(db, services, author, other_user, post):
    top = services.comments.create(db, author, CommentCreate(content="Top", post_id=post.id))
    services.comments.create(db, other_user, CommentCreate(content="Reply", post_id=post.id, parent_id=top.id))
    comments, total = services.comments.list(db, post_id=post.id)
    assert total == 1
    assert [reply.content for reply in comments[0].replies] == ["Reply"]


def test_non_owner_cannot_edit_comment(db, services, author, other_user, post):
    comment = services.comments.create(db, author, CommentCreate(content="Mine", post_id=post.id))
    with pytest.raises(ForbiddenError):
        services.comments.update(db, comment.id, other_user, CommentUpdate(content="Yours now"))
    db.expire_all()
    assert services.comments.get(db, comment.id).content == "Mine"


# ----- Reactions -----

def test_toggle_same_kind_twice_removes(db, services, other_user, post):
    target = PostTarget(entity_id=post.id)
    first = services.reactions.toggle(db, other_user, target, ReactionType.LIKE)
    assert first.reaction == ReactionType.LIKE
    assert services.reactions.toggle(db, other_user, target, ReactionType.LIKE) is None
    assert services.reactions.summary(db, target) == {}
    assert _audit_actions(db, EntityType.REACTION) == [AuditAction.CREATE, AuditAction.DELETE]


def test_toggle_other_kind_updates_in_place(db, services, other_user, post):
    target = PostTarget(entity_id=post.id)
    first = services.reactions.toggle(db, other_user, target, ReactionType.LIKE)
    first_id = first.id
    second = services.reactions.toggle(db, other_user, target, ReactionType.LOVE)
    assert second.id == first_id
    assert second.reaction == ReactionType.LOVE
    assert services.reactions.summary(db, target) == {ReactionType.LOVE: 1}
    assert _audit_actions(db, EntityType.REACTION) == [AuditAction.CREATE, AuditAction.UPDATE]


def test_summary_counts_per_kind(db, services, author, other_user, post):
    target = PostTarget(entity_id=post.id)
    services.reactions.toggle(db, author, target, ReactionType.LIKE)
    services.reactions.toggle(db, other_user, target, ReactionType.LIKE)
    assert services.reactions.summary(db, target) == {ReactionType.LIKE: 2}


def test_toggle_on_missing_comment_is_not_found(db, services, author):
    with pytest.raises(NotFoundError):
        services.reactions.toggle(db, author, CommentTarget(entity_id=999), ReactionType.LIKE)


def test_concurrent_insert_surfaces_as_conflict(db, services, other_user, post, monkeypatch):
    target = PostTarget(entity_id=post.id)
    services.reactions.toggle(db, other_user, target, ReactionType.LIKE)
    # Simulate a toggle that read "no reaction" before the other insert committed
    monkeypatch.setattr(services.reactions.reactions, "get_for_target", lambda *args, **kwargs: None)
    with pytest.raises(ConflictError):
        services.reactions.toggle(db, other_user, target, ReactionType.LOVE)


# ----- Media -----

def test_only_post_owner_adds_media(db, services, post, other_user):
    with pytest.raises(ForbiddenError):
        services.media.create(
            db, other_user, MediaCreate(post_id=post.id, file_url="https://cdn/x.png", type=MediaType.IMAGE)
        )


def test_bulk_create_audits_each_item(db, services, post, author):
    media = services.media.bulk_create(
        db,
        author,
        MediaBulkCreate(
            post_id=post.id,
            media=[
                MediaItem(file_url="https://cdn/a.png", type=MediaType.IMAGE),
                MediaItem(file_url="https://cdn/b.mp4", type=MediaType.VIDEO),
            ],
        ),
    )
    assert len(media) == 2
    assert _audit_actions(db, EntityType.MEDIA) == [AuditAction.CREATE, AuditAction.CREATE]


def test_delete_by_post_removes_all_media(db, services, post, author):
    for url in ("https://cdn/a.png", "https://cdn/b.png"):
        services.media.create(db, author, MediaCreate(post_id=post.id, file_url=url, type=MediaType.IMAGE))
    assert services.media.delete_by_post(db, post.id, author) == 2
    db.expire_all()
    assert services.media.find_by_post(db, post.id) == []


def test_list_media_filters_by_type(db, services, post, author):
    services.media.create(db, author, MediaCreate(post_id=post.id, file_url="https://cdn/a.png", type=MediaType.IMAGE))
    services.media.create(db, author, MediaCreate(post_id=post.id, file_url="https://cdn/a.mp3", type=MediaType.AUDIO))
    media, total = services.media.list(db, author, media_type=MediaType.AUDIO)
    assert total == 1
    assert media[0].type == MediaType.AUDIO


# ----- Audit -----

def test_audit_failure_does_not_propagate(caplog):
    gateway = MagicMock()
    gateway.append.side_effect = RuntimeError("database is gone")
    audit = AuditService(gateway)

    audit.log(MagicMock(), 1, AuditAction.CREATE, EntityType.POST, 1)

    assert "Audit logging failed" in caplog.text


def test_audit_append_rolls_back_on_commit_failure():
    session = MagicMock()
    session.commit.side_effect = RuntimeError("commit failed")
    with pytest.raises(RuntimeError):
        CRUDAuditLog(AuditLog).append(session, user_id=1, action=AuditAction.READ)
    session.rollback.assert_called_once()


def test_primary_operation_survives_audit_failure(db, author, monkeypatch):
    audit = AuditService()
    monkeypatch.setattr(audit.logs, "append", MagicMock(side_effect=RuntimeError("boom")))
    services = build_services(audit)

    post = services.posts.create(db, author, _post_in())
    assert post.id is not None
    assert db.scalars(select(AuditLog)).all() == []


def test_user_logs_newest_first(db, services, author, post):
    services.posts.update(db, post.id, author, PostUpdate(title="Renamed post"))
    logs, total = services.audit.get_user_logs(db, author.id)
    assert total == 2
    assert [entry.action for entry in logs] == [AuditAction.UPDATE, AuditAction.CREATE]


# ----- Forbidden deletes leave state unchanged -----

def test_non_owner_cannot_delete_post(db, services, post, other_user):
    with pytest.raises(ForbiddenError):
        services.posts.delete(db, post.id, other_user)
    db.expire_all()
    assert services.posts.get(db, post.id).id == post.id


def test_non_owner_cannot_delete_comment(db, services, author, other_user, post):
    comment = services.comments.create(db, author, CommentCreate(content="Keep me", post_id=post.id))
    with pytest.raises(ForbiddenError):
        services.comments.delete(db, comment.id, other_user)
    db.expire_all()
    assert services.comments.get(db, comment.id).content == "Keep me"


def test_non_owner_cannot_touch_media(db, services, author, other_user, post):
    media = services.media.create(
        db, author, MediaCreate(post_id=post.id, file_url="https://cdn/keep.png", type=MediaType.IMAGE)
    )
    with pytest.raises(ForbiddenError):
        services.media.delete(db, media.id, other_user)
    with pytest.raises(ForbiddenError):
        services.media.delete_by_post(db, post.id, other_user)
    db.expire_all()
    assert services.media.get(db, media.id, author).file_url == "https://cdn/keep.png"


def test_admin_can_delete_any_comment(db, services, author, admin, post):
    comment = services.comments.create(db, author, CommentCreate(content="Moderated", post_id=post.id))
    services.comments.delete(db, comment.id, admin)
    with pytest.raises(NotFoundError):
        services.comments.get(db, comment.id)


def test_regular_user_cannot_change_tags(db, services, admin, author):
    tag = services.tags.create(db, admin, TagCreate(name="Python"))
    with pytest.raises(ForbiddenError):
        services.tags.update(db, tag.id, author, TagUpdate(name="Snake"))
    with pytest.raises(ForbiddenError):
        services.tags.delete(db, tag.id, author)
    db.expire_all()
    assert services.tags.get(db, tag.id).name == "Python"


def test_regular_user_cannot_change_categories(db, services, admin, author):
    category = services.categories.create(db, admin, CategoryCreate(name="News"))
    with pytest.raises(ForbiddenError):
        services.categories.update(db, category.id, author, CategoryUpdate(name="Gossip"))
    with pytest.raises(ForbiddenError):
        services.categories.delete(db, category.id, author)
    db.expire_all()
    assert services.categories.get(db, category.id).name == "News"


# ----- Passwords -----

def test_unknown_hash_format_does_not_verify():
    bcrypt_style = "$2b$12$abcdefghijklmnopqrstuuQ0jJ5hVv8S3u4Zx6nHhW7b1oF0pZy2a"
    assert verify_password("secret123", bcrypt_style) is False


def test_password_hash_round_trip():
    hashed = get_password_hash("secret123")
    assert hashed.startswith("$pbkdf2-sha256$")
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)
