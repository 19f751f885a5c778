"""
Functional tests for the persistence gateways (no service rules involved).
Run: pytest test_crud.py
"""

from sqlalchemy import select

from blog_backend.crud import CRUDCategory, CRUDComment, CRUDMedia, CRUDPost, CRUDReaction, CRUDTag, CRUDUser
from blog_backend.database import utcnow
from blog_backend.models import Category, Comment, EntityType, Media, MediaType, Post, Reaction, ReactionType, Tag, User
from blog_backend.schemas import CommentCreate, MediaItem, PostCreate, PostFilter, TagCreate, UserCreate

crud_user = CRUDUser(User)
crud_tag = CRUDTag(Tag)
crud_category = CRUDCategory(Category)
crud_post = CRUDPost(Post)
crud_comment = CRUDComment(Comment)
crud_reaction = CRUDReaction(Reaction)
crud_media = CRUDMedia(Media)


def test_user_crud(db):
    """Test User CRUD operations"""
    # 1. Create user
    user = crud_user.create_user(
        db,
        user_in=UserCreate(name="Test User", email="Test@Example.com", password="testpassword123"),
    )
    assert user.id is not None
    assert user.password_hash != "testpassword123"

    # 2. Get user by ID
    assert crud_user.get(db, user.id).name == "Test User"

    # 3. Get by email, ignoring case
    assert crud_user.get_by_email(db, "TEST@example.com").id == user.id

    # 4. Authenticate
    assert crud_user.authenticate(db, email="test@example.com", password="testpassword123") is not None
    assert crud_user.authenticate(db, email="test@example.com", password="wrong") is None

    # 5. Search by name or email
    assert [u.id for u in crud_user.search(db, search="example")] == [user.id]
    assert crud_user.count_search(db, search="nobody") == 0


def test_named_lookup_ignores_case(db):
    tag = crud_tag.create(db, obj_in=TagCreate(name="Python"))
    assert crud_tag.get_by_name_insensitive(db, "PYTHON").id == tag.id
    assert crud_tag.get_by_name_insensitive(db, "python", exclude_id=tag.id) is None


def test_search_is_sorted_by_name(db):
    for name in ("Travel", "Food", "Music"):
        crud_category.create(db, obj_in={"name": name})
    assert [c.name for c in crud_category.search(db)] == ["Food", "Music", "Travel"]
    assert [c.name for c in crud_category.search(db, search="o")] == ["Food"]


def test_get_many_by_ids_skips_missing(db):
    tag = crud_tag.create(db, obj_in={"name": "Go"})
    assert [t.id for t in crud_tag.get_many_by_ids(db, [tag.id, 404])] == [tag.id]
    assert crud_tag.get_many_by_ids(db, []) == []


def test_post_listing_newest_first_with_filters(db, author):
    tag = crud_tag.create(db, obj_in={"name": "Python"})
    older = crud_post.create_post(
        db, user_id=author.id, post_in=PostCreate(title="Older post", content="Content of the older post")
    )
    newer = crud_post.create_post(
        db,
        user_id=author.id,
        post_in=PostCreate(title="Newer post", content="Content of the newer post"),
        tags=[tag],
    )

    posts, total = crud_post.list_posts(db, filters=PostFilter(), now=utcnow())
    assert total == 2
    assert [p.id for p in posts] == [newer.id, older.id]

    posts, total = crud_post.list_posts(db, filters=PostFilter(tag_id=tag.id), now=utcnow())
    assert [p.id for p in posts] == [newer.id]

    posts, total = crud_post.list_posts(db, filters=PostFilter(search="OLDER"), now=utcnow())
    assert [p.id for p in posts] == [older.id]


def test_top_level_comments_exclude_replies(db, author):
    post = crud_post.create_post(
        db, user_id=author.id, post_in=PostCreate(title="Commented post", content="Content to comment on")
    )
    top = crud_comment.create_comment(db, user_id=author.id, comment_in=CommentCreate(content="Top", post_id=post.id))
    crud_comment.create_comment(
        db, user_id=author.id, comment_in=CommentCreate(content="Reply", post_id=post.id, parent_id=top.id)
    )
    assert [c.id for c in crud_comment.get_top_level(db, post_id=post.id)] == [top.id]
    assert crud_comment.count_top_level(db, post_id=post.id) == 1


def test_reaction_counts_and_bulk_delete(db, author, other_user):
    for user, kind in ((author, ReactionType.LIKE), (other_user, ReactionType.WOW)):
        crud_reaction.create(
            db,
            obj_in={"user_id": user.id, "entity_type": EntityType.POST, "entity_id": 7, "reaction": kind},
        )
    counts = crud_reaction.count_by_kind(db, entity_type=EntityType.POST, entity_id=7)
    assert counts == {ReactionType.LIKE: 1, ReactionType.WOW: 1}

    crud_reaction.delete_for_target(db, entity_type=EntityType.POST, entity_id=7)
    db.commit()
    assert db.scalars(select(Reaction)).all() == []


def test_media_bulk_create_and_delete_by_post(db, author):
    post = crud_post.create_post(
        db, user_id=author.id, post_in=PostCreate(title="Media post", content="Content with attachments")
    )
    media = crud_media.bulk_create(
        db,
        post_id=post.id,
        items=[
            MediaItem(file_url="https://cdn/a.png", type=MediaType.IMAGE),
            MediaItem(file_url="https://cdn/b.pdf", type=MediaType.DOCUMENT),
        ],
    )
    assert all(item.id is not None for item in media)

    items, total = crud_media.list_media(db, post_id=post.id, media_type=MediaType.DOCUMENT)
    assert total == 1
    assert items[0].file_url == "https://cdn/b.pdf"

    assert crud_media.delete_by_post(db, post_id=post.id) == 2
    assert crud_media.count(db) == 0
