"""Tests for the authorization policy."""

import pytest

from blog_backend.core.exceptions import ForbiddenError
from blog_backend.core.permissions import (
    can_manage_taxonomy,
    can_mutate,
    ensure_admin,
    ensure_can_manage_taxonomy,
    ensure_can_mutate,
    is_admin,
)
from blog_backend.models.user import User, UserRole


def _user(user_id, role=UserRole.USER):
    return User(id=user_id, name="Someone", email=f"u{user_id}@example.com", password_hash="x", role=role)


def test_owner_can_mutate():
    assert can_mutate(_user(1), 1)


def test_non_owner_cannot_mutate():
    assert not can_mutate(_user(1), 2)


def test_admin_can_mutate_anything():
    assert can_mutate(_user(9, UserRole.ADMIN), 2)


def test_missing_owner_is_not_owned():
    assert not can_mutate(_user(1), None)


def test_only_admin_manages_taxonomy():
    assert can_manage_taxonomy(_user(1, UserRole.ADMIN))
    assert not can_manage_taxonomy(_user(1))


def test_ensure_can_mutate_uses_message():
    with pytest.raises(ForbiddenError) as exc_info:
        ensure_can_mutate(_user(1), 2, "Not yours")
    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "Not yours"


def test_ensure_helpers_raise_for_regular_user():
    with pytest.raises(ForbiddenError):
        ensure_can_manage_taxonomy(_user(1))
    with pytest.raises(ForbiddenError):
        ensure_admin(_user(1))
    ensure_admin(_user(1, UserRole.ADMIN))


def test_is_admin_reads_role():
    assert is_admin(_user(1, UserRole.ADMIN))
    assert not is_admin(_user(1))
