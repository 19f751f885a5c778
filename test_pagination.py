"""Tests for page normalization and page descriptors."""

import pytest

from blog_backend.config import settings
from blog_backend.core.exceptions import ValidationError
from blog_backend.utils.pagination import normalize_page_params, page_offset, paginate


def test_defaults_applied():
    assert normalize_page_params() == (1, settings.DEFAULT_PAGE_SIZE)


def test_oversized_page_is_clamped():
    page, page_size = normalize_page_params(2, settings.MAX_PAGE_SIZE + 50)
    assert page == 2
    assert page_size == settings.MAX_PAGE_SIZE


@pytest.mark.parametrize("page, page_size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
def test_non_positive_values_rejected(page, page_size):
    with pytest.raises(ValidationError):
        normalize_page_params(page, page_size)


def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(3, 10) == 20


def test_middle_page_has_both_neighbours():
    info = paginate(2, 10, 25)
    assert info.total_pages == 3
    assert info.total_docs == 25
    assert info.current_page == 2
    assert info.prev_page == 1
    assert info.next_page == 3


def test_first_and_last_page_boundaries():
    first = paginate(1, 10, 25)
    assert first.prev_page is None
    assert first.next_page == 2

    last = paginate(3, 10, 25)
    assert last.next_page is None
    assert last.prev_page == 2


def test_exact_multiple_does_not_add_a_page():
    assert paginate(1, 5, 10).total_pages == 2


def test_empty_result():
    info = paginate(1, 10, 0)
    assert info.total_pages == 0
    assert info.next_page is None
    assert info.prev_page is None


def test_paginate_rejects_zero_page_size():
    with pytest.raises(ValidationError):
        paginate(1, 0, 10)
