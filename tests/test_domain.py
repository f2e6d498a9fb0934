from __future__ import annotations

import pytest

from alumni_api.domain import pagination
from alumni_api.domain.images import ImageFolder, image_url
from alumni_api.domain.otp import generate_otp, is_valid_otp


def test_generated_codes_are_six_digits():
    codes = {generate_otp() for _ in range(200)}
    assert all(100000 <= code <= 999999 for code in codes)
    assert all(is_valid_otp(code) for code in codes)
    # 200 draws from 900000 values should not collapse to a handful
    assert len(codes) > 150


@pytest.mark.parametrize(
    "value,expected",
    [(123456, True), ("654321", True), ("12345", False), ("1234567", False), ("12a456", False), (None, False)],
)
def test_is_valid_otp(value, expected):
    assert is_valid_otp(value) is expected


@pytest.mark.parametrize(
    "total,page,per_page,pages,has_next,has_prev",
    [(0, 1, 10, 0, False, False), (25, 1, 10, 3, True, False), (25, 3, 10, 3, False, True), (10, 1, 10, 1, False, False)],
)
def test_build_page(total, page, per_page, pages, has_next, has_prev):
    built = pagination.build_page(total, page, per_page, [])
    assert built.total_pages == pages
    assert built.has_next_page is has_next
    assert built.has_prev_page is has_prev
    assert set(built.as_dict()) == {
        "total",
        "totalPages",
        "currentPage",
        "hasNextPage",
        "hasPrevPage",
        "perPage",
        "results",
    }


def test_normalize_and_offset():
    assert pagination.normalize(None, None) == (1, 10)
    assert pagination.normalize(0, -5) == (1, 10)
    assert pagination.normalize(3, 5) == (3, 5)
    assert pagination.offset_for(3, 5) == 10
    assert pagination.normalize(10**19, 10**19) == (pagination.MAX_PAGE, pagination.MAX_LIMIT)


def test_image_url():
    assert image_url(ImageFolder.AVATARS, None) is None
    assert image_url(ImageFolder.NEWS_IMAGES, "a.png", base="http://h") == "http://h/api/images/newsImages/a.png"
