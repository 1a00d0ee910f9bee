"""Domain Types: identity wrappers and pagination values.

Tests:
    - NewType wrappers are transparent over UUID
    - PageRequest converts page number/size to offset/limit
    - from_query falls back to defaults for missing, non-numeric, zero or negative input
    - Page echoes the pagination it was produced with
"""

from uuid import uuid4

from userposts.core.domain_types import (
    DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, MAX_SQL_INTEGER,
    AddressId, Page, PageRequest, PostId, UserId,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert AddressId(uid) == uid
    assert PostId(uid) == uid


def test_page_request_defaults():
    page = PageRequest()
    assert page.page_number == DEFAULT_PAGE_NUMBER == 0
    assert page.page_size == DEFAULT_PAGE_SIZE == 10


def test_offset_is_page_number_times_size():
    page = PageRequest(page_number=3, page_size=25)
    assert page.offset == 75
    assert page.limit == 25


def test_from_query_parses_numeric_strings():
    page = PageRequest.from_query("2", "5")
    assert (page.page_number, page.page_size) == (2, 5)


def test_from_query_missing_values_use_defaults():
    page = PageRequest.from_query(None, None)
    assert (page.page_number, page.page_size) == (0, 10)


def test_from_query_non_numeric_values_use_defaults():
    page = PageRequest.from_query("abc", "ten")
    assert (page.page_number, page.page_size) == (0, 10)


def test_from_query_zero_and_negative_use_defaults():
    page = PageRequest.from_query("-1", "0")
    assert (page.page_number, page.page_size) == (0, 10)


def test_page_size_has_no_upper_bound():
    assert PageRequest.from_query("0", "100000").page_size == 100000


def test_page_pagination_echoes_request():
    page = Page(items=["a"], request=PageRequest(1, 20))
    assert page.pagination() == {"pageNumber": 1, "pageSize": 20}


def test_from_query_values_beyond_64_bit_use_defaults():
    page = PageRequest.from_query("99999999999999999999", "99999999999999999999")
    assert (page.page_number, page.page_size) == (0, 10)


def test_from_query_offset_overflow_resets_page_number():
    page = PageRequest.from_query(str(MAX_SQL_INTEGER), "10")
    assert page.page_number == 0
    assert page.page_size == 10
    assert page.offset <= MAX_SQL_INTEGER


def test_from_query_largest_representable_offset_kept():
    page = PageRequest.from_query(str(MAX_SQL_INTEGER // 10), "10")
    assert page.offset <= MAX_SQL_INTEGER
    assert page.page_number == MAX_SQL_INTEGER // 10
