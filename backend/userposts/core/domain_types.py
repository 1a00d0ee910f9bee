"""Domain Types: identity wrappers and pagination values shared across layers.

Invariants:
    - UserId, AddressId, PostId wrap UUIDs; never use a bare string id in domain logic
    - PageRequest.offset == page_number * page_size
    - page_size has no business cap (see DESIGN.md open questions); offset and limit
      always fit a signed 64-bit integer

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses for pagination: values, not state
"""

from dataclasses import dataclass
from typing import Generic, NewType, TypeVar
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
AddressId = NewType("AddressId", UUID)
PostId = NewType("PostId", UUID)


# ─── Pagination ──────────────────────────────────────────────────

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 10
# LIMIT/OFFSET are bound as signed 64-bit integers by every supported driver
MAX_SQL_INTEGER = 2**63 - 1

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page number plus page size."""
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @classmethod
    def from_query(cls, page_number: str | None, page_size: str | None) -> "PageRequest":
        """Parse raw query values; anything non-numeric, zero, negative or too large falls back to the default.

        A page number whose offset would not fit MAX_SQL_INTEGER also falls back.
        """
        number = _positive_int_or(page_number, DEFAULT_PAGE_NUMBER)
        size = _positive_int_or(page_size, DEFAULT_PAGE_SIZE)
        if number * size > MAX_SQL_INTEGER:
            number = DEFAULT_PAGE_NUMBER
        return cls(page_number=number, page_size=size)


@dataclass(frozen=True)
class Page(Generic[T]):
    """A slice of results with the pagination parameters that produced it."""
    items: list[T]
    request: PageRequest

    def pagination(self) -> dict:
        return {
            "pageNumber": self.request.page_number,
            "pageSize": self.request.page_size,
        }


def _positive_int_or(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else 0
    except (TypeError, ValueError):
        return default
    return value if 0 < value <= MAX_SQL_INTEGER else default
