"""Boundary Protocols: contracts between core services and persistence.

Invariants:
    - Core NEVER imports from the shell; dependency arrows point inward only
    - Repositories return domain entities (core/entities.py), never ORM rows
    - find_* returns None when absent; update/delete raise ResourceNotFoundError
    - create raises AlreadyExistsError when a unique constraint would be violated
    - UserRepository.find_all/find_by_id fill User.address; PostRepository finders fill Post.user

Design Decisions:
    - Protocol over ABC: structural subtyping, services accept any conforming object
    - Async in Protocol: implementations do IO, every store call is a suspension point
"""

from typing import Any, Protocol

from userposts.core.domain_types import PageRequest, PostId, UserId
from userposts.core.entities import Address, Post, User


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def find_all(self, page: PageRequest) -> list[User]: ...
    async def count(self) -> int: ...
    async def find_by_id(self, user_id: UserId) -> User | None: ...
    async def find_by_email(self, email: str) -> User | None: ...
    async def exists_by_email(self, email: str) -> bool: ...
    async def create(self, data: dict[str, Any]) -> User: ...
    async def update(self, user_id: UserId, changes: dict[str, Any]) -> User: ...
    async def delete(self, user_id: UserId) -> None: ...


class AddressRepository(Protocol):
    """Contract for address persistence. Keyed by owning user, one per user."""
    async def find_by_user_id(self, user_id: UserId) -> Address | None: ...
    async def exists_for_user(self, user_id: UserId) -> bool: ...
    async def create(self, data: dict[str, Any]) -> Address: ...
    async def update(self, user_id: UserId, changes: dict[str, Any]) -> Address: ...
    async def delete(self, user_id: UserId) -> None: ...


class PostRepository(Protocol):
    """Contract for post persistence."""
    async def find_by_id(self, post_id: PostId) -> Post | None: ...
    async def find_by_user_id(self, user_id: UserId) -> list[Post]: ...
    async def count_by_user_id(self, user_id: UserId) -> int: ...
    async def create(self, data: dict[str, Any]) -> Post: ...
    async def update(self, post_id: PostId, changes: dict[str, Any]) -> Post: ...
    async def delete(self, post_id: PostId) -> None: ...
