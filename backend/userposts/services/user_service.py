"""User Service: registration, lookup, pagination and merge-update of users.

Invariants:
    - create checks exists_by_email BEFORE insert (AlreadyExists), the unique index is the backstop
    - update re-checks email only when the email is being changed, and only a
      DIFFERENT user holding it is a conflict (self-update with own email is allowed)
    - find_by_id / find_by_email raise ResourceNotFoundError when absent
    - find_all converts page number/size into offset/limit and echoes them back
"""

import logging
from typing import Any

from userposts.core.domain_types import Page, PageRequest, UserId
from userposts.core.entities import User
from userposts.core.errors import (
    AlreadyExistsError, ErrorContext, ErrorMessages, ResourceNotFoundError,
)
from userposts.core.repository_protocols import UserRepository
from userposts.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, users: UserRepository):
        self._users = users

    async def find_all(self, page: PageRequest) -> Page[User]:
        items = await self._users.find_all(page)
        return Page(items=items, request=page)

    async def count(self) -> int:
        return await self._users.count()

    async def find_by_id(self, user_id: UserId) -> User:
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError(
                "User", ErrorMessages.USER_NOT_FOUND,
                ErrorContext(resource_id=str(user_id)),
            )
        return user

    async def find_by_email(self, email: str) -> User:
        user = await self._users.find_by_email(email)
        if user is None:
            raise ResourceNotFoundError("User", ErrorMessages.USER_NOT_FOUND)
        return user

    async def create(self, data: UserCreate) -> User:
        if await self._users.exists_by_email(data.email):
            logger.warning("Rejected user registration: email already registered")
            raise AlreadyExistsError("User", ErrorMessages.USER_ALREADY_EXISTS)
        user = await self._users.create(data.model_dump())
        logger.info("User created", extra={"resource_id": str(user.id)})
        return user

    async def update(self, user_id: UserId, changes: dict[str, Any]) -> User:
        email = changes.get("email")
        if email:
            holder = await self._users.find_by_email(email)
            if holder is not None and holder.id != user_id:
                logger.warning(
                    "Rejected user update: email held by another user",
                    extra={"resource_id": str(user_id)},
                )
                raise AlreadyExistsError(
                    "User", ErrorMessages.USER_ALREADY_EXISTS,
                    ErrorContext(resource_id=str(user_id)),
                )
        return await self._users.update(user_id, changes)

    async def delete(self, user_id: UserId) -> None:
        await self._users.delete(user_id)
        logger.info("User deleted", extra={"resource_id": str(user_id)})
