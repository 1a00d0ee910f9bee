"""User Repository: CRUD, pagination and email lookups over the users table.

Invariants:
    - find_all orders by created_at ascending (creation order) before offset/limit
    - find_all and find_by_id return users with their address loaded; writes return them without
    - delete cascades to the user's address and posts (ORM cascade + ON DELETE CASCADE)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from userposts.core.domain_types import PageRequest, UserId
from userposts.core.entities import User
from userposts.core.errors import (
    AlreadyExistsError, ErrorContext, ErrorMessages, ResourceNotFoundError,
)
from userposts.models.user import User as UserModel
from userposts.repositories.base import SqlAlchemyRepository, to_user


def _email_taken() -> AlreadyExistsError:
    return AlreadyExistsError("User", ErrorMessages.USER_ALREADY_EXISTS)


def _with_address():
    """Read query that loads each user's address in one extra SELECT ... IN."""
    return (
        select(UserModel)
        .options(selectinload(UserModel.address))
        .execution_options(populate_existing=True)
    )


class SqlAlchemyUserRepository(SqlAlchemyRepository):

    async def find_all(self, page: PageRequest) -> list[User]:
        result = await self._db.execute(
            _with_address()
            .order_by(UserModel.created_at)
            .offset(page.offset)
            .limit(page.limit),
        )
        return [to_user(row, with_address=True) for row in result.scalars().all()]

    async def count(self) -> int:
        total = await self._db.scalar(select(func.count()).select_from(UserModel))
        return total or 0

    async def find_by_id(self, user_id: UserId) -> User | None:
        result = await self._db.execute(_with_address().where(UserModel.id == user_id))
        row = result.scalar_one_or_none()
        return to_user(row, with_address=True) if row else None

    async def find_by_email(self, email: str) -> User | None:
        result = await self._db.execute(
            select(UserModel).where(UserModel.email == email),
        )
        row = result.scalar_one_or_none()
        return to_user(row) if row else None

    async def exists_by_email(self, email: str) -> bool:
        total = await self._db.scalar(
            select(func.count()).select_from(UserModel).where(UserModel.email == email),
        )
        return bool(total)

    async def create(self, data: dict[str, Any]) -> User:
        row = UserModel(**data)
        self._db.add(row)
        await self._commit(conflict=_email_taken)
        return to_user(row)

    async def update(self, user_id: UserId, changes: dict[str, Any]) -> User:
        row = await self._get_row(user_id)
        for name, value in changes.items():
            setattr(row, name, value)
        row.updated_at = datetime.now(timezone.utc)
        await self._commit(conflict=_email_taken)
        return to_user(row)

    async def delete(self, user_id: UserId) -> None:
        row = await self._get_row(user_id)
        await self._db.delete(row)
        await self._commit()

    async def _get_row(self, user_id: UserId) -> UserModel:
        row = await self._db.get(UserModel, user_id)
        if row is None:
            raise ResourceNotFoundError(
                "User", ErrorMessages.USER_NOT_FOUND,
                ErrorContext(resource_id=str(user_id)),
            )
        return row
