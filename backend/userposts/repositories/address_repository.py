"""Address Repository: one address per user, addressed by the owning user's id.

Invariants:
    - create performs the existence check and the insert in the same session, back to back;
      the unique index on addresses.user_id settles any race between them
    - A rejected create leaves the existing address untouched
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select

from userposts.core.domain_types import UserId
from userposts.core.entities import Address
from userposts.core.errors import (
    AlreadyExistsError, ErrorContext, ErrorMessages, ResourceNotFoundError,
)
from userposts.models.address import Address as AddressModel
from userposts.repositories.base import SqlAlchemyRepository, to_address


def _address_taken() -> AlreadyExistsError:
    return AlreadyExistsError("Address", ErrorMessages.ADDRESS_ALREADY_EXISTS)


class SqlAlchemyAddressRepository(SqlAlchemyRepository):

    async def find_by_user_id(self, user_id: UserId) -> Address | None:
        row = await self._find_row(user_id)
        return to_address(row) if row else None

    async def exists_for_user(self, user_id: UserId) -> bool:
        total = await self._db.scalar(
            select(func.count()).select_from(AddressModel)
            .where(AddressModel.user_id == user_id),
        )
        return bool(total)

    async def create(self, data: dict[str, Any]) -> Address:
        if await self.exists_for_user(data["user_id"]):
            raise _address_taken()
        row = AddressModel(**data)
        self._db.add(row)
        await self._commit(conflict=_address_taken)
        return to_address(row)

    async def update(self, user_id: UserId, changes: dict[str, Any]) -> Address:
        row = await self._get_row(user_id)
        for name, value in changes.items():
            setattr(row, name, value)
        row.updated_at = datetime.now(timezone.utc)
        await self._commit()
        return to_address(row)

    async def delete(self, user_id: UserId) -> None:
        row = await self._get_row(user_id)
        await self._db.delete(row)
        await self._commit()

    async def _find_row(self, user_id: UserId) -> AddressModel | None:
        result = await self._db.execute(
            select(AddressModel).where(AddressModel.user_id == user_id),
        )
        return result.scalar_one_or_none()

    async def _get_row(self, user_id: UserId) -> AddressModel:
        row = await self._find_row(user_id)
        if row is None:
            raise ResourceNotFoundError(
                "Address", ErrorMessages.ADDRESS_NOT_FOUND,
                ErrorContext(resource_id=str(user_id)),
            )
        return row
