"""Address Service: one address per user, created on behalf of the caller.

Invariants:
    - create stamps user_id from the caller identity; the payload never chooses the owner
    - the owner must exist (a token can outlive its user)
    - one-address-per-user is enforced by the repository (check + insert + unique index)
    - update merges only the supplied keys; update/delete of a missing address is NotFound
"""

import logging
from typing import Any

from userposts.core.domain_types import UserId
from userposts.core.entities import Address
from userposts.core.errors import ErrorContext, ErrorMessages, ResourceNotFoundError
from userposts.core.repository_protocols import AddressRepository, UserRepository
from userposts.schemas.address import AddressCreate

logger = logging.getLogger(__name__)


class AddressService:

    def __init__(self, addresses: AddressRepository, users: UserRepository):
        self._addresses = addresses
        self._users = users

    async def find_by_user_id(self, user_id: UserId) -> Address:
        address = await self._addresses.find_by_user_id(user_id)
        if address is None:
            raise ResourceNotFoundError(
                "Address", ErrorMessages.ADDRESS_NOT_FOUND,
                ErrorContext(resource_id=str(user_id)),
            )
        return address

    async def create(self, data: AddressCreate, owner_id: UserId) -> Address:
        if await self._users.find_by_id(owner_id) is None:
            raise ResourceNotFoundError(
                "User", ErrorMessages.USER_NOT_FOUND,
                ErrorContext(resource_id=str(owner_id)),
            )
        address = await self._addresses.create({**data.model_dump(), "user_id": owner_id})
        logger.info("Address created", extra={"user_id": str(owner_id)})
        return address

    async def update(self, user_id: UserId, changes: dict[str, Any]) -> Address:
        return await self._addresses.update(user_id, changes)

    async def delete(self, user_id: UserId) -> None:
        await self._addresses.delete(user_id)
        logger.info("Address deleted", extra={"user_id": str(user_id)})
