"""Address Routes: one address per user, keyed by the owning user's id.

Invariants:
    - POST creates the address for the caller; the payload cannot name another owner
    - PATCH/DELETE require caller == path userId (403 otherwise)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from userposts.api.deps import get_address_service, get_caller_id
from userposts.core.domain_types import UserId
from userposts.core.enforce_ownership import ensure_self
from userposts.core.errors import ErrorContext, ErrorMessages, ResourceNotFoundError
from userposts.core.validation import coerce_identifier, unwrap
from userposts.schemas.address import (
    AddressResponse, validate_address_create, validate_address_update,
    validate_address_user_id,
)
from userposts.schemas.common import envelope
from userposts.services.address_service import AddressService

router = APIRouter(prefix="/api/v1/addresses", tags=["addresses"])


@router.get("/{user_id}")
async def get_address(
    user_id: str, service: AddressService = Depends(get_address_service),
):
    identifier = coerce_identifier(user_id)
    if identifier is None:
        raise ResourceNotFoundError(
            "Address", ErrorMessages.ADDRESS_NOT_FOUND, ErrorContext(resource_id=user_id),
        )
    return envelope(AddressResponse.render(await service.find_by_user_id(UserId(identifier))))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_address(
    payload: dict[str, Any] = Body(...),
    caller_id: UserId = Depends(get_caller_id),
    service: AddressService = Depends(get_address_service),
):
    data = unwrap(validate_address_create(payload))
    return envelope(AddressResponse.render(await service.create(data, caller_id)))


@router.patch("/{user_id}")
async def update_address(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    caller_id: UserId = Depends(get_caller_id),
    service: AddressService = Depends(get_address_service),
):
    owner = UserId(unwrap(validate_address_user_id(user_id)))
    changes = unwrap(validate_address_update(payload)).changes()
    ensure_self(owner, caller_id, "Address")
    return envelope(AddressResponse.render(await service.update(owner, changes)))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_address(
    user_id: str,
    caller_id: UserId = Depends(get_caller_id),
    service: AddressService = Depends(get_address_service),
):
    owner = UserId(unwrap(validate_address_user_id(user_id)))
    ensure_self(owner, caller_id, "Address")
    await service.delete(owner)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
