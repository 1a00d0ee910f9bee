"""Address Service: one address per user, stamped from the caller."""

from uuid import uuid4

import pytest

from userposts.core.domain_types import UserId
from userposts.core.errors import AlreadyExistsError, ResourceNotFoundError
from userposts.schemas.address import AddressCreate
from userposts.services.address_service import AddressService

ADDRESS = {
    "street": "Main Street 1",
    "city": "Springfield",
    "state": "IL",
    "country": "USA",
    "zipCode": "62701",
}


@pytest.fixture
def service(address_repo, user_repo):
    return AddressService(address_repo, user_repo)


@pytest.fixture
async def owner(user_repo):
    return await user_repo.create({
        "first_name": "Homer", "last_name": "Simpson",
        "email": "homer@mail.com", "phone_number": None,
    })


async def test_create_stamps_owner(service, owner):
    address = await service.create(AddressCreate.model_validate(ADDRESS), owner.id)
    assert address.user_id == owner.id
    assert address.zip_code == "62701"


async def test_second_address_rejected_and_first_untouched(service, owner):
    first = await service.create(AddressCreate.model_validate(ADDRESS), owner.id)
    other = AddressCreate.model_validate({**ADDRESS, "city": "Shelbyville"})

    with pytest.raises(AlreadyExistsError) as exc_info:
        await service.create(other, owner.id)

    assert exc_info.value.message == "User already has an address"
    current = await service.find_by_user_id(owner.id)
    assert current.id == first.id
    assert current.city == "Springfield"


async def test_create_for_missing_user_raises(service):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.create(AddressCreate.model_validate(ADDRESS), UserId(uuid4()))
    assert exc_info.value.message == "User not found"


async def test_find_missing_address_raises(service, owner):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.find_by_user_id(owner.id)
    assert exc_info.value.message == "Address not found"


async def test_update_merges_supplied_keys(service, owner):
    await service.create(AddressCreate.model_validate(ADDRESS), owner.id)
    updated = await service.update(owner.id, {"city": "Capital City"})
    assert updated.city == "Capital City"
    assert updated.street == "Main Street 1"


async def test_update_missing_address_raises(service, owner):
    with pytest.raises(ResourceNotFoundError):
        await service.update(owner.id, {"city": "Nowhere"})


async def test_delete_then_find_raises(service, owner):
    await service.create(AddressCreate.model_validate(ADDRESS), owner.id)
    await service.delete(owner.id)
    with pytest.raises(ResourceNotFoundError):
        await service.find_by_user_id(owner.id)


async def test_delete_missing_address_raises(service, owner):
    with pytest.raises(ResourceNotFoundError):
        await service.delete(owner.id)
