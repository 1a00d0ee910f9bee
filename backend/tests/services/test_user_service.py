"""User Service: uniqueness, merge-update, pagination and cascade delete.

Invariants verified:
    - create with a registered email raises AlreadyExistsError regardless of other fields
    - update to another user's email conflicts; to the user's own email succeeds
    - find_all(1, 10) over 15 users returns the 11th-15th in creation order
    - delete removes the user's address and posts
"""

from uuid import uuid4

import pytest

from userposts.core.domain_types import PageRequest, UserId
from userposts.core.errors import AlreadyExistsError, ResourceNotFoundError
from userposts.schemas.user import UserCreate
from userposts.services.user_service import UserService


def _create(n: int, **overrides) -> UserCreate:
    fields = {
        "firstName": f"Name{n}",
        "lastName": "Surname",
        "email": f"person{n}@mail.com",
    }
    fields.update(overrides)
    return UserCreate.model_validate(fields)


@pytest.fixture
def service(user_repo):
    return UserService(user_repo)


async def test_create_returns_submitted_fields_plus_generated(service):
    user = await service.create(_create(1, phoneNumber="+5511999990000"))
    assert user.id is not None
    assert user.first_name == "Name1"
    assert user.last_name == "Surname"
    assert user.email == "person1@mail.com"
    assert user.phone_number == "+5511999990000"
    assert user.created_at is not None
    assert user.updated_at is not None


async def test_duplicate_email_rejected_regardless_of_other_fields(service):
    await service.create(_create(1))
    with pytest.raises(AlreadyExistsError) as exc_info:
        await service.create(_create(2, email="person1@mail.com"))
    assert exc_info.value.message == "User already exists with this email"
    assert await service.count() == 1


async def test_find_by_id_missing_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.find_by_id(UserId(uuid4()))


async def test_find_by_email(service):
    created = await service.create(_create(1))
    found = await service.find_by_email("person1@mail.com")
    assert found.id == created.id


async def test_find_by_email_missing_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.find_by_email("ghost@mail.com")


async def test_update_merges_only_supplied_fields(service):
    user = await service.create(_create(1, phoneNumber="+5511999990000"))
    updated = await service.update(user.id, {"last_name": "Changed"})
    assert updated.last_name == "Changed"
    assert updated.first_name == "Name1"
    assert updated.phone_number == "+5511999990000"


async def test_update_to_another_users_email_conflicts(service):
    await service.create(_create(1))
    second = await service.create(_create(2))
    with pytest.raises(AlreadyExistsError):
        await service.update(second.id, {"email": "person1@mail.com"})
    assert (await service.find_by_id(second.id)).email == "person2@mail.com"


async def test_update_to_own_email_succeeds(service):
    user = await service.create(_create(1))
    updated = await service.update(user.id, {"email": "person1@mail.com", "first_name": "New"})
    assert updated.email == "person1@mail.com"
    assert updated.first_name == "New"


async def test_update_missing_user_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.update(UserId(uuid4()), {"first_name": "Nobody"})


async def test_pagination_second_page_in_creation_order(service):
    created = [await service.create(_create(n)) for n in range(1, 16)]

    page = await service.find_all(PageRequest(page_number=1, page_size=10))

    assert [u.id for u in page.items] == [u.id for u in created[10:]]
    assert page.pagination() == {"pageNumber": 1, "pageSize": 10}


async def test_pagination_first_page(service):
    created = [await service.create(_create(n)) for n in range(1, 16)]
    page = await service.find_all(PageRequest())
    assert [u.id for u in page.items] == [u.id for u in created[:10]]


async def test_count(service):
    for n in range(3):
        await service.create(_create(n))
    assert await service.count() == 3


async def test_delete_missing_user_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.delete(UserId(uuid4()))


async def test_delete_cascades_to_address_and_posts(service, address_repo, post_repo):
    user = await service.create(_create(1))
    await address_repo.create({
        "street": "Main Street", "city": "Town", "state": "ST",
        "country": "Land", "zip_code": "12345", "user_id": user.id,
    })
    await post_repo.create({"title": "Hello", "body": "A body long enough", "user_id": user.id})

    await service.delete(user.id)

    assert await address_repo.find_by_user_id(user.id) is None
    assert await post_repo.count_by_user_id(user.id) == 0
