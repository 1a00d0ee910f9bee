"""Post Service: caller-stamped authoring, newest-first listing, two-step ownership."""

from uuid import uuid4

import pytest

from userposts.core.domain_types import PostId, UserId
from userposts.core.errors import ForbiddenError, ResourceNotFoundError
from userposts.schemas.post import PostCreate
from userposts.services.post_service import PostService


@pytest.fixture
def service(post_repo, user_repo):
    return PostService(post_repo, user_repo)


async def _user(user_repo, n: int):
    return await user_repo.create({
        "first_name": f"Author{n}", "last_name": "Writer",
        "email": f"author{n}@mail.com", "phone_number": None,
    })


def _post(title: str = "A title") -> PostCreate:
    return PostCreate.model_validate({"title": title, "body": "Body with enough text"})


async def test_create_stamps_author(service, user_repo):
    author = await _user(user_repo, 1)
    post = await service.create(_post(), author.id)
    assert post.user_id == author.id
    assert post.title == "A title"


async def test_create_for_missing_author_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.create(_post(), UserId(uuid4()))


async def test_find_by_user_id_is_newest_first(service, user_repo):
    author = await _user(user_repo, 1)
    first = await service.create(_post("First"), author.id)
    second = await service.create(_post("Second"), author.id)
    third = await service.create(_post("Third"), author.id)

    posts = await service.find_by_user_id(author.id)

    assert [p.id for p in posts] == [third.id, second.id, first.id]


async def test_find_by_user_id_only_returns_that_author(service, user_repo):
    a = await _user(user_repo, 1)
    b = await _user(user_repo, 2)
    await service.create(_post(), a.id)
    assert await service.find_by_user_id(b.id) == []


async def test_find_by_id_missing_raises(service):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.find_by_id(PostId(uuid4()))
    assert exc_info.value.message == "Post not found"


async def test_ensure_author_rejects_other_user(service, user_repo):
    a = await _user(user_repo, 1)
    b = await _user(user_repo, 2)
    post = await service.create(_post(), a.id)

    with pytest.raises(ForbiddenError):
        service.ensure_author(await service.find_by_id(post.id), b.id)

    assert (await service.find_by_id(post.id)).title == "A title"


async def test_ensure_author_accepts_author(service, user_repo):
    a = await _user(user_repo, 1)
    post = await service.create(_post(), a.id)
    service.ensure_author(post, a.id)


async def test_update_merges(service, user_repo):
    a = await _user(user_repo, 1)
    post = await service.create(_post(), a.id)
    updated = await service.update(post.id, {"title": "New title"})
    assert updated.title == "New title"
    assert updated.body == "Body with enough text"
    assert updated.user_id == a.id


async def test_delete_missing_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.delete(PostId(uuid4()))
