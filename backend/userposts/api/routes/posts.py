"""Post Routes: authoring, per-author listing and author-only mutation.

Invariants:
    - GET "" requires the userId query parameter (400 otherwise); results newest first
    - Reads embed the author under "user"
    - PATCH/DELETE follow fetch -> ensure_author -> mutate; non-authors get 403, post untouched
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from userposts.api.deps import get_caller_id, get_post_service
from userposts.core.domain_types import PostId, UserId
from userposts.core.errors import ErrorContext, ErrorMessages, ResourceNotFoundError
from userposts.core.validation import coerce_identifier, invalid_input, unwrap
from userposts.schemas.common import envelope
from userposts.schemas.post import (
    PostDetailResponse, PostResponse,
    validate_post_create, validate_post_id, validate_post_update,
)
from userposts.services.post_service import PostService

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.get("")
async def list_posts(
    user_id: str | None = Query(None, alias="userId"),
    service: PostService = Depends(get_post_service),
):
    if not user_id:
        raise invalid_input("userId query parameter is required", "userId")
    author = coerce_identifier(user_id)
    posts = await service.find_by_user_id(UserId(author)) if author else []
    return envelope([PostDetailResponse.render(post) for post in posts])


@router.get("/{post_id}")
async def get_post(post_id: str, service: PostService = Depends(get_post_service)):
    identifier = coerce_identifier(post_id)
    if identifier is None:
        raise ResourceNotFoundError(
            "Post", ErrorMessages.POST_NOT_FOUND, ErrorContext(resource_id=post_id),
        )
    return envelope(PostDetailResponse.render(await service.find_by_id(PostId(identifier))))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: dict[str, Any] = Body(...),
    caller_id: UserId = Depends(get_caller_id),
    service: PostService = Depends(get_post_service),
):
    data = unwrap(validate_post_create(payload))
    return envelope(PostResponse.render(await service.create(data, caller_id)))


@router.patch("/{post_id}")
async def update_post(
    post_id: str,
    payload: dict[str, Any] = Body(...),
    caller_id: UserId = Depends(get_caller_id),
    service: PostService = Depends(get_post_service),
):
    target = PostId(unwrap(validate_post_id(post_id)))
    changes = unwrap(validate_post_update(payload)).changes()
    post = await service.find_by_id(target)
    service.ensure_author(post, caller_id)
    return envelope(PostResponse.render(await service.update(target, changes)))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    caller_id: UserId = Depends(get_caller_id),
    service: PostService = Depends(get_post_service),
):
    target = PostId(unwrap(validate_post_id(post_id)))
    post = await service.find_by_id(target)
    service.ensure_author(post, caller_id)
    await service.delete(target)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
