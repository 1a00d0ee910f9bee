"""User Routes: registration, listing, lookup and self-service update/delete.

Invariants:
    - GET /count is declared before GET /{user_id} so "count" is never read as an id
    - PATCH/DELETE require a bearer token whose identity equals the path id (403 otherwise)
    - Pagination parameters are echoed back under "pagination"
    - Reads embed the user's address (null when absent)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from userposts.api.deps import get_caller_id, get_user_service
from userposts.core.domain_types import PageRequest, UserId
from userposts.core.enforce_ownership import ensure_self
from userposts.core.errors import ErrorContext, ErrorMessages, ResourceNotFoundError
from userposts.core.validation import coerce_identifier, unwrap
from userposts.schemas.common import envelope
from userposts.schemas.user import (
    UserDetailResponse, UserResponse,
    validate_user_create, validate_user_id, validate_user_update,
)
from userposts.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("")
async def list_users(
    page_number: str | None = Query(None, alias="pageNumber"),
    page_size: str | None = Query(None, alias="pageSize"),
    service: UserService = Depends(get_user_service),
):
    """List users in creation order, one page at a time."""
    page = await service.find_all(PageRequest.from_query(page_number, page_size))
    return envelope(
        [UserDetailResponse.render(user) for user in page.items],
        pagination=page.pagination(),
    )


@router.get("/count")
async def count_users(service: UserService = Depends(get_user_service)):
    return envelope({"count": await service.count()})


@router.get("/{user_id}")
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    identifier = coerce_identifier(user_id)
    if identifier is None:
        raise ResourceNotFoundError(
            "User", ErrorMessages.USER_NOT_FOUND, ErrorContext(resource_id=user_id),
        )
    return envelope(UserDetailResponse.render(await service.find_by_id(UserId(identifier))))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
):
    data = unwrap(validate_user_create(payload))
    return envelope(UserResponse.render(await service.create(data)))


@router.patch("/{user_id}")
async def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    caller_id: UserId = Depends(get_caller_id),
    service: UserService = Depends(get_user_service),
):
    target = UserId(unwrap(validate_user_id(user_id)))
    changes = unwrap(validate_user_update(payload)).changes()
    ensure_self(target, caller_id)
    return envelope(UserResponse.render(await service.update(target, changes)))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    caller_id: UserId = Depends(get_caller_id),
    service: UserService = Depends(get_user_service),
):
    target = UserId(unwrap(validate_user_id(user_id)))
    ensure_self(target, caller_id)
    await service.delete(target)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
