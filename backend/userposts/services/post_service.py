"""Post Service: authoring, listing and ownership-gated mutation of posts.

Invariants:
    - create always stamps the caller as author; there is no way to post as someone else
    - find_by_user_id returns newest first
    - Mutations are a two-step contract: find_by_id, then ensure_author, then update/delete.
      A mismatch raises ForbiddenError and leaves the post intact.
"""

import logging
from typing import Any
from uuid import UUID

from userposts.core.domain_types import PostId, UserId
from userposts.core.enforce_ownership import ensure_author
from userposts.core.entities import Post
from userposts.core.errors import (
    ErrorContext, ErrorMessages, ForbiddenError, ResourceNotFoundError,
)
from userposts.core.repository_protocols import PostRepository, UserRepository
from userposts.schemas.post import PostCreate

logger = logging.getLogger(__name__)


class PostService:

    def __init__(self, posts: PostRepository, users: UserRepository):
        self._posts = posts
        self._users = users

    async def find_by_id(self, post_id: PostId) -> Post:
        post = await self._posts.find_by_id(post_id)
        if post is None:
            raise ResourceNotFoundError(
                "Post", ErrorMessages.POST_NOT_FOUND,
                ErrorContext(resource_id=str(post_id)),
            )
        return post

    async def find_by_user_id(self, user_id: UserId) -> list[Post]:
        return await self._posts.find_by_user_id(user_id)

    async def create(self, data: PostCreate, author_id: UserId) -> Post:
        if await self._users.find_by_id(author_id) is None:
            raise ResourceNotFoundError(
                "User", ErrorMessages.USER_NOT_FOUND,
                ErrorContext(resource_id=str(author_id)),
            )
        post = await self._posts.create({**data.model_dump(), "user_id": author_id})
        logger.info(
            "Post created",
            extra={"resource_id": str(post.id), "user_id": str(author_id)},
        )
        return post

    def ensure_author(self, post: Post, caller_id: UUID) -> None:
        """Second step of the mutation contract; raises ForbiddenError for non-authors."""
        try:
            ensure_author(post, caller_id)
        except ForbiddenError:
            logger.warning(
                "Rejected post mutation by non-author",
                extra={"resource_id": str(post.id), "user_id": str(caller_id)},
            )
            raise

    async def update(self, post_id: PostId, changes: dict[str, Any]) -> Post:
        return await self._posts.update(post_id, changes)

    async def delete(self, post_id: PostId) -> None:
        await self._posts.delete(post_id)
        logger.info("Post deleted", extra={"resource_id": str(post_id)})
