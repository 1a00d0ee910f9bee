"""Post Repository: CRUD plus per-author listing, newest first.

Invariants:
    - find_by_id and find_by_user_id return posts with their author loaded
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from userposts.core.domain_types import PostId, UserId
from userposts.core.entities import Post
from userposts.core.errors import ErrorContext, ErrorMessages, ResourceNotFoundError
from userposts.models.post import Post as PostModel
from userposts.repositories.base import SqlAlchemyRepository, to_post


def _with_author():
    return (
        select(PostModel)
        .options(selectinload(PostModel.user))
        .execution_options(populate_existing=True)
    )


class SqlAlchemyPostRepository(SqlAlchemyRepository):

    async def find_by_id(self, post_id: PostId) -> Post | None:
        result = await self._db.execute(_with_author().where(PostModel.id == post_id))
        row = result.scalar_one_or_none()
        return to_post(row, with_user=True) if row else None

    async def find_by_user_id(self, user_id: UserId) -> list[Post]:
        result = await self._db.execute(
            _with_author()
            .where(PostModel.user_id == user_id)
            .order_by(PostModel.created_at.desc()),
        )
        return [to_post(row, with_user=True) for row in result.scalars().all()]

    async def count_by_user_id(self, user_id: UserId) -> int:
        total = await self._db.scalar(
            select(func.count()).select_from(PostModel)
            .where(PostModel.user_id == user_id),
        )
        return total or 0

    async def create(self, data: dict[str, Any]) -> Post:
        row = PostModel(**data)
        self._db.add(row)
        await self._commit()
        return to_post(row)

    async def update(self, post_id: PostId, changes: dict[str, Any]) -> Post:
        row = await self._get_row(post_id)
        for name, value in changes.items():
            setattr(row, name, value)
        row.updated_at = datetime.now(timezone.utc)
        await self._commit()
        return to_post(row)

    async def delete(self, post_id: PostId) -> None:
        row = await self._get_row(post_id)
        await self._db.delete(row)
        await self._commit()

    async def _get_row(self, post_id: PostId) -> PostModel:
        row = await self._db.get(PostModel, post_id)
        if row is None:
            raise ResourceNotFoundError(
                "Post", ErrorMessages.POST_NOT_FOUND,
                ErrorContext(resource_id=str(post_id)),
            )
        return row
