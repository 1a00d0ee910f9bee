"""Repository Base: session holder, commit with conflict mapping, row-to-entity mapping.

Design Decisions:
    - Relations are mapped only when the caller asked for them and loaded them eagerly:
      touching an unloaded relation on an async session would trigger IO in the mapper
    - Mapping functions are explicit field lists, not reflection: the table layout (models/)
      and the domain structs (core/entities.py) can drift independently
    - The store's unique constraints are the authoritative guard for check-then-insert races;
      _commit converts their IntegrityError into the same domain error the pre-check raises
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userposts.core.domain_types import AddressId, PostId, UserId
from userposts.core.entities import Address, Post, User
from userposts.core.errors import UserPostsError
from userposts.models.address import Address as AddressModel
from userposts.models.post import Post as PostModel
from userposts.models.user import User as UserModel

logger = logging.getLogger(__name__)


class SqlAlchemyRepository:
    """Shared plumbing for the entity repositories."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _commit(self, conflict: Callable[[], UserPostsError] | None = None) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            if conflict is None:
                raise
            logger.warning(f"Unique constraint rejected write: {e.orig}")
            raise conflict() from e


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_user(row: UserModel, with_address: bool = False) -> User:
    """with_address requires row.address to be eagerly loaded (selectinload)."""
    return User(
        id=UserId(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone_number=row.phone_number,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        address=to_address(row.address) if with_address and row.address else None,
    )


def to_address(row: AddressModel) -> Address:
    return Address(
        id=AddressId(row.id),
        street=row.street,
        city=row.city,
        state=row.state,
        country=row.country,
        zip_code=row.zip_code,
        user_id=UserId(row.user_id),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def to_post(row: PostModel, with_user: bool = False) -> Post:
    """with_user requires row.user to be eagerly loaded (selectinload)."""
    return Post(
        id=PostId(row.id),
        title=row.title,
        body=row.body,
        user_id=UserId(row.user_id),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        user=to_user(row.user) if with_user else None,
    )
