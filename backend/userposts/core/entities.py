"""Domain Entities: explicit structs for User, Address and Post.

Invariants:
    - Entities are plain dataclasses; they know nothing about tables or sessions
    - Post.user_id and Address.user_id are set once at creation and never reassigned
    - Field names are snake_case here; camelCase exists only on the wire (schemas/)
    - User.address and Post.user are populated only by read paths that load the relation;
      None on a User means "no address" only when it came from such a path
    - Timestamps are timezone-aware UTC

Design Decisions:
    - Struct + separate table mapping (models/) instead of annotated ORM classes leaking
      into services: repositories translate rows to entities at the boundary
"""

from dataclasses import dataclass
from datetime import datetime

from userposts.core.domain_types import AddressId, PostId, UserId


@dataclass
class User:
    id: UserId
    first_name: str
    last_name: str
    email: str
    phone_number: str | None
    created_at: datetime
    updated_at: datetime
    address: "Address | None" = None


@dataclass
class Address:
    id: AddressId
    street: str
    city: str
    state: str
    country: str
    zip_code: str
    user_id: UserId
    created_at: datetime
    updated_at: datetime


@dataclass
class Post:
    id: PostId
    title: str
    body: str
    user_id: UserId
    created_at: datetime
    updated_at: datetime
    user: User | None = None
