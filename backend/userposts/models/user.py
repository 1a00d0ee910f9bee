"""User ORM: persists the aggregate root owning one address and many posts.

Invariants:
    - id is UUID primary key (client-side uuid4)
    - email is unique: the authoritative guard behind UserService's existence check
    - cascade delete for address and posts

Design Decisions:
    - Column names are snake_case; wire names are camelCase (schemas/)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from userposts.db.base import Base


class User(Base):
    """User table: aggregate root for address and posts."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    phone_number: Mapped[str | None] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    address: Mapped["Address"] = relationship(
        "Address", back_populates="user", uselist=False,
        cascade="all, delete-orphan",
    )
    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="user",
        cascade="all, delete-orphan",
    )
