"""Post Schemas: create/update rule sets, identifier check and response shape.

Invariants:
    - title: trimmed, 3-100 chars; body: trimmed, at least 10 chars
    - userId is not part of either rule set: the author is the caller, and is immutable
    - read responses (PostDetailResponse) embed the author; write responses do not
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar
from uuid import UUID

from pydantic import StringConstraints

from userposts.core.validation import (
    PartialRuleSet, RuleSet, ValidationResult, validate_identifier, validate_payload,
)
from userposts.schemas.common import ResponseModel
from userposts.schemas.user import UserResponse

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Body = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]

_LABELS = {"title": "Title", "body": "Body"}


class PostCreate(RuleSet):
    field_labels: ClassVar[dict[str, str]] = _LABELS

    title: Title
    body: Body


class PostUpdate(PartialRuleSet):
    field_labels: ClassVar[dict[str, str]] = _LABELS

    title: Title | None = None
    body: Body | None = None


class PostResponse(ResponseModel):
    id: UUID
    title: str
    body: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class PostDetailResponse(PostResponse):
    """Read shape: the post plus its author."""
    user: UserResponse | None = None


def validate_post_create(payload: Any) -> ValidationResult[PostCreate]:
    return validate_payload(PostCreate, payload)


def validate_post_update(payload: Any) -> ValidationResult[PostUpdate]:
    return validate_payload(PostUpdate, payload)


def validate_post_id(raw: Any) -> ValidationResult[UUID]:
    return validate_identifier(raw, "id", "Post ID")
