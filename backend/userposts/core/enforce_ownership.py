"""Ownership Enforcement: compares a caller identity against a resource owner.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Raise ForbiddenError on mismatch, return None on success
    - Forbidden (403) is distinct from Unauthorized (401): the caller IS authenticated here

Design Decisions:
    - Two-step contract (fetch, then check) instead of filtering queries by owner:
      a foreign resource is reported as forbidden rather than hidden as not-found
"""

from uuid import UUID

from userposts.core.entities import Post
from userposts.core.errors import ErrorContext, ForbiddenError


def ensure_author(post: Post, caller_id: UUID) -> None:
    """Only the author may mutate a post."""
    if post.user_id != caller_id:
        raise ForbiddenError(
            "You are not allowed to modify this post",
            ErrorContext(
                resource_type="Post", resource_id=str(post.id), caller_id=str(caller_id),
            ),
        )


def ensure_self(target_user_id: UUID, caller_id: UUID, resource_type: str = "User") -> None:
    """Per-user resources (the user record, its address) are mutable only by that user."""
    if target_user_id != caller_id:
        raise ForbiddenError(
            f"You are not allowed to modify this {resource_type.lower()}",
            ErrorContext(
                resource_type=resource_type,
                resource_id=str(target_user_id),
                caller_id=str(caller_id),
            ),
        )
