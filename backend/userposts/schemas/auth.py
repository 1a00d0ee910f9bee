"""Auth Schemas: login request and token response.

Design Decisions:
    - Email is the only credential (no password); flagged in DESIGN.md as an
      intentional simplification
"""

from typing import Any, ClassVar

from pydantic import BaseModel

from userposts.core.validation import RuleSet, ValidationResult, validate_payload
from userposts.schemas.user import Email


class LoginRequest(RuleSet):
    field_labels: ClassVar[dict[str, str]] = {"email": "Email"}

    email: Email


class TokenResponse(BaseModel):
    token: str


def validate_login(payload: Any) -> ValidationResult[LoginRequest]:
    return validate_payload(LoginRequest, payload)
