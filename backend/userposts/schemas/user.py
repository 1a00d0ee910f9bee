"""User Schemas: create/update rule sets, identifier check and response shape.

Invariants:
    - firstName/lastName: trimmed, 2-50 chars
    - email: valid syntax (email-validator, no deliverability lookup), required on create
    - phoneNumber: optional; null or "" means absent; else optional "+" and 10-15 digits
    - read responses (UserDetailResponse) embed the address; write responses do not
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Optional
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BeforeValidator, StringConstraints

from userposts.core.validation import (
    PartialRuleSet, RuleSet, ValidationResult, validate_identifier, validate_payload,
)
from userposts.schemas.address import AddressResponse
from userposts.schemas.common import ResponseModel


def check_email_syntax(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email format")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
Email = Annotated[str, StringConstraints(strip_whitespace=True), AfterValidator(check_email_syntax)]
PhoneNumber = Annotated[
    Optional[Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\+?[0-9]{10,15}$")]],
    BeforeValidator(_blank_to_none),
]

_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "phoneNumber": "Phone number",
}
_PATTERNS = {
    "phoneNumber": (
        "Phone number must be 10-15 digits and can start with + for international format"
    ),
}


class UserCreate(RuleSet):
    field_labels: ClassVar[dict[str, str]] = _LABELS
    pattern_messages: ClassVar[dict[str, str]] = _PATTERNS

    first_name: PersonName
    last_name: PersonName
    email: Email
    phone_number: PhoneNumber = None


class UserUpdate(PartialRuleSet):
    field_labels: ClassVar[dict[str, str]] = _LABELS
    pattern_messages: ClassVar[dict[str, str]] = _PATTERNS
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"phone_number"})

    first_name: PersonName | None = None
    last_name: PersonName | None = None
    email: Email | None = None
    phone_number: PhoneNumber = None


class UserResponse(ResponseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    created_at: datetime
    updated_at: datetime


class UserDetailResponse(UserResponse):
    """Read shape: the user plus the address, null when the user has none."""
    address: AddressResponse | None = None


def validate_user_create(payload: Any) -> ValidationResult[UserCreate]:
    return validate_payload(UserCreate, payload)


def validate_user_update(payload: Any) -> ValidationResult[UserUpdate]:
    return validate_payload(UserUpdate, payload)


def validate_user_id(raw: Any) -> ValidationResult[UUID]:
    return validate_identifier(raw, "id", "User ID")
