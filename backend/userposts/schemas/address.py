"""Address Schemas: create/update rule sets, owner identifier check and response shape.

Invariants:
    - street: trimmed, 2-100 chars; city/state/country: trimmed, 2-50 chars
    - zipCode: 4-10 ASCII digits as a string; an integer in 1000..9999999999 is normalised to its string form
    - userId is never accepted from the payload; it is stamped from the caller identity
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar
from uuid import UUID

from pydantic import BeforeValidator, StringConstraints

from userposts.core.validation import (
    PartialRuleSet, RuleSet, ValidationResult, validate_identifier, validate_payload,
)
from userposts.schemas.common import ResponseModel

ZIP_CODE_MESSAGE = "Zip Code must be a number with 4-10 digits"


def _zip_from_number(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        if 1000 <= value <= 9_999_999_999:
            return str(value)
        raise ValueError(ZIP_CODE_MESSAGE)
    return value


Street = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
Region = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
ZipCode = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^[0-9]{4,10}$"),
    BeforeValidator(_zip_from_number),
]

_LABELS = {
    "street": "Street",
    "city": "City",
    "state": "State",
    "country": "Country",
    "zipCode": "Zip Code",
}
_PATTERNS = {"zipCode": ZIP_CODE_MESSAGE}


class AddressCreate(RuleSet):
    field_labels: ClassVar[dict[str, str]] = _LABELS
    pattern_messages: ClassVar[dict[str, str]] = _PATTERNS

    street: Street
    city: Region
    state: Region
    country: Region
    zip_code: ZipCode


class AddressUpdate(PartialRuleSet):
    field_labels: ClassVar[dict[str, str]] = _LABELS
    pattern_messages: ClassVar[dict[str, str]] = _PATTERNS

    street: Street | None = None
    city: Region | None = None
    state: Region | None = None
    country: Region | None = None
    zip_code: ZipCode | None = None


class AddressResponse(ResponseModel):
    id: UUID
    street: str
    city: str
    state: str
    country: str
    zip_code: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime


def validate_address_create(payload: Any) -> ValidationResult[AddressCreate]:
    return validate_payload(AddressCreate, payload)


def validate_address_update(payload: Any) -> ValidationResult[AddressUpdate]:
    return validate_payload(AddressUpdate, payload)


def validate_address_user_id(raw: Any) -> ValidationResult[UUID]:
    return validate_identifier(raw, "userId", "User ID")
