"""Validation Rules: declarative rule sets evaluated into a tagged result.

Invariants:
    - validate_payload never raises for bad input: it returns Accepted(value) or Rejected(violations)
    - Every violated constraint is reported in one pass (pydantic collects, we translate)
    - Rejected.message joins all violation messages with ", "
    - Unknown keys are violations; camelCase is the only accepted key style
    - PartialRuleSet additionally requires at least one field to be present

Design Decisions:
    - Pydantic models as the declarative schema, pure function as the entry point:
      callers branch on the result instead of catching one exception per field
    - Identifier checks are a separate function so reads can skip them (see DESIGN.md)
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from userposts.core.errors import ErrorMessages, ValidationFailedError

T = TypeVar("T")
R = TypeVar("R", bound="RuleSet")


# ─── Result Variants ─────────────────────────────────────────────

@dataclass(frozen=True)
class Violation:
    """One violated constraint. field is None for payload-level rules."""
    field: str | None
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Accepted(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    violations: list[Violation]

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return ", ".join(v.message for v in self.violations)

    def to_error(self) -> ValidationFailedError:
        return ValidationFailedError(
            self.message, [v.to_dict() for v in self.violations],
        )


ValidationResult = Union[Accepted[T], Rejected]


def unwrap(result: "ValidationResult[T]") -> T:
    """Return the accepted value or raise ValidationFailedError with every violation."""
    if isinstance(result, Rejected):
        raise result.to_error()
    return result.value


# ─── Rule Sets ───────────────────────────────────────────────────

class RuleSet(BaseModel):
    """Base for create schemas: camelCase keys, trimmed strings, no unknown keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="forbid",
        str_strip_whitespace=True,
    )

    field_labels: ClassVar[dict[str, str]] = {}
    pattern_messages: ClassVar[dict[str, str]] = {}


class PartialRuleSet(RuleSet):
    """Base for update schemas: all fields optional, at least one required.

    Fields are typed Optional so they can be omitted; an explicit null is only
    accepted for names listed in nullable_fields.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def require_at_least_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        fields = type(self).model_fields
        nulls = sorted(
            fields[name].alias or name
            for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.nullable_fields
        )
        if nulls:
            raise ValueError(", ".join(
                f"{self.field_labels.get(alias, alias)} cannot be null" for alias in nulls
            ))
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied (merge-update input)."""
        return self.model_dump(exclude_unset=True)


def validate_payload(schema: type[R], payload: Any) -> "ValidationResult[R]":
    """Evaluate payload against schema, collecting every violation."""
    try:
        return Accepted(schema.model_validate(payload))
    except ValidationError as exc:
        return Rejected([_to_violation(error, schema) for error in exc.errors()])


def _to_violation(error: dict, schema: type[RuleSet]) -> Violation:
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else None
    label = schema.field_labels.get(field, field) if field else "Payload"
    kind = error.get("type")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        message = f"{label} is required"
    elif kind == "extra_forbidden":
        message = f'"{field}" is not allowed'
    elif kind == "string_too_short":
        if _is_blank(error.get("input")):
            message = f"{label} cannot be empty"
        else:
            message = f"{label} must be at least {ctx.get('min_length')} characters long"
    elif kind == "string_too_long":
        message = f"{label} must be at most {ctx.get('max_length')} characters long"
    elif kind == "string_pattern_mismatch":
        message = schema.pattern_messages.get(field, f"{label} has an invalid format")
    elif kind == "string_type":
        message = f"{label} must be a string"
    elif kind == "value_error" and "error" in ctx:
        message = str(ctx["error"])
    else:
        message = f"{label}: {error.get('msg')}" if field else str(error.get("msg"))
    return Violation(field, message)


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and not value.strip()


# ─── Identifiers ─────────────────────────────────────────────────

def validate_identifier(raw: Any, field: str = "id", label: str = "ID") -> "ValidationResult[UUID]":
    """Path identifiers must be syntactically valid UUIDv4."""
    value = coerce_identifier(raw)
    if value is None or value.version != 4:
        return Rejected([Violation(field, f"Invalid {label} format")])
    return Accepted(value)


def coerce_identifier(raw: Any) -> UUID | None:
    """Lenient parse for read paths: anything unparsable is simply no identifier."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except (TypeError, ValueError):
        return None


def invalid_input(message: str, field: str | None = None) -> ValidationFailedError:
    """Single-violation validation error for checks outside a rule set."""
    return ValidationFailedError(
        message or ErrorMessages.INVALID_INPUT, [Violation(field, message).to_dict()],
    )
