"""Shared response plumbing: camelCase response base and the success envelope."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResponseModel(BaseModel):
    """Response base: built from entities, serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @classmethod
    def render(cls, entity: Any) -> dict:
        return cls.model_validate(entity).model_dump(mode="json", by_alias=True)


def envelope(data: Any, **extra: Any) -> dict:
    """Success envelope shared by every endpoint: {"status", "data", ...extra}."""
    return {"status": "success", "data": data, **extra}
