"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase keys on the wire.

    Snake-case field names are still accepted on input so Python callers
    and tests can build schemas directly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StatusMessage(CamelModel):
    """Simple acknowledgement returned by state-changing endpoints."""

    status: str
