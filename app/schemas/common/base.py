"""
Schema base classes.

Payload schemas forbid unknown fields; update schemas expose only the
fields the caller actually sent through `changes()`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseFilterSchema",
]


class BaseSchema(BaseModel):
    """Reads ORM attributes and strips surrounding whitespace from strings."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class BaseCreateSchema(BaseSchema):
    model_config = ConfigDict(extra="forbid")


class BaseUpdateSchema(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict:
        """Fields explicitly present in the payload, including explicit nulls."""
        return self.model_dump(exclude_unset=True)


class BaseFilterSchema(BaseSchema):
    model_config = ConfigDict(extra="forbid")
