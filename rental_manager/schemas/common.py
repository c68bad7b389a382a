"""
Shared schema building blocks.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exchanging camelCase JSON.
    Snake_case field names are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DeleteResponse(CamelModel):
    """Confirmation returned by delete endpoints."""

    message: str = Field(..., examples=["Property deleted"])


def clean_required_text(value, field_name: str):
    """
    Strip a required text field on update.

    Explicit ``null`` and blank strings are rejected; omitted fields never
    reach the validator.
    """
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} cannot be empty")
    return value


def reject_null(value, field_name: str):
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert an incoming timestamp to UTC.

    SQLite keeps the wall-clock digits and drops the offset, so every stored
    instant is normalized first; naive values are taken to be UTC already.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
