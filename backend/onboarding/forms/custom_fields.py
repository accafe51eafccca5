"""
Custom fields an HR admin attaches to a stored record.

Stored in the record document as ``customFields``: a list of
``{category, label, value}`` entries, all three required.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

CUSTOM_FIELDS_KEY = "customFields"
CUSTOM_FIELD_PARTS = ("category", "label", "value")


class CustomField(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    category: str
    label: str
    value: str

    @field_validator("category", "label", "value")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be blank")
        return value


def normalize_custom_fields(items: Any) -> list[dict[str, str]]:
    """Validate a ``customFields`` value; raises ValueError naming the bad entry."""
    if not isinstance(items, list):
        raise ValueError("customFields must be a list of {category, label, value} entries")

    fields = []
    for index, item in enumerate(items):
        try:
            fields.append(CustomField.model_validate(item).model_dump())
        except ValidationError as exc:
            raise ValueError(
                f"customFields[{index}]: category, label and value are all required"
            ) from exc
    return fields


def parse_custom_field(text: str) -> dict[str, str]:
    """Parse ``category:label:value``; the value may itself contain colons."""
    parts = text.split(":", 2)
    if len(parts) != 3:
        raise ValueError(f"Expected category:label:value, got '{text}'")
    return normalize_custom_fields([dict(zip(CUSTOM_FIELD_PARTS, parts))])[0]
