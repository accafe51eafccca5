"""
FormSubmission / Nominee / SubmitterProfile — in-memory onboarding form.

Field names are snake_case in Python and camelCase on the wire
(``passport_name`` <-> ``passportName``).  Every scalar is a string that
defaults to "" so a half-filled form still parses; validation decides
what is missing.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def new_nominee_id() -> str:
    """Locally unique nominee row id (not a durable key)."""
    return f"nominee-{uuid.uuid4().hex}"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_scalars(cls, value: Any) -> Any:
        # JSON clients send null for untouched inputs and numbers for portions
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Nominee(_CamelModel):
    """A beneficiary entry with a percentage portion."""

    id: str = Field(default_factory=new_nominee_id)
    name: str = ""
    passport_id: str = ""
    relationship: str = ""
    portion: str = ""

    @field_validator("id", mode="after")
    @classmethod
    def _fill_blank_id(cls, value: str) -> str:
        return value or new_nominee_id()


class SubmitterProfile(_CamelModel):
    """Identity of the signed-in account submitting the form."""

    name: str = ""
    email: str = ""


class FormSubmission(_CamelModel):
    """One onboarding form's field values before persistence."""

    # Identity
    passport_name: str = ""
    calling_name: str = ""
    gender: str = ""
    dob_day: str = ""
    dob_month: str = ""
    dob_year: str = ""
    nationality: str = ""
    religion: str = ""
    passport_no: str = ""
    marital_status: str = ""

    # Contact (standard variant)
    contact_number: str = ""
    residential_address: str = ""

    # Contact (regional variant)
    sri_lanka_contact: str = ""
    home_contact_code: str = ""
    home_contact_number: str = ""
    sri_lanka_address: str = ""
    home_country_address: str = ""

    # Shared contact
    home_country: str = ""
    personal_email: str = ""

    # Emergency
    emergency_name: str = ""
    emergency_relationship: str = ""
    emergency_contact: str = ""
    emergency_address: str = ""

    # Family
    birth_place: str = ""
    spouse_name: str = ""
    mother_name: str = ""
    father_name: str = ""

    nominees: list[Nominee] = Field(default_factory=list)

    @field_validator("nominees", mode="before")
    @classmethod
    def _nominees_default(cls, value: Any) -> Any:
        return [] if value in (None, "") else value

    def field_values(self) -> dict[str, str]:
        """Scalar fields keyed by their wire (camelCase) names."""
        return self.model_dump(by_alias=True, exclude={"nominees"})

    def nominee_dicts(self) -> list[dict[str, str]]:
        return [nominee.model_dump(by_alias=True) for nominee in self.nominees]
