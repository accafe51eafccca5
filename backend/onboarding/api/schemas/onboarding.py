"""Onboarding submission request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from onboarding.forms.submission import FormSubmission, SubmitterProfile


class _CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OnboardingRequest(_CamelSchema):
    """Body of POST /onboarding; every part optional so the steps can answer."""

    profile: SubmitterProfile = Field(default_factory=SubmitterProfile)
    access_token: str | None = None
    form: FormSubmission = Field(default_factory=FormSubmission)

    @field_validator("profile", "form", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class OnboardingResponse(_CamelSchema):
    success: bool = True
    execution_id: str
    persisted: bool


class SignInRequest(_CamelSchema):
    profile: SubmitterProfile = Field(default_factory=SubmitterProfile)

    @field_validator("profile", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class SignInResponse(_CamelSchema):
    allowed: bool
    message: str = ""


class FormOptionsResponse(_CamelSchema):
    """Field catalogue the form client renders for the configured variant."""

    variant: str
    labels: dict[str, str]
    required: list[str]
    options: dict[str, list[str]]
