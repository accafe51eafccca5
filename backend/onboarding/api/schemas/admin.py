"""Admin console request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from onboarding.forms.custom_fields import CUSTOM_FIELDS_KEY, normalize_custom_fields


class LoginRequest(BaseModel):
    """Request payload for the admin login endpoint."""

    username: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=256)


class TokenResponse(BaseModel):
    """Bearer access token response."""

    success: bool = True
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., ge=1)


class EmployeeListResponse(BaseModel):
    data: list[dict[str, Any]]
    total: int


class EmployeeUpdateRequest(BaseModel):
    """Edited fields, including any custom fields added in the console."""

    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data")
    @classmethod
    def _check_custom_fields(cls, value: dict[str, Any]) -> dict[str, Any]:
        if CUSTOM_FIELDS_KEY in value:
            value = {**value, CUSTOM_FIELDS_KEY: normalize_custom_fields(value[CUSTOM_FIELDS_KEY])}
        return value


class EmployeeUpdateResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]
