"""API schema package."""

from onboarding.api.schemas.admin import (
    EmployeeListResponse,
    EmployeeUpdateRequest,
    EmployeeUpdateResponse,
    LoginRequest,
    TokenResponse,
)
from onboarding.api.schemas.onboarding import (
    FormOptionsResponse,
    OnboardingRequest,
    OnboardingResponse,
    SignInRequest,
    SignInResponse,
)

__all__ = [
    "EmployeeListResponse",
    "EmployeeUpdateRequest",
    "EmployeeUpdateResponse",
    "FormOptionsResponse",
    "LoginRequest",
    "OnboardingRequest",
    "OnboardingResponse",
    "SignInRequest",
    "SignInResponse",
    "TokenResponse",
]
