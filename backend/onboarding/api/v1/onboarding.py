"""Onboarding endpoints — packet submission, sign-in domain check and form catalogue."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from onboarding.api.deps import get_dispatcher, get_session_factory, get_settings
from onboarding.api.schemas.onboarding import (
    FormOptionsResponse,
    OnboardingRequest,
    OnboardingResponse,
    SignInRequest,
    SignInResponse,
)
from onboarding.core.config import Settings
from onboarding.core.constants import (
    GENDER_OPTIONS,
    HOME_COUNTRY_OPTIONS,
    MARITAL_STATUS_OPTIONS,
    RELATIONSHIP_OPTIONS,
    GatePurpose,
)
from onboarding.forms.fields import FIELD_LABELS, required_fields
from onboarding.pipeline import SubmissionContext, SubmissionEngine
from onboarding.pipeline.flow import build_submission_steps
from onboarding.submission.dispatcher import NotificationDispatcher
from onboarding.validation.access_gate import check_email_domain

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


@router.post("", response_model=OnboardingResponse)
async def submit_onboarding(
    payload: OnboardingRequest,
    config: Settings = Depends(get_settings),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    session_factory: async_sessionmaker[AsyncSession] | None = Depends(get_session_factory),
) -> OnboardingResponse:
    """
    Validate, export, mail and store one onboarding packet.

    Failures are raised as SubmissionError subclasses and rendered by the
    application's exception handler with their own status code.
    """
    ctx = SubmissionContext(
        profile=payload.profile,
        form=payload.form,
        access_token=payload.access_token,
        variant=config.FORM_VARIANT,
    )
    steps = build_submission_steps(config, dispatcher, session_factory)
    result = await SubmissionEngine().run_steps(ctx, steps)

    if result.failure is not None:
        raise result.failure

    return OnboardingResponse(
        success=True,
        execution_id=result.execution_id,
        persisted=ctx.persisted,
    )


@router.post("/sign-in", response_model=SignInResponse)
async def check_sign_in(
    payload: SignInRequest,
    config: Settings = Depends(get_settings),
) -> SignInResponse:
    """Tell the client whether the signed-in account may use the form."""
    decision = check_email_domain(
        payload.profile.email,
        GatePurpose.SIGN_IN,
        domain=config.ALLOWED_EMAIL_DOMAIN,
    )
    return SignInResponse(allowed=decision.allowed, message=decision.message)


@router.get("/form", response_model=FormOptionsResponse)
async def get_form_options(config: Settings = Depends(get_settings)) -> FormOptionsResponse:
    """Labels, required keys and select options for the configured form variant."""
    return FormOptionsResponse(
        variant=str(config.FORM_VARIANT),
        labels=FIELD_LABELS,
        required=list(required_fields(config.FORM_VARIANT)),
        options={
            "gender": list(GENDER_OPTIONS),
            "maritalStatus": list(MARITAL_STATUS_OPTIONS),
            "relationship": list(RELATIONSHIP_OPTIONS),
            "homeCountry": list(HOME_COUNTRY_OPTIONS),
        },
    )
