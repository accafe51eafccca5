"""
AuthorizeSubmitterStep — rejects a submission before any side effect.

Checks, in order: mail configuration present, profile email present,
email inside the approved domain, access token present when mail is sent
on behalf of the signed-in user.
"""

from __future__ import annotations

from onboarding.core.config import Settings
from onboarding.core.constants import GatePurpose, MailMode
from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.errors import (
    AccessDeniedError,
    MissingAccessTokenError,
    MissingProfileEmailError,
)
from onboarding.pipeline.step import SubmissionStep
from onboarding.submission.dispatcher import MISSING_TOKEN_MESSAGE
from onboarding.validation.access_gate import check_email_domain

MISSING_EMAIL_MESSAGE = "Profile email is required to send onboarding details."


class AuthorizeSubmitterStep(SubmissionStep):
    """Gate the submitter on configuration, email domain and token."""

    name = "authorize_submitter"
    description = "Check configuration, submitter email domain and access token"

    def __init__(self, config: Settings) -> None:
        self.config = config

    async def execute(self, ctx: SubmissionContext) -> StepResult:
        started_at = self._now()

        self.config.require_mail_settings()

        email = ctx.profile.email.strip()
        if not email:
            raise MissingProfileEmailError(MISSING_EMAIL_MESSAGE)

        decision = check_email_domain(
            email,
            GatePurpose.SUBMISSION,
            domain=self.config.ALLOWED_EMAIL_DOMAIN,
        )
        if not decision.allowed:
            raise AccessDeniedError(decision.message)

        delegated = self.config.GRAPH_MAIL_MODE == MailMode.DELEGATED
        if delegated and not ctx.access_token:
            raise MissingAccessTokenError(MISSING_TOKEN_MESSAGE)

        return self._success(started_at, metadata={
            "mail_mode": str(self.config.GRAPH_MAIL_MODE),
        })
