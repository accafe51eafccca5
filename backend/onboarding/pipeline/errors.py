"""
Domain-specific exception hierarchy for the onboarding submission flow.

All exceptions inherit from SubmissionError so callers can catch broadly
or narrowly as needed.  The base and ConfigurationError live in
``onboarding.core.errors`` so settings can raise them without loading the
pipeline.
"""

from __future__ import annotations

from onboarding.core.errors import ConfigurationError, SubmissionError

__all__ = [
    "SubmissionError",
    "ConfigurationError",
    "MissingProfileEmailError",
    "AccessDeniedError",
    "MissingAccessTokenError",
    "FormValidationError",
    "StepExecutionError",
    "NotificationError",
    "PersistenceError",
]


class MissingProfileEmailError(SubmissionError):
    """The submitter profile carries no email address."""

    status_code = 400


class AccessDeniedError(SubmissionError):
    """The submitter's email is outside the approved domain."""

    status_code = 403


class MissingAccessTokenError(SubmissionError):
    """No mail access token was supplied for delegated sending."""

    status_code = 401


class FormValidationError(SubmissionError):
    """The submitted form failed validation; details hold per-field errors."""

    status_code = 400


class StepExecutionError(SubmissionError):
    """A step failed during execution."""
    pass


class NotificationError(StepExecutionError):
    """The mail transport rejected or failed to send the notification."""

    def __init__(
        self,
        message: str,
        *,
        transport_status: int | None = None,
        response_body: str | None = None,
        **kwargs,
    ) -> None:
        self.transport_status = transport_status
        self.response_body = response_body
        super().__init__(message, **kwargs)


class PersistenceError(StepExecutionError):
    """Writing the employee record to the store failed."""
    pass
