"""
Base error types shared by configuration and the submission flow.

Every error carries the HTTP status the API should answer with, plus
structured details for the response body and for logging.
"""

from __future__ import annotations


class SubmissionError(Exception):
    """Base exception for all onboarding errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        execution_id: str | None = None,
        step_name: str | None = None,
        details: dict | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message
        self.execution_id = execution_id
        self.step_name = step_name
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ConfigurationError(SubmissionError):
    """A required environment setting is missing."""

    status_code = 500
