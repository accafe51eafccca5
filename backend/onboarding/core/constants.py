"""Shared constants and enums used across the application."""

from enum import StrEnum


class FormVariant(StrEnum):
    """Which set of contact/address fields the onboarding form collects."""

    STANDARD = "standard"
    REGIONAL = "regional"


class MailMode(StrEnum):
    """How notification mail is sent through Microsoft Graph."""

    DELEGATED = "delegated"      # as the signed-in submitter (/me/sendMail)
    APPLICATION = "application"  # as a shared sender mailbox (client credentials)


class GatePurpose(StrEnum):
    """What an access-gate check is guarding."""

    SUBMISSION = "submission"
    SIGN_IN = "sign_in"


class SubmissionStatus(StrEnum):
    """Overall status of one onboarding submission run."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    PARTIALLY_COMPLETED = "PARTIALLY_COMPLETED"


class StepStatus(StrEnum):
    """Status of an individual submission step."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


MARRIED = "Married"

GENDER_OPTIONS = ("Male", "Female", "Non-binary", "Prefer not to say")
MARITAL_STATUS_OPTIONS = ("Single", "Married", "Widowed", "Divorced")
RELATIONSHIP_OPTIONS = (
    "Spouse",
    "Child",
    "Parent",
    "Sibling",
    "Relative",
    "Friend",
    "Other",
)
HOME_COUNTRY_OPTIONS = ("Sri Lanka", "India", "Malaysia", "Singapore")
