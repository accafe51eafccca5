"""Onboarding form models and field catalogue."""

from onboarding.forms.custom_fields import CustomField, normalize_custom_fields
from onboarding.forms.submission import FormSubmission, Nominee, SubmitterProfile, new_nominee_id

__all__ = [
    "CustomField",
    "FormSubmission",
    "Nominee",
    "SubmitterProfile",
    "new_nominee_id",
    "normalize_custom_fields",
]
