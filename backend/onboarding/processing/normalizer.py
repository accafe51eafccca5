"""
Record normalizer — maps a submitted form onto the flat employee document.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from onboarding.forms.submission import FormSubmission, SubmitterProfile

DOB_PARTS = ("dobDay", "dobMonth", "dobYear")


def format_date_of_birth(form: FormSubmission) -> str:
    """Join the non-blank day/month/year parts with '-' (no zero padding)."""
    parts = [form.dob_day.strip(), form.dob_month.strip(), form.dob_year.strip()]
    return "-".join(part for part in parts if part)


def normalize_submission(
    form: FormSubmission,
    profile: SubmitterProfile | None = None,
    submitted_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the persistence document for ``form``.

    Assumes validation already ran; nothing is checked or deduplicated here.
    """
    record: dict[str, Any] = {}
    if profile is not None:
        record["profileName"] = profile.name
        record["profileEmail"] = profile.email

    for key, value in form.field_values().items():
        if key in DOB_PARTS:
            continue
        record[key] = value

    record["dob"] = format_date_of_birth(form)
    record["nominees"] = form.nominee_dicts()
    record["submittedAt"] = (submitted_at or datetime.now(timezone.utc)).isoformat()
    return record
