"""
Onboarding form validation — required fields, formats, date of birth,
and nominee allocation.

Pure functions: no I/O, no logging.  The result mirrors what the form UI
renders, one message per field, one mapping per nominee row and a single
optional global message.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from onboarding.core.constants import MARRIED, FormVariant
from onboarding.forms.fields import required_fields
from onboarding.forms.submission import FormSubmission, Nominee

REQUIRED_MESSAGE = "This field is required."
SPOUSE_REQUIRED_MESSAGE = "Spouse name is required for married employees."
INVALID_EMAIL_MESSAGE = "Enter a valid email address."
INVALID_PHONE_MESSAGE = "Enter a valid contact number."
INVALID_DOB_MESSAGE = "Enter a valid date of birth."
INVALID_COUNTRY_CODE_MESSAGE = "Enter a valid country code."
NOMINEE_REQUIRED_MESSAGE = "Required"
PORTION_NOT_POSITIVE_MESSAGE = "Enter a number above 0"
PORTION_TOO_LARGE_MESSAGE = "Cannot exceed 100"
NO_NOMINEES_MESSAGE = "Add at least one nominee and ensure their portions total 100%."
PORTION_TOTAL_MESSAGE = "Nominee portions must add up to 100%."

PORTION_TOTAL = 100.0
PORTION_TOLERANCE = 0.01

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[0-9+][0-9\s-]{6,}$")

# Regional variant: Sri Lankan mobile plus a separate home-country number
SRI_LANKA_PHONE_PATTERN = re.compile(r"^\+94\d{9}$")
COUNTRY_CODE_PATTERN = re.compile(r"^\+\d{1,4}$")
LOCAL_NUMBER_PATTERN = re.compile(r"^\d{6,14}$")

# Plain decimal notation only: no digit separators, hex or inf/nan words
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class ValidationErrors:
    """Per-field, per-nominee and global validation messages."""

    fields: dict[str, str] = field(default_factory=dict)
    nominees: dict[str, dict[str, str]] = field(default_factory=dict)
    global_message: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.fields and not self.nominees and not self.global_message

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"fields": dict(self.fields), "nominees": dict(self.nominees)}
        if self.global_message:
            data["global"] = self.global_message
        return data


@dataclass
class ValidationResult:
    has_errors: bool
    errors: ValidationErrors


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_phone(value: str) -> bool:
    return PHONE_PATTERN.fullmatch(value) is not None


def parse_number(value: str) -> float | None:
    """Parse a finite decimal such as ``"42"``, ``"42.5"`` or ``"5.0"``."""
    text = value.strip()
    if DECIMAL_PATTERN.fullmatch(text) is None:
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def is_valid_date(year: str, month: str, day: str) -> bool:
    """True when the parts name a real calendar day.

    Parts may be written as whole decimals (``"5.0"``).  Relies on ``date()``
    rejecting out-of-range days (31 April, 29 February in a common year)
    instead of a hand-written month table.
    """
    parts = [parse_number(part) for part in (year, month, day)]
    if any(part is None or not part.is_integer() for part in parts):
        return False
    y, m, d = (int(part) for part in parts)
    try:
        built = date(y, m, d)
    except (ValueError, OverflowError):
        return False
    # Two-digit years are ambiguous and never round-trip as typed
    if y < 100:
        return False
    return (built.year, built.month, built.day) == (y, m, d)


def parse_portion(value: str) -> float | None:
    """Parse a nominee portion; None when blank, non-numeric or not finite."""
    return parse_number(value)


def _check_required(values: dict[str, str], variant: FormVariant, errors: ValidationErrors) -> None:
    for key in required_fields(variant):
        if not values.get(key, "").strip():
            errors.fields[key] = REQUIRED_MESSAGE

    if values.get("maritalStatus") == MARRIED and not values.get("spouseName", "").strip():
        errors.fields["spouseName"] = SPOUSE_REQUIRED_MESSAGE


def _check_formats(values: dict[str, str], variant: FormVariant, errors: ValidationErrors) -> None:
    email = values.get("personalEmail", "")
    if email and not is_valid_email(email):
        errors.fields["personalEmail"] = INVALID_EMAIL_MESSAGE

    day, month, year = values.get("dobDay", ""), values.get("dobMonth", ""), values.get("dobYear", "")
    if day and month and year and not is_valid_date(year, month, day):
        errors.fields["dobYear"] = INVALID_DOB_MESSAGE

    for key in ("contactNumber", "emergencyContact"):
        number = values.get(key, "")
        if number and not is_valid_phone(number):
            errors.fields[key] = INVALID_PHONE_MESSAGE

    if variant == FormVariant.REGIONAL:
        regional_checks = (
            ("sriLankaContact", SRI_LANKA_PHONE_PATTERN, INVALID_PHONE_MESSAGE),
            ("homeContactCode", COUNTRY_CODE_PATTERN, INVALID_COUNTRY_CODE_MESSAGE),
            ("homeContactNumber", LOCAL_NUMBER_PATTERN, INVALID_PHONE_MESSAGE),
        )
        for key, pattern, message in regional_checks:
            value = values.get(key, "").replace(" ", "")
            if value and pattern.fullmatch(value) is None:
                errors.fields[key] = message


def _check_nominees(nominees: list[Nominee], errors: ValidationErrors) -> None:
    if not nominees:
        errors.global_message = NO_NOMINEES_MESSAGE
        return

    total = 0.0
    portions_are_valid = True

    for nominee in nominees:
        entry: dict[str, str] = {}
        if not nominee.name.strip():
            entry["name"] = NOMINEE_REQUIRED_MESSAGE
        if not nominee.passport_id.strip():
            entry["passportId"] = NOMINEE_REQUIRED_MESSAGE
        if not nominee.relationship.strip():
            entry["relationship"] = NOMINEE_REQUIRED_MESSAGE

        if not nominee.portion.strip():
            entry["portion"] = NOMINEE_REQUIRED_MESSAGE
            portions_are_valid = False
        else:
            portion = parse_portion(nominee.portion)
            if portion is None or portion <= 0:
                entry["portion"] = PORTION_NOT_POSITIVE_MESSAGE
                portions_are_valid = False
            elif portion > PORTION_TOTAL:
                entry["portion"] = PORTION_TOO_LARGE_MESSAGE
                portions_are_valid = False
            else:
                total += portion

        if entry:
            errors.nominees[nominee.id] = entry

    if portions_are_valid and abs(total - PORTION_TOTAL) > PORTION_TOLERANCE:
        errors.global_message = PORTION_TOTAL_MESSAGE


def validate_form(
    form: FormSubmission,
    variant: FormVariant = FormVariant.STANDARD,
) -> ValidationResult:
    """Run every rule against ``form`` and collect the messages."""
    errors = ValidationErrors()
    values = form.field_values()

    _check_required(values, variant, errors)
    _check_formats(values, variant, errors)
    _check_nominees(form.nominees, errors)

    return ValidationResult(has_errors=not errors.is_empty, errors=errors)
