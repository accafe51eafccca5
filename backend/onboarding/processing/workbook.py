"""
Onboarding workbook builder — renders one submission as a single-sheet
XLSX document for the HR mailbox.

Layout (one row per list entry, blank row between sections)::

    HTS Employee Onboarding
    Submitted at | 2024-05-01T08:30:00+00:00

    Profile
    Name  | ...
    Email | ...

    Personal Information ... Contact & Address ... Emergency Contact ...
    EPF/ETF Financial Fund ...

    Nominees
    Name | Passport/ID No | Relationship | Portion (%)
    ...one row per nominee, or a single row of dashes
"""

from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font

from onboarding.core.config import settings
from onboarding.core.constants import FormVariant
from onboarding.forms.fields import FIELD_LABELS
from onboarding.forms.submission import FormSubmission, SubmitterProfile
from onboarding.processing.normalizer import format_date_of_birth

SHEET_TITLE = "Onboarding"
NOMINEE_HEADER = ["Name", "Passport/ID No", "Relationship", "Portion (%)"]
EMPTY_NOMINEE_ROW = ["-", "-", "-", "-"]

SECTION_PROFILE = "Profile"
SECTION_PERSONAL = "Personal Information"
SECTION_CONTACT = "Contact & Address"
SECTION_EMERGENCY = "Emergency Contact"
SECTION_FAMILY = "EPF/ETF Financial Fund"
SECTION_NOMINEES = "Nominees"

SECTION_TITLES = (
    SECTION_PROFILE,
    SECTION_PERSONAL,
    SECTION_CONTACT,
    SECTION_EMERGENCY,
    SECTION_FAMILY,
    SECTION_NOMINEES,
)

_PERSONAL_KEYS = (
    "passportName",
    "callingName",
    "gender",
    "dob",
    "nationality",
    "religion",
    "passportNo",
    "maritalStatus",
)

_CONTACT_KEYS = {
    FormVariant.STANDARD: ("contactNumber", "homeCountry", "personalEmail", "residentialAddress"),
    FormVariant.REGIONAL: (
        "sriLankaContact",
        "homeContact",
        "homeCountry",
        "personalEmail",
        "sriLankaAddress",
        "homeCountryAddress",
    ),
}

_EMERGENCY_KEYS = ("emergencyName", "emergencyRelationship", "emergencyContact", "emergencyAddress")
_FAMILY_KEYS = ("birthPlace", "spouseName", "motherName", "fatherName")

_EXTRA_LABELS = {"dob": "Date of Birth", "homeContact": "Home Contact"}


def workbook_title() -> str:
    return f"{settings.COMPANY_NAME} Employee Onboarding"


def attachment_name(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    prefix = settings.COMPANY_NAME.lower().replace(" ", "-")
    return f"{prefix}-onboarding-{int(moment.timestamp() * 1000)}.xlsx"


def _labelled_rows(values: dict[str, str], keys: tuple[str, ...]) -> list[list[str]]:
    return [[_EXTRA_LABELS.get(key) or FIELD_LABELS[key], values.get(key, "")] for key in keys]


def build_rows(
    profile: SubmitterProfile,
    form: FormSubmission,
    submitted_at: datetime | None = None,
    variant: FormVariant = FormVariant.STANDARD,
) -> list[list[str]]:
    """Lay out the submission as rows of cell values."""
    moment = submitted_at or datetime.now(timezone.utc)
    values = form.field_values()
    values["dob"] = format_date_of_birth(form)
    values["homeContact"] = " ".join(
        part for part in (form.home_contact_code.strip(), form.home_contact_number.strip()) if part
    )

    nominee_rows = [
        [nominee.name, nominee.passport_id, nominee.relationship, nominee.portion]
        for nominee in form.nominees
    ]

    return [
        [workbook_title()],
        ["Submitted at", moment.isoformat()],
        [],
        [SECTION_PROFILE],
        ["Name", profile.name],
        ["Email", profile.email],
        [],
        [SECTION_PERSONAL],
        *_labelled_rows(values, _PERSONAL_KEYS),
        [],
        [SECTION_CONTACT],
        *_labelled_rows(values, _CONTACT_KEYS[FormVariant(variant)]),
        [],
        [SECTION_EMERGENCY],
        *_labelled_rows(values, _EMERGENCY_KEYS),
        [],
        [SECTION_FAMILY],
        *_labelled_rows(values, _FAMILY_KEYS),
        [],
        [SECTION_NOMINEES],
        NOMINEE_HEADER,
        *(nominee_rows or [EMPTY_NOMINEE_ROW]),
    ]


def build_workbook(
    profile: SubmitterProfile,
    form: FormSubmission,
    submitted_at: datetime | None = None,
    variant: FormVariant = FormVariant.STANDARD,
) -> bytes:
    """Render the submission to XLSX bytes."""
    rows = build_rows(profile, form, submitted_at=submitted_at, variant=variant)

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    bold = Font(bold=True)
    for row in rows:
        sheet.append(row)
        if len(row) == 1 and (row[0] in SECTION_TITLES or row[0] == workbook_title()):
            sheet.cell(row=sheet.max_row, column=1).font = bold
    for cell in sheet[_nominee_header_row(rows)]:
        cell.font = bold

    sheet.column_dimensions["A"].width = 34
    sheet.column_dimensions["B"].width = 40
    sheet.column_dimensions["C"].width = 18
    sheet.column_dimensions["D"].width = 14

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _nominee_header_row(rows: list[list[str]]) -> int:
    """1-based sheet row of the nominee table header."""
    return rows.index(NOMINEE_HEADER) + 1
