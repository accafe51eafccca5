from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO

from openpyxl import load_workbook

from onboarding.core.constants import FormVariant
from onboarding.forms.submission import FormSubmission
from onboarding.processing.workbook import (
    EMPTY_NOMINEE_ROW,
    NOMINEE_HEADER,
    SHEET_TITLE,
    attachment_name,
    build_rows,
    build_workbook,
)

SUBMITTED_AT = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)


def _sheet_rows(content: bytes) -> list[list]:
    sheet = load_workbook(BytesIO(content)).active
    return [[cell for cell in row if cell is not None] for row in sheet.iter_rows(values_only=True)]


def test_two_nominees_give_two_rows_and_one_profile_block(profile, valid_form) -> None:
    rows = build_rows(profile, valid_form, submitted_at=SUBMITTED_AT)

    assert rows.count(["Profile"]) == 1
    header_index = rows.index(NOMINEE_HEADER)
    assert rows[header_index + 1:] == [
        ["Sita Perera", "N7654321", "Mother", "70"],
        ["Sunil Perera", "N1111111", "Father", "30"],
    ]


def test_rows_start_with_title_and_timestamp(profile, valid_form) -> None:
    rows = build_rows(profile, valid_form, submitted_at=SUBMITTED_AT)
    assert rows[0] == ["HTS Employee Onboarding"]
    assert rows[1] == ["Submitted at", "2024-05-01T08:30:00+00:00"]
    assert ["Email", "nimal.perera@hts.asia"] in rows
    assert ["Date of Birth", "5-06-1990"] in rows
    assert ["Contact Details", "+94 77 123 4567"] in rows


def test_no_nominees_gives_placeholder_row(profile) -> None:
    rows = build_rows(profile, FormSubmission(), submitted_at=SUBMITTED_AT)
    assert rows[-2:] == [NOMINEE_HEADER, EMPTY_NOMINEE_ROW]


def test_regional_variant_uses_split_contacts(profile) -> None:
    form = FormSubmission(
        sri_lanka_contact="+94771234567",
        home_contact_code="+92",
        home_contact_number="3001234567",
        sri_lanka_address="Colombo 02",
    )
    rows = build_rows(profile, form, submitted_at=SUBMITTED_AT, variant=FormVariant.REGIONAL)
    assert ["Home Contact", "+92 3001234567"] in rows
    assert ["Sri Lanka Residential Address", "Colombo 02"] in rows
    assert not any(row and row[0] == "Contact Details" for row in rows)


def test_workbook_bytes_round_trip_through_openpyxl(profile, valid_form) -> None:
    content = build_workbook(profile, valid_form, submitted_at=SUBMITTED_AT)

    workbook = load_workbook(BytesIO(content))
    assert workbook.sheetnames == [SHEET_TITLE]
    sheet = workbook.active
    assert sheet["A1"].value == "HTS Employee Onboarding"
    assert sheet["A1"].font.bold is True

    rows = _sheet_rows(content)
    assert rows[-1] == ["Sunil Perera", "N1111111", "Father", "30"]


def test_attachment_name_uses_epoch_milliseconds() -> None:
    assert attachment_name(SUBMITTED_AT) == f"hts-onboarding-{int(SUBMITTED_AT.timestamp() * 1000)}.xlsx"
