from __future__ import annotations

import importlib
import json

import pytest

from onboarding.core.config import settings
from onboarding.forms.submission import FormSubmission
from onboarding.processing.normalizer import normalize_submission
from onboarding.repositories.employees import get_employee_by_passport_no, upsert_employee


@pytest.fixture
def manage():
    return importlib.import_module("manage")


@pytest.fixture
def console(manage, tmp_path, monkeypatch, form_payload, profile):
    """A signed-in console over a file-backed SQLite store holding one record."""
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'onboarding.db'}")
    console = manage.AdminConsole(username="htsHR", password="HTS")
    console.init_db()

    record = normalize_submission(FormSubmission.model_validate(form_payload()), profile)
    console._with_session(lambda session: upsert_employee(session, record))
    return console


def _stored_document(console, passport_no: str) -> dict:
    async def fetch(session):
        employee = await get_employee_by_passport_no(session, passport_no)
        return dict(employee.document)

    return console._with_session(fetch)


def test_parse_assignments(manage) -> None:
    edits = manage.parse_assignments(["callingName=Nimo", "Blood Group=O+", "note=a=b", "--username=x"])
    assert edits == {"callingName": "Nimo", "Blood Group": "O+", "note": "a=b"}

    with pytest.raises(ValueError):
        manage.parse_assignments(["novalue"])


def test_parse_custom_options(manage) -> None:
    opts = ["N1234567", "--custom=Medical:Blood Group:O+", "--username=htsHR", "--custom=HR:Shift:09:00-17:00"]
    assert manage.parse_custom_options(opts) == [
        {"category": "Medical", "label": "Blood Group", "value": "O+"},
        {"category": "HR", "label": "Shift", "value": "09:00-17:00"},
    ]

    with pytest.raises(ValueError):
        manage.parse_custom_options(["--custom=Medical:Blood Group"])
    with pytest.raises(ValueError):
        manage.parse_custom_options(["--custom=Medical: :O+"])


def test_parse_credentials(manage) -> None:
    assert manage.parse_credentials(["--username=htsHR", "--password=HTS", "list"]) == ("htsHR", "HTS")
    assert manage.parse_credentials([]) == (None, None)


def test_console_login_uses_fixed_pair(manage) -> None:
    assert manage.AdminConsole(username="htsHR", password="HTS").login() is True
    assert manage.AdminConsole(username="htsHR", password="bad").login() is False


def test_console_commands_require_sign_in(manage) -> None:
    console = manage.AdminConsole(username="htsHR", password="bad")
    with pytest.raises(PermissionError):
        console.show("N1234567")


def test_list_prints_stored_records(console, capsys) -> None:
    assert console.list_records() == 1

    out = capsys.readouterr().out
    assert "passportNo" in out
    assert "N1234567" in out
    assert "nimal.perera@hts.asia" in out


def test_show_prints_record_as_json(console, capsys) -> None:
    capsys.readouterr()
    assert console.show("N1234567") is True

    record = json.loads(capsys.readouterr().out)
    assert record["passportNo"] == "N1234567"
    assert record["passportName"] == "Nimal Perera"

    assert console.show("UNKNOWN") is False


def test_save_merges_edits_and_appends_custom_fields(console, manage) -> None:
    custom = manage.parse_custom_options(["--custom=Medical:Blood Group:O+"])

    assert console.save("N1234567", {"callingName": "Nimo"}, custom) is True
    assert console.save("N1234567", {}, manage.parse_custom_options(["--custom=HR:Employee Code:HTS-042"])) is True

    document = _stored_document(console, "N1234567")
    assert document["callingName"] == "Nimo"
    assert document["customFields"] == [
        {"category": "Medical", "label": "Blood Group", "value": "O+"},
        {"category": "HR", "label": "Employee Code", "value": "HTS-042"},
    ]
    assert "Blood Group" not in document


def test_save_unknown_record_and_empty_save(console) -> None:
    assert console.save("UNKNOWN", {"callingName": "x"}) is False

    with pytest.raises(ValueError, match="Nothing to save"):
        console.save("N1234567", {})
