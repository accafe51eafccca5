from __future__ import annotations

from onboarding.forms.submission import FormSubmission, Nominee, SubmitterProfile
from onboarding.submission.message_builder import build_html, build_subject, nominee_preview


def test_subject_prefers_passport_name_then_calling_name() -> None:
    assert build_subject(FormSubmission(passport_name="Nimal Perera", calling_name="Nimal")) == (
        "HTS Onboarding | Nimal Perera"
    )
    assert build_subject(FormSubmission(calling_name="Nimal")) == "HTS Onboarding | Nimal"
    assert build_subject(FormSubmission()) == "HTS Onboarding | New hire"


def test_nominee_preview_is_truncated_to_three() -> None:
    form = FormSubmission(
        nominees=[Nominee(name=f"N{i}", relationship="Sibling", portion="25") for i in range(4)]
    )
    preview = nominee_preview(form)
    assert preview == "N0 (Sibling) - 25%; N1 (Sibling) - 25%; N2 (Sibling) - 25%"


def test_html_escapes_values_and_breaks_address_lines(valid_form) -> None:
    profile = SubmitterProfile(name="<b>Nimal</b>", email="nimal@hts.asia")
    html = build_html(profile, valid_form)

    assert "&lt;b&gt;Nimal&lt;/b&gt;" in html
    assert "<b>Nimal</b>" not in html
    assert "12 Galle Road<br />Colombo 03" in html
    assert "Sita Perera (Mother) - 70%" in html
    assert "Male - 5-06-1990" in html


def test_html_falls_back_when_sections_missing() -> None:
    html = build_html(SubmitterProfile(), FormSubmission())
    assert "Emergency contact:</strong> Not provided" in html
    assert "Nominees:</strong> Not provided" in html
    assert "no email provided" in html
