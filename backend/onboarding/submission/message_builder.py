"""Build the HR notification subject and HTML body from a submission."""

from __future__ import annotations

from html import escape

from onboarding.core.config import settings
from onboarding.forms.submission import FormSubmission, Nominee, SubmitterProfile
from onboarding.processing.normalizer import format_date_of_birth

DEFAULT_SUBJECT_NAME = "New hire"
NOMINEE_PREVIEW_LIMIT = 3


def build_subject(form: FormSubmission) -> str:
    name = form.passport_name.strip() or form.calling_name.strip() or DEFAULT_SUBJECT_NAME
    return f"{settings.COMPANY_NAME} Onboarding | {name}"


def _nominee_line(nominee: Nominee) -> str:
    line = nominee.name or "Nominee"
    if nominee.relationship:
        line += f" ({nominee.relationship})"
    if nominee.portion:
        line += f" - {nominee.portion}%"
    return line


def nominee_preview(form: FormSubmission, limit: int = NOMINEE_PREVIEW_LIMIT) -> str:
    """First ``limit`` nominees as one '; '-separated line."""
    return "; ".join(_nominee_line(nominee) for nominee in form.nominees[:limit])


def _multiline(value: str) -> str:
    return escape(value).replace("\n", "<br />")


def build_html(profile: SubmitterProfile, form: FormSubmission) -> str:
    company = settings.COMPANY_NAME
    dob = format_date_of_birth(form)
    contact = form.contact_number or form.sri_lanka_contact
    address = form.residential_address or form.sri_lanka_address

    if form.emergency_name:
        emergency = (
            f"{form.emergency_name} ({form.emergency_relationship}) - {form.emergency_contact}"
        )
    else:
        emergency = "Not provided"

    items = [
        ("Name", form.passport_name or form.calling_name),
        ("Gender / DOB", f"{form.gender}{f' - {dob}' if dob else ''}"),
        ("Contact", f"{contact} - {form.personal_email}"),
        ("Home country", form.home_country),
        ("Emergency contact", emergency),
        ("Nominees", nominee_preview(form) or "Not provided"),
    ]
    item_html = "\n".join(
        f"      <li><strong>{label}:</strong> {escape(value)}</li>" for label, value in items
    )
    family = " | ".join(escape(v) for v in (form.spouse_name, form.mother_name, form.father_name))

    return f"""
    <p>Hi PeopleOps,</p>
    <p>{escape(profile.name or f"{company} employee")} ({escape(profile.email or "no email provided")}) submitted the employee information form.</p>
    <p>The Excel attachment includes all fields. Quick preview:</p>
    <ul>
{item_html}
    </ul>
    <p>Residential address:<br />{_multiline(address)}</p>
    <p>Emergency address:<br />{_multiline(form.emergency_address)}</p>
    <p>Spouse / parents:<br />{family}</p>
    <p>- {escape(company)} onboarding portal</p>
    """
