"""Field catalogue for the onboarding form: labels and required keys per variant."""

from __future__ import annotations

from onboarding.core.constants import FormVariant

FIELD_LABELS: dict[str, str] = {
    "passportName": "Name (As per Passport)",
    "callingName": "Calling Name",
    "gender": "Gender",
    "dobDay": "Date of Birth (Day)",
    "dobMonth": "Date of Birth (Month)",
    "dobYear": "Date of Birth (Year)",
    "nationality": "Nationality",
    "religion": "Religion",
    "passportNo": "Passport No",
    "maritalStatus": "Marital Status",
    "contactNumber": "Contact Details",
    "residentialAddress": "Residential Address",
    "sriLankaContact": "Sri Lanka Contact",
    "homeContactCode": "Home Contact Code",
    "homeContactNumber": "Home Contact Number",
    "sriLankaAddress": "Sri Lanka Residential Address",
    "homeCountryAddress": "Home Country Address",
    "homeCountry": "Home Country",
    "personalEmail": "Personal Email",
    "emergencyName": "Name",
    "emergencyRelationship": "Relationship",
    "emergencyContact": "Contact No",
    "emergencyAddress": "Address",
    "birthPlace": "Birth Place",
    "spouseName": "Name of the Spouse (If Married)",
    "motherName": "Name of the Mother",
    "fatherName": "Name of the Father",
}

_IDENTITY_REQUIRED = (
    "passportName",
    "callingName",
    "gender",
    "dobDay",
    "dobMonth",
    "dobYear",
    "nationality",
    "passportNo",
    "maritalStatus",
)

_TAIL_REQUIRED = (
    "emergencyName",
    "emergencyRelationship",
    "emergencyContact",
    "emergencyAddress",
    "birthPlace",
    "motherName",
    "fatherName",
)

CONTACT_FIELDS: dict[FormVariant, tuple[str, ...]] = {
    FormVariant.STANDARD: (
        "contactNumber",
        "homeCountry",
        "personalEmail",
        "residentialAddress",
    ),
    FormVariant.REGIONAL: (
        "sriLankaContact",
        "homeContactCode",
        "homeContactNumber",
        "homeCountry",
        "personalEmail",
        "sriLankaAddress",
        "homeCountryAddress",
    ),
}


def required_fields(variant: FormVariant = FormVariant.STANDARD) -> tuple[str, ...]:
    """Keys that must be non-blank for ``variant``, in form order."""
    return _IDENTITY_REQUIRED + CONTACT_FIELDS[FormVariant(variant)] + _TAIL_REQUIRED
