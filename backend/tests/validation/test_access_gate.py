from __future__ import annotations

from onboarding.core.constants import GatePurpose
from onboarding.validation.access_gate import (
    INVALID_CREDENTIALS_MESSAGE,
    check_admin_credentials,
    check_email_domain,
)


def test_company_domain_is_allowed() -> None:
    decision = check_email_domain("user@hts.asia")
    assert decision.allowed is True
    assert decision.message == ""


def test_domain_check_ignores_case_and_whitespace() -> None:
    assert check_email_domain("  First.Last@HTS.Asia ").allowed is True


def test_other_domain_is_rejected_with_purpose_message() -> None:
    submission = check_email_domain("user@other.com")
    assert submission.allowed is False
    assert submission.message == "Only @hts.asia accounts can submit onboarding packets."

    sign_in = check_email_domain("user@other.com", GatePurpose.SIGN_IN)
    assert sign_in.allowed is False
    assert sign_in.message == "Only @hts.asia accounts can sign in here. Please use your HTS address."


def test_missing_email_is_rejected() -> None:
    assert check_email_domain(None).allowed is False
    assert check_email_domain("").allowed is False


def test_lookalike_domain_is_rejected() -> None:
    assert check_email_domain("user@hts.asia.evil.com").allowed is False


def test_custom_domain_override() -> None:
    assert check_email_domain("ops@example.org", domain="@example.org").allowed is True


def test_admin_credentials() -> None:
    assert check_admin_credentials("htsHR", "HTS").allowed is True

    rejected = check_admin_credentials("htsHR", "wrong")
    assert rejected.allowed is False
    assert rejected.message == INVALID_CREDENTIALS_MESSAGE
    assert check_admin_credentials("htshr", "HTS").allowed is False
