"""
Access gate — email-domain allow-list for sign-in and submission, and the
fixed admin credential check.

Checks return a decision with a user-facing message instead of raising;
callers decide which HTTP status a rejection maps to.
"""

from __future__ import annotations

from dataclasses import dataclass

from onboarding.core.config import settings
from onboarding.core.constants import GatePurpose
from onboarding.core.security import verify_admin_credentials

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    message: str = ""


def rejection_message(purpose: GatePurpose, domain: str) -> str:
    if purpose == GatePurpose.SIGN_IN:
        company = settings.COMPANY_NAME
        return f"Only {domain} accounts can sign in here. Please use your {company} address."
    return f"Only {domain} accounts can submit onboarding packets."


def check_email_domain(
    email: str | None,
    purpose: GatePurpose = GatePurpose.SUBMISSION,
    *,
    domain: str | None = None,
) -> GateDecision:
    """Allow only addresses ending with the approved domain (case-insensitive)."""
    allowed_domain = (domain or settings.ALLOWED_EMAIL_DOMAIN).lower()
    normalized = (email or "").strip().lower()
    if normalized and normalized.endswith(allowed_domain):
        return GateDecision(allowed=True)
    return GateDecision(allowed=False, message=rejection_message(purpose, allowed_domain))


def check_admin_credentials(username: str, password: str) -> GateDecision:
    if verify_admin_credentials(username, password):
        return GateDecision(allowed=True)
    return GateDecision(allowed=False, message=INVALID_CREDENTIALS_MESSAGE)
