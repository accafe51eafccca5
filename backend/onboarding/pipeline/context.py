"""
SubmissionContext — mutable state object carried through every step.

This is the single source of truth for one onboarding submission.  Each
step reads from and writes to the context; the engine logs a compact
summary of it when the run ends.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from onboarding.core.constants import FormVariant
from onboarding.forms.submission import FormSubmission, SubmitterProfile
from onboarding.validation.form_rules import ValidationResult


# ═══════════════════════════════════════════════════════════
#  StepResult
# ═══════════════════════════════════════════════════════════

@dataclass
class StepResult:
    """Outcome of a single submission step."""

    step_name: str
    status: str                     # StepStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_ms: int = 0
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_name": self.step_name,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_ms": self.duration_ms,
            "error": self.error,
            "metadata": self.metadata,
        }


# ═══════════════════════════════════════════════════════════
#  SubmissionContext
# ═══════════════════════════════════════════════════════════

@dataclass
class SubmissionContext:
    """
    Carries all state between submission steps.

    Populated progressively: validation fills ``validation``, the
    normalizer fills ``record``, the workbook step fills ``attachment``,
    and so on.
    """

    # ─── Input (set at init) ───────────────────────────
    profile: SubmitterProfile
    form: FormSubmission
    access_token: str | None = None
    variant: FormVariant = FormVariant.STANDARD
    execution_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # ─── Populated by steps ────────────────────────────
    validation: ValidationResult | None = None
    record: dict[str, Any] = field(default_factory=dict)
    attachment: bytes | None = None
    attachment_name: str | None = None
    notification_sent: bool = False
    persisted: bool = False

    # ─── Execution tracking ────────────────────────────
    current_step_index: int = 0
    total_steps: int = 0
    step_results: list[StepResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        """Record a non-fatal error."""
        self.errors.append(error)

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging."""
        return {
            "execution_id": self.execution_id,
            "profile_email": self.profile.email,
            "passport_no": self.form.passport_no,
            "variant": str(self.variant),
            "nominees": len(self.form.nominees),
            "validation_failed": bool(self.validation and self.validation.has_errors),
            "attachment_bytes": len(self.attachment) if self.attachment else 0,
            "notification_sent": self.notification_sent,
            "persisted": self.persisted,
            "steps_completed": len(self.step_results),
            "total_steps": self.total_steps,
            "errors": self.errors,
        }
