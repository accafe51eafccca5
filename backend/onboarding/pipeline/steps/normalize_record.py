"""NormalizeRecordStep — builds the persistence document."""

from __future__ import annotations

from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.step import SubmissionStep
from onboarding.processing.normalizer import normalize_submission


class NormalizeRecordStep(SubmissionStep):

    name = "normalize_record"
    description = "Flatten the form into the employee document"

    async def execute(self, ctx: SubmissionContext) -> StepResult:
        started_at = self._now()
        ctx.record = normalize_submission(ctx.form, ctx.profile, ctx.submitted_at)
        return self._success(started_at, metadata={
            "passport_no": ctx.record.get("passportNo", ""),
            "dob": ctx.record.get("dob", ""),
        })
