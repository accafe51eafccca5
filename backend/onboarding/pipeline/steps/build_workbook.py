"""BuildWorkbookStep — renders the submission to the XLSX attachment."""

from __future__ import annotations

from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.step import SubmissionStep
from onboarding.processing.workbook import attachment_name, build_workbook


class BuildWorkbookStep(SubmissionStep):

    name = "build_workbook"
    description = "Build the onboarding spreadsheet"

    async def execute(self, ctx: SubmissionContext) -> StepResult:
        started_at = self._now()
        ctx.attachment = build_workbook(
            ctx.profile,
            ctx.form,
            submitted_at=ctx.submitted_at,
            variant=ctx.variant,
        )
        ctx.attachment_name = attachment_name(ctx.submitted_at)
        return self._success(started_at, metadata={
            "attachment_name": ctx.attachment_name,
            "bytes": len(ctx.attachment),
        })
