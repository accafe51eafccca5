"""
ValidateFormStep — runs the form rules server-side.

Validation failures are an expected outcome: they are logged at info and
returned to the caller with the per-field messages.
"""

from __future__ import annotations

from onboarding.core.logging import get_logger
from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.errors import FormValidationError
from onboarding.pipeline.step import SubmissionStep
from onboarding.validation.form_rules import validate_form

logger = get_logger(__name__)

INVALID_FORM_MESSAGE = "Please correct the highlighted fields before submitting."


class ValidateFormStep(SubmissionStep):
    """Apply the validation rules to the submitted form."""

    name = "validate_form"
    description = "Validate required fields, formats and nominee portions"

    async def execute(self, ctx: SubmissionContext) -> StepResult:
        started_at = self._now()

        ctx.validation = validate_form(ctx.form, ctx.variant)
        errors = ctx.validation.errors

        if ctx.validation.has_errors:
            logger.info(
                "Submission rejected by validation",
                execution_id=ctx.execution_id,
                field_errors=sorted(errors.fields),
                nominee_errors=len(errors.nominees),
                global_error=errors.global_message,
            )
            raise FormValidationError(
                INVALID_FORM_MESSAGE,
                details={"errors": errors.to_dict()},
            )

        return self._success(started_at, metadata={
            "nominees": len(ctx.form.nominees),
        })
