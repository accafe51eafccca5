"""
SubmissionEngine — runs the onboarding steps sequentially.

Responsibilities:
    - Execute each step with timing, logging, and error handling
    - Stop at the first failing critical step
    - Let non-critical steps fail without failing the submission
    - Return a complete SubmissionResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog

from onboarding.core.constants import StepStatus, SubmissionStatus
from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.errors import StepExecutionError, SubmissionError
from onboarding.pipeline.step import SubmissionStep

UNEXPECTED_ERROR_MESSAGE = "Unexpected server error."


@dataclass
class SubmissionResult:
    """Final outcome of one submission run."""

    execution_id: str
    status: str                     # SubmissionStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_duration_ms: int = 0
    steps_completed: int = 0
    total_steps: int = 0
    step_results: list[dict[str, Any]] = field(default_factory=list)
    context_summary: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    failure: SubmissionError | None = None

    @property
    def succeeded(self) -> bool:
        return self.status in (SubmissionStatus.COMPLETED, SubmissionStatus.PARTIALLY_COMPLETED)


class SubmissionEngine:
    """
    Runs a sequence of SubmissionStep objects against a SubmissionContext.

    Usage::

        engine = SubmissionEngine()
        result = await engine.run_steps(ctx, build_submission_steps(...))
        if result.failure:
            raise result.failure
    """

    def __init__(self) -> None:
        self.logger = structlog.get_logger("pipeline.engine")

    async def run_steps(
        self,
        ctx: SubmissionContext,
        steps: list[SubmissionStep],
    ) -> SubmissionResult:
        """Execute an ordered list of steps against a context."""
        started_at = datetime.now(timezone.utc)
        ctx.total_steps = len(steps)

        log = self.logger.bind(
            execution_id=ctx.execution_id,
            total_steps=len(steps),
        )
        log.info("Submission started", profile_email=ctx.profile.email)

        status = SubmissionStatus.RUNNING
        steps_completed = 0
        failure: SubmissionError | None = None

        for index, step in enumerate(steps):
            ctx.current_step_index = index
            step_number = index + 1

            step_log = log.bind(
                step_name=step.name,
                step_index=step_number,
                step_description=step.description,
            )

            # ── Check skip condition ──────────────────
            if await step.should_skip(ctx):
                step_log.info("Step skipped")
                now = datetime.now(timezone.utc)
                ctx.step_results.append(StepResult(
                    step_name=step.name,
                    status=StepStatus.SKIPPED,
                    started_at=now,
                    completed_at=now,
                ))
                steps_completed += 1
                continue

            # ── Execute step ──────────────────────────
            step_log.info(f"Step {step_number}/{len(steps)}: {step.description}")

            result, exc = await self._execute(step, ctx, step_log)
            ctx.step_results.append(result)

            if result.status == StepStatus.COMPLETED:
                steps_completed += 1
                step_log.info(
                    "Step completed",
                    duration_ms=result.duration_ms,
                    metadata=result.metadata,
                )
                continue

            ctx.add_error(f"Step '{step.name}' failed: {result.error}")
            if not step.critical:
                step_log.warning("Non-critical step failed, continuing", error=result.error)
                status = SubmissionStatus.PARTIALLY_COMPLETED
                continue

            # 4xx outcomes are rejections of the request, not failures
            if exc is not None and exc.status_code < 500:
                step_log.info(
                    "Submission rejected, stopping",
                    error=result.error,
                    status_code=exc.status_code,
                )
            else:
                step_log.error("Step failed, submission stopping", error=result.error)
            status = SubmissionStatus.FAILED
            failure = exc
            break

        # ── Finalise ──────────────────────────────────
        completed_at = datetime.now(timezone.utc)
        total_duration_ms = int((completed_at - started_at).total_seconds() * 1000)

        if status == SubmissionStatus.RUNNING:
            status = SubmissionStatus.COMPLETED

        log.info(
            "Submission finished",
            status=status,
            steps_completed=steps_completed,
            duration_ms=total_duration_ms,
        )

        return SubmissionResult(
            execution_id=ctx.execution_id,
            status=status,
            started_at=started_at,
            completed_at=completed_at,
            total_duration_ms=total_duration_ms,
            steps_completed=steps_completed,
            total_steps=len(steps),
            step_results=[sr.to_dict() for sr in ctx.step_results],
            context_summary=ctx.to_summary_dict(),
            error=failure.message if failure else None,
            failure=failure,
        )

    async def _execute(
        self,
        step: SubmissionStep,
        ctx: SubmissionContext,
        log: structlog.BoundLogger,
    ) -> tuple[StepResult, SubmissionError | None]:
        """Execute one step, turning raised errors into a failed StepResult."""
        started_at = datetime.now(timezone.utc)
        try:
            return await step.execute(ctx), None

        except SubmissionError as exc:
            exc.execution_id = exc.execution_id or ctx.execution_id
            exc.step_name = exc.step_name or step.name
            return self._failed(step, started_at, exc.message, exc.details), exc

        except Exception as exc:
            # Unexpected error: logged with traceback, reported generically
            log.exception("Unexpected error in step", error=str(exc))
            wrapped = StepExecutionError(
                UNEXPECTED_ERROR_MESSAGE,
                execution_id=ctx.execution_id,
                step_name=step.name,
            )
            wrapped.__cause__ = exc
            return self._failed(step, started_at, f"Unexpected: {exc}", {}), wrapped

    @staticmethod
    def _failed(
        step: SubmissionStep,
        started_at: datetime,
        error: str,
        metadata: dict[str, Any],
    ) -> StepResult:
        now = datetime.now(timezone.utc)
        return StepResult(
            step_name=step.name,
            status=StepStatus.FAILED,
            started_at=started_at,
            completed_at=now,
            duration_ms=int((now - started_at).total_seconds() * 1000),
            error=error,
            metadata=metadata,
        )
