"""
PersistRecordStep — upserts the employee document keyed by passport number.

Runs after the email went out.  It is non-critical: a database failure is
logged and the submission still succeeds, reported as not persisted.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from onboarding.core.logging import get_logger
from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.errors import PersistenceError
from onboarding.pipeline.step import SubmissionStep
from onboarding.repositories.employees import upsert_employee

logger = get_logger(__name__)


class PersistRecordStep(SubmissionStep):
    """Store the normalized record; skipped without a database."""

    name = "persist_record"
    description = "Save the employee record to the database"
    critical = False

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None) -> None:
        self.session_factory = session_factory

    async def should_skip(self, ctx: SubmissionContext) -> bool:
        return self.session_factory is None

    async def execute(self, ctx: SubmissionContext) -> StepResult:
        started_at = self._now()

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    employee = await upsert_employee(session, ctx.record)
                    employee_id = str(employee.id)
        except Exception as exc:
            logger.exception(
                "Persisting employee record failed",
                execution_id=ctx.execution_id,
                passport_no=ctx.record.get("passportNo"),
            )
            raise PersistenceError(
                f"Failed to save employee record: {exc}",
                step_name=self.name,
            ) from exc

        ctx.persisted = True
        return self._success(started_at, metadata={
            "employee_id": employee_id,
            "passport_no": ctx.record.get("passportNo"),
        })
