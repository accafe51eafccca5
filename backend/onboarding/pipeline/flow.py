"""
Submission flow — the ordered step list for one onboarding submission.

Email first, persistence second: the record is stored only after the
notification went out, and a storage failure does not undo the email.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from onboarding.core.config import Settings
from onboarding.pipeline.step import SubmissionStep
from onboarding.pipeline.steps.authorize_submitter import AuthorizeSubmitterStep
from onboarding.pipeline.steps.build_workbook import BuildWorkbookStep
from onboarding.pipeline.steps.normalize_record import NormalizeRecordStep
from onboarding.pipeline.steps.persist_record import PersistRecordStep
from onboarding.pipeline.steps.send_notification import SendNotificationStep
from onboarding.pipeline.steps.validate_form import ValidateFormStep
from onboarding.submission.dispatcher import NotificationDispatcher


def build_submission_steps(
    config: Settings,
    dispatcher: NotificationDispatcher,
    session_factory: async_sessionmaker[AsyncSession] | None,
) -> list[SubmissionStep]:
    return [
        AuthorizeSubmitterStep(config),
        ValidateFormStep(),
        NormalizeRecordStep(),
        BuildWorkbookStep(),
        SendNotificationStep(dispatcher),
        PersistRecordStep(session_factory),
    ]
