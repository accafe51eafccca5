"""
SendNotificationStep — mails the HR notification with the workbook attached.

Transport failures are not retried; the NotificationError raised by the
Graph client reaches the caller with the transport's diagnostic text.
"""

from __future__ import annotations

from onboarding.core.logging import get_logger
from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.errors import NotificationError, StepExecutionError
from onboarding.pipeline.step import SubmissionStep
from onboarding.submission.dispatcher import NotificationDispatcher
from onboarding.submission.graph_client import MailAttachment

logger = get_logger(__name__)


class SendNotificationStep(SubmissionStep):
    """Send the notification through the configured mail mode."""

    name = "send_notification"
    description = "Send the onboarding email to HR"

    def __init__(self, dispatcher: NotificationDispatcher) -> None:
        self.dispatcher = dispatcher

    async def execute(self, ctx: SubmissionContext) -> StepResult:
        started_at = self._now()

        if ctx.attachment is None or not ctx.attachment_name:
            raise StepExecutionError("No workbook was built for this submission")

        attachment = MailAttachment(name=ctx.attachment_name, content=ctx.attachment)
        try:
            message = await self.dispatcher.dispatch(
                ctx.profile,
                ctx.form,
                [attachment],
                access_token=ctx.access_token,
            )
        except NotificationError as exc:
            logger.error(
                "Notification send failed",
                execution_id=ctx.execution_id,
                transport_status=exc.transport_status,
                error=exc.message,
            )
            raise

        ctx.notification_sent = True
        return self._success(started_at, metadata={
            "recipient": message.recipient,
            "subject": message.subject,
        })
