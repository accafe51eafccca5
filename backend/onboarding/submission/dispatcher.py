"""
NotificationDispatcher — composes the HR notification and hands it to the
Graph mail client.
"""

from __future__ import annotations

from onboarding.core.config import Settings
from onboarding.core.constants import MailMode
from onboarding.forms.submission import FormSubmission, SubmitterProfile
from onboarding.pipeline.errors import MissingAccessTokenError
from onboarding.submission.graph_client import GraphMailClient, MailAttachment, MailMessage
from onboarding.submission.message_builder import build_html, build_subject

MISSING_TOKEN_MESSAGE = "Missing access token to send mail as the signed-in user."


class NotificationDispatcher:
    """Turns a submission plus its workbook into one outgoing mail."""

    def __init__(self, client: GraphMailClient, config: Settings) -> None:
        self.client = client
        self.config = config

    @classmethod
    def from_settings(cls, config: Settings) -> "NotificationDispatcher":
        client = GraphMailClient(
            base_url=config.GRAPH_API_BASE_URL,
            authority_url=config.GRAPH_AUTHORITY_URL,
            tenant_id=config.AZURE_TENANT_ID,
            client_id=config.AZURE_CLIENT_ID,
            client_secret=config.AZURE_CLIENT_SECRET,
            timeout=config.GRAPH_TIMEOUT_SECONDS,
            save_to_sent_items=config.GRAPH_SAVE_TO_SENT_ITEMS,
        )
        return cls(client, config)

    def compose(
        self,
        profile: SubmitterProfile,
        form: FormSubmission,
        attachments: list[MailAttachment],
    ) -> MailMessage:
        message = MailMessage(
            subject=build_subject(form),
            html=build_html(profile, form),
            recipient=self.config.GRAPH_RECIPIENT_EMAIL,
            attachments=attachments,
        )
        if self.config.GRAPH_MAIL_MODE == MailMode.APPLICATION:
            message.sender = self.config.MS_SENDER_EMAIL
            message.sender_name = profile.name or None
            message.reply_to = profile.email or None
        return message

    async def dispatch(
        self,
        profile: SubmitterProfile,
        form: FormSubmission,
        attachments: list[MailAttachment],
        access_token: str | None = None,
    ) -> MailMessage:
        """Send the notification; raises NotificationError on transport failure."""
        message = self.compose(profile, form, attachments)
        if self.config.GRAPH_MAIL_MODE == MailMode.APPLICATION:
            await self.client.send_as_application(self.config.MS_SENDER_EMAIL, message)
        else:
            if not access_token:
                raise MissingAccessTokenError(MISSING_TOKEN_MESSAGE)
            await self.client.send_as_user(access_token, message)
        return message
