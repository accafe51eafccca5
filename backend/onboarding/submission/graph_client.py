"""
HTTP client for the Microsoft Graph sendMail API.

Two sending modes:

* delegated   — ``POST /me/sendMail`` with the submitter's own bearer token
* application — client-credentials token for the app registration, then
  ``POST /users/{sender}/sendMail`` from a shared mailbox with the
  submitter as reply-to
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

import httpx

from onboarding.core.logging import get_logger
from onboarding.pipeline.errors import NotificationError

logger = get_logger(__name__)

GRAPH_SCOPE = "https://graph.microsoft.com/.default"


@dataclass
class MailAttachment:
    name: str
    content: bytes

    def to_graph(self) -> dict[str, str]:
        return {
            "@odata.type": "#microsoft.graph.fileAttachment",
            "name": self.name,
            "contentBytes": base64.b64encode(self.content).decode("ascii"),
        }


@dataclass
class MailMessage:
    subject: str
    html: str
    recipient: str
    attachments: list[MailAttachment] = field(default_factory=list)
    sender: str | None = None
    sender_name: str | None = None
    reply_to: str | None = None

    def to_graph(self) -> dict[str, Any]:
        message: dict[str, Any] = {
            "subject": self.subject,
            "body": {"contentType": "HTML", "content": self.html},
            "toRecipients": [{"emailAddress": {"address": self.recipient}}],
            "attachments": [attachment.to_graph() for attachment in self.attachments],
        }
        if self.sender:
            sender: dict[str, str] = {"address": self.sender}
            if self.sender_name:
                sender["name"] = self.sender_name
            message["from"] = {"emailAddress": sender}
        if self.reply_to:
            message["replyTo"] = [{"emailAddress": {"address": self.reply_to}}]
        return message


class GraphMailClient:
    """Sends mail through Microsoft Graph; every failure becomes NotificationError."""

    def __init__(
        self,
        base_url: str = "https://graph.microsoft.com/v1.0",
        authority_url: str = "https://login.microsoftonline.com",
        *,
        tenant_id: str = "",
        client_id: str = "",
        client_secret: str = "",
        timeout: float = 30.0,
        save_to_sent_items: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.authority_url = authority_url.rstrip("/")
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.save_to_sent_items = save_to_sent_items
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def send_as_user(self, access_token: str, message: MailMessage) -> None:
        """Send as the signed-in user (delegated Mail.Send)."""
        await self._post_send_mail(f"{self.base_url}/me/sendMail", access_token, message)

    async def send_as_application(self, sender: str, message: MailMessage) -> None:
        """Send from ``sender``'s mailbox using the app's own token."""
        token = await self.acquire_app_token()
        await self._post_send_mail(f"{self.base_url}/users/{sender}/sendMail", token, message)

    async def acquire_app_token(self) -> str:
        url = f"{self.authority_url}/{self.tenant_id}/oauth2/v2.0/token"
        form = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "scope": GRAPH_SCOPE,
        }
        try:
            async with self._client() as client:
                response = await client.post(url, data=form)
        except httpx.HTTPError as exc:
            raise NotificationError(f"Graph token request failed: {exc}") from exc

        if response.status_code != 200:
            raise NotificationError(
                f"Graph token request failed ({response.status_code}): {response.text}",
                transport_status=response.status_code,
                response_body=response.text,
            )

        token = response.json().get("access_token")
        if not token:
            raise NotificationError("Graph token response did not include an access token")
        return token

    async def _post_send_mail(self, url: str, token: str, message: MailMessage) -> None:
        payload = {"message": message.to_graph(), "saveToSentItems": self.save_to_sent_items}
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

        logger.info(
            "Sending mail via Graph",
            url=url,
            recipient=message.recipient,
            attachments=len(message.attachments),
        )
        try:
            async with self._client() as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(f"Graph sendMail failed: {exc}") from exc

        if not response.is_success:
            raise NotificationError(
                f"Graph sendMail failed ({response.status_code}): {response.text}",
                transport_status=response.status_code,
                response_body=response.text,
            )
