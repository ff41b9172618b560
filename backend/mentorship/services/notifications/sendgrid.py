"""
Send notifications as SendGrid dynamic-template emails (v3 mail/send).
Requires SENDGRID_API_KEY and template ids in env. If not configured, send() no-ops (log and return False).
"""
import logging

import httpx

from mentorship.config import Settings, settings as default_settings
from mentorship.services.notifications.base import (
    Notification,
    NotificationKind,
    Recipient,
    RecipientRole,
)

logger = logging.getLogger(__name__)

MAIL_SEND_PATH = "/v3/mail/send"


class SendGridGateway:
    """NotificationGateway backed by the SendGrid HTTP API."""

    def __init__(
        self,
        config: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._config = config or default_settings
        self._transport = transport
        self._timeout = timeout

    def is_configured(self) -> bool:
        return bool(self._config.sendgrid_api_key)

    def template_id(self, kind: NotificationKind, role: RecipientRole) -> str:
        c = self._config
        if kind is NotificationKind.UPCOMING_SESSION:
            if role is RecipientRole.MENTOR:
                return c.template_upcoming_session_mentor
            return c.template_upcoming_session_mentee
        if kind is NotificationKind.REVIEW_REQUEST:
            return c.template_review_request
        if kind is NotificationKind.MENTOR_APPROVED:
            return c.template_mentor_approved
        return ""

    def _message(self, notification: Notification, recipient: Recipient, template_id: str) -> dict:
        return {
            "from": {"email": self._config.notify_from_email, "name": self._config.notify_from_name},
            "template_id": template_id,
            "personalizations": [
                {
                    "to": [{"email": recipient.email, "name": recipient.name}],
                    "dynamic_template_data": notification.data,
                    "headers": {"Importance": "high"},
                }
            ],
        }

    def _post(self, client: httpx.Client, message: dict) -> bool:
        resp = client.post(MAIL_SEND_PATH, json=message)
        if resp.is_success:
            return True
        logger.warning("SendGrid returned %s: %s", resp.status_code, resp.text[:500] if resp.text else "")
        return False

    def send(self, notification: Notification) -> bool:
        """One email per recipient. True only if every recipient's email was accepted."""
        if not self.is_configured():
            logger.debug("SENDGRID_API_KEY not set; skipping %s for %s", notification.kind.value, notification.key)
            return False
        headers = {"authorization": f"Bearer {self._config.sendgrid_api_key}"}
        ok = True
        with httpx.Client(
            base_url=self._config.sendgrid_base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            for recipient in notification.recipients:
                template_id = self.template_id(notification.kind, recipient.role)
                if not template_id:
                    logger.debug("No template for %s/%s; skipping", notification.kind.value, recipient.role.value)
                    ok = False
                    continue
                try:
                    sent = self._post(client, self._message(notification, recipient, template_id))
                except httpx.HTTPError as e:
                    logger.warning("SendGrid request failed for %s: %s", notification.key, e, exc_info=True)
                    sent = False
                ok = ok and sent
        if ok:
            logger.info("Email sent for %s (%s recipients)", notification.key, len(notification.recipients))
        return ok
