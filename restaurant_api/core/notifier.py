"""
Restaurant API — Outbound customer notifications

`send()` raises NotificationError on failure; callers on the order path log it
and carry on, the order is already committed by then.
"""
import asyncio
import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from restaurant_api.core.config import get_settings
from restaurant_api.core.exceptions import NotificationError

settings = get_settings()
logger = logging.getLogger(__name__)


class Notifier:
    async def send(self, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Used when no mail provider is configured."""

    async def send(self, to: str, subject: str, body: str) -> None:
        logger.info("Email to %s not sent (no provider configured): %s", to, subject)


class SendGridNotifier(Notifier):
    def __init__(self, api_key: str, from_email: str):
        self._client = SendGridAPIClient(api_key)
        self._from_email = from_email

    def _send_sync(self, to: str, subject: str, body: str) -> None:
        message = Mail(
            from_email=self._from_email,
            to_emails=to,
            subject=subject,
            plain_text_content=body,
        )
        response = self._client.send(message)
        if response.status_code >= 400:
            raise NotificationError(f"SendGrid responded {response.status_code}")

    async def send(self, to: str, subject: str, body: str) -> None:
        try:
            # sendgrid's client is blocking
            await asyncio.to_thread(self._send_sync, to, subject, body)
        except NotificationError:
            raise
        except Exception as exc:
            raise NotificationError(f"SendGrid send failed: {exc}") from exc
        logger.info("Email sent to %s", to)


def build_notifier() -> Notifier:
    if settings.SENDGRID_API_KEY:
        return SendGridNotifier(settings.SENDGRID_API_KEY, settings.EMAIL_FROM)
    return LoggingNotifier()
