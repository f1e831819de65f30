from __future__ import annotations

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional

from app.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailRelay:
    """SMTP transport shared by every request.

    Built once from settings when the application starts and never mutated
    afterwards. Each ``send`` opens its own connection, so concurrent
    requests need no coordination.
    """

    host: str
    port: int
    username: str
    password: str
    use_ssl: bool = True
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailRelay":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD.get_secret_value(),
            use_ssl=settings.SMTP_USE_SSL,
            timeout=settings.SMTP_TIMEOUT,
        )

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        server.starttls()
        return server

    def _send_sync(self, message: EmailMessage) -> None:
        with self._connect() as server:
            if self.username:
                server.login(self.username, self.password)
            server.send_message(message)

    async def send(
        self,
        *,
        sender: str,
        to: str,
        subject: str,
        html: str,
        text: str,
        reply_to: Optional[str] = None,
    ) -> None:
        """Deliver one message. Errors propagate to the caller, no retry."""
        message = build_message(
            sender=sender,
            to=to,
            subject=subject,
            html=html,
            text=text,
            reply_to=reply_to,
        )
        await asyncio.to_thread(self._send_sync, message)
        logger.info("Email relayed via %s:%s", self.host, self.port)


def build_message(
    *,
    sender: str,
    to: str,
    subject: str,
    html: str,
    text: str,
    reply_to: Optional[str] = None,
) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content(text)
    msg.add_alternative(html, subtype="html")
    return msg
