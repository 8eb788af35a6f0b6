import logging
import smtplib
from email.message import EmailMessage

from starlette.concurrency import run_in_threadpool

from booksphere_auth.app.services.email_delivery import (
    DeliveryResult,
    EmailConfig,
    EmailDelivery,
)

logger = logging.getLogger(__name__)


class SmtpEmailDelivery(EmailDelivery):
    """Sends plain-text mail through a configured SMTP server"""

    def __init__(self, config: EmailConfig):
        self.config = config

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.config.from_address
        msg["To"] = to
        msg.set_content(body)
        return msg

    def _send_sync(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(
            self.config.host, self.config.port, timeout=self.config.timeout_seconds
        ) as smtp:
            if self.config.use_tls:
                smtp.starttls()
            smtp.login(self.config.user, self.config.password)
            smtp.send_message(msg)

    async def send(self, to: str, subject: str, body: str) -> DeliveryResult:
        msg = self._build_message(to, subject, body)
        try:
            # smtplib blocks, keep it off the event loop
            await run_in_threadpool(self._send_sync, msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"SMTP send to {to} failed: {type(exc).__name__}: {exc}")
            return DeliveryResult(mail_sent=False, error=f"{type(exc).__name__}: {exc}")

        logger.info(f"SMTP mail sent to {to}")
        return DeliveryResult(mail_sent=True)
