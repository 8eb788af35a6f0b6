"""
Email delivery adapters

build_email_delivery picks the variant once, at startup.
"""

import logging

from booksphere_auth.app.services.email_delivery import EmailConfig, EmailDelivery
from .smtp_delivery import SmtpEmailDelivery
from .test_inbox import CapturedEmail, TestInboxEmailDelivery

logger = logging.getLogger(__name__)


def build_email_delivery(config: EmailConfig) -> EmailDelivery:
    """SMTP when credentials are configured, otherwise the in-process test inbox"""
    if config.has_credentials:
        logger.info(f"Email delivery: SMTP via {config.host}:{config.port}")
        return SmtpEmailDelivery(config)

    logger.warning("Email delivery: no SMTP credentials, capturing mail in the test inbox")
    return TestInboxEmailDelivery(config)


__all__ = [
    "build_email_delivery",
    "SmtpEmailDelivery",
    "TestInboxEmailDelivery",
    "CapturedEmail",
]
