"""
Email Delivery capability

The application layer only sees ``EmailDelivery``. Which variant runs
(configured SMTP or the in-process test inbox) is decided once at startup.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class EmailConfig(BaseModel):
    """Transport settings handed to an EmailDelivery at construction"""

    host: str = "smtp.gmail.com"
    port: int = 587
    user: str = ""
    password: str = ""
    sender: str = ""
    use_tls: bool = True
    timeout_seconds: float = 10.0
    public_base_url: str = "http://localhost:8000"
    inbox_path: str = "/api/auth/dev/inbox"
    inbox_size: int = 100

    @property
    def has_credentials(self) -> bool:
        return bool(self.user and self.password)

    @property
    def from_address(self) -> str:
        return self.sender or self.user

    @classmethod
    def from_application_config(cls, config) -> "EmailConfig":
        return cls(
            host=config.EMAIL_HOST,
            port=config.EMAIL_PORT,
            user=config.EMAIL_USER or "",
            password=config.EMAIL_PASS or "",
            sender=config.EMAIL_FROM or "",
            use_tls=config.EMAIL_USE_TLS,
            timeout_seconds=config.EMAIL_TIMEOUT_SECONDS,
            public_base_url=config.PUBLIC_BASE_URL,
            inbox_path=f"{config.API_PREFIX.rstrip('/')}/auth/dev/inbox",
            inbox_size=config.TEST_INBOX_SIZE,
        )


class DeliveryResult(BaseModel):
    """
    Outcome of a send.

    mail_sent is True only when a real mail server accepted the message.
    The test inbox reports mail_sent=False and a preview_url instead.
    """

    mail_sent: bool = False
    preview_url: Optional[str] = None
    error: Optional[str] = None


class EmailDelivery(ABC):
    """Outbound email channel"""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> DeliveryResult:
        pass

    @property
    def is_test_inbox(self) -> bool:
        return False
