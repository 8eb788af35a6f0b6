"""
Request Password Reset Use Case

Issues a reset token for the account and emails the reset link.
"""

import logging
import secrets

import bcrypt

from libs.result import Result, Return
from booksphere_auth.app.services.email_delivery import DeliveryResult, EmailDelivery
from booksphere_auth.app.services.unit_of_work import UnitOfWork
from booksphere_auth.domain.base import normalize_email, now_ms
from .dtos import PasswordResetIssued

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If an account with that email exists, a reset email has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Raw token is 32 random bytes, hex encoded (never stored)
    - Stored token is a bcrypt hash of the raw token
    - Token expires in 1 hour by default
    - A new request overwrites any outstanding token for the user
    - No email enumeration (same response for valid/invalid emails)
    - Email delivery failures are logged, never returned to the caller
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_delivery: EmailDelivery,
        frontend_url: str,
        token_ttl_minutes: int = 60,
        bcrypt_rounds: int = 12,
    ):
        self.uow = uow
        self.email_delivery = email_delivery
        self.frontend_url = frontend_url
        self.token_ttl_minutes = token_ttl_minutes
        self.bcrypt_rounds = bcrypt_rounds

    def build_reset_url(self, raw_token: str, user_id) -> str:
        return f"{self.frontend_url.rstrip('/')}/reset-password?token={raw_token}&id={user_id}"

    def _validity_text(self) -> str:
        if self.token_ttl_minutes == 60:
            return "1 hour"
        return f"{self.token_ttl_minutes} minutes"

    async def execute(self, email: str) -> Result[PasswordResetIssued]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address (any case)

        Returns:
            Result with PasswordResetIssued

        Note:
            For security (no email enumeration), always returns success
            even if email doesn't exist. However, only generates token
            if email exists.
        """
        normalized_email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(normalized_email)

            if user is None:
                return Return.ok(PasswordResetIssued(message=GENERIC_RESET_MESSAGE))

            raw_token = secrets.token_hex(32)
            token_hash = bcrypt.hashpw(raw_token.encode(), bcrypt.gensalt(self.bcrypt_rounds))
            expire_ms = now_ms() + self.token_ttl_minutes * 60 * 1000

            user_id, user_email = user.id, user.email
            await self.uow.users.set_reset_token(user_id, token_hash.decode(), expire_ms)
            await self.uow.commit()

        reset_url = self.build_reset_url(raw_token, user_id)
        logger.info(f"Password reset token issued for user {user_id}")

        delivery = await self._deliver(user_email, reset_url)

        return Return.ok(
            PasswordResetIssued(
                message=GENERIC_RESET_MESSAGE,
                reset_url=reset_url,
                mail_sent=delivery.mail_sent,
                preview_url=delivery.preview_url,
            )
        )

    async def _deliver(self, to: str, reset_url: str) -> DeliveryResult:
        subject = "BookSphere Password Reset"
        if self.email_delivery.is_test_inbox:
            subject += " (dev)"
        body = (
            f"You requested a password reset. Use this link (valid {self._validity_text()}):\n\n"
            f"{reset_url}\n\n"
            "If you didn't request this, ignore this email."
        )

        try:
            result = await self.email_delivery.send(to, subject, body)
        except Exception as exc:
            logger.exception(f"Password reset email delivery raised: {type(exc).__name__}")
            return DeliveryResult(mail_sent=False, error=str(exc))

        if result.error:
            logger.error(f"Password reset email delivery failed: {result.error}")
        return result
