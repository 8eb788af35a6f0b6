"""
Confirm Password Reset Use Case

Redeems a raw reset token and sets the new password.
"""

import logging
from uuid import UUID

import bcrypt

from libs.result import Error, Result, Return
from booksphere_auth.app.services.unit_of_work import UnitOfWork
from booksphere_auth.domain.base import now_ms
from .dtos import PasswordResetConfirmed
from .password_policy import MAX_PASSWORD_BYTES, validate_password

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - User id must be a well-formed UUID of an existing user
    - User must have an outstanding token that has not expired
    - Raw token is checked with bcrypt.checkpw, never compared directly
    - New password must meet complexity requirements (min 8 chars)
    - Password update and token clearing happen in one conditional update,
      so a token replaced by a concurrent request can no longer be redeemed
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self, user_id: str, token: str, new_password: str
    ) -> Result[PasswordResetConfirmed]:
        """
        Execute confirm password reset use case.

        Args:
            user_id: User id from the reset link
            token: Raw password reset token from the reset link
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_USER_ID: user_id is not a UUID
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - USER_NOT_FOUND: No user with that id
            - TOKEN_INVALID: No outstanding token, or token does not match
            - TOKEN_EXPIRED: Token has expired
        """
        try:
            parsed_id = UUID(str(user_id))
        except ValueError:
            return Return.err(Error("INVALID_USER_ID", "Invalid user id"))

        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(parsed_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not user.has_reset_token():
                return Return.err(Error("TOKEN_INVALID", "Token invalid"))

            if user.reset_token_expired(now_ms()):
                return Return.err(Error("TOKEN_EXPIRED", "Token expired"))

            stored_hash = user.reset_password_token
            raw = token.encode()
            # Issued tokens are 64 bytes; bcrypt rejects anything over 72
            if len(raw) > MAX_PASSWORD_BYTES or not bcrypt.checkpw(raw, stored_hash.encode()):
                return Return.err(Error("TOKEN_INVALID", "Token invalid"))

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(self.bcrypt_rounds))

            updated = await self.uow.users.reset_password(
                user.id, stored_hash, password_hash.decode()
            )
            if not updated:
                # A newer token replaced this one between read and write
                return Return.err(Error("TOKEN_INVALID", "Token invalid"))

            await self.uow.commit()

            logger.info(f"Password reset completed for user {parsed_id}")

            return Return.ok(PasswordResetConfirmed(message="Password reset successful"))
