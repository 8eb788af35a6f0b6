"""
Login Use Case

Checks email and password and returns a JWT access token.
"""

from functools import lru_cache

import bcrypt

from libs.result import Error, Result, Return
from booksphere_auth.app.services.unit_of_work import UnitOfWork
from booksphere_auth.domain.base import normalize_email
from .dtos import AuthResponse, UserInfo
from .password_policy import MAX_PASSWORD_BYTES


@lru_cache(maxsize=None)
def dummy_hash(rounds: int) -> bytes:
    """Hash checked against when the email is unknown, at the same cost as real hashes"""
    return bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Email is matched case-insensitively
    - Unknown email and wrong password give the same error
    - Constant-time password comparison via bcrypt
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse, or Error(INVALID_CREDENTIALS)
        """
        # Signup never accepts such a password, and bcrypt rejects it
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            # Constant-time password verification (prevent timing attacks)
            if user is None or not user.password_hash:
                bcrypt.checkpw(password.encode(), dummy_hash(self.bcrypt_rounds))
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            password_valid = bcrypt.checkpw(password.encode(), user.password_hash.encode())
            if not password_valid:
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            from booksphere_auth.api.utils.jwt import generate_jwt

            return Return.ok(
                AuthResponse(
                    message="Login successful",
                    user=UserInfo.from_user(user),
                    token=generate_jwt(user.id, user.email),
                )
            )
