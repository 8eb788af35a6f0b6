import logging

import bcrypt
from libs.result import Error, Result, Return

from booksphere_auth.app.services.unit_of_work import UnitOfWork
from booksphere_auth.domain.base import normalize_email
from booksphere_auth.domain.entities import User
from .dtos import AuthResponse, UserInfo
from .password_policy import validate_password
from .signup_dto import SignupCommand

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[AuthResponse]

    Business Logic:
    1. Normalize email and validate password
    2. Reject already registered email
    3. Hash password with bcrypt
    4. Create User
    5. Commit and return the user with a JWT access token
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, command: SignupCommand) -> Result[AuthResponse]:
        """
        Execute signup use case

        Returns:
            Result[AuthResponse] with user data and token,
            Error(INVALID_PASSWORD) or Error(EMAIL_ALREADY_EXISTS)
        """
        email = normalize_email(command.email)

        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "User already exists"))

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(self.bcrypt_rounds)
            )

            user = User(
                email=email,
                password_hash=password_hash.decode("utf-8"),
                first_name=command.first_name,
                last_name=command.last_name,
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

            logger.info(f"User signed up: {user.id}")

            # Import JWT utility here to avoid circular dependency
            from booksphere_auth.api.utils.jwt import generate_jwt

            return Return.ok(
                AuthResponse(
                    message="User created successfully",
                    user=UserInfo.from_user(user),
                    token=generate_jwt(user.id, user.email),
                )
            )
