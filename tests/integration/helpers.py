from typing import Optional
from urllib.parse import parse_qs, urlparse

import bcrypt
from sqlmodel.ext.asyncio.session import AsyncSession

from booksphere_auth.domain.entities import User
from config import ApplicationConfig


class DevConfig(ApplicationConfig):
    ENVIRONMENT = "development"
    DEV_EMAIL_RETURN_URL = False
    FRONTEND_URL = "http://localhost:3000"
    BCRYPT_ROUNDS = 4


class ProductionConfig(DevConfig):
    ENVIRONMENT = "production"


async def create_test_user(
    db_session: AsyncSession,
    email: str = "user@example.com",
    password: str = "OldPass123!",
    reset_password_token: Optional[str] = None,
    reset_password_expire: Optional[int] = None,
) -> User:
    """Insert a user directly into the database and commit"""
    user = User(
        email=email,
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
        reset_password_token=reset_password_token,
        reset_password_expire=reset_password_expire,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def token_from_reset_url(reset_url: str) -> str:
    return parse_qs(urlparse(reset_url).query)["token"][0]


def id_from_reset_url(reset_url: str) -> str:
    return parse_qs(urlparse(reset_url).query)["id"][0]
