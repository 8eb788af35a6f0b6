from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from booksphere_auth.app.repositories.user_repository import IUserRepository
from booksphere_auth.domain.base import utcnow
from booksphere_auth.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def set_reset_token(self, user_id: UUID, token_hash: str, expire_ms: int) -> None:
        """Store the reset token hash and expiry in one UPDATE"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(reset_password_token=token_hash, reset_password_expire=expire_ms)
        )
        await self.session.execute(stmt)

    async def reset_password(
        self, user_id: UUID, expected_token_hash: str, password_hash: str
    ) -> bool:
        """Set password and clear reset token fields while the token is still current"""
        stmt = (
            update(User)
            .where(User.id == user_id, User.reset_password_token == expected_token_hash)
            .values(
                password_hash=password_hash,
                updated_at=utcnow(),
                reset_password_token=None,
                reset_password_expire=None,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
