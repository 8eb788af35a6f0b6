from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from booksphere_auth.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def set_reset_token(self, user_id: UUID, token_hash: str, expire_ms: int) -> None:
        """Store the reset token hash and expiry in one update, replacing any previous token"""
        pass

    @abstractmethod
    async def reset_password(
        self, user_id: UUID, expected_token_hash: str, password_hash: str
    ) -> bool:
        """
        Set the new password hash and clear both reset token fields in one update.

        The update only applies while the stored token hash is still
        ``expected_token_hash``. Returns False when nothing was updated.
        """
        pass
