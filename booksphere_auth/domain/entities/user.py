"""
User Entity

A reader account, including the outstanding password reset token if any.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import BigInteger
from sqlmodel import Column, DateTime, Field, SQLModel

from booksphere_auth.domain.base import now_ms, utcnow


class User(SQLModel, table=True):
    """
    User entity - one document per account.

    Business Rules:
    - Email is unique and always stored lower-cased
    - Password stored as bcrypt hash; absent only before first signup
    - reset_password_token is the bcrypt hash of the raw reset token
    - reset_password_token and reset_password_expire are set together
      and cleared together
    - At most one outstanding reset token; a new one overwrites the old
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output is 60 chars

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    reset_password_token: Optional[str] = Field(default=None, max_length=60)
    # Epoch milliseconds
    reset_password_expire: Optional[int] = Field(
        default=None, sa_column=Column(BigInteger, nullable=True)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    def has_reset_token(self) -> bool:
        return self.reset_password_token is not None and self.reset_password_expire is not None

    def reset_token_expired(self, at_ms: Optional[int] = None) -> bool:
        """Expired once the stored expiry is at or before ``at_ms``"""
        if at_ms is None:
            at_ms = now_ms()
        return self.reset_password_expire is None or self.reset_password_expire <= at_ms
