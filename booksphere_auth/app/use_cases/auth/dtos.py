"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for the auth domain. Field aliases follow the JSON
contract expected by the mobile client (camelCase).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from booksphere_auth.domain.entities import User


class UserInfo(BaseModel):
    """Public user fields returned by signup and login"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )


class AuthResponse(BaseModel):
    """Response for signup and login use cases"""

    success: bool = True
    message: str
    user: UserInfo
    token: str


class PasswordResetIssued(BaseModel):
    """
    Response for request password reset use case.

    reset_url, mail_sent and preview_url are diagnostics for development;
    the API layer only exposes them outside production. reset_url is None
    when no account matched.
    """

    success: bool = True
    message: str
    reset_url: Optional[str] = None
    mail_sent: bool = False
    preview_url: Optional[str] = None


class PasswordResetConfirmed(BaseModel):
    """Response for confirm password reset use case"""

    success: bool = True
    message: str
