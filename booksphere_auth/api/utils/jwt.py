from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import jwt

from config import ApplicationConfig


def generate_jwt(user_id: UUID, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        email: Normalized user email
        expires_delta: Token lifetime, defaults to JWT_EXPIRE_MINUTES

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.JWT_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": str(user_id),
        "email": email,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")
