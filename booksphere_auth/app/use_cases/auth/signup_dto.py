"""
Signup Use Case DTOs

SignupCommand is created by the API layer after request validation passes
and carries only business-relevant data (no HTTP concerns).
"""

from typing import Optional

from pydantic import BaseModel


class SignupCommand(BaseModel):
    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
