"""
Use Cases

- auth/: signup, login and the password reset flow
"""

from .auth import (
    SignupUseCase,
    SignupCommand,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)

__all__ = [
    "SignupUseCase",
    "SignupCommand",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
]
