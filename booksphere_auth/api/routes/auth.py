from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from libs.result import Error
from booksphere_auth.api.error import ClientError, ServerError
from booksphere_auth.app.services.email_delivery import EmailDelivery
from booksphere_auth.app.services.unit_of_work import UnitOfWork
from booksphere_auth.app.use_cases.auth import (
    AuthResponse,
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    PasswordResetConfirmed,
    RequestPasswordResetUseCase,
    SignupCommand,
    SignupUseCase,
)
from booksphere_auth.depends import get_config, get_email_delivery, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])

DEV_RESET_MESSAGE = "Password reset (dev): check returned resetURL or email preview."


def _require(condition, message: str):
    if not condition:
        raise ClientError(Error("VALIDATION_ERROR", message))


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Missing email/password are reported by the route with a readable
    message; a malformed email is rejected by validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[EmailStr] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password (min 8 chars)")
    first_name: Optional[str] = Field(None, alias="firstName", max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=100)


@router.post("/signup", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    User Signup

    Creates an account and returns the user with a JWT access token.

    Raises:
        - 400 Bad Request: Missing fields, weak password or email already registered
        - 500 Internal Server Error: Server error
    """
    _require(request.email and request.password, "Email and password are required")

    command = SignupCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    use_case = SignupUseCase(uow, bcrypt_rounds=config.BCRYPT_ROUNDS)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_ALREADY_EXISTS", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    User Login

    Raises:
        - 400 Bad Request: Missing fields or invalid credentials
        - 500 Internal Server Error: Server error
    """
    _require(request.email and request.password, "Email and password are required")

    use_case = LoginUseCase(uow, bcrypt_rounds=config.BCRYPT_ROUNDS)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")


class ForgotPasswordResponse(BaseModel):
    """
    Forgot password HTTP response

    resetURL, mailSent and previewUrl are only filled outside production.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    reset_url: Optional[str] = Field(None, alias="resetURL")
    mail_sent: Optional[bool] = Field(None, alias="mailSent")
    preview_url: Optional[str] = Field(None, alias="previewUrl")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=ForgotPasswordResponse,
    response_model_exclude_none=True,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_delivery: EmailDelivery = Depends(get_email_delivery),
    config=Depends(get_config),
):
    """
    Forgot Password

    Stores a hashed reset token on the account and emails the reset link.

    Security:
        - No email enumeration (same response for unknown emails)
        - Delivery failures do not change the response

    Returns:
        - 200 OK: Always, once an email is supplied
        - 400 Bad Request: Email missing
        - 500 Internal Server Error: Server error
    """
    _require(request.email and request.email.strip(), "Email required")

    use_case = RequestPasswordResetUseCase(
        uow,
        email_delivery,
        frontend_url=config.FRONTEND_URL,
        token_ttl_minutes=config.RESET_TOKEN_TTL_MINUTES,
        bcrypt_rounds=config.BCRYPT_ROUNDS,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    issued = result.value
    if issued.reset_url is None or not config.expose_reset_details():
        return ForgotPasswordResponse(message=issued.message)

    return ForgotPasswordResponse(
        message=DEV_RESET_MESSAGE,
        reset_url=issued.reset_url,
        mail_sent=issued.mail_sent,
        preview_url=issued.preview_url,
    )


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    id: Optional[str] = Field(None, description="User id from the reset link")
    token: Optional[str] = Field(None, description="Raw reset token from the reset link")
    password: Optional[str] = Field(None, description="New password (min 8 chars)")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=PasswordResetConfirmed
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Reset Password

    Redeems the reset token and sets the new password. The token is cleared
    on success and cannot be used again.

    Raises:
        - 400 Bad Request: Missing fields, invalid id, invalid/expired token, weak password
        - 404 Not Found: Unknown user id
        - 500 Internal Server Error: Server error
    """
    _require(
        request.id and request.token and request.password,
        "id, token and password are required",
    )

    use_case = ConfirmPasswordResetUseCase(uow, bcrypt_rounds=config.BCRYPT_ROUNDS)
    result = await use_case.execute(request.id, request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVALID_USER_ID", "INVALID_PASSWORD", "TOKEN_INVALID", "TOKEN_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
