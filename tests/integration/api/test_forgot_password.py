"""
Integration tests for POST /api/auth/forgot-password

- Token issuance for an existing account
- No email enumeration
- Overwrite on repeated requests
- Development vs production response shape
"""
import re

import bcrypt
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from booksphere_auth.app.services.email_delivery import DeliveryResult
from booksphere_auth.domain.base import now_ms
from booksphere_auth.domain.entities import User
from tests.integration.helpers import (
    ProductionConfig,
    create_test_user,
    id_from_reset_url,
    token_from_reset_url,
)
from tests.utils.recording_delivery import RecordingEmailDelivery

GENERIC_MESSAGE = "If an account with that email exists, a reset email has been sent"


@pytest.mark.asyncio
async def test_successful_forgot_password_dev(client: AsyncClient, db_session: AsyncSession, email_delivery):
    """Existing user: token hash and expiry stored, reset link returned in development"""
    user = await create_test_user(db_session, email="user@example.com")
    user_id = str(user.id)

    before = now_ms()
    response = await client.post("/api/auth/forgot-password", json={"email": "User@Example.com"})
    after = now_ms()

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Password reset (dev): check returned resetURL or email preview."
    assert data["mailSent"] is True
    assert "previewUrl" not in data

    reset_url = data["resetURL"]
    assert reset_url.startswith("http://localhost:3000/reset-password?token=")
    assert id_from_reset_url(reset_url) == user_id
    raw_token = token_from_reset_url(reset_url)

    await db_session.refresh(user)
    assert user.reset_password_token is not None
    assert user.reset_password_token != raw_token
    assert bcrypt.checkpw(raw_token.encode(), user.reset_password_token.encode())
    assert before + 3_600_000 <= user.reset_password_expire <= after + 3_600_000

    assert len(email_delivery.sent) == 1
    assert email_delivery.sent[0]["to"] == "user@example.com"
    assert reset_url in email_delivery.sent[0]["body"]


@pytest.mark.asyncio
async def test_forgot_password_unknown_email(client: AsyncClient, db_session: AsyncSession, email_delivery):
    """No enumeration: generic acknowledgment, nothing created, nothing sent"""
    response = await client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": GENERIC_MESSAGE}

    result = await db_session.exec(select(User))
    assert result.all() == []
    assert email_delivery.sent == []


@pytest.mark.asyncio
async def test_forgot_password_leaves_other_users_untouched(client: AsyncClient, db_session: AsyncSession):
    other = await create_test_user(db_session, email="other@example.com")

    response = await client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert response.status_code == 200

    await db_session.refresh(other)
    assert other.reset_password_token is None
    assert other.reset_password_expire is None


@pytest.mark.asyncio
async def test_second_request_overwrites_token(client: AsyncClient, db_session: AsyncSession):
    user = await create_test_user(db_session, email="multiple@example.com")

    first = await client.post("/api/auth/forgot-password", json={"email": "multiple@example.com"})
    await db_session.refresh(user)
    first_hash, first_expire = user.reset_password_token, user.reset_password_expire

    second = await client.post("/api/auth/forgot-password", json={"email": "multiple@example.com"})
    await db_session.refresh(user)

    first_token = token_from_reset_url(first.json()["resetURL"])
    second_token = token_from_reset_url(second.json()["resetURL"])
    assert first_token != second_token
    assert user.reset_password_token != first_hash
    assert user.reset_password_expire >= first_expire
    assert bcrypt.checkpw(second_token.encode(), user.reset_password_token.encode())
    assert not bcrypt.checkpw(first_token.encode(), user.reset_password_token.encode())


@pytest.mark.asyncio
async def test_forgot_password_production_hides_details(
    prod_client: AsyncClient, db_session: AsyncSession, email_delivery
):
    user = await create_test_user(db_session, email="user@example.com")

    response = await prod_client.post("/api/auth/forgot-password", json={"email": "user@example.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": GENERIC_MESSAGE}

    # Token still issued and mailed
    await db_session.refresh(user)
    assert user.reset_password_token is not None
    assert len(email_delivery.sent) == 1
    assert re.search(r"token=[0-9a-f]{64}&id=", email_delivery.sent[0]["body"])


@pytest.mark.asyncio
async def test_forgot_password_production_same_response_for_unknown_email(
    prod_client: AsyncClient, db_session: AsyncSession
):
    await create_test_user(db_session, email="user@example.com")

    known = await prod_client.post("/api/auth/forgot-password", json={"email": "user@example.com"})
    unknown = await prod_client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()


@pytest.mark.asyncio
async def test_forgot_password_delivery_failure_still_succeeds(make_client, db_session: AsyncSession):
    failing = RecordingEmailDelivery(result=DeliveryResult(mail_sent=False, error="SMTP down"))
    await create_test_user(db_session, email="user@example.com")

    async with make_client(delivery=failing) as ac:
        response = await ac.post("/api/auth/forgot-password", json={"email": "user@example.com"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["mailSent"] is False


@pytest.mark.asyncio
async def test_forgot_password_delivery_exception_still_succeeds(make_client, db_session: AsyncSession):
    failing = RecordingEmailDelivery(raises=OSError("network unreachable"))
    await create_test_user(db_session, email="user@example.com")

    async with make_client(config=ProductionConfig, delivery=failing) as ac:
        response = await ac.post("/api/auth/forgot-password", json={"email": "user@example.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": GENERIC_MESSAGE}


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"email": ""}, {"email": "   "}])
async def test_forgot_password_missing_email(client: AsyncClient, payload):
    response = await client.post("/api/auth/forgot-password", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Email required"
