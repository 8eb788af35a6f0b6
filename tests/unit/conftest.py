import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.utils.recording_delivery import RecordingEmailDelivery


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.set_reset_token = AsyncMock()
    uow.users.reset_password = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def email_delivery():
    return RecordingEmailDelivery()
