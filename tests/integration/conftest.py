import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from booksphere_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from booksphere_auth.api.app import create_app
from booksphere_auth.depends import get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader
from tests.integration.helpers import DevConfig, ProductionConfig
from tests.utils.recording_delivery import RecordingEmailDelivery


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def email_delivery():
    return RecordingEmailDelivery()


@pytest_asyncio.fixture
def make_client(db_session):
    """Builds an AsyncClient for the app with the given config and delivery"""

    def _make(config=DevConfig, delivery=None):
        app = create_app(config, email_delivery=delivery or RecordingEmailDelivery())

        async def override_get_unit_of_work():
            yield SqlAlchemyUnitOfWork(db_session)

        app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def client(make_client, email_delivery):
    async with make_client(DevConfig, email_delivery) as ac:
        yield ac


@pytest_asyncio.fixture
async def prod_client(make_client, email_delivery):
    async with make_client(ProductionConfig, email_delivery) as ac:
        yield ac
