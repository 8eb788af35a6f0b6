from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from booksphere_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from booksphere_auth.app.services.email_delivery import EmailDelivery

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_delivery(request: Request) -> EmailDelivery:
    """The delivery chosen at startup by create_app"""
    return request.app.state.email_delivery


def get_config(request: Request):
    return request.app.state.config
