from contextlib import asynccontextmanager

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from wordrace.core.config import get_test_settings
from wordrace.db.session import create_session_factory
from wordrace.repositories.memory_repository import MemoryGameRepository
from wordrace.repositories.sql_repository import SqlGameRepository

DEFAULT_TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@asynccontextmanager
async def temporary_engine():
    test_settings = get_test_settings()
    engine = create_async_engine(
        test_settings.DATABASE_URL or DEFAULT_TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repository(request, clock):
    if request.param == "memory":
        yield MemoryGameRepository(clock=clock)
        return

    async with temporary_engine() as engine:
        yield SqlGameRepository(create_session_factory(engine), clock=clock)
