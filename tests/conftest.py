from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from smart_broadband.core.config import Settings
from smart_broadband.db.init_db import ensure_schema
from smart_broadband.db.session import Database
from smart_broadband.main import create_app


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        frontend_url="https://frontend.example",
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    database = Database.from_settings(settings)
    await ensure_schema(database)

    yield database

    await database.dispose()


@pytest.fixture
async def app(settings: Settings, database: Database) -> FastAPI:
    return create_app(settings, database)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()
