from __future__ import annotations

import ssl
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from smart_broadband.core.config import Settings

# Driver, query and connectivity failures; anything else is a bug and propagates.
STORAGE_ERRORS = (SQLAlchemyError, OSError)


def _engine_kwargs(settings: Settings) -> dict:
    engine_kwargs: dict = {
        "echo": False,
        "future": True,
    }

    if settings.database_url.startswith("sqlite+aiosqlite"):
        engine_kwargs["connect_args"] = {"timeout": 30}
    elif settings.database_url.startswith("postgresql+asyncpg") and settings.database_ssl:
        # Supabase poolers present certificates that do not verify against the system store.
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        engine_kwargs["connect_args"] = {"ssl": context}
        engine_kwargs["pool_pre_ping"] = True

    return engine_kwargs


class Database:
    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        return cls(create_async_engine(settings.database_url, **_engine_kwargs(settings)))

    @property
    def backend_name(self) -> str:
        return self.engine.url.get_backend_name()

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
