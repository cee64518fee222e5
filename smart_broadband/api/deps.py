from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from smart_broadband.repositories import ClientRepository


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async for session in request.app.state.database.session():
        yield session


def get_client_repository(session: AsyncSession = Depends(get_db_session)) -> ClientRepository:
    return ClientRepository(session)
