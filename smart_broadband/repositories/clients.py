from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from smart_broadband.db.session import STORAGE_ERRORS
from smart_broadband.models.client import MUTABLE_FIELDS, Client, utcnow
from smart_broadband.repositories.result import StorageResult

logger = logging.getLogger(__name__)

# SERIAL primary keys are 32-bit; anything outside cannot name a row.
MAX_CLIENT_ID = 2**31 - 1


def parse_client_id(raw: str) -> int | None:
    try:
        client_id = int(raw)
    except (TypeError, ValueError):
        return None
    if not 1 <= client_id <= MAX_CLIENT_ID:
        return None
    return client_id


class ClientRepository:
    """Single-round-trip operations on the clients table.

    Every method returns a :class:`StorageResult`; database exceptions are
    logged here and never propagate to the caller.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_page(self, limit: int, offset: int) -> StorageResult[tuple[list[Client], int]]:
        query = select(Client).order_by(Client.created_at.desc(), Client.id.desc()).limit(limit).offset(offset)
        try:
            rows = list(await self.session.scalars(query))
            total = await self.session.scalar(select(func.count()).select_from(Client))
        except STORAGE_ERRORS as exc:
            logger.error("Error fetching clients: %s", exc, exc_info=exc)
            return StorageResult.failed(exc)
        return StorageResult.ok((rows, int(total or 0)))

    async def get(self, client_id: int) -> StorageResult[Client]:
        try:
            client = await self.session.get(Client, client_id)
        except STORAGE_ERRORS as exc:
            logger.error("Error fetching client %s: %s", client_id, exc, exc_info=exc)
            return StorageResult.failed(exc)
        if client is None:
            return StorageResult.not_found()
        return StorageResult.ok(client)

    async def create(self, values: dict[str, Any]) -> StorageResult[Client]:
        now = utcnow()
        statement = (
            insert(Client)
            .values(**_mutable(values), created_at=now, updated_at=now)
            .returning(Client)
        )
        try:
            client = await self.session.scalar(statement)
            await self.session.commit()
        except STORAGE_ERRORS as exc:
            logger.error("Error adding client: %s", exc, exc_info=exc)
            return StorageResult.failed(exc)
        return StorageResult.ok(client)

    async def replace(self, client_id: int, values: dict[str, Any]) -> StorageResult[Client]:
        """Overwrite every mutable column; fields missing from ``values`` become NULL."""
        replacement = {field: values.get(field) for field in MUTABLE_FIELDS}
        statement = (
            update(Client)
            .where(Client.id == client_id)
            .values(**replacement, updated_at=utcnow())
            .returning(Client)
            .execution_options(populate_existing=True)
        )
        try:
            client = await self.session.scalar(statement)
            await self.session.commit()
        except STORAGE_ERRORS as exc:
            logger.error("Error updating client %s: %s", client_id, exc, exc_info=exc)
            return StorageResult.failed(exc)
        if client is None:
            return StorageResult.not_found()
        return StorageResult.ok(client)

    async def delete(self, client_id: int) -> StorageResult[Client]:
        statement = (
            delete(Client)
            .where(Client.id == client_id)
            .returning(Client)
            .execution_options(populate_existing=True)
        )
        try:
            client = await self.session.scalar(statement)
            await self.session.commit()
        except STORAGE_ERRORS as exc:
            logger.error("Error deleting client %s: %s", client_id, exc, exc_info=exc)
            return StorageResult.failed(exc)
        if client is None:
            return StorageResult.not_found()
        return StorageResult.ok(client)


def _mutable(values: dict[str, Any]) -> dict[str, Any]:
    return {field: value for field, value in values.items() if field in MUTABLE_FIELDS}
