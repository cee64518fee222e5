import pytest
from sqlalchemy import inspect

from smart_broadband.core.config import Settings
from smart_broadband.db.base import Base
from smart_broadband.db.init_db import ensure_schema, init_db
from smart_broadband.db.session import Database


@pytest.mark.anyio
async def test_init_db_creates_clients_table(tmp_path):
    settings = Settings(_env_file=None, database_url=f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
    database = Database.from_settings(settings)
    try:
        assert await init_db(database) is True
        # Running again must not fail on the existing table.
        assert await ensure_schema(database) is True

        async with database.engine.connect() as conn:
            columns = await conn.run_sync(lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns("clients")})
    finally:
        await database.dispose()

    assert columns == {
        "id",
        "full_name",
        "email",
        "phone",
        "location",
        "service_type",
        "serial_number",
        "price",
        "supporter",
        "has_bonus",
        "created_at",
        "updated_at",
    }


@pytest.mark.anyio
async def test_unreachable_database_is_logged_not_raised(tmp_path, caplog):
    missing_dir = tmp_path / "does" / "not" / "exist"
    settings = Settings(_env_file=None, database_url=f"sqlite+aiosqlite:///{missing_dir / 'clients.db'}")
    database = Database.from_settings(settings)
    try:
        assert await init_db(database) is False
    finally:
        await database.dispose()

    assert "Error acquiring database connection" in caplog.text



@pytest.mark.anyio
async def test_programming_errors_are_not_swallowed(tmp_path, monkeypatch):
    settings = Settings(_env_file=None, database_url=f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
    database = Database.from_settings(settings)

    def broken_create_all(*args, **kwargs):
        raise RuntimeError("metadata bug")

    monkeypatch.setattr(Base.metadata, "create_all", broken_create_all)
    try:
        with pytest.raises(RuntimeError, match="metadata bug"):
            await ensure_schema(database)
    finally:
        await database.dispose()
