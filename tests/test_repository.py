import pytest

from smart_broadband.repositories import ClientRepository, StorageStatus, parse_client_id


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", 1), ("42", 42), ("2147483647", 2147483647), ("2147483648", None), ("0", None), ("-1", None), ("x1", None)],
)
def test_parse_client_id(raw, expected):
    assert parse_client_id(raw) == expected


@pytest.mark.anyio
async def test_repository_round_trip(database):
    async with database.session_factory() as session:
        repository = ClientRepository(session)

        created = await repository.create({"full_name": "Hiba", "unknown_column": "ignored"})
        assert created.is_ok
        client = created.value
        assert client.has_bonus is False
        assert client.created_at == client.updated_at

        replaced = await repository.replace(client.id, {"full_name": "Hiba S.", "has_bonus": True})
        assert replaced.is_ok
        assert replaced.value.updated_at > replaced.value.created_at

        page = await repository.list_page(limit=10, offset=0)
        rows, total = page.value
        assert total == 1
        assert [row.full_name for row in rows] == ["Hiba S."]

        deleted = await repository.delete(client.id)
        assert deleted.is_ok
        assert deleted.value.full_name == "Hiba S."

        assert (await repository.get(client.id)).status is StorageStatus.NOT_FOUND
        assert (await repository.replace(client.id, {"full_name": "Nobody"})).status is StorageStatus.NOT_FOUND
        assert (await repository.delete(client.id)).status is StorageStatus.NOT_FOUND


@pytest.mark.anyio
async def test_repository_reports_constraint_violation(database):
    async with database.session_factory() as session:
        result = await ClientRepository(session).create({"email": "no-name@example.com"})

    assert result.status is StorageStatus.FAILED
    assert result.error is not None
