"""
PostgreSQL store against a live server (set TEST_POSTGRES_URL to run)
"""

import os

import pytest
import pytest_asyncio

from conftest import person_data
from personnel.database.postgres_store import PostgresPersonStore
from personnel.errors import DuplicateKey, RecordNotFound

TEST_POSTGRES_URL = os.getenv("TEST_POSTGRES_URL")

pytestmark = [
    pytest.mark.postgres,
    pytest.mark.skipif(not TEST_POSTGRES_URL, reason="TEST_POSTGRES_URL not set"),
]


@pytest_asyncio.fixture
async def pg_store():
    store = await PostgresPersonStore.connect(TEST_POSTGRES_URL)
    async with store._pool.acquire() as conn:
        await conn.execute("TRUNCATE people RESTART IDENTITY")
    yield store
    await store.close()


class TestPostgresPersonStore:

    @pytest.mark.asyncio
    async def test_crud_cycle(self, pg_store):
        created = await pg_store.create(person_data())
        assert await pg_store.get(created.id) == created

        updated = await pg_store.update(created.id, person_data(city="Manta"))
        assert updated.city.value == "Manta"
        assert updated.registered_at == created.registered_at

        await pg_store.delete(created.id)
        with pytest.raises(RecordNotFound):
            await pg_store.get(created.id)

    @pytest.mark.asyncio
    async def test_unique_national_id(self, pg_store):
        await pg_store.create(person_data())
        with pytest.raises(DuplicateKey):
            await pg_store.create(person_data(first_names="Ana"))

    @pytest.mark.asyncio
    async def test_ids_beyond_serial_range_are_not_found(self, pg_store):
        with pytest.raises(RecordNotFound):
            await pg_store.get(2 ** 31)
        with pytest.raises(RecordNotFound):
            await pg_store.update(2 ** 31, person_data())
        with pytest.raises(RecordNotFound):
            await pg_store.delete(2 ** 31)

    @pytest.mark.asyncio
    async def test_missing_records(self, pg_store):
        with pytest.raises(RecordNotFound):
            await pg_store.update(1, person_data())
        with pytest.raises(RecordNotFound):
            await pg_store.delete(1)
