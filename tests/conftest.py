"""
pytest configuration and fixtures for the personnel registry test suite
"""

from datetime import date, datetime, timezone
from typing import Any, Dict

import httpx
import pytest
import pytest_asyncio

from personnel.app import app
from personnel.database import connection
from personnel.database.base import PersonStore
from personnel.database.memory_store import InMemoryPersonStore
from personnel.database.sqlite_store import SqlitePersonStore
from personnel.errors import StorageFailure
from personnel.models.person import PersonData, PersonRecord
from personnel.services.people_service import PeopleService


VALID_PERSON = {
    "national_id": "1234567890",
    "first_names": "Juan",
    "last_names": "Perez",
    "birth_date": "2000-01-01",
    "gender": "Masculine",
    "city": "Quito",
}


def person_candidate(**overrides) -> Dict[str, Any]:
    """A valid candidate with selected fields overridden"""
    return {**VALID_PERSON, **overrides}


def person_data(**overrides) -> PersonData:
    return PersonData.from_candidate(person_candidate(**overrides))


def make_record(record_id: int, **overrides) -> PersonRecord:
    return PersonRecord(
        id=record_id,
        registered_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        **person_data(**overrides).model_dump()
    )


class SpyPersonStore(InMemoryPersonStore):
    """In-memory store that counts write calls"""

    def __init__(self):
        super().__init__()
        self.create_calls = 0
        self.update_calls = 0

    async def create(self, data):
        self.create_calls += 1
        return await super().create(data)

    async def update(self, record_id, data):
        self.update_calls += 1
        return await super().update(record_id, data)


class BrokenPersonStore(PersonStore):
    """Store whose backend is unreachable"""

    reason = "disk I/O error reading /var/lib/personnel/people.db"

    async def list(self, newest_first=True):
        raise StorageFailure(self.reason)

    async def get(self, record_id):
        raise StorageFailure(self.reason)

    async def create(self, data):
        raise StorageFailure(self.reason)

    async def update(self, record_id, data):
        raise StorageFailure(self.reason)

    async def delete(self, record_id):
        raise StorageFailure(self.reason)

    async def ping(self):
        raise StorageFailure(self.reason)


@pytest.fixture
def today() -> date:
    return date(2025, 6, 15)


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(request, tmp_path):
    """Every store backend that runs without an external server"""
    if request.param == "memory":
        person_store = InMemoryPersonStore()
    else:
        person_store = SqlitePersonStore(tmp_path / "people.db")
    yield person_store
    await person_store.close()


@pytest.fixture
def spy_store() -> SpyPersonStore:
    return SpyPersonStore()


@pytest.fixture
def people_service(spy_store) -> PeopleService:
    return PeopleService(spy_store)


@pytest_asyncio.fixture
async def api_client(tmp_path):
    """HTTP client bound in-process to the app, backed by a fresh SQLite file"""
    await connection.init_database(f"sqlite:///{tmp_path / 'api.db'}")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    await connection.close_database()
