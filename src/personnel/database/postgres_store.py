"""
PostgreSQL-backed record store (asyncpg connection pool)
"""

import logging
from typing import List, Optional

import asyncpg

from personnel.database.base import PersonStore
from personnel.errors import DuplicateKey, RecordNotFound, StorageFailure
from personnel.models.person import PersonData, PersonRecord
from personnel.utils.helpers import parse_db_timestamp

logger = logging.getLogger(__name__)

CREATE_PEOPLE_TABLE = """
    CREATE TABLE IF NOT EXISTS people (
        id SERIAL PRIMARY KEY,
        national_id TEXT NOT NULL UNIQUE,
        first_names TEXT NOT NULL,
        last_names TEXT NOT NULL,
        birth_date DATE NOT NULL,
        gender TEXT NOT NULL,
        city TEXT NOT NULL,
        registered_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""

SELECT_COLUMNS = "id, national_id, first_names, last_names, birth_date, gender, city, registered_at"


class PostgresPersonStore(PersonStore):
    """Person store on a PostgreSQL database"""

    # id is SERIAL (int4)
    max_record_id = 2 ** 31 - 1

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    @classmethod
    async def connect(cls, database_url: str) -> "PostgresPersonStore":
        """Create the connection pool and make sure the table exists"""
        try:
            pool = await asyncpg.create_pool(
                database_url,
                min_size=1,
                max_size=10,
                command_timeout=60,
                statement_cache_size=0  # pgbouncer compatibility
            )
            async with pool.acquire() as conn:
                await conn.execute(CREATE_PEOPLE_TABLE)
        except (asyncpg.PostgresError, OSError) as e:
            raise StorageFailure(f"Failed to connect to PostgreSQL: {e}") from e

        logger.info("PostgreSQL person store initialized successfully")
        return cls(pool)

    async def list(self, newest_first: bool = True) -> List[PersonRecord]:
        direction = "DESC" if newest_first else "ASC"
        query = f"SELECT {SELECT_COLUMNS} FROM people ORDER BY registered_at {direction}, id {direction}"
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query)
        except asyncpg.PostgresError as e:
            raise StorageFailure(f"Failed to list people: {e}") from e
        return [self._row_to_record(row) for row in rows]

    async def get(self, record_id: int) -> PersonRecord:
        self._require_storable_id(record_id)
        row = await self._fetchrow(
            f"SELECT {SELECT_COLUMNS} FROM people WHERE id = $1", record_id
        )
        if row is None:
            raise RecordNotFound(record_id)
        return self._row_to_record(row)

    async def create(self, data: PersonData) -> PersonRecord:
        query = f"""
            INSERT INTO people (national_id, first_names, last_names, birth_date, gender, city)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {SELECT_COLUMNS}
        """
        row = await self._fetchrow(query, *self._params(data))
        return self._row_to_record(row)

    async def update(self, record_id: int, data: PersonData) -> PersonRecord:
        query = f"""
            UPDATE people
            SET national_id = $1, first_names = $2, last_names = $3, birth_date = $4, gender = $5, city = $6
            WHERE id = $7
            RETURNING {SELECT_COLUMNS}
        """
        self._require_storable_id(record_id)
        row = await self._fetchrow(query, *self._params(data), record_id)
        if row is None:
            raise RecordNotFound(record_id)
        return self._row_to_record(row)

    async def delete(self, record_id: int) -> None:
        self._require_storable_id(record_id)
        try:
            async with self._pool.acquire() as conn:
                status = await conn.execute("DELETE FROM people WHERE id = $1", record_id)
        except asyncpg.PostgresError as e:
            raise StorageFailure(f"Failed to delete person {record_id}: {e}") from e

        # Command tag looks like "DELETE <count>"
        if status.split()[-1] == "0":
            raise RecordNotFound(record_id)

    async def ping(self) -> bool:
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except asyncpg.PostgresError as e:
            raise StorageFailure(f"PostgreSQL ping failed: {e}") from e
        return True

    async def close(self) -> None:
        await self._pool.close()
        logger.info("Database connections closed")

    async def _fetchrow(self, query: str, *params) -> Optional[asyncpg.Record]:
        try:
            async with self._pool.acquire() as conn:
                return await conn.fetchrow(query, *params)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateKey("national_id") from e
        except asyncpg.PostgresError as e:
            raise StorageFailure(f"Database operation failed: {e}") from e

    @staticmethod
    def _params(data: PersonData) -> tuple:
        return (
            data.national_id,
            data.first_names,
            data.last_names,
            data.birth_date,
            data.gender.value,
            data.city.value,
        )

    @staticmethod
    def _row_to_record(row: asyncpg.Record) -> PersonRecord:
        record = dict(row)
        record["registered_at"] = parse_db_timestamp(record["registered_at"])
        return PersonRecord(**record)
