"""
SQLite-backed record store
"""

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import List, Union

from personnel.database.base import PersonStore
from personnel.errors import DuplicateKey, RecordNotFound, StorageFailure
from personnel.models.person import PersonData, PersonRecord
from personnel.utils.helpers import parse_db_timestamp

logger = logging.getLogger(__name__)

CREATE_PEOPLE_TABLE = """
    CREATE TABLE IF NOT EXISTS people (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        national_id TEXT NOT NULL UNIQUE,
        first_names TEXT NOT NULL,
        last_names TEXT NOT NULL,
        birth_date DATE NOT NULL,
        gender TEXT NOT NULL,
        city TEXT NOT NULL,
        registered_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
"""

SELECT_COLUMNS = "id, national_id, first_names, last_names, birth_date, gender, city, registered_at"


class SqlitePersonStore(PersonStore):
    """
    Person store on a single SQLite database file.

    AUTOINCREMENT keeps ids from being reused after deletes, and the UNIQUE
    constraint on national_id is the final guard against duplicates.
    """

    max_record_id = 2 ** 63 - 1

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.execute(CREATE_PEOPLE_TABLE)
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to open SQLite database at {self.path}: {e}") from e

        logger.info(f"SQLite person store ready at {self.path}")

    async def list(self, newest_first: bool = True) -> List[PersonRecord]:
        direction = "DESC" if newest_first else "ASC"
        query = f"SELECT {SELECT_COLUMNS} FROM people ORDER BY registered_at {direction}, id {direction}"
        try:
            rows = self._conn.execute(query).fetchall()
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to list people: {e}") from e
        return [self._row_to_record(row) for row in rows]

    async def get(self, record_id: int) -> PersonRecord:
        self._require_storable_id(record_id)
        try:
            row = self._conn.execute(
                f"SELECT {SELECT_COLUMNS} FROM people WHERE id = ?", (record_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to get person {record_id}: {e}") from e

        if row is None:
            raise RecordNotFound(record_id)
        return self._row_to_record(row)

    async def create(self, data: PersonData) -> PersonRecord:
        query = """
            INSERT INTO people (national_id, first_names, last_names, birth_date, gender, city)
            VALUES (?, ?, ?, ?, ?, ?)
        """
        try:
            with self._conn:
                cursor = self._conn.execute(query, self._params(data))
                record_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise self._integrity_error(e) from e
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to create person: {e}") from e

        return await self.get(record_id)

    async def update(self, record_id: int, data: PersonData) -> PersonRecord:
        query = """
            UPDATE people
            SET national_id = ?, first_names = ?, last_names = ?, birth_date = ?, gender = ?, city = ?
            WHERE id = ?
        """
        self._require_storable_id(record_id)
        try:
            with self._conn:
                cursor = self._conn.execute(query, self._params(data) + (record_id,))
        except sqlite3.IntegrityError as e:
            raise self._integrity_error(e) from e
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to update person {record_id}: {e}") from e

        if cursor.rowcount == 0:
            raise RecordNotFound(record_id)
        return await self.get(record_id)

    async def delete(self, record_id: int) -> None:
        self._require_storable_id(record_id)
        try:
            with self._conn:
                cursor = self._conn.execute("DELETE FROM people WHERE id = ?", (record_id,))
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to delete person {record_id}: {e}") from e

        if cursor.rowcount == 0:
            raise RecordNotFound(record_id)

    async def ping(self) -> bool:
        try:
            self._conn.execute("SELECT 1").fetchone()
        except sqlite3.Error as e:
            raise StorageFailure(f"SQLite ping failed: {e}") from e
        return True

    async def close(self) -> None:
        self._conn.close()
        logger.info("SQLite connection closed")

    @staticmethod
    def _params(data: PersonData) -> tuple:
        return (
            data.national_id,
            data.first_names,
            data.last_names,
            data.birth_date.isoformat(),
            data.gender.value,
            data.city.value,
        )

    @staticmethod
    def _integrity_error(error: sqlite3.IntegrityError) -> Exception:
        if "UNIQUE constraint failed" in str(error):
            return DuplicateKey("national_id")
        return StorageFailure(f"Integrity error: {error}")

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> PersonRecord:
        return PersonRecord(
            id=row["id"],
            national_id=row["national_id"],
            first_names=row["first_names"],
            last_names=row["last_names"],
            birth_date=date.fromisoformat(row["birth_date"]),
            gender=row["gender"],
            city=row["city"],
            registered_at=parse_db_timestamp(row["registered_at"]),
        )
