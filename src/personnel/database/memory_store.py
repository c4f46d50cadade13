"""
In-memory record store used by form sessions and tests
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List

from personnel.database.base import PersonStore
from personnel.errors import DuplicateKey, RecordNotFound
from personnel.models.person import PersonData, PersonRecord

logger = logging.getLogger(__name__)


class InMemoryPersonStore(PersonStore):
    """Records live in a dict for the lifetime of the store; ids are never reused"""

    def __init__(self):
        self._records: Dict[int, PersonRecord] = {}
        self._last_id = 0

    async def list(self, newest_first: bool = True) -> List[PersonRecord]:
        records = [record.model_copy() for record in self._records.values()]
        if newest_first:
            records.reverse()
        return records

    async def get(self, record_id: int) -> PersonRecord:
        record = self._records.get(record_id)
        if record is None:
            raise RecordNotFound(record_id)
        return record.model_copy()

    async def create(self, data: PersonData) -> PersonRecord:
        self._check_unique(data.national_id, exclude_id=None)

        self._last_id += 1
        record = PersonRecord(
            id=self._last_id,
            registered_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        self._records[record.id] = record
        return record.model_copy()

    async def update(self, record_id: int, data: PersonData) -> PersonRecord:
        current = self._records.get(record_id)
        if current is None:
            raise RecordNotFound(record_id)
        self._check_unique(data.national_id, exclude_id=record_id)

        record = PersonRecord(
            id=current.id,
            registered_at=current.registered_at,
            **data.model_dump(),
        )
        self._records[record_id] = record
        return record.model_copy()

    async def delete(self, record_id: int) -> None:
        if record_id not in self._records:
            raise RecordNotFound(record_id)
        del self._records[record_id]

    def _check_unique(self, national_id: str, exclude_id):
        for record in self._records.values():
            if record.national_id == national_id and record.id != exclude_id:
                raise DuplicateKey("national_id")
