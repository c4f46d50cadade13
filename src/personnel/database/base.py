"""
Record store interface shared by every persistence backend
"""

from abc import ABC, abstractmethod
from typing import List

from personnel.errors import RecordNotFound
from personnel.models.person import PersonData, PersonRecord


class PersonStore(ABC):
    """
    Async store of person records keyed by an integer id.

    Implementations raise RecordNotFound, DuplicateKey and StorageFailure;
    every write is atomic from the caller's point of view.
    """

    # Largest id the backend's id column can hold
    max_record_id = None

    @abstractmethod
    async def list(self, newest_first: bool = True) -> List[PersonRecord]:
        """Snapshot of all records, most recent first unless told otherwise"""

    @abstractmethod
    async def get(self, record_id: int) -> PersonRecord:
        """Fetch a record by id"""

    @abstractmethod
    async def create(self, data: PersonData) -> PersonRecord:
        """Insert a record and return it with its generated id and timestamp"""

    @abstractmethod
    async def update(self, record_id: int, data: PersonData) -> PersonRecord:
        """Replace every writable field of an existing record"""

    @abstractmethod
    async def delete(self, record_id: int) -> None:
        """Remove a record permanently"""

    async def ping(self) -> bool:
        """Check that the backend is reachable"""
        return True

    async def close(self) -> None:
        """Release backend resources"""

    def _require_storable_id(self, record_id: int) -> None:
        """An id outside the id column's range cannot name a stored record"""
        if self.max_record_id is not None and not -self.max_record_id - 1 <= record_id <= self.max_record_id:
            raise RecordNotFound(record_id)
