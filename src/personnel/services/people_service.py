"""
People service - business logic for personnel registration
"""

import logging
from datetime import date
from typing import Any, Mapping, Optional

from personnel.database.base import PersonStore
from personnel.database.connection import get_person_store
from personnel.errors import DUPLICATE_NATIONAL_ID_MESSAGE, DuplicateKey, RegistryError, ValidationFailed
from personnel.models.person import PersonData
from personnel.services.base_service import BaseService, ServiceResult
from personnel.validator import validate_person

logger = logging.getLogger(__name__)

class PeopleService(BaseService):
    """Validated CRUD over person records"""

    def __init__(self, store: PersonStore, newest_first: bool = True):
        super().__init__(store, "people")
        self.newest_first = newest_first

    async def register_person(
        self,
        candidate: Mapping[str, Any],
        today: Optional[date] = None
    ) -> ServiceResult:
        """
        Validate a candidate and store it as a new person

        Args:
            candidate: Raw field values
            today: Reference date for the birth date rule (default: today)

        Returns:
            ServiceResult with the created record
        """
        try:
            data = await self._validated(candidate, editing_id=None, today=today)
            record = await self.store.create(data)
        except RegistryError as e:
            return self._failure("Register", e)

        logger.info(f"Registered person {record.id}")
        return ServiceResult.ok([record])

    async def list_people(self) -> ServiceResult:
        """
        Get every registered person

        Returns:
            ServiceResult with records ordered per the service's configured order
        """
        try:
            records = await self.store.list(newest_first=self.newest_first)
        except RegistryError as e:
            return self._failure("List", e)
        return ServiceResult.ok(records)

    async def get_person(self, person_id: int) -> ServiceResult:
        try:
            record = await self.store.get(person_id)
        except RegistryError as e:
            return self._failure("Get", e)
        return ServiceResult.ok([record])

    async def update_person(
        self,
        person_id: int,
        candidate: Mapping[str, Any],
        today: Optional[date] = None
    ) -> ServiceResult:
        """
        Replace every writable field of a person

        The national ID uniqueness check ignores the person's own current value.

        Args:
            person_id: Id of the person to update
            candidate: Raw field values for the full record
            today: Reference date for the birth date rule (default: today)

        Returns:
            ServiceResult with the updated record
        """
        try:
            data = await self._validated(candidate, editing_id=person_id, today=today)
            record = await self.store.update(person_id, data)
        except RegistryError as e:
            return self._failure("Update", e)

        logger.info(f"Updated person {person_id}")
        return ServiceResult.ok([record])

    async def delete_person(self, person_id: int) -> ServiceResult:
        try:
            await self.store.delete(person_id)
        except RegistryError as e:
            return self._failure("Delete", e)

        logger.info(f"Deleted person {person_id}")
        return ServiceResult(success=True, data=[], count=1)

    async def _validated(
        self,
        candidate: Mapping[str, Any],
        editing_id: Optional[int],
        today: Optional[date]
    ) -> PersonData:
        existing = await self.store.list()
        errors = validate_person(candidate, existing, editing_id=editing_id, today=today)
        if errors == {"national_id": DUPLICATE_NATIONAL_ID_MESSAGE}:
            raise DuplicateKey("national_id")
        if errors:
            raise ValidationFailed(errors)
        return PersonData.from_candidate(candidate)

# Global service instance
_people_service: Optional[PeopleService] = None

def get_people_service() -> PeopleService:
    """Get the people service bound to the current global store"""
    global _people_service
    store = get_person_store()
    if _people_service is None or _people_service.store is not store:
        _people_service = PeopleService(store)
    return _people_service
