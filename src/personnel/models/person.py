"""
Person-related Pydantic models
"""

from typing import Any, Dict, Mapping, Optional
from datetime import date, datetime
from pydantic import AliasChoices, BaseModel, Field
from personnel.models.enums import City, Gender

# Writable fields, in form order
PERSON_FIELDS = ("national_id", "first_names", "last_names", "birth_date", "gender", "city")


class PersonData(BaseModel):
    """Validated, writable fields of a person"""
    national_id: str
    first_names: str
    last_names: str
    birth_date: date
    gender: Gender
    city: City

    @classmethod
    def from_candidate(cls, candidate: Mapping[str, Any]) -> "PersonData":
        """
        Build the write payload from a candidate that already passed validation.

        Text values are trimmed; the birth date is parsed from its ISO form.
        """
        birth_date = candidate["birth_date"]
        if isinstance(birth_date, str):
            birth_date = date.fromisoformat(birth_date.strip())

        return cls(
            national_id=str(candidate["national_id"]).strip(),
            first_names=str(candidate["first_names"]).strip(),
            last_names=str(candidate["last_names"]).strip(),
            birth_date=birth_date,
            gender=Gender(str(candidate["gender"]).strip()),
            city=City(str(candidate["city"]).strip()),
        )


class PersonRecord(PersonData):
    """A stored person"""
    id: int
    registered_at: datetime

    def to_candidate(self) -> Dict[str, str]:
        """Flatten back into the raw string form used by forms and the validator"""
        return {
            "national_id": self.national_id,
            "first_names": self.first_names,
            "last_names": self.last_names,
            "birth_date": self.birth_date.isoformat(),
            "gender": self.gender.value,
            "city": self.city.value,
        }


class PersonRequest(BaseModel):
    """
    Request body for creating or replacing a person.

    Every field is optional here so that missing values reach the validator
    and come back as field-level messages instead of a schema error.
    """
    national_id: Optional[str] = Field(None, validation_alias=AliasChoices("national_id", "nationalId"))
    first_names: Optional[str] = Field(None, validation_alias=AliasChoices("first_names", "firstNames"))
    last_names: Optional[str] = Field(None, validation_alias=AliasChoices("last_names", "lastNames"))
    birth_date: Optional[str] = Field(None, validation_alias=AliasChoices("birth_date", "birthDate"))
    gender: Optional[str] = None
    city: Optional[str] = None


class PersonCreatedResponse(BaseModel):
    message: str
    id: int


class PersonUpdatedResponse(BaseModel):
    message: str
    record: PersonRecord


class PersonDeletedResponse(BaseModel):
    message: str
    deleted_id: int
