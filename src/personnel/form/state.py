"""
Form session state and events

State is an immutable value: the reducer always returns a new FormState.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from personnel.models.person import PERSON_FIELDS, PersonRecord


class Mode(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


def empty_values() -> Dict[str, str]:
    return {name: "" for name in PERSON_FIELDS}


@dataclass(frozen=True)
class FormState:
    """What the registration form shows: field values, errors, notice and the table"""
    values: Dict[str, str] = field(default_factory=empty_values)
    errors: Dict[str, str] = field(default_factory=dict)
    editing_id: Optional[int] = None
    notice: Optional[str] = None
    records: Tuple[PersonRecord, ...] = ()

    @property
    def mode(self) -> Mode:
        return Mode.IDLE if self.editing_id is None else Mode.EDITING


# User events

@dataclass(frozen=True)
class FieldChanged:
    field: str
    value: str


@dataclass(frozen=True)
class EditRequested:
    record: PersonRecord


@dataclass(frozen=True)
class CancelRequested:
    pass


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class DeleteRequested:
    record_id: int


# Outcome events, produced by the controller after calling the people service

@dataclass(frozen=True)
class RecordsLoaded:
    records: Tuple[PersonRecord, ...]


@dataclass(frozen=True)
class SubmitSucceeded:
    records: Tuple[PersonRecord, ...]
    notice: str


@dataclass(frozen=True)
class SubmitRejected:
    errors: Dict[str, str]
    notice: Optional[str] = None


@dataclass(frozen=True)
class DeleteSucceeded:
    record_id: int
    records: Tuple[PersonRecord, ...]
    notice: str


@dataclass(frozen=True)
class OperationFailed:
    notice: str


@dataclass(frozen=True)
class EditTargetMissing:
    """The record under edit was removed before the update reached the store"""
    records: Tuple[PersonRecord, ...]
    notice: str
