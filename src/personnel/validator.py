"""
Validator component - deterministic field validation for person records

The same rules serve the HTTP API and the form session. Candidates are raw
mappings of field name to value (strings as typed by a user, or request
bodies); missing keys, None and blank strings all count as missing.
"""

import re
import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from personnel.errors import DUPLICATE_NATIONAL_ID_MESSAGE
from personnel.models.enums import City, Gender
from personnel.models.person import PERSON_FIELDS, PersonRecord

logger = logging.getLogger(__name__)

NATIONAL_ID_PATTERN = re.compile(r"[0-9]{10}")
NAME_PATTERN = re.compile(r"[A-Za-zÁÉÍÓÚÜÑáéíóúüñ\s]+")

FIRST_NAMES_MIN_LENGTH = 2
FIRST_NAMES_MAX_LENGTH = 50

BIRTH_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

GENDERS = frozenset(g.value for g in Gender)
CITIES = frozenset(c.value for c in City)


def _text(candidate: Mapping[str, Any], field: str) -> str:
    value = candidate.get(field)
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    if hasattr(value, "value"):  # Enum members
        value = value.value
    return str(value).strip()


def _validate_national_id(candidate, existing, editing_id, today) -> Optional[str]:
    national_id = _text(candidate, "national_id")
    if not national_id:
        return "National ID is required"
    if not NATIONAL_ID_PATTERN.fullmatch(national_id):
        return "National ID must contain exactly 10 digits"
    for record in existing:
        if record.national_id == national_id and record.id != editing_id:
            return DUPLICATE_NATIONAL_ID_MESSAGE
    return None


def _validate_first_names(candidate, existing, editing_id, today) -> Optional[str]:
    first_names = _text(candidate, "first_names")
    if not first_names:
        return "First names are required"
    if len(first_names) < FIRST_NAMES_MIN_LENGTH:
        return f"First names must have at least {FIRST_NAMES_MIN_LENGTH} characters"
    if not NAME_PATTERN.fullmatch(first_names):
        return "First names may only contain letters and spaces"
    if len(first_names) > FIRST_NAMES_MAX_LENGTH:
        return f"First names cannot exceed {FIRST_NAMES_MAX_LENGTH} characters"
    return None


def _validate_last_names(candidate, existing, editing_id, today) -> Optional[str]:
    last_names = _text(candidate, "last_names")
    if not last_names:
        return "Last names are required"
    if not NAME_PATTERN.fullmatch(last_names):
        return "Last names may only contain letters and spaces"
    return None


def _validate_birth_date(candidate, existing, editing_id, today) -> Optional[str]:
    raw = _text(candidate, "birth_date")
    if not raw:
        return "Birth date is required"
    invalid = "Birth date must be a valid date (YYYY-MM-DD)"
    if not BIRTH_DATE_PATTERN.fullmatch(raw):
        return invalid
    try:
        birth_date = date.fromisoformat(raw)
    except ValueError:
        return invalid
    if birth_date > today:
        return "Birth date cannot be in the future"
    return None


def _validate_gender(candidate, existing, editing_id, today) -> Optional[str]:
    gender = _text(candidate, "gender")
    if not gender:
        return "Gender is required"
    if gender not in GENDERS:
        return f"Gender must be one of: {', '.join(g.value for g in Gender)}"
    return None


def _validate_city(candidate, existing, editing_id, today) -> Optional[str]:
    city = _text(candidate, "city")
    if not city:
        return "City is required"
    if city not in CITIES:
        return "City is not in the list of allowed cities"
    return None


FIELD_RULES: Dict[str, Callable[..., Optional[str]]] = {
    "national_id": _validate_national_id,
    "first_names": _validate_first_names,
    "last_names": _validate_last_names,
    "birth_date": _validate_birth_date,
    "gender": _validate_gender,
    "city": _validate_city,
}


def validate_field(
    field: str,
    candidate: Mapping[str, Any],
    existing: Iterable[PersonRecord] = (),
    editing_id: Optional[int] = None,
    today: Optional[date] = None,
) -> Optional[str]:
    """
    Validate a single field of a candidate record

    Args:
        field: Name of the field to check
        candidate: Raw field values
        existing: Records already stored, for the national ID uniqueness check
        editing_id: Id of the record being edited, excluded from uniqueness
        today: Reference date for the birth date check (default: today)

    Returns:
        Error message, or None if the field passes
    """
    if field not in FIELD_RULES:
        raise ValueError(f"Unknown person field: {field}")
    return FIELD_RULES[field](candidate, tuple(existing), editing_id, today or date.today())


def validate_person(
    candidate: Mapping[str, Any],
    existing: Iterable[PersonRecord] = (),
    editing_id: Optional[int] = None,
    today: Optional[date] = None,
) -> Dict[str, str]:
    """
    Validate every field of a candidate record

    Returns:
        Mapping of field name to error message; empty when the record is valid
    """
    existing = tuple(existing)
    today = today or date.today()

    errors = {}
    for field in PERSON_FIELDS:
        message = validate_field(field, candidate, existing, editing_id, today)
        if message:
            errors[field] = message

    if errors:
        logger.debug(f"Person validation failed on fields: {sorted(errors)}")
    return errors
