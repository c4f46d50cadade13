"""
Error taxonomy for registry operations
"""

from typing import Dict

DUPLICATE_NATIONAL_ID_MESSAGE = "National ID is already registered"


class RegistryError(Exception):
    """Base class for recoverable registry errors"""
    error_type = "REGISTRY_ERROR"


class ValidationFailed(RegistryError):
    """One or more field rules were violated; nothing was written"""
    error_type = "VALIDATION_FAILED"

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"Validation failed for: {', '.join(sorted(self.errors))}")


class DuplicateKey(RegistryError):
    """A unique field collided with another record"""
    error_type = "DUPLICATE_KEY"

    def __init__(self, field: str = "national_id", message: str = DUPLICATE_NATIONAL_ID_MESSAGE):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class RecordNotFound(RegistryError):
    error_type = "NOT_FOUND"

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"Person not found with ID: {record_id}")


class StorageFailure(RegistryError):
    """The underlying persistence engine failed; the operation was aborted"""
    error_type = "STORAGE_FAILURE"
