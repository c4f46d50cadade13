"""
Base service layer wrapping a record store with uniform result reporting
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from personnel.database.base import PersonStore
from personnel.errors import DuplicateKey, RecordNotFound, RegistryError, StorageFailure, ValidationFailed

logger = logging.getLogger(__name__)

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Any]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: List[Any]) -> "ServiceResult":
        return cls(success=True, data=data, count=len(data))

    @classmethod
    def failed(cls, exc: RegistryError) -> "ServiceResult":
        """Translate a registry error into a failed result"""
        if isinstance(exc, ValidationFailed):
            return cls(
                success=False,
                error="Validation failed",
                error_type=exc.error_type,
                errors=exc.errors
            )
        if isinstance(exc, DuplicateKey):
            return cls(
                success=False,
                error=exc.message,
                error_type=exc.error_type,
                errors={exc.field: exc.message}
            )
        if isinstance(exc, StorageFailure):
            return cls(
                success=False,
                error="Storage operation failed",
                error_type=exc.error_type
            )
        return cls(success=False, error=str(exc), error_type=exc.error_type)


class BaseService:
    """Base service that owns a store and reports outcomes as ServiceResult"""

    def __init__(self, store: PersonStore, resource_name: str):
        self.store = store
        self.resource_name = resource_name
        logger.info(f"{type(self).__name__} initialized for resource: {resource_name}")

    def _failure(self, operation: str, exc: RegistryError) -> ServiceResult:
        """Log a failed operation at a level matching its severity"""
        if isinstance(exc, StorageFailure):
            logger.error(f"{operation} failed for {self.resource_name}: {exc}", exc_info=True)
        elif isinstance(exc, RecordNotFound):
            logger.info(f"{operation} on {self.resource_name}: {exc}")
        else:
            logger.warning(f"{operation} rejected for {self.resource_name}: {exc}")
        return ServiceResult.failed(exc)
