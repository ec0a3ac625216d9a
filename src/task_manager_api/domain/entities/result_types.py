"""
Domain Result Types - Pure Business Logic Results.

These types represent the outcome of domain operations without any
infrastructure or presentation concerns. Transports decide how each
error type is rendered (status code, body shape).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar


class DomainErrorType(Enum):
    """Types of domain errors."""

    VALIDATION_ERROR = "validation_error"
    BAD_PARAMETER = "bad_parameter"
    NOT_FOUND = "not_found"


T = TypeVar("T")


@dataclass
class DomainResult(Generic[T]):
    """
    Base result type for domain operations.

    Represents either success with data or failure with error information.
    """

    success: bool
    data: Optional[T] = None
    error_type: Optional[DomainErrorType] = None
    error_message: Optional[str] = None
    error_details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """Check if result is successful."""
        return self.success

    @property
    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return not self.success

    def get_data_or_raise(self) -> T:
        """Get data or raise exception if failed."""
        if self.is_failure:
            raise ValueError(f"Cannot get data from failed result: {self.error_message}")
        return self.data  # type: ignore


@dataclass
class DomainSuccess(Generic[T]):
    """
    Factory for creating successful domain results.

    Usage:
        result = DomainSuccess.create(data=view)
    """

    @staticmethod
    def create(data: Optional[T] = None) -> DomainResult[T]:
        """Create a successful domain result."""
        return DomainResult(success=True, data=data)


@dataclass
class DomainError:
    """
    Factory for creating failed domain results.

    Usage:
        result = DomainError.validation_error("Title is required", details={"field": "title"})
    """

    @staticmethod
    def create(
        error_type: DomainErrorType,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> DomainResult[Any]:
        """Create a failed domain result."""
        return DomainResult(
            success=False,
            error_type=error_type,
            error_message=message,
            error_details=details or {},
        )

    @staticmethod
    def validation_error(
        message: str, details: Optional[Dict[str, Any]] = None
    ) -> DomainResult[Any]:
        """Create a validation error result (bad input shape or length)."""
        return DomainError.create(DomainErrorType.VALIDATION_ERROR, message, details)

    @staticmethod
    def bad_parameter(
        message: str, details: Optional[Dict[str, Any]] = None
    ) -> DomainResult[Any]:
        """Create a bad parameter result; the message is shown to clients verbatim."""
        return DomainError.create(DomainErrorType.BAD_PARAMETER, message, details)

    @staticmethod
    def not_found(resource: str, resource_id: Any) -> DomainResult[Any]:
        """Create a not found error result."""
        return DomainError.create(
            DomainErrorType.NOT_FOUND,
            f"{resource} '{resource_id}' not found",
            {"resource": resource, "id": resource_id},
        )
