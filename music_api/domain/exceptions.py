"""Domain exceptions for the music catalog.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class MusicCatalogException(Exception):
    """Base exception for all music catalog errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFoundException(MusicCatalogException):
    """Raised when a requested entity does not exist."""

    def __init__(self, resource_type: str, field: str, value: Any) -> None:
        """Initialize with the entity, the lookup field and its value.

        Args:
            resource_type: Type of resource (e.g. 'Author', 'Music').
            field: Field used for the lookup (e.g. 'id').
            value: The value that was not found.
        """
        super().__init__(
            f"{resource_type} not found with {field}: '{value}'",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class BusinessRuleException(MusicCatalogException):
    """Raised when a request is well-formed but breaks a business rule (e.g. duplicate email)."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "BUSINESS_RULE_VIOLATION", details)


class ValidationException(MusicCatalogException):
    """Raised when input validation fails outside the request schema (e.g. unknown sort property)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or parameter that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)
