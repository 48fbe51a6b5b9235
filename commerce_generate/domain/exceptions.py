"""Domain exceptions.

Errors raised when generation settings or field definitions cannot be
honoured. Storage failures are not wrapped: they propagate unchanged to
the caller of a generation run.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidGenerateSettingsError(DomainError):
    """Raised when operator-supplied generation settings are out of range."""

    def __init__(self, setting: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{setting}': {value!r} ({reason})",
            details={"setting": setting, "value": value, "reason": reason},
        )


class UnsupportedFieldTypeError(DomainError):
    """Raised when no sample generator exists for a field type."""

    def __init__(self, field_name: str, field_type: str) -> None:
        super().__init__(
            f"Cannot generate sample values for field '{field_name}' "
            f"of type '{field_type}'",
            details={"field_name": field_name, "field_type": field_type},
        )
