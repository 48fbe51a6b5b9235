"""Domain layer: errors shared by the catalog and its surfaces."""

from commerce_generate.domain.exceptions import (
    DomainError,
    InvalidGenerateSettingsError,
    UnsupportedFieldTypeError,
)

__all__ = [
    "DomainError",
    "InvalidGenerateSettingsError",
    "UnsupportedFieldTypeError",
]
