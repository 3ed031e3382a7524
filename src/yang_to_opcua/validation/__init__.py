"""Validation module for generated ModelDesign documents."""

from yang_to_opcua.validation.errors import (
    ErrorCodes,
    ValidationIssue,
    ValidationLocation,
    ValidationResult,
    ValidationSeverity,
)
from yang_to_opcua.validation.validator import (
    DocumentValidationError,
    DocumentValidator,
)

__all__ = [
    "DocumentValidationError",
    "DocumentValidator",
    "ErrorCodes",
    "ValidationIssue",
    "ValidationLocation",
    "ValidationResult",
    "ValidationSeverity",
]
