"""Main validator combining all document checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yang_to_opcua.validation.base import CompositeValidator
from yang_to_opcua.validation.document_validators import (
    ForwardReferenceValidator,
    MissingDescriptionValidator,
    UniqueSymbolicNameValidator,
    UnresolvedReferenceValidator,
)
from yang_to_opcua.validation.errors import ValidationResult, ValidationSeverity

if TYPE_CHECKING:
    from yang_to_opcua.ir.document import ModelDocument


class DocumentValidator:
    """Main validator for generated ModelDesign documents.

    Checks the ordering and naming guarantees the ModelCompiler relies on:
    unique symbolic names, and type references that point backwards or to
    the built-in vocabulary.
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize validator.

        Args:
        ----
            strict: If True, treat warnings as errors.

        """
        self.strict = strict
        self._validator = CompositeValidator(
            [
                UniqueSymbolicNameValidator(),
                ForwardReferenceValidator(),
                UnresolvedReferenceValidator(),
                MissingDescriptionValidator(),
            ]
        )

    def validate(self, document: ModelDocument) -> ValidationResult:
        """Validate a document.

        Args:
        ----
            document: The document to validate.

        Returns:
        -------
            ValidationResult with all issues found.

        """
        result = ValidationResult()
        self._validator.validate(document, result)
        return result

    def validate_and_raise(self, document: ModelDocument) -> ValidationResult:
        """Validate and raise exception if invalid.

        Args:
        ----
            document: The document to validate.

        Returns:
        -------
            The result, when the document is valid.

        Raises:
        ------
            DocumentValidationError: If validation fails.

        """
        result = self.validate(document)

        if not result.is_valid:
            raise DocumentValidationError(result)

        if self.strict and result.warnings:
            raise DocumentValidationError(result)

        return result


class DocumentValidationError(Exception):
    """Raised when a generated document fails validation."""

    def __init__(self, result: ValidationResult) -> None:
        """Initialize with validation result.

        Args:
        ----
            result: The validation result containing issues.

        """
        self.result = result
        error_count = len(result.errors)
        warning_count = len(result.warnings)

        parts = []
        if error_count:
            parts.append(f"{error_count} error(s)")
        if warning_count:
            parts.append(f"{warning_count} warning(s)")

        message = f"Validation failed: {', '.join(parts)}"
        super().__init__(message)

    def format_issues(self) -> str:
        """Format all issues as a string."""
        lines = [f"ERROR: {issue}" for issue in self.result.errors]
        lines.extend(f"WARNING: {issue}" for issue in self.result.warnings)
        return "\n".join(lines)

    @property
    def errors_only(self) -> list[str]:
        """Get only error messages."""
        return [
            str(issue) for issue in self.result.issues if issue.severity == ValidationSeverity.ERROR
        ]
