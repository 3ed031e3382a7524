"""Validation issue types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationLocation:
    """Location in the generated document where an issue was found."""

    path: str
    """Symbolic name plus attribute (e.g., 'ns0__systemLeafType.DataType')."""

    position: int | None = None
    """Position of the definition in the document (if known)."""

    def __str__(self) -> str:
        """Format location as string."""
        if self.position is not None:
            return f"{self.path} (definition #{self.position})"
        return self.path


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation issue."""

    code: str
    """Unique error code (e.g., 'E001', 'W003')."""

    message: str
    """Human-readable error message."""

    severity: ValidationSeverity
    """Severity level."""

    location: ValidationLocation | None = None
    """Location in the document."""

    suggestion: str | None = None
    """Suggested fix."""

    context: dict[str, Any] = field(default_factory=dict)
    """Additional context for debugging."""

    def __str__(self) -> str:
        """Format issue as string."""
        parts = [f"[{self.code}]", self.severity.value.upper(), self.message]
        if self.location:
            parts.append(f"at {self.location}")
        if self.suggestion:
            parts.append(f"(hint: {self.suggestion})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validation containing all issues."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        """Check if there are no errors (warnings are OK)."""
        return len(self.errors) == 0

    def add(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def add_error(
        self,
        code: str,
        message: str,
        path: str,
        position: int | None = None,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Add an error issue."""
        self._add(ValidationSeverity.ERROR, code, message, path, position, suggestion, context)

    def add_warning(
        self,
        code: str,
        message: str,
        path: str,
        position: int | None = None,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Add a warning issue."""
        self._add(ValidationSeverity.WARNING, code, message, path, position, suggestion, context)

    def _add(
        self,
        severity: ValidationSeverity,
        code: str,
        message: str,
        path: str,
        position: int | None,
        suggestion: str | None,
        context: dict[str, Any],
    ) -> None:
        self.add(
            ValidationIssue(
                code=code,
                message=message,
                severity=severity,
                location=ValidationLocation(path=path, position=position),
                suggestion=suggestion,
                context=context,
            )
        )

    def merge(self, other: ValidationResult) -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)

    def by_code(self, code: str) -> list[ValidationIssue]:
        """Get the issues with a given code."""
        return [i for i in self.issues if i.code == code]


class ErrorCodes:
    """Standard validation error codes."""

    # E0xx - Reference errors
    E001_FORWARD_REFERENCE = "E001"
    E002_UNRESOLVED_REFERENCE = "E002"

    # E1xx - Duplicate errors
    E100_DUPLICATE_SYMBOLIC_NAME = "E100"

    # W0xx - Warnings
    W003_MISSING_DESCRIPTION = "W003"
