"""Base validator class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from yang_to_opcua.validation.errors import ValidationResult

if TYPE_CHECKING:
    from yang_to_opcua.ir.document import ModelDocument


class BaseValidator(ABC):
    """Base class for document validators."""

    @abstractmethod
    def validate(
        self,
        document: ModelDocument,
        result: ValidationResult,
    ) -> None:
        """Validate the document and add issues to result.

        Args:
        ----
            document: The generated ModelDesign document.
            result: The result object to add issues to.

        """
        ...


class CompositeValidator(BaseValidator):
    """Runs several validators in order."""

    def __init__(self, validators: list[BaseValidator] | None = None) -> None:
        """Initialize with optional list of validators."""
        self.validators = validators or []

    def add(self, validator: BaseValidator) -> None:
        """Add a validator."""
        self.validators.append(validator)

    def validate(
        self,
        document: ModelDocument,
        result: ValidationResult,
    ) -> None:
        """Run all validators."""
        for validator in self.validators:
            validator.validate(document, result)
