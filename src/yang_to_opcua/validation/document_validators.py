"""Validators for generated ModelDesign documents."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from yang_to_opcua.ir.document import type_references
from yang_to_opcua.ir.types import (
    DataTypeDesign,
    Member,
    ObjectMember,
    ObjectTypeDesign,
    ReferenceTypeDesign,
    VariableTypeDesign,
)
from yang_to_opcua.validation.base import BaseValidator
from yang_to_opcua.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from yang_to_opcua.ir.document import ModelDocument
    from yang_to_opcua.ir.types import SymbolicName


def _first_positions(document: ModelDocument) -> dict[SymbolicName, int]:
    positions: dict[SymbolicName, int] = {}
    for position, definition in enumerate(document.definitions):
        positions.setdefault(definition.symbolic_name, position)
    return positions


class UniqueSymbolicNameValidator(BaseValidator):
    """Validates that symbolic names are unique.

    Definitions must be unique across the document; members must be unique
    among the children of the same node.
    """

    def validate(
        self,
        document: ModelDocument,
        result: ValidationResult,
    ) -> None:
        """Check definitions and member lists for duplicate names."""
        counts = Counter(d.symbolic_name for d in document.definitions)
        for name, count in counts.items():
            if count > 1:
                result.add_error(
                    code=ErrorCodes.E100_DUPLICATE_SYMBOLIC_NAME,
                    message=f"Symbolic name '{name.name}' is defined {count} times",
                    path=name.name,
                )

        for position, definition in enumerate(document.definitions):
            children = getattr(definition, "children", ())
            self._check_members(definition.symbolic_name.name, children, position, result)

    def _check_members(
        self,
        path: str,
        members: tuple[Member, ...],
        position: int,
        result: ValidationResult,
    ) -> None:
        counts = Counter(m.symbolic_name for m in members)
        for name, count in counts.items():
            if count > 1:
                result.add_error(
                    code=ErrorCodes.E100_DUPLICATE_SYMBOLIC_NAME,
                    message=f"Member '{name.name}' is declared {count} times",
                    path=f"{path}.{name.name}",
                    position=position,
                )
        for member in members:
            if isinstance(member, ObjectMember) and member.children:
                self._check_members(
                    f"{path}.{member.symbolic_name.name}", member.children, position, result
                )


class ForwardReferenceValidator(BaseValidator):
    """Validates that type references point to earlier definitions."""

    def validate(
        self,
        document: ModelDocument,
        result: ValidationResult,
    ) -> None:
        """Report references to definitions emitted later."""
        positions = _first_positions(document)
        for position, definition in enumerate(document.definitions):
            for reference in type_references(definition):
                if reference.target.is_builtin:
                    continue
                target_position = positions.get(reference.target)
                if target_position is not None and target_position > position:
                    result.add_error(
                        code=ErrorCodes.E001_FORWARD_REFERENCE,
                        message=(
                            f"{reference.role} '{reference.target.name}' is defined "
                            f"after its use (definition #{target_position})"
                        ),
                        path=f"{reference.source.name}.{reference.role}",
                        position=position,
                        suggestion="Emit dependencies before the definitions using them",
                        target=reference.target.name,
                    )


class UnresolvedReferenceValidator(BaseValidator):
    """Validates that type references resolve to a definition or a built-in."""

    def validate(
        self,
        document: ModelDocument,
        result: ValidationResult,
    ) -> None:
        """Report references that resolve nowhere."""
        positions = _first_positions(document)
        for position, definition in enumerate(document.definitions):
            for reference in type_references(definition):
                if reference.target.is_builtin or reference.target in positions:
                    continue
                result.add_error(
                    code=ErrorCodes.E002_UNRESOLVED_REFERENCE,
                    message=f"{reference.role} '{reference.target.name}' is not defined",
                    path=f"{reference.source.name}.{reference.role}",
                    position=position,
                    target=reference.target.name,
                )


class MissingDescriptionValidator(BaseValidator):
    """Warns about type definitions without a description."""

    TYPE_DESIGNS = (DataTypeDesign, ObjectTypeDesign, VariableTypeDesign, ReferenceTypeDesign)

    def validate(
        self,
        document: ModelDocument,
        result: ValidationResult,
    ) -> None:
        """Report types with no description."""
        for position, definition in enumerate(document.definitions):
            if isinstance(definition, self.TYPE_DESIGNS) and not definition.description:
                result.add_warning(
                    code=ErrorCodes.W003_MISSING_DESCRIPTION,
                    message=f"{type(definition).__name__} has no description",
                    path=definition.symbolic_name.name,
                    position=position,
                    suggestion="Add a description to the YANG statement",
                )
