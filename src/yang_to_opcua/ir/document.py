"""Output model document.

The document is the ordered collection of definitions produced by one
translation run. Definitions are only ever appended, and each definition
may refer only to definitions appended before it or to the built-in
OPC UA vocabulary.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from yang_to_opcua.ir.types import (
    DataTypeDesign,
    Definition,
    Member,
    Namespace,
    ObjectDesign,
    ObjectMember,
    ObjectTypeDesign,
    ReferenceTypeDesign,
    SymbolicName,
    VariableMember,
    VariableTypeDesign,
)


class DuplicateDefinitionError(ValueError):
    """A definition with the same symbolic name was already appended."""

    def __init__(self, symbolic_name: SymbolicName) -> None:
        """Initialize DuplicateDefinitionError."""
        self.symbolic_name = symbolic_name
        super().__init__(f"duplicate symbolic name: {symbolic_name.name}")


@dataclass(frozen=True)
class TypeReference:
    """A type reference held by a definition.

    Attributes
    ----------
        source: Symbolic name of the definition holding the reference.
        target: The referenced type.
        role: Which attribute holds it (``BaseType``, ``DataType``, ...).

    """

    source: SymbolicName
    target: SymbolicName
    role: str


@dataclass
class ModelDocument:
    """A complete ModelDesign document.

    The document is mutable (not frozen) to allow building it incrementally
    during translation, but :meth:`append` is its only mutator.

    Attributes
    ----------
        target_namespace: Namespace URI of the generated definitions.
        namespaces: Namespace declarations (base vocabulary first).
        definitions: Definitions in emission order.

    """

    target_namespace: str
    namespaces: tuple[Namespace, ...] = ()
    definitions: list[Definition] = field(default_factory=list)
    _positions: dict[SymbolicName, int] = field(default_factory=dict, repr=False)

    def append(self, definition: Definition) -> None:
        """Append a definition.

        Args:
        ----
            definition: The definition to add.

        Raises:
        ------
            DuplicateDefinitionError: If the symbolic name is already taken.

        """
        if definition.symbolic_name in self._positions:
            raise DuplicateDefinitionError(definition.symbolic_name)
        self._positions[definition.symbolic_name] = len(self.definitions)
        self.definitions.append(definition)

    def get(self, symbolic_name: SymbolicName) -> Definition | None:
        """Get a definition by symbolic name."""
        position = self._positions.get(symbolic_name)
        return None if position is None else self.definitions[position]

    def index_of(self, symbolic_name: SymbolicName) -> int | None:
        """Get the position of a definition, or None if it is not present."""
        return self._positions.get(symbolic_name)

    def __len__(self) -> int:
        return len(self.definitions)

    def __iter__(self) -> Iterator[Definition]:
        return iter(self.definitions)

    def __contains__(self, symbolic_name: object) -> bool:
        return symbolic_name in self._positions

    @property
    def data_types(self) -> list[DataTypeDesign]:
        """All DataType definitions, in order."""
        return [d for d in self.definitions if isinstance(d, DataTypeDesign)]

    @property
    def object_types(self) -> list[ObjectTypeDesign]:
        """All ObjectType definitions, in order."""
        return [d for d in self.definitions if isinstance(d, ObjectTypeDesign)]

    @property
    def variable_types(self) -> list[VariableTypeDesign]:
        """All VariableType definitions, in order."""
        return [d for d in self.definitions if isinstance(d, VariableTypeDesign)]

    @property
    def reference_types(self) -> list[ReferenceTypeDesign]:
        """All ReferenceType definitions, in order."""
        return [d for d in self.definitions if isinstance(d, ReferenceTypeDesign)]

    @property
    def objects(self) -> list[ObjectDesign]:
        """All Object instances, in order."""
        return [d for d in self.definitions if isinstance(d, ObjectDesign)]

    def forward_reference_violations(self) -> list[TypeReference]:
        """List type references that break the emission order.

        A reference is a violation when it points neither to the built-in
        vocabulary nor to a definition at the same or an earlier position.

        Returns
        -------
            The offending references, in document order.

        """
        violations: list[TypeReference] = []
        for position, definition in enumerate(self.definitions):
            for reference in type_references(definition):
                if reference.target.is_builtin:
                    continue
                target_position = self.index_of(reference.target)
                if target_position is None or target_position > position:
                    violations.append(reference)
        return violations


def type_references(definition: Definition) -> list[TypeReference]:
    """Collect every type reference held by a definition and its members.

    Reference targets of instances are node ids, not types, and are not
    included.
    """
    source = definition.symbolic_name
    references: list[TypeReference] = []

    def add(target: SymbolicName | None, role: str) -> None:
        if target is not None:
            references.append(TypeReference(source, target, role))

    if isinstance(definition, (DataTypeDesign, ReferenceTypeDesign)):
        add(definition.base_type, "BaseType")
    elif isinstance(definition, VariableTypeDesign):
        add(definition.base_type, "BaseType")
        add(definition.data_type, "DataType")
    elif isinstance(definition, ObjectTypeDesign):
        add(definition.base_type, "BaseType")
        _member_references(definition.children, add)
    elif isinstance(definition, ObjectDesign):
        add(definition.type_definition, "TypeDefinition")
        for reference in definition.references:
            add(reference.reference_type, "ReferenceType")
        _member_references(definition.children, add)

    return references


def _member_references(members: tuple[Member, ...], add) -> None:
    for member in members:
        add(member.type_definition, "TypeDefinition")
        if isinstance(member, VariableMember):
            if member.default_value is not None:
                add(member.default_value.data_type, "DefaultValue")
        elif isinstance(member, ObjectMember):
            for reference in member.references:
                add(reference.reference_type, "ReferenceType")
            _member_references(member.children, add)
