"""Resolved YANG schema tree.

These dataclasses are the read-only input of the translation engine. They
are produced by :mod:`yang_to_opcua.schema.resolver` from a schema file, with
namespaces, paths, typedef references and identity bases already resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class QName:
    """Qualified name of a schema node: namespace URI plus local name."""

    namespace: str
    local_name: str

    def __str__(self) -> str:
        """Format as Clark notation."""
        return f"{{{self.namespace}}}{self.local_name}"


# YANG built-in types that are never treated as primitive, even without a base
NON_PRIMITIVE_KINDS = frozenset(
    {"enumeration", "union", "identityref", "instance-identifier", "leafref"}
)


@dataclass(frozen=True)
class EnumValue:
    """A single value of an enumeration type.

    Attributes
    ----------
        name: The enum label.
        value: The integer assigned to the label.
        description: Optional description of the label.

    """

    name: str
    value: int
    description: str | None = None


@dataclass(frozen=True)
class TypeDefinition:
    """Resolved type of a leaf, leaf-list or typedef.

    A type is either primitive (a YANG built-in with no further base) or
    derived, in which case ``base`` points to the type it restricts.

    Attributes
    ----------
        qname: Qualified name of the type (typedef name, or the owning
            node's namespace for inline types).
        path: Path of the type from the module root.
        kind: Name of the YANG built-in type at the root of the chain.
        base: The restricted type, or None for built-ins.
        enums: Effective enumeration values, in declaration order.
        description: Optional description.

    """

    qname: QName
    path: tuple[str, ...]
    kind: str
    base: TypeDefinition | None = None
    enums: tuple[EnumValue, ...] = ()
    description: str | None = None

    @property
    def is_primitive(self) -> bool:
        """Return True for built-in types that map straight to a built-in name."""
        return self.base is None and self.kind not in NON_PRIMITIVE_KINDS


@dataclass(frozen=True)
class SchemaNode:
    """Common part of every schema statement.

    Attributes
    ----------
        qname: Qualified name (module namespace + identifier).
        path: Local names from the module root down to this node.
        description: Optional human-readable description.

    """

    qname: QName
    path: tuple[str, ...]
    description: str | None = None

    @property
    def name(self) -> str:
        """Local name of the node."""
        return self.qname.local_name


@dataclass(frozen=True)
class ContainerNode(SchemaNode):
    """A ``container`` statement."""

    children: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True)
class ListNode(SchemaNode):
    """A ``list`` statement."""

    children: tuple[SchemaNode, ...] = ()
    keys: tuple[str, ...] = ()


@dataclass(frozen=True)
class LeafNode(SchemaNode):
    """A ``leaf`` statement."""

    type: TypeDefinition | None = None


@dataclass(frozen=True)
class LeafListNode(SchemaNode):
    """A ``leaf-list`` statement."""

    type: TypeDefinition | None = None


@dataclass(frozen=True)
class CaseNode(SchemaNode):
    """A ``case`` statement of a choice."""

    children: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True)
class ChoiceNode(SchemaNode):
    """A ``choice`` statement."""

    cases: tuple[CaseNode, ...] = ()


@dataclass(frozen=True)
class TypedefNode(SchemaNode):
    """A ``typedef`` statement."""

    type: TypeDefinition | None = None


@dataclass(frozen=True)
class IdentityNode(SchemaNode):
    """An ``identity`` statement.

    Bases are kept as qualified names and looked up through
    :meth:`SchemaContext.identity` when the chain is translated.
    """

    bases: tuple[QName, ...] = ()


@dataclass(frozen=True)
class OpaqueStatement(SchemaNode):
    """Any other statement kept in the tree (meta statements, rpc, ...)."""

    keyword: str = ""
    argument: str | None = None


@dataclass(frozen=True)
class Module:
    """A resolved YANG module."""

    name: str
    namespace: str
    prefix: str
    statements: tuple[SchemaNode, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class SchemaContext:
    """The complete resolved schema: all modules in declaration order."""

    modules: tuple[Module, ...] = ()
    identities: dict[QName, IdentityNode] = field(default_factory=dict, compare=False)

    @classmethod
    def from_modules(cls, modules: tuple[Module, ...] | list[Module]) -> SchemaContext:
        """Build a context and index the module-level identities."""
        identities: dict[QName, IdentityNode] = {}
        for module in modules:
            for statement in module.statements:
                if isinstance(statement, IdentityNode):
                    identities[statement.qname] = statement
        return cls(modules=tuple(modules), identities=identities)

    def identity(self, qname: QName) -> IdentityNode:
        """Look up an identity by qualified name.

        Raises
        ------
            KeyError: If no module defines the identity.

        """
        return self.identities[qname]

    def module_by_name(self, name: str) -> Module | None:
        """Get a module by name."""
        for module in self.modules:
            if module.name == name:
                return module
        return None
