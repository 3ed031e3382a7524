"""Output model for OPC UA ModelDesign documents.

This module defines the definitions a ModelDesign document is made of. They
map one to one onto the elements written by
:class:`yang_to_opcua.converters.xml_writer.ModelDesignWriter`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# Namespace of the built-in OPC UA vocabulary (BaseObjectType, UInt16, ...)
OPC_UA_BASE_URI = "http://opcfoundation.org/UA/"

# Namespace of the OPC UA XML data encoding, used for default values
UA_TYPES_URI = "http://opcfoundation.org/UA/2008/02/Types.xsd"


@dataclass(frozen=True)
class SymbolicName:
    """Qualified symbolic name of a definition or node."""

    namespace: str
    name: str

    def __str__(self) -> str:
        """Return the local part."""
        return self.name

    @property
    def is_builtin(self) -> bool:
        """Return True for names of the built-in OPC UA vocabulary."""
        return self.namespace == OPC_UA_BASE_URI


def opcua_ref(name: str) -> SymbolicName:
    """Reference a name of the built-in OPC UA vocabulary.

    Examples
    --------
        >>> opcua_ref("BaseObjectType")
        SymbolicName(namespace='http://opcfoundation.org/UA/', name='BaseObjectType')

    """
    return SymbolicName(OPC_UA_BASE_URI, name)


class ValueRank(Enum):
    """Value rank of a variable or variable type."""

    SCALAR = "Scalar"
    ARRAY = "Array"


class AccessLevel(Enum):
    """Access level of a variable."""

    READ = "Read"
    WRITE = "Write"
    READ_WRITE = "ReadWrite"


@dataclass(frozen=True)
class Field:
    """A field of a DataType (one enum value for enumerations)."""

    name: str
    identifier: int | None = None
    description: str | None = None


@dataclass(frozen=True)
class Reference:
    """A reference from a node to another node."""

    reference_type: SymbolicName
    target_id: SymbolicName
    is_inverse: bool = False


@dataclass(frozen=True)
class DefaultValue:
    """Default value of a variable.

    Attributes
    ----------
        data_type: Data type the value is encoded as.
        value: The value; a tuple for array variables.

    """

    data_type: SymbolicName
    value: Any


@dataclass(frozen=True)
class NodeDesign:
    """Fields shared by every definition and member.

    Attributes
    ----------
        symbolic_name: Globally unique identifier of the node.
        browse_name: Browse name.
        display_name: Display name (also used as the localization key).
        description: Normalized description text.

    """

    symbolic_name: SymbolicName
    browse_name: str
    display_name: str
    description: str | None = None


@dataclass(frozen=True)
class VariableMember(NodeDesign):
    """A variable declared as a child of a type or instance."""

    type_definition: SymbolicName | None = None
    value_rank: ValueRank = ValueRank.SCALAR
    access_level: AccessLevel | None = None
    default_value: DefaultValue | None = None


@dataclass(frozen=True)
class ObjectMember(NodeDesign):
    """An object declared as a child of a type or instance."""

    type_definition: SymbolicName | None = None
    references: tuple[Reference, ...] = ()
    children: tuple[Member, ...] = ()


Member = Union[VariableMember, ObjectMember]


@dataclass(frozen=True)
class DataTypeDesign(NodeDesign):
    """A DataType definition."""

    base_type: SymbolicName | None = None
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class ObjectTypeDesign(NodeDesign):
    """An ObjectType definition."""

    base_type: SymbolicName | None = None
    is_abstract: bool = False
    children: tuple[Member, ...] = ()


@dataclass(frozen=True)
class VariableTypeDesign(NodeDesign):
    """A VariableType definition."""

    base_type: SymbolicName | None = None
    data_type: SymbolicName | None = None
    value_rank: ValueRank = ValueRank.SCALAR


@dataclass(frozen=True)
class ReferenceTypeDesign(NodeDesign):
    """A ReferenceType definition."""

    base_type: SymbolicName | None = None


@dataclass(frozen=True)
class ObjectDesign(NodeDesign):
    """A top-level Object instance."""

    type_definition: SymbolicName | None = None
    references: tuple[Reference, ...] = ()
    children: tuple[Member, ...] = ()


Definition = Union[
    DataTypeDesign,
    ObjectTypeDesign,
    VariableTypeDesign,
    ReferenceTypeDesign,
    ObjectDesign,
]


@dataclass(frozen=True)
class Namespace:
    """A namespace declaration of the document."""

    name: str
    value: str
    version: str | None = None
    publication_date: str | None = None
    prefix: str | None = None
    internal_prefix: str | None = None
    xml_namespace: str | None = None
    xml_prefix: str | None = None
