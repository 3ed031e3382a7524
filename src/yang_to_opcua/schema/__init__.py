"""Resolved YANG schema tree and decoded instance data.

The translator reads two immutable inputs:

1. The schema tree (:mod:`yang_to_opcua.schema.nodes`), produced from a
   schema file by :class:`SchemaResolver`.
2. Optional instance data (:mod:`yang_to_opcua.schema.data`), decoded from an
   RFC 7951 document by :class:`InstanceDecoder`.
"""

from yang_to_opcua.schema.data import (
    ContainerData,
    DataNode,
    DataTree,
    LeafData,
    LeafListData,
    ListData,
    ListEntryData,
    find_child,
)
from yang_to_opcua.schema.decoder import InstanceDataError, InstanceDecoder
from yang_to_opcua.schema.nodes import (
    NON_PRIMITIVE_KINDS,
    CaseNode,
    ChoiceNode,
    ContainerNode,
    EnumValue,
    IdentityNode,
    LeafListNode,
    LeafNode,
    ListNode,
    Module,
    OpaqueStatement,
    QName,
    SchemaContext,
    SchemaNode,
    TypeDefinition,
    TypedefNode,
)
from yang_to_opcua.schema.resolver import (
    SchemaResolutionError,
    SchemaResolver,
    resolve_schema,
)

__all__ = [
    # Schema tree
    "NON_PRIMITIVE_KINDS",
    "CaseNode",
    "ChoiceNode",
    "ContainerNode",
    "EnumValue",
    "IdentityNode",
    "LeafListNode",
    "LeafNode",
    "ListNode",
    "Module",
    "OpaqueStatement",
    "QName",
    "SchemaContext",
    "SchemaNode",
    "TypeDefinition",
    "TypedefNode",
    # Data tree
    "ContainerData",
    "DataNode",
    "DataTree",
    "LeafData",
    "LeafListData",
    "ListData",
    "ListEntryData",
    "find_child",
    # Resolution and decoding
    "InstanceDataError",
    "InstanceDecoder",
    "SchemaResolutionError",
    "SchemaResolver",
    "resolve_schema",
]
