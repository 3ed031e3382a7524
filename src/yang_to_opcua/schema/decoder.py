"""Decode RFC 7951 JSON instance data against a resolved schema.

Top-level members are qualified as ``module-name:identifier``; nested members
inherit the namespace of their parent unless qualified themselves. Choices and
cases do not appear in the data: their data nodes are members of the
enclosing container or list entry.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from yang_to_opcua.models.common import split_prefixed_name
from yang_to_opcua.schema.data import (
    ContainerData,
    DataNode,
    DataTree,
    LeafData,
    LeafListData,
    ListData,
    ListEntryData,
)
from yang_to_opcua.schema.nodes import (
    ChoiceNode,
    ContainerNode,
    LeafListNode,
    LeafNode,
    ListNode,
    SchemaContext,
    SchemaNode,
    TypeDefinition,
)

logger = logging.getLogger(__name__)

INTEGER_RANGES: dict[str, tuple[int, int]] = {
    "int8": (-(2**7), 2**7 - 1),
    "int16": (-(2**15), 2**15 - 1),
    "int32": (-(2**31), 2**31 - 1),
    "int64": (-(2**63), 2**63 - 1),
    "uint8": (0, 2**8 - 1),
    "uint16": (0, 2**16 - 1),
    "uint32": (0, 2**32 - 1),
    "uint64": (0, 2**64 - 1),
}

# Types encoded as JSON strings
STRING_KINDS = frozenset(
    {"string", "binary", "bits", "identityref", "instance-identifier", "leafref"}
)


class InstanceDataError(ValueError):
    """Instance data does not match the schema."""

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        """Initialize InstanceDataError.

        Args:
        ----
            message: Description of the mismatch.
            path: Data path of the offending member.

        """
        self.path = path
        location = "/" + "/".join(path) if path else ""
        super().__init__(f"{location}: {message}" if location else message)


class InstanceDecoder:
    """Decode an RFC 7951 document into a :class:`DataTree`."""

    def __init__(self, context: SchemaContext) -> None:
        """Initialize the decoder.

        Args:
        ----
            context: The resolved schema the data conforms to.

        """
        self._context = context
        self._namespaces = {m.name: m.namespace for m in context.modules}

    def decode(self, document: dict[str, Any]) -> DataTree:
        """Decode a whole datastore.

        Raises
        ------
            InstanceDataError: If a member is unknown or a value does not fit
                its schema node.

        """
        children: list[DataNode] = []
        for member, value in document.items():
            module_name, local = split_prefixed_name(member)
            if module_name is None:
                raise InstanceDataError(
                    f"top-level member '{member}' must be qualified with a module name"
                )
            module = self._context.module_by_name(module_name)
            if module is None:
                raise InstanceDataError(f"unknown module '{module_name}'", (member,))
            node = _find_data_node(module.statements, module.namespace, local)
            if node is None:
                raise InstanceDataError(f"unknown member '{member}'", (member,))
            children.append(self._decode_node(node, value, (member,)))
        return DataTree(children=tuple(children))

    def _decode_members(
        self,
        schema_children: tuple[SchemaNode, ...],
        value: Any,
        namespace: str,
        path: tuple[str, ...],
    ) -> tuple[DataNode, ...]:
        if not isinstance(value, dict):
            raise InstanceDataError(f"expected an object, got {type(value).__name__}", path)

        members: list[DataNode] = []
        for member, member_value in value.items():
            module_name, local = split_prefixed_name(member)
            member_namespace = namespace
            if module_name is not None:
                if module_name not in self._namespaces:
                    raise InstanceDataError(f"unknown module '{module_name}'", path + (member,))
                member_namespace = self._namespaces[module_name]
            node = _find_data_node(schema_children, member_namespace, local)
            if node is None:
                raise InstanceDataError(f"unknown member '{member}'", path + (member,))
            members.append(self._decode_node(node, member_value, path + (member,)))
        return tuple(members)

    def _decode_node(self, node: SchemaNode, value: Any, path: tuple[str, ...]) -> DataNode:
        namespace = node.qname.namespace

        if isinstance(node, ContainerNode):
            return ContainerData(
                node_type=node.qname,
                children=self._decode_members(node.children, value, namespace, path),
            )

        if isinstance(node, ListNode):
            if not isinstance(value, list):
                raise InstanceDataError("list data must be an array", path)
            entries = tuple(
                ListEntryData(
                    node_type=node.qname,
                    children=self._decode_members(
                        node.children, entry, namespace, path + (str(index),)
                    ),
                )
                for index, entry in enumerate(value)
            )
            return ListData(node_type=node.qname, entries=entries)

        if isinstance(node, LeafListNode):
            if not isinstance(value, list):
                raise InstanceDataError("leaf-list data must be an array", path)
            return LeafListData(
                node_type=node.qname,
                values=tuple(decode_leaf_value(node.type, item, path) for item in value),
            )

        if isinstance(node, LeafNode):
            return LeafData(node_type=node.qname, value=decode_leaf_value(node.type, value, path))

        raise InstanceDataError(f"'{node.name}' cannot carry data", path)


def _find_data_node(
    children: tuple[SchemaNode, ...], namespace: str, local_name: str
) -> SchemaNode | None:
    """Find a data node by name, looking through choices and cases."""
    for child in children:
        if isinstance(child, ChoiceNode):
            for case in child.cases:
                found = _find_data_node(case.children, namespace, local_name)
                if found is not None:
                    return found
        elif isinstance(child, (ContainerNode, ListNode, LeafNode, LeafListNode)):
            if child.qname.namespace == namespace and child.qname.local_name == local_name:
                return child
    return None


def decode_leaf_value(type_def: TypeDefinition | None, value: Any, path: tuple[str, ...]) -> Any:
    """Convert an RFC 7951 leaf value to a Python value.

    Args:
    ----
        type_def: Resolved type of the leaf.
        value: JSON value.
        path: Data path used in error messages.

    Returns:
    -------
        int for integer types, Decimal for decimal64, bool for boolean and
        empty, str for the string encoded types; union values pass through.

    Raises:
    ------
        InstanceDataError: If the value cannot represent the type.

    """
    kind = type_def.kind if type_def is not None else "string"

    if kind in INTEGER_RANGES:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise InstanceDataError(f"expected {kind}, got {value!r}", path)
        try:
            number = int(value)
        except ValueError:
            raise InstanceDataError(f"expected {kind}, got {value!r}", path) from None
        low, high = INTEGER_RANGES[kind]
        if not low <= number <= high:
            raise InstanceDataError(f"{number} is out of range for {kind}", path)
        return number

    if kind == "decimal64":
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise InstanceDataError(f"expected decimal64, got {value!r}", path)
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise InstanceDataError(f"expected decimal64, got {value!r}", path) from None

    if kind == "boolean":
        if not isinstance(value, bool):
            raise InstanceDataError(f"expected boolean, got {value!r}", path)
        return value

    if kind == "empty":
        if value != [None]:
            raise InstanceDataError("empty leaf must be encoded as [null]", path)
        return True

    if kind == "enumeration":
        labels = {enum.name for enum in type_def.enums} if type_def is not None else set()
        if not isinstance(value, str) or value not in labels:
            raise InstanceDataError(f"'{value}' is not a valid enum", path)
        return value

    if kind in STRING_KINDS:
        if not isinstance(value, str):
            raise InstanceDataError(f"expected {kind} string, got {value!r}", path)
        return value

    if kind == "union":
        if isinstance(value, (dict, list)):
            raise InstanceDataError("union value must be a scalar", path)
        return value

    logger.debug("Passing through value of unknown type %s at %s", kind, "/".join(path))
    return value
