"""Decoded instance data (value tree).

Every node exposes ``node_type``, the qualified name of the schema node it
instantiates. The translator pairs schema children with data children by
comparing the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from yang_to_opcua.schema.nodes import QName


@dataclass(frozen=True)
class LeafData:
    """Value of a leaf."""

    node_type: QName
    value: Any


@dataclass(frozen=True)
class LeafListData:
    """Values of a leaf-list."""

    node_type: QName
    values: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ContainerData:
    """Instance of a container."""

    node_type: QName
    children: tuple[DataNode, ...] = ()


@dataclass(frozen=True)
class ListEntryData:
    """A single entry of a list."""

    node_type: QName
    children: tuple[DataNode, ...] = ()


@dataclass(frozen=True)
class ListData:
    """All entries of a list, in document order."""

    node_type: QName
    entries: tuple[ListEntryData, ...] = ()


DataNode = Union[LeafData, LeafListData, ContainerData, ListData]


@dataclass(frozen=True)
class DataTree:
    """Root of a decoded datastore: the top-level data nodes."""

    children: tuple[DataNode, ...] = ()


def find_child(
    children: tuple[DataNode, ...] | None,
    node_type: QName,
    data_class: type,
) -> Any:
    """Find the first data child of the given class instantiating ``node_type``.

    Args:
    ----
        children: Data children to search (None when there is no data).
        node_type: Qualified name of the schema node.
        data_class: Expected data node class.

    Returns:
    -------
        The matching data node, or None.

    """
    if not children:
        return None
    for child in children:
        if isinstance(child, data_class) and child.node_type == node_type:
            return child
    return None
