"""Materialize Object instances from instance data."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from yang_to_opcua.ir.types import ObjectDesign, Reference, SymbolicName, opcua_ref
from yang_to_opcua.schema.data import ContainerData, ListData
from yang_to_opcua.schema.nodes import ContainerNode, ListNode
from yang_to_opcua.transform.context import TranslationContext
from yang_to_opcua.transform.naming import describe, visible_names

if TYPE_CHECKING:
    from yang_to_opcua.transform.shapes import ShapeTranslator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstanceParent:
    """The instance whose children are being materialized."""

    symbolic_name: SymbolicName
    browse_name: str

    def child(self, member_name: SymbolicName, browse_name: str) -> InstanceParent:
        """Return the parent for a nested member (``<parent>_<member>``)."""
        return InstanceParent(
            SymbolicName(member_name.namespace, f"{self.symbolic_name.name}_{member_name.name}"),
            browse_name,
        )


class InstanceMaterializer:
    """Emit Object instances while walking data in step with the schema."""

    def __init__(self, context: TranslationContext, shapes: ShapeTranslator) -> None:
        """Initialize the materializer.

        Args:
        ----
            context: The translation context.
            shapes: Translator used to build the members of each instance.

        """
        self.context = context
        self.shapes = shapes

    def container_instance(
        self,
        container: ContainerNode,
        type_name: SymbolicName,
        data: ContainerData,
    ) -> ObjectDesign:
        """Emit ``<path>ContainerInstance`` for a top-level container.

        The instance is organized under ``ObjectsFolder`` and its members are
        materialized from the container data.
        """
        name = self.context.namer.name_for(container, "ContainerInstance")
        browse_name, display_name = visible_names(container)
        children = self.shapes.make_children(
            container.children, data.children, InstanceParent(name, browse_name)
        )
        instance = ObjectDesign(
            symbolic_name=name,
            browse_name=browse_name,
            display_name=display_name,
            description=describe(container),
            type_definition=type_name,
            references=(
                Reference(
                    reference_type=opcua_ref("Organizes"),
                    target_id=opcua_ref("ObjectsFolder"),
                    is_inverse=True,
                ),
            ),
            children=children,
        )
        self.context.emit(instance)
        return instance

    def list_elements(
        self,
        list_node: ListNode,
        data: ListData,
        element_type: SymbolicName,
        reference_type: SymbolicName,
        parent: InstanceParent,
    ) -> list[ObjectDesign]:
        """Emit one ``<path>ElementInstance<i>`` per list entry.

        Indices come from a counter per list, so entries of the same list
        under different parents never share a name. Each element points back
        to ``<parent>_<list>`` through an inverse reference of the list's
        reference type.
        """
        list_name = self.context.namer.name_for(list_node)
        target = SymbolicName(list_name.namespace, f"{parent.symbolic_name.name}_{list_name.name}")

        elements: list[ObjectDesign] = []
        for entry in data.entries:
            index = self.context.next_element_index(list_name)
            name = self.context.namer.name_for(list_node, f"ElementInstance{index}")
            browse_name, display_name = visible_names(list_node, suffix=f" {index}")
            children = self.shapes.make_children(
                list_node.children, entry.children, InstanceParent(name, browse_name)
            )
            element = ObjectDesign(
                symbolic_name=name,
                browse_name=browse_name,
                display_name=display_name,
                description=describe(list_node),
                type_definition=element_type,
                references=(
                    Reference(reference_type=reference_type, target_id=target, is_inverse=True),
                ),
                children=children,
            )
            self.context.emit(element)
            elements.append(element)

        logger.debug("Materialized %d elements of %s", len(elements), list_name.name)
        return elements
