"""Translate schema nodes into OPC UA type shapes.

Each YANG construct maps to a fixed set of definitions:

    container   -> ObjectType <path>ContainerType
    list        -> ObjectType <path>ListType, ObjectType <path>ListElementType,
                   ReferenceType <path>ListElementReferenceType
    leaf        -> VariableType <path>LeafType (scalar)
    leaf-list   -> VariableType <path>LeafListType (array)
    choice      -> abstract ObjectType <path>ChoiceType, and one
                   ObjectType <path>CaseType per case
    identity    -> ObjectType <path>
    typedef     -> DataType <path>DataType

Every type is registered once; dependencies are emitted before the
definition that refers to them.
"""

from __future__ import annotations

import logging

from yang_to_opcua.ir.types import (
    AccessLevel,
    DefaultValue,
    Member,
    ObjectMember,
    ObjectTypeDesign,
    ReferenceTypeDesign,
    SymbolicName,
    ValueRank,
    VariableMember,
    VariableTypeDesign,
    opcua_ref,
)
from yang_to_opcua.schema.data import (
    ContainerData,
    DataNode,
    LeafData,
    LeafListData,
    ListData,
    find_child,
)
from yang_to_opcua.schema.nodes import (
    CaseNode,
    ChoiceNode,
    ContainerNode,
    IdentityNode,
    LeafListNode,
    LeafNode,
    ListNode,
    OpaqueStatement,
    QName,
    SchemaNode,
    TypedefNode,
)
from yang_to_opcua.transform.context import TranslationContext
from yang_to_opcua.transform.errors import (
    MultipleInheritanceError,
    UnsupportedConstructError,
)
from yang_to_opcua.transform.instances import InstanceMaterializer, InstanceParent
from yang_to_opcua.transform.naming import describe, visible_names
from yang_to_opcua.transform.registry import TypeFamily
from yang_to_opcua.transform.type_converter import get_data_type

logger = logging.getLogger(__name__)

# Statements below a container, list or case that carry no structure
CHILD_IGNORED_KEYWORDS = frozenset(
    {
        "config",
        "status",
        "if-feature",
        "uses",
        "when",
        "reference",
        "description",
        "unique",
        "augment",
        "key",
        "must",
        "presence",
        "default",
        "mandatory",
        "units",
        "ordered-by",
        "min-elements",
        "max-elements",
        "grouping",
    }
)


class ShapeTranslator:
    """Translate containers, lists, leaves, choices, identities and typedefs."""

    def __init__(self, context: TranslationContext) -> None:
        """Initialize the translator.

        Args:
        ----
            context: The translation context shared by the whole run.

        """
        self.context = context
        self.instances = InstanceMaterializer(context, self)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def translate_identity(self, identity: IdentityNode) -> SymbolicName:
        """Register the ObjectType of an identity and of its base chain.

        Raises
        ------
            MultipleInheritanceError: If the identity has more than one base.
                Nothing is registered for it in that case.

        """
        name = self.context.namer.name_for(identity)
        if self.context.registry.is_registered(TypeFamily.IDENTITY, name):
            return name
        if len(identity.bases) > 1:
            raise MultipleInheritanceError(
                f"multiple inheritance is not supported [{identity.name}]", identity.path
            )

        def build() -> ObjectTypeDesign:
            base_type = None
            if identity.bases:
                try:
                    base = self.context.schema.identity(identity.bases[0])
                except KeyError:
                    raise UnsupportedConstructError(
                        f"unknown base identity {identity.bases[0]}", identity.path
                    ) from None
                base_type = self.translate_identity(base)
            browse_name, display_name = visible_names(identity)
            definition = ObjectTypeDesign(
                symbolic_name=name,
                browse_name=browse_name,
                display_name=display_name,
                description=describe(identity),
                base_type=base_type,
            )
            self.context.emit(definition)
            return definition

        return self.context.registry.get_or_register(TypeFamily.IDENTITY, name, build)

    def translate_typedef(self, typedef: TypedefNode) -> SymbolicName | None:
        """Register the DataType of a typedef unless a leaf already did."""
        if typedef.type is None:
            return None
        return get_data_type(self.context, typedef.type)

    def container_type(self, container: ContainerNode) -> SymbolicName:
        """Register ``<path>ContainerType``; members are the container children."""
        name = self.context.namer.name_for(container, "ContainerType")

        def build() -> ObjectTypeDesign:
            children = self.make_children(container.children, None, None)
            return self._emit_object_type(container, name, children=children)

        return self.context.registry.get_or_register(TypeFamily.OBJECT_TYPE, name, build)

    def list_types(self, list_node: ListNode) -> tuple[SymbolicName, SymbolicName, SymbolicName]:
        """Register the list, list element and list element reference types.

        Returns
        -------
            Tuple of (list type, element type, reference type).

        """
        namer = self.context.namer
        registry = self.context.registry

        list_name = namer.name_for(list_node, "ListType")
        list_type = registry.get_or_register(
            TypeFamily.OBJECT_TYPE,
            list_name,
            lambda: self._emit_object_type(list_node, list_name),
        )

        element_name = namer.name_for(list_node, "ListElementType")
        element_type = registry.get_or_register(
            TypeFamily.OBJECT_TYPE,
            element_name,
            lambda: self._emit_object_type(
                list_node,
                element_name,
                children=self.make_children(list_node.children, None, None),
            ),
        )

        reference_name = namer.name_for(list_node, "ListElementReferenceType")

        def build_reference_type() -> ReferenceTypeDesign:
            browse_name, display_name = visible_names(list_node, prefix="Contains")
            definition = ReferenceTypeDesign(
                symbolic_name=reference_name,
                browse_name=browse_name,
                display_name=display_name,
                description=describe(list_node),
                base_type=opcua_ref("HasComponent"),
            )
            self.context.emit(definition)
            return definition

        reference_type = registry.get_or_register(
            TypeFamily.REFERENCE_TYPE, reference_name, build_reference_type
        )
        return list_type, element_type, reference_type

    def leaf_type(self, leaf: LeafNode) -> SymbolicName:
        """Register the scalar ``<path>LeafType`` VariableType."""
        return self._variable_type(leaf, "LeafType", ValueRank.SCALAR)

    def leaf_list_type(self, leaf_list: LeafListNode) -> SymbolicName:
        """Register the array ``<path>LeafListType`` VariableType."""
        return self._variable_type(leaf_list, "LeafListType", ValueRank.ARRAY)

    def _variable_type(
        self, node: LeafNode | LeafListNode, suffix: str, value_rank: ValueRank
    ) -> SymbolicName:
        name = self.context.namer.name_for(node, suffix)

        def build() -> VariableTypeDesign:
            data_type = self._data_type_of(node)
            browse_name, display_name = visible_names(node)
            definition = VariableTypeDesign(
                symbolic_name=name,
                browse_name=browse_name,
                display_name=display_name,
                description=describe(node),
                base_type=opcua_ref("BaseDataVariableType"),
                data_type=data_type,
                value_rank=value_rank,
            )
            self.context.emit(definition)
            return definition

        return self.context.registry.get_or_register(TypeFamily.VARIABLE_TYPE, name, build)

    def _data_type_of(self, node: LeafNode | LeafListNode) -> SymbolicName:
        if node.type is None:
            raise UnsupportedConstructError(f"{node.name} has no type", node.path)
        return get_data_type(self.context, node.type)

    def choice_type(self, choice: ChoiceNode) -> SymbolicName:
        """Register the abstract ``<path>ChoiceType`` and one type per case."""
        name = self.context.namer.name_for(choice, "ChoiceType")

        def build() -> ObjectTypeDesign:
            definition = self._emit_object_type(choice, name, is_abstract=True)
            for case in choice.cases:
                self.case_type(case, name)
            return definition

        return self.context.registry.get_or_register(TypeFamily.OBJECT_TYPE, name, build)

    def case_type(self, case: CaseNode, choice_type: SymbolicName) -> SymbolicName:
        """Register ``<path>CaseType`` deriving from its choice type."""
        name = self.context.namer.name_for(case, "CaseType")

        def build() -> ObjectTypeDesign:
            children = self.make_children(case.children, None, None)
            return self._emit_object_type(case, name, base_type=choice_type, children=children)

        return self.context.registry.get_or_register(TypeFamily.OBJECT_TYPE, name, build)

    def _emit_object_type(
        self,
        node: SchemaNode,
        name: SymbolicName,
        base_type: SymbolicName | None = None,
        is_abstract: bool = False,
        children: tuple[Member, ...] = (),
    ) -> ObjectTypeDesign:
        browse_name, display_name = visible_names(node)
        definition = ObjectTypeDesign(
            symbolic_name=name,
            browse_name=browse_name,
            display_name=display_name,
            description=describe(node),
            base_type=base_type or opcua_ref("BaseObjectType"),
            is_abstract=is_abstract,
            children=children,
        )
        self.context.emit(definition)
        return definition

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def make_children(
        self,
        children: tuple[SchemaNode, ...],
        data: tuple[DataNode, ...] | None,
        parent: InstanceParent | None,
    ) -> tuple[Member, ...]:
        """Translate schema children into member declarations.

        Types of the children are registered on the way. When ``parent`` is
        set, the members belong to an instance and are filled from ``data``.

        Args:
        ----
            children: Schema children of a container, list or case.
            data: Data children matching the schema children, if any.
            parent: The instance being materialized, or None for types.

        Returns:
        -------
            Member declarations in schema order.

        Raises:
        ------
            UnsupportedConstructError: If a child kind cannot be translated.

        """
        members: list[Member] = []
        for child in children:
            if isinstance(child, OpaqueStatement):
                if child.keyword in CHILD_IGNORED_KEYWORDS:
                    logger.debug("Ignoring '%s' below %s", child.keyword, "/".join(child.path[:-1]))
                    continue
                raise UnsupportedConstructError(
                    f"container child of type [{child.keyword}] not supported", child.path
                )
            if isinstance(child, ListNode):
                members.append(self._list_member(child, data, parent))
            elif isinstance(child, LeafNode):
                members.append(self._leaf_member(child, data, parent))
            elif isinstance(child, LeafListNode):
                members.append(self._leaf_list_member(child, data, parent))
            elif isinstance(child, ContainerNode):
                members.append(self._container_member(child, data, parent))
            elif isinstance(child, ChoiceNode):
                members.append(self._choice_member(child, data, parent))
            elif isinstance(child, TypedefNode):
                self.translate_typedef(child)
            else:
                raise UnsupportedConstructError(
                    f"container child of type [{type(child).__name__}] not supported",
                    child.path,
                )
        return tuple(members)

    def _list_member(
        self,
        list_node: ListNode,
        data: tuple[DataNode, ...] | None,
        parent: InstanceParent | None,
    ) -> ObjectMember:
        list_type, element_type, reference_type = self.list_types(list_node)
        browse_name, display_name = visible_names(list_node, suffix="List")
        description = describe(list_node)
        if description is not None:
            description += (
                f"\n\telement type: {element_type.name}"
                f"\n\treference type: {reference_type.name}"
                f"\n\telement key: {', '.join(list_node.keys)}"
            )
        member = ObjectMember(
            symbolic_name=self.context.namer.name_for(list_node),
            browse_name=browse_name,
            display_name=display_name,
            description=description,
            type_definition=list_type,
        )

        list_data = find_child(data, list_node.qname, ListData)
        if list_data is not None and parent is not None:
            self.instances.list_elements(list_node, list_data, element_type, reference_type, parent)
        return member

    def _leaf_member(
        self,
        leaf: LeafNode,
        data: tuple[DataNode, ...] | None,
        parent: InstanceParent | None,
    ) -> VariableMember:
        leaf_type = self.leaf_type(leaf)
        browse_name, display_name = visible_names(
            leaf, parent_browse_name=parent.browse_name if parent else None
        )
        default_value = None
        leaf_data = find_child(data, leaf.qname, LeafData)
        if leaf_data is not None:
            default_value = DefaultValue(data_type=self._data_type_of(leaf), value=leaf_data.value)
        return VariableMember(
            symbolic_name=self.context.namer.name_for(leaf),
            browse_name=browse_name,
            display_name=display_name,
            description=describe(leaf),
            type_definition=leaf_type,
            value_rank=ValueRank.SCALAR,
            access_level=AccessLevel.READ_WRITE,
            default_value=default_value,
        )

    def _leaf_list_member(
        self,
        leaf_list: LeafListNode,
        data: tuple[DataNode, ...] | None,
        parent: InstanceParent | None,
    ) -> VariableMember:
        leaf_list_type = self.leaf_list_type(leaf_list)
        browse_name, display_name = visible_names(leaf_list)
        default_value = None
        leaf_list_data = find_child(data, leaf_list.qname, LeafListData)
        if leaf_list_data is not None and parent is not None:
            default_value = DefaultValue(
                data_type=self._data_type_of(leaf_list), value=leaf_list_data.values
            )
        return VariableMember(
            symbolic_name=self.context.namer.name_for(leaf_list),
            browse_name=browse_name,
            display_name=display_name,
            description=describe(leaf_list),
            type_definition=leaf_list_type,
            value_rank=ValueRank.ARRAY,
            default_value=default_value,
        )

    def _container_member(
        self,
        container: ContainerNode,
        data: tuple[DataNode, ...] | None,
        parent: InstanceParent | None,
    ) -> ObjectMember:
        container_type = self.container_type(container)
        name = self.context.namer.name_for(container)
        browse_name, display_name = visible_names(container)

        children: tuple[Member, ...] = ()
        container_data = find_child(data, container.qname, ContainerData)
        if container_data is not None and parent is not None:
            children = self.make_children(
                container.children, container_data.children, parent.child(name, browse_name)
            )
        return ObjectMember(
            symbolic_name=name,
            browse_name=browse_name,
            display_name=display_name,
            description=describe(container),
            type_definition=container_type,
            children=children,
        )

    def _choice_member(
        self,
        choice: ChoiceNode,
        data: tuple[DataNode, ...] | None,
        parent: InstanceParent | None,
    ) -> ObjectMember:
        choice_type = self.choice_type(choice)
        if parent is not None and data:
            case_nodes = _case_data_nodes(choice)
            if any(child.node_type in case_nodes for child in data):
                logger.warning(
                    "Skipping instance data below choice %s; case members are not materialized",
                    "/".join(choice.path),
                )
        browse_name, display_name = visible_names(choice)
        return ObjectMember(
            symbolic_name=self.context.namer.name_for(choice),
            browse_name=browse_name,
            display_name=display_name,
            description=describe(choice),
            type_definition=choice_type,
        )


def _case_data_nodes(choice: ChoiceNode) -> set[QName]:
    """Qualified names of the data nodes reachable through a choice."""
    names: set[QName] = set()
    for case in choice.cases:
        for child in case.children:
            if isinstance(child, ChoiceNode):
                names |= _case_data_nodes(child)
            elif isinstance(child, (ContainerNode, ListNode, LeafNode, LeafListNode)):
                names.add(child.qname)
    return names
