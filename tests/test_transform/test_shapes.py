"""Tests for ShapeTranslator."""

from collections.abc import Callable
from typing import Any

import pytest
from yang_to_opcua.ir.document import ModelDocument
from yang_to_opcua.ir.types import (
    AccessLevel,
    ObjectMember,
    ObjectTypeDesign,
    ReferenceTypeDesign,
    ValueRank,
    VariableMember,
    VariableTypeDesign,
    opcua_ref,
)
from yang_to_opcua.schema.nodes import IdentityNode, Module, QName, SchemaContext
from yang_to_opcua.transform.context import TranslationContext
from yang_to_opcua.transform.errors import MultipleInheritanceError, UnsupportedConstructError
from yang_to_opcua.transform.naming import SymbolNamer
from yang_to_opcua.transform.registry import TypeFamily
from yang_to_opcua.transform.shapes import ShapeTranslator

TARGET = "urn:yang-to-opcua:rootModel"

Resolve = Callable[[dict[str, Any]], SchemaContext]
MakeSchema = Callable[..., dict[str, Any]]


def _translator(schema: SchemaContext) -> ShapeTranslator:
    context = TranslationContext(
        schema=schema,
        document=ModelDocument(target_namespace=TARGET),
        namer=SymbolNamer(TARGET),
    )
    return ShapeTranslator(context)


def _names(shapes: ShapeTranslator) -> list[str]:
    return [d.symbolic_name.name for d in shapes.context.document]


class TestContainers:
    """Tests for container types."""

    def test_empty_container(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should emit an ObjectType with no members based on BaseObjectType."""
        schema = resolve(make_schema([{"kind": "container", "name": "system"}]))
        shapes = _translator(schema)

        name = shapes.container_type(schema.modules[0].statements[0])

        definition = shapes.context.document.get(name)
        assert name.name == "ns0__systemContainerType"
        assert isinstance(definition, ObjectTypeDesign)
        assert definition.children == ()
        assert definition.base_type == opcua_ref("BaseObjectType")
        assert not definition.is_abstract

    def test_members_emitted_first(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should emit every member type before the container type."""
        schema = resolve(system_schema)
        shapes = _translator(schema)

        name = shapes.container_type(schema.modules[0].statements[4])

        document = shapes.context.document
        assert _names(shapes)[-1] == name.name
        assert document.forward_reference_violations() == []
        members = [m.browse_name for m in document.get(name).children]
        assert members == ["hostname", "load", "dns-server", "interfaceList", "transport"]

    def test_ignored_child_keywords(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should skip statements without structure."""
        schema = resolve(
            make_schema(
                [
                    {
                        "kind": "container",
                        "name": "system",
                        "children": [
                            {"kind": "config", "argument": "false"},
                            {"kind": "must", "argument": "count(x) > 0"},
                        ],
                    }
                ]
            )
        )
        shapes = _translator(schema)

        name = shapes.container_type(schema.modules[0].statements[0])

        assert shapes.context.document.get(name).children == ()

    def test_unsupported_child(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should fail on statements that cannot be children."""
        schema = resolve(
            make_schema(
                [
                    {
                        "kind": "container",
                        "name": "system",
                        "children": [{"kind": "anydata", "argument": "blob"}],
                    }
                ]
            )
        )
        shapes = _translator(schema)

        with pytest.raises(UnsupportedConstructError, match=r"\[anydata\] not supported"):
            shapes.container_type(schema.modules[0].statements[0])

    def test_nested_typedef_registered(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should register a nested typedef without adding a member."""
        schema = resolve(
            make_schema(
                [
                    {
                        "kind": "container",
                        "name": "system",
                        "children": [{"kind": "typedef", "name": "label", "type": "string"}],
                    }
                ]
            )
        )
        shapes = _translator(schema)

        name = shapes.container_type(schema.modules[0].statements[0])

        assert _names(shapes) == ["ns0__system___labelDataType", "ns0__systemContainerType"]
        assert shapes.context.document.get(name).children == ()


class TestLeaves:
    """Tests for leaf and leaf-list shapes."""

    def test_leaf_type(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should emit a scalar VariableType with the built-in data type."""
        schema = resolve(
            make_schema([{"kind": "leaf", "name": "mtu", "type": "uint16", "description": "MTU"}])
        )
        shapes = _translator(schema)

        name = shapes.leaf_type(schema.modules[0].statements[0])

        definition = shapes.context.document.get(name)
        assert isinstance(definition, VariableTypeDesign)
        assert name.name == "ns0__mtuLeafType"
        assert definition.data_type == opcua_ref("UInt16")
        assert definition.base_type == opcua_ref("BaseDataVariableType")
        assert definition.value_rank == ValueRank.SCALAR
        assert shapes.context.document.data_types == []

    def test_leaf_list_type(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should emit an array VariableType."""
        schema = resolve(make_schema([{"kind": "leaf-list", "name": "dns", "type": "string"}]))
        shapes = _translator(schema)

        name = shapes.leaf_list_type(schema.modules[0].statements[0])

        definition = shapes.context.document.get(name)
        assert name.name == "ns0__dnsLeafListType"
        assert definition.value_rank == ValueRank.ARRAY

    def test_registration_idempotent(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should return the same name and append nothing the second time."""
        schema = resolve(make_schema([{"kind": "leaf", "name": "mtu", "type": "uint16"}]))
        shapes = _translator(schema)
        leaf = schema.modules[0].statements[0]

        first = shapes.leaf_type(leaf)
        count = len(shapes.context.document)
        second = shapes.leaf_type(leaf)

        assert first == second
        assert len(shapes.context.document) == count

    def test_leaf_member(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should declare leaves as read-write scalar variables."""
        schema = resolve(system_schema)
        shapes = _translator(schema)

        name = shapes.container_type(schema.modules[0].statements[4])

        hostname, _, dns = shapes.context.document.get(name).children[:3]
        assert isinstance(hostname, VariableMember)
        assert hostname.symbolic_name.name == "ns0__system___hostname"
        assert hostname.type_definition.name == "ns0__system___hostnameLeafType"
        assert hostname.access_level == AccessLevel.READ_WRITE
        assert hostname.value_rank == ValueRank.SCALAR
        assert hostname.default_value is None
        assert dns.value_rank == ValueRank.ARRAY
        assert dns.access_level is None


class TestLists:
    """Tests for list shapes."""

    def test_list_types(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should emit list, element and reference types in that order."""
        schema = resolve(system_schema)
        shapes = _translator(schema)
        interface = schema.modules[0].statements[4].children[3]

        list_type, element_type, reference_type = shapes.list_types(interface)

        assert _names(shapes) == [
            "ns0__system___interfaceListType",
            "ns0__system___interface___nameLeafType",
            "ns0__system___interface___mtuLeafType",
            "ns0__system___interfaceListElementType",
            "ns0__system___interfaceListElementReferenceType",
        ]
        document = shapes.context.document
        assert document.get(list_type).children == ()
        assert [m.browse_name for m in document.get(element_type).children] == ["name", "mtu"]
        reference = document.get(reference_type)
        assert isinstance(reference, ReferenceTypeDesign)
        assert reference.browse_name == "ContainsInterface"
        assert reference.base_type == opcua_ref("HasComponent")

    def test_list_member(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should declare the list as an object with the list type."""
        schema = resolve(system_schema)
        shapes = _translator(schema)

        name = shapes.container_type(schema.modules[0].statements[4])

        member = shapes.context.document.get(name).children[3]
        assert isinstance(member, ObjectMember)
        assert member.browse_name == "interfaceList"
        assert member.type_definition.name == "ns0__system___interfaceListType"
        assert member.description.startswith("Interfaces\n\telement type: ")
        assert member.description.endswith("\n\telement key: name")


class TestChoices:
    """Tests for choice and case shapes."""

    def test_choice_before_cases(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should emit the abstract choice type before its case types."""
        schema = resolve(system_schema)
        shapes = _translator(schema)
        choice = schema.modules[0].statements[4].children[4]

        name = shapes.choice_type(choice)

        document = shapes.context.document
        assert _names(shapes)[0] == "ns0__system___transportChoiceType"
        assert document.get(name).is_abstract
        cases = [d for d in document.object_types if d.symbolic_name.name.endswith("CaseType")]
        assert [c.symbolic_name.name for c in cases] == [
            "ns0__system___transport___tcpCaseType",
            "ns0__system___transport___udpCaseType",
        ]
        assert all(c.base_type == name for c in cases)
        assert cases[0].children[0].browse_name == "port"
        assert document.forward_reference_violations() == []


class TestIdentities:
    """Tests for identity shapes."""

    def test_identity_chain(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should emit a chain of n identities base first."""
        schema = resolve(
            make_schema(
                [
                    {"kind": "identity", "name": "gigabit", "bases": ["ethernet"]},
                    {"kind": "identity", "name": "ethernet", "bases": ["interface-type"]},
                    {"kind": "identity", "name": "interface-type"},
                ]
            )
        )
        shapes = _translator(schema)

        for identity in schema.modules[0].statements:
            shapes.translate_identity(identity)

        document = shapes.context.document
        assert _names(shapes) == ["ns0__interface__type", "ns0__ethernet", "ns0__gigabit"]
        assert len(document.object_types) == 3
        assert document.object_types[0].base_type is None
        assert document.object_types[1].base_type.name == "ns0__interface__type"
        assert document.object_types[2].base_type.name == "ns0__ethernet"

    def test_multiple_inheritance(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should reject two bases and register nothing."""
        schema = resolve(
            make_schema(
                [
                    {"kind": "identity", "name": "a"},
                    {"kind": "identity", "name": "b"},
                    {"kind": "identity", "name": "c", "bases": ["a", "b"]},
                ]
            )
        )
        shapes = _translator(schema)
        identity = schema.modules[0].statements[2]

        with pytest.raises(MultipleInheritanceError, match=r"\[T003\]"):
            shapes.translate_identity(identity)

        name = shapes.context.namer.name_for(identity)
        assert not shapes.context.registry.is_registered(TypeFamily.IDENTITY, name)
        assert len(shapes.context.document) == 0

    def test_unknown_base_identity(self) -> None:
        """Should fail with a coded error when a base identity is missing."""
        namespace = "urn:example:system"
        identity = IdentityNode(
            qname=QName(namespace, "gigabit"),
            path=("gigabit",),
            bases=(QName(namespace, "ethernet"),),
        )
        module = Module(
            name="example-system", namespace=namespace, prefix="sys", statements=(identity,)
        )
        schema = SchemaContext.from_modules([module])
        shapes = _translator(schema)

        with pytest.raises(UnsupportedConstructError, match=r"\[T001\] unknown base identity"):
            shapes.translate_identity(identity)
