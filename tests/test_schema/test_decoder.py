"""Tests for decoding RFC 7951 instance data."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest
from yang_to_opcua.schema.data import (
    ContainerData,
    LeafData,
    LeafListData,
    ListData,
    find_child,
)
from yang_to_opcua.schema.decoder import InstanceDataError, InstanceDecoder, decode_leaf_value
from yang_to_opcua.schema.nodes import EnumValue, QName, SchemaContext, TypeDefinition

NS = "urn:example:system"

Resolve = Callable[[dict[str, Any]], SchemaContext]


def _type(kind: str, enums: tuple[EnumValue, ...] = ()) -> TypeDefinition:
    return TypeDefinition(qname=QName(NS, kind), path=(kind,), kind=kind, enums=enums)


class TestInstanceDecoder:
    """Tests for InstanceDecoder."""

    def test_decode_system(
        self,
        resolve: Resolve,
        system_schema: dict[str, Any],
        system_data: dict[str, Any],
    ) -> None:
        """Should decode containers, lists, leaves and leaf-lists."""
        tree = InstanceDecoder(resolve(system_schema)).decode(system_data)

        system = tree.children[0]
        assert isinstance(system, ContainerData)
        assert system.node_type == QName(NS, "system")

        hostname = find_child(system.children, QName(NS, "hostname"), LeafData)
        assert hostname.value == "router"

        dns = find_child(system.children, QName(NS, "dns-server"), LeafListData)
        assert dns.values == ("10.0.0.1", "10.0.0.2")

        interfaces = find_child(system.children, QName(NS, "interface"), ListData)
        assert len(interfaces.entries) == 2
        mtu = find_child(interfaces.entries[1].children, QName(NS, "mtu"), LeafData)
        assert mtu.value == 9000

    def test_member_inside_choice(
        self,
        resolve: Resolve,
        system_schema: dict[str, Any],
        system_data: dict[str, Any],
    ) -> None:
        """Should find case members as members of the enclosing container."""
        tree = InstanceDecoder(resolve(system_schema)).decode(system_data)

        port = find_child(tree.children[0].children, QName(NS, "port"), LeafData)

        assert port.value == 22

    def test_unqualified_top_level(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should require module-qualified top-level members."""
        decoder = InstanceDecoder(resolve(system_schema))

        with pytest.raises(InstanceDataError, match="must be qualified"):
            decoder.decode({"system": {}})

    def test_unknown_module(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should reject members of unknown modules."""
        decoder = InstanceDecoder(resolve(system_schema))

        with pytest.raises(InstanceDataError, match="unknown module 'other'"):
            decoder.decode({"other:system": {}})

    def test_unknown_member(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should reject members the schema does not declare."""
        decoder = InstanceDecoder(resolve(system_schema))

        with pytest.raises(InstanceDataError, match="/example-system:system/uptime"):
            decoder.decode({"example-system:system": {"uptime": 5}})

    def test_list_requires_array(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should reject list data that is not an array."""
        decoder = InstanceDecoder(resolve(system_schema))

        with pytest.raises(InstanceDataError, match="list data must be an array"):
            decoder.decode({"example-system:system": {"interface": {"name": "eth0"}}})

    def test_out_of_range(self, resolve: Resolve, system_schema: dict[str, Any]) -> None:
        """Should reject values outside the integer range."""
        decoder = InstanceDecoder(resolve(system_schema))

        with pytest.raises(InstanceDataError, match="out of range for uint8"):
            decoder.decode({"example-system:system": {"load": 300}})


class TestDecodeLeafValue:
    """Tests for decode_leaf_value."""

    def test_integer_from_string(self) -> None:
        """Should accept 64-bit integers encoded as strings."""
        assert decode_leaf_value(_type("int64"), "-12", ()) == -12

    def test_integer_rejects_bool(self) -> None:
        """Should not treat booleans as integers."""
        with pytest.raises(InstanceDataError):
            decode_leaf_value(_type("uint8"), True, ())

    def test_decimal64(self) -> None:
        """Should decode decimal64 as Decimal."""
        assert decode_leaf_value(_type("decimal64"), "2.50", ()) == Decimal("2.50")

    def test_invalid_decimal64(self) -> None:
        """Should reject text that is not a number."""
        with pytest.raises(InstanceDataError, match="expected decimal64"):
            decode_leaf_value(_type("decimal64"), "abc", ())

    def test_boolean(self) -> None:
        """Should accept JSON booleans only."""
        assert decode_leaf_value(_type("boolean"), False, ()) is False
        with pytest.raises(InstanceDataError):
            decode_leaf_value(_type("boolean"), "true", ())

    def test_empty(self) -> None:
        """Should decode [null] as present."""
        assert decode_leaf_value(_type("empty"), [None], ()) is True
        with pytest.raises(InstanceDataError, match=r"\[null\]"):
            decode_leaf_value(_type("empty"), None, ())

    def test_enumeration(self) -> None:
        """Should accept declared labels only."""
        state = _type("enumeration", (EnumValue("up", 0), EnumValue("down", 1)))

        assert decode_leaf_value(state, "down", ()) == "down"
        with pytest.raises(InstanceDataError, match="not a valid enum"):
            decode_leaf_value(state, "testing", ())

    def test_string_kinds(self) -> None:
        """Should require strings for string encoded types."""
        assert decode_leaf_value(_type("identityref"), "sys:ethernet", ()) == "sys:ethernet"
        with pytest.raises(InstanceDataError):
            decode_leaf_value(_type("string"), 5, ())

    def test_union_scalar(self) -> None:
        """Should pass union scalars through."""
        assert decode_leaf_value(_type("union"), 7, ()) == 7
        with pytest.raises(InstanceDataError, match="scalar"):
            decode_leaf_value(_type("union"), [7], ())
