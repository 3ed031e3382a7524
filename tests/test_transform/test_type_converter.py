"""Tests for type conversion."""

from collections.abc import Callable
from typing import Any

import pytest
from yang_to_opcua.ir.document import ModelDocument
from yang_to_opcua.ir.types import DataTypeDesign, opcua_ref
from yang_to_opcua.schema.nodes import QName, SchemaContext, TypeDefinition
from yang_to_opcua.transform.context import TranslationContext
from yang_to_opcua.transform.errors import UnknownPrimitiveTypeError
from yang_to_opcua.transform.naming import SymbolNamer
from yang_to_opcua.transform.type_converter import (
    PRIMITIVE_TYPE_TO_OPCUA,
    get_data_type,
    translate_primitive_type,
)

TARGET = "urn:yang-to-opcua:rootModel"

Resolve = Callable[[dict[str, Any]], SchemaContext]
MakeSchema = Callable[..., dict[str, Any]]


def _context(schema: SchemaContext) -> TranslationContext:
    return TranslationContext(
        schema=schema,
        document=ModelDocument(target_namespace=TARGET),
        namer=SymbolNamer(TARGET),
    )


class TestPrimitiveTypes:
    """Tests for the primitive type table."""

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            ("string", "String"),
            ("boolean", "Boolean"),
            ("int8", "SByte"),
            ("uint8", "Byte"),
            ("uint16", "UInt16"),
            ("int64", "Int64"),
            ("binary", "ByteString"),
            ("identityref", "NodeId"),
            ("union", "Variant"),
        ],
    )
    def test_mapping(self, kind: str, expected: str) -> None:
        """Should map built-ins to OPC UA data types."""
        assert translate_primitive_type(kind) == opcua_ref(expected)

    def test_lossy_mappings(self) -> None:
        """Should keep the lossy mappings."""
        assert PRIMITIVE_TYPE_TO_OPCUA["decimal64"] == "Int64"
        assert PRIMITIVE_TYPE_TO_OPCUA["bits"] == "UInt32"
        assert PRIMITIVE_TYPE_TO_OPCUA["instance-identifier"] == "ExpandedNodeId"

    def test_unknown(self) -> None:
        """Should raise for kinds missing from the table."""
        with pytest.raises(UnknownPrimitiveTypeError, match=r"\[T004\].*\[float\]"):
            translate_primitive_type("float", ("x",))


class TestGetDataType:
    """Tests for get_data_type."""

    def test_primitive_emits_nothing(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should map a uint16 leaf to UInt16 without a DataType."""
        schema = resolve(make_schema([{"kind": "leaf", "name": "mtu", "type": "uint16"}]))
        context = _context(schema)

        data_type = get_data_type(context, schema.modules[0].statements[0].type)

        assert data_type == opcua_ref("UInt16")
        assert len(context.document) == 0

    def test_typedef_of_builtin(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should emit a DataType based on the built-in type."""
        schema = resolve(
            make_schema(
                [{"kind": "typedef", "name": "percent", "type": "uint8", "description": "Pct"}]
            )
        )
        context = _context(schema)

        data_type = get_data_type(context, schema.modules[0].statements[0].type)

        assert data_type.name == "ns0__percentDataType"
        definition = context.document.get(data_type)
        assert isinstance(definition, DataTypeDesign)
        assert definition.base_type == opcua_ref("Byte")
        assert definition.browse_name == "percent"
        assert definition.description == "Pct"

    def test_derived_typedef_chain(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should emit the base DataType before the derived one."""
        schema = resolve(
            make_schema(
                [
                    {"kind": "typedef", "name": "small-percent", "type": "percent"},
                    {"kind": "typedef", "name": "percent", "type": "uint8"},
                ]
            )
        )
        context = _context(schema)

        data_type = get_data_type(context, schema.modules[0].statements[0].type)

        names = [d.symbolic_name.name for d in context.document]
        assert names == ["ns0__percentDataType", "ns0__small__percentDataType"]
        assert context.document.get(data_type).base_type.name == "ns0__percentDataType"
        assert context.document.forward_reference_violations() == []

    def test_enumeration_fields(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should emit one field per enum, in order."""
        schema = resolve(
            make_schema(
                [
                    {
                        "kind": "leaf",
                        "name": "state",
                        "type": {
                            "name": "enumeration",
                            "enums": [
                                {"name": "up", "description": "Link up"},
                                {"name": "down", "value": 5},
                                {"name": "testing"},
                            ],
                        },
                    }
                ]
            )
        )
        context = _context(schema)

        data_type = get_data_type(context, schema.modules[0].statements[0].type)

        definition = context.document.get(data_type)
        assert data_type.name == "ns0__state___enumerationDataType"
        assert definition.base_type == opcua_ref("Enumeration")
        assert [(f.name, f.identifier) for f in definition.fields] == [
            ("up", 0),
            ("down", 5),
            ("testing", 6),
        ]
        assert definition.fields[0].description == "Link up"

    def test_registered_once(self, resolve: Resolve, make_schema: MakeSchema) -> None:
        """Should return the same name without appending again."""
        schema = resolve(make_schema([{"kind": "typedef", "name": "percent", "type": "uint8"}]))
        context = _context(schema)
        type_def = schema.modules[0].statements[0].type

        first = get_data_type(context, type_def)
        second = get_data_type(context, type_def)

        assert first == second
        assert len(context.document) == 1

    def test_inline_union(self) -> None:
        """Should emit a Variant based DataType for an inline union."""
        schema = SchemaContext()
        context = _context(schema)
        union = TypeDefinition(
            qname=QName("urn:example:system", "union"),
            path=("address", "union"),
            kind="union",
        )

        data_type = get_data_type(context, union)

        assert context.document.get(data_type).base_type == opcua_ref("Variant")
