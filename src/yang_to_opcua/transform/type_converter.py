"""Convert YANG types to OPC UA data types."""

from __future__ import annotations

from yang_to_opcua.ir.types import DataTypeDesign, Field, SymbolicName, opcua_ref
from yang_to_opcua.schema.nodes import TypeDefinition
from yang_to_opcua.transform.context import TranslationContext
from yang_to_opcua.transform.errors import UnknownPrimitiveTypeError
from yang_to_opcua.transform.naming import describe, safe_text, visible_names
from yang_to_opcua.transform.registry import TypeFamily

# Mapping from YANG built-in types to OPC UA built-in data types
PRIMITIVE_TYPE_TO_OPCUA: dict[str, str] = {
    "string": "String",
    "binary": "ByteString",
    "bits": "UInt32",  # lossy: bit names are dropped
    "boolean": "Boolean",
    "decimal64": "Int64",  # lossy: fraction digits are dropped
    "empty": "Structure",
    "enumeration": "Enumeration",
    "identityref": "NodeId",
    "instance-identifier": "ExpandedNodeId",
    "int8": "SByte",
    "int16": "Int16",
    "int32": "Int32",
    "int64": "Int64",
    "uint8": "Byte",
    "uint16": "UInt16",
    "uint32": "UInt32",
    "uint64": "UInt64",
    "leafref": "NodeId",
    "union": "Variant",
}


def translate_primitive_type(kind: str, path: tuple[str, ...] = ()) -> SymbolicName:
    """Map a YANG built-in type name to its OPC UA data type.

    Args:
    ----
        kind: YANG built-in type name.
        path: Path of the type, for error messages.

    Returns:
    -------
        Symbolic name in the built-in OPC UA vocabulary.

    Raises:
    ------
        UnknownPrimitiveTypeError: If the kind is not in the table.

    """
    try:
        return opcua_ref(PRIMITIVE_TYPE_TO_OPCUA[kind])
    except KeyError:
        raise UnknownPrimitiveTypeError(f"unknown primitive type [{kind}]", path) from None


def get_data_type(context: TranslationContext, type_def: TypeDefinition) -> SymbolicName:
    """Resolve the data type of a leaf, leaf-list or typedef.

    Primitive types map straight to the built-in vocabulary and emit nothing.
    Any other type is registered as a DataType (once) and referenced.

    Args:
    ----
        context: The translation context.
        type_def: The resolved YANG type.

    Returns:
    -------
        Symbolic name of the data type.

    """
    if type_def.is_primitive:
        return translate_primitive_type(type_def.kind, type_def.path)
    return register_data_type(context, type_def)


def register_data_type(context: TranslationContext, type_def: TypeDefinition) -> SymbolicName:
    """Register ``<path>DataType`` for a derived or non-primitive type."""
    name = context.namer.name_for(type_def, "DataType")
    return context.registry.get_or_register(
        TypeFamily.DATA_TYPE,
        name,
        lambda: _build_data_type(context, type_def, name),
    )


def _build_data_type(
    context: TranslationContext, type_def: TypeDefinition, name: SymbolicName
) -> DataTypeDesign:
    fields: tuple[Field, ...] = ()
    if type_def.kind == "enumeration":
        base_type = opcua_ref("Enumeration")
        fields = tuple(
            Field(
                name=enum.name,
                identifier=enum.value,
                description=safe_text(enum.description) if enum.description else None,
            )
            for enum in type_def.enums
        )
    elif type_def.base is None or type_def.base.base is None:
        # Built-in base (or an inline union, leafref, ... with no base at all)
        base_type = translate_primitive_type((type_def.base or type_def).kind, type_def.path)
    else:
        # Derived base: emit it first so it precedes this definition
        base_type = get_data_type(context, type_def.base)

    browse_name, display_name = visible_names(type_def)
    definition = DataTypeDesign(
        symbolic_name=name,
        browse_name=browse_name,
        display_name=display_name,
        description=describe(type_def),
        base_type=base_type,
        fields=fields,
    )
    context.emit(definition)
    return definition
