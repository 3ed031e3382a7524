"""YANG to OPC UA ModelDesign translation.

This module translates a resolved YANG schema (and optional instance data)
into a ModelDesign document.

The translation process:
    1. Walk modules and their statements in declaration order
    2. Derive a symbolic name for every node (``SymbolNamer``)
    3. Register each type once, dependencies first (``TypeRegistry``)
    4. Translate each construct into its type shapes (``ShapeTranslator``)
    5. Materialize Object instances from instance data (``InstanceMaterializer``)

Primary Class:
    YangToOpcuaTransformer: Main transformer class

Example:
-------
    >>> from yang_to_opcua.models.loader import load_schema
    >>> from yang_to_opcua.transform import YangToOpcuaTransformer
    >>>
    >>> schema = load_schema(Path("example.yaml"))
    >>> document = YangToOpcuaTransformer().transform(schema)
    >>> print(f"ObjectTypes: {len(document.object_types)}")


"""

from yang_to_opcua.transform.errors import (
    InvalidSymbolicNameError,
    MultipleInheritanceError,
    TranslationError,
    UnknownPrimitiveTypeError,
    UnsupportedConstructError,
)
from yang_to_opcua.transform.transformer import YangToOpcuaTransformer

__all__ = [
    "InvalidSymbolicNameError",
    "MultipleInheritanceError",
    "TranslationError",
    "UnknownPrimitiveTypeError",
    "UnsupportedConstructError",
    "YangToOpcuaTransformer",
]
