"""yang-to-opcua: Translator from YANG schemas to OPC UA ModelDesign XML.

This package provides tools for:
- Loading and resolving YANG schemas serialized as YAML/JSON
- Decoding RFC 7951 instance data against a resolved schema
- Translating both into an ordered OPC UA information model
- Writing the model as ModelDesign XML for the OPC Foundation ModelCompiler

Quick Start:
    >>> from pathlib import Path
    >>> from yang_to_opcua.models.loader import load_schema
    >>> from yang_to_opcua.transform import YangToOpcuaTransformer
    >>> from yang_to_opcua.converters import ModelDesignWriter
    >>>
    >>> schema = load_schema(Path("system.yaml"))
    >>> document = YangToOpcuaTransformer().transform(schema)
    >>> ModelDesignWriter().write(document, Path("rootModel.xml"))

Modules:
    models: Pydantic models for schema files, and file loaders
    schema: Resolved schema tree, resolver and instance data decoder
    ir: Output model document and definition types
    transform: Schema to model document translation
    validation: Checks on the generated document
    converters: ModelDesign XML writer and reader
    cli: Command-line interface helpers
"""

__version__ = "0.1.0"
