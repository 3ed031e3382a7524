"""Converters for writing and reading ModelDesign XML.

This package provides the final stage of the conversion pipeline:
rendering the output model document as ModelDesign XML, the input format of
the OPC Foundation ModelCompiler.

Primary Classes:
    ModelDesignWriter: Main class for writing ModelDesign files
    ModelDesignReader: Summarizes existing ModelDesign files

Example:
-------
    >>> from yang_to_opcua.converters import ModelDesignWriter
    >>> from yang_to_opcua.transform import YangToOpcuaTransformer
    >>>
    >>> # Assuming schema is a resolved SchemaContext
    >>> document = YangToOpcuaTransformer().transform(schema)
    >>>
    >>> # Write to a file
    >>> ModelDesignWriter().write(document, Path("rootModel.xml"))
    >>>
    >>> # Get bytes without writing to file
    >>> xml_bytes = ModelDesignWriter(pretty_print=False).write_bytes(document)


"""

from yang_to_opcua.converters.modeldesign_reader import (
    ModelDesignReader,
    ModelDesignReadError,
    ModelDesignSummary,
)
from yang_to_opcua.converters.xml_writer import (
    MODEL_DESIGN_URI,
    ModelDesignWriter,
    convert_yang_to_modeldesign,
)

__all__ = [
    "MODEL_DESIGN_URI",
    "ModelDesignReadError",
    "ModelDesignReader",
    "ModelDesignSummary",
    "ModelDesignWriter",
    "convert_yang_to_modeldesign",
]
