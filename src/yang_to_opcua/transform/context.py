"""Mutable state of a single translation run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from yang_to_opcua.ir.document import ModelDocument
from yang_to_opcua.ir.types import Definition, SymbolicName
from yang_to_opcua.schema.nodes import SchemaContext
from yang_to_opcua.transform.naming import SymbolNamer
from yang_to_opcua.transform.registry import TypeRegistry

logger = logging.getLogger(__name__)


@dataclass
class TranslationContext:
    """Everything a translator may read or change during one run.

    Attributes
    ----------
        schema: The resolved schema being translated.
        document: The output document; definitions are only appended.
        namer: Symbolic name derivation and namespace prefixes.
        registry: Memoization tables of translated types.
        element_counters: Next element index per list symbolic name.

    """

    schema: SchemaContext
    document: ModelDocument
    namer: SymbolNamer
    registry: TypeRegistry = field(default_factory=TypeRegistry)
    element_counters: dict[SymbolicName, int] = field(default_factory=dict)

    def emit(self, definition: Definition) -> Definition:
        """Append a definition to the document and return it."""
        self.document.append(definition)
        logger.debug("Emitted %s %s", type(definition).__name__, definition.symbolic_name.name)
        return definition

    def next_element_index(self, list_name: SymbolicName) -> int:
        """Return the next element index of a list and advance its counter."""
        index = self.element_counters.get(list_name, 0)
        self.element_counters[list_name] = index + 1
        return index
