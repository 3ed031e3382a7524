"""Memoization of translated types."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from yang_to_opcua.ir.types import Definition, SymbolicName

logger = logging.getLogger(__name__)


class TypeFamily(Enum):
    """Independent tables of the registry."""

    IDENTITY = "identity"
    DATA_TYPE = "data type"
    OBJECT_TYPE = "object type"
    VARIABLE_TYPE = "variable type"
    REFERENCE_TYPE = "reference type"


class TypeRegistry:
    """Ensure every symbolic name is translated and emitted at most once.

    Registration is two-phase: the name is reserved before the build function
    runs, so recursive translations that reach the same name return early
    instead of emitting it twice.

    Example:
    -------
        >>> registry = TypeRegistry()
        >>> registry.get_or_register(TypeFamily.DATA_TYPE, name, build)
        >>> registry.get_or_register(TypeFamily.DATA_TYPE, name, build)  # build not called

    """

    def __init__(self) -> None:
        """Initialize empty tables."""
        self._tables: dict[TypeFamily, dict[SymbolicName, Definition | None]] = {
            family: {} for family in TypeFamily
        }

    def get_or_register(
        self,
        family: TypeFamily,
        name: SymbolicName,
        build_fn: Callable[[], Definition],
    ) -> SymbolicName:
        """Return ``name``, building its definition on first registration.

        Args:
        ----
            family: Table the name belongs to.
            name: Symbolic name of the definition.
            build_fn: Builds the definition and appends it to the document.
                Called at most once per name.

        Returns:
        -------
            The symbolic name.

        """
        table = self._tables[family]
        if name in table:
            return name

        logger.debug("Registering %s %s", family.value, name.name)
        table[name] = None
        table[name] = build_fn()
        return name

    def is_registered(self, family: TypeFamily, name: SymbolicName) -> bool:
        """Return True if the name is reserved or built."""
        return name in self._tables[family]

    def lookup(self, family: TypeFamily, name: SymbolicName) -> Definition | None:
        """Get the definition built for a name (None while only reserved)."""
        return self._tables[family].get(name)

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())
