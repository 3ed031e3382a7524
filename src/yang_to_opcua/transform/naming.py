"""Symbolic and visible names for translated nodes."""

from __future__ import annotations

import unicodedata

from yang_to_opcua.ir.types import SymbolicName
from yang_to_opcua.schema.nodes import SchemaNode, TypeDefinition
from yang_to_opcua.transform.errors import InvalidSymbolicNameError

PATH_SEPARATOR = "___"


class SymbolNamer:
    """Derive globally unique symbolic names from schema nodes.

    A symbolic name is ``ns<k>__`` + the node path joined with ``___`` + a
    role suffix, with ``-`` replaced by ``__`` and ``.`` by ``_``. Namespace
    prefixes are numbered in the order namespaces are first seen, so the
    same traversal order always yields the same names.

    Example:
    -------
        >>> namer = SymbolNamer("urn:yang-to-opcua:rootModel")
        >>> namer.name_for(system_container, "ContainerType").name
        'ns0__systemContainerType'

    """

    def __init__(self, target_namespace: str) -> None:
        """Initialize the namer.

        Args:
        ----
            target_namespace: Namespace of every generated name.

        """
        self.target_namespace = target_namespace
        self._prefixes: dict[str, str] = {}
        # Generated name -> (namespace, path) of the node it was derived from
        self._owners: dict[str, tuple[str, tuple[str, ...]]] = {}

    def namespace_prefix(self, namespace: str) -> str:
        """Return the prefix of a namespace, allocating it on first use."""
        prefix = self._prefixes.get(namespace)
        if prefix is None:
            prefix = f"ns{len(self._prefixes)}__"
            self._prefixes[namespace] = prefix
        return prefix

    def name_for(self, node: SchemaNode | TypeDefinition, suffix: str = "") -> SymbolicName:
        """Derive the symbolic name of a node for a given role.

        Args:
        ----
            node: Schema node or type definition.
            suffix: Role suffix (``ContainerType``, ``DataType``, ...).

        Returns:
        -------
            The symbolic name in the target namespace.

        Raises:
        ------
            InvalidSymbolicNameError: If the result is not an identifier, or
                if the same name was already derived from another node.

        """
        raw = (
            self.namespace_prefix(node.qname.namespace)
            + PATH_SEPARATOR.join(node.path)
            + suffix
        )
        name = raw.replace("-", "__").replace(".", "_")
        if not is_identifier(name):
            raise InvalidSymbolicNameError(f"invalid name: {name}", node.path)

        owner = (node.qname.namespace, node.path)
        previous = self._owners.setdefault(name, owner)
        if previous != owner:
            raise InvalidSymbolicNameError(
                f"name {name} of {'/'.join(node.path)} clashes with "
                f"{'/'.join(previous[1])}",
                node.path,
            )
        return SymbolicName(self.target_namespace, name)

    @property
    def prefixes(self) -> dict[str, str]:
        """Allocated namespace prefixes, by namespace URI."""
        return dict(self._prefixes)


def is_identifier(name: str) -> bool:
    """Check that a name is an identifier (letter or ``_``, then word characters)."""
    if not name:
        return False
    first, rest = name[0], name[1:]
    if not (first.isalpha() or first == "_"):
        return False
    return all(c.isalnum() or c == "_" for c in rest)


def safe_text(text: str) -> str:
    """Normalize description text to plain single-line ASCII.

    Examples
    --------
        >>> safe_text("Café’s menu")
        "Cafe's menu"

    """
    text = text.replace("’", "'").replace("\n", " ").replace("\t", " ")
    text = unicodedata.normalize("NFD", text)
    return "".join(c for c in text if ord(c) < 128)


def describe(node: SchemaNode | TypeDefinition) -> str | None:
    """Return the normalized description of a node, if it has one."""
    return safe_text(node.description) if node.description is not None else None


def capitalize(name: str) -> str:
    """Upper-case the first character only."""
    return name[:1].upper() + name[1:]


def visible_names(
    node: SchemaNode | TypeDefinition,
    parent_browse_name: str | None = None,
    prefix: str = "",
    suffix: str = "",
) -> tuple[str, str]:
    """Build the browse name and display name of a node.

    Args:
    ----
        node: Schema node or type definition.
        parent_browse_name: Browse name of the enclosing instance, if any.
        prefix: Browse name prefix; the rest is capitalized after it.
        suffix: Browse name suffix.

    Returns:
    -------
        Tuple of (browse_name, display_name).

    """
    browse_name = node.qname.local_name + suffix
    if prefix.strip():
        browse_name = prefix + capitalize(browse_name)
    display_name = f"{parent_browse_name}/{browse_name}" if parent_browse_name else browse_name
    return browse_name, display_name
