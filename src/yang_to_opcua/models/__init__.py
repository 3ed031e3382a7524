"""Pydantic models for the resolved schema file format.

These models validate the YAML/JSON description of YANG modules before the
resolver turns them into the read-only schema tree. File loading lives in
:mod:`yang_to_opcua.models.loader`.

Example:
-------
    >>> from yang_to_opcua.models.loader import load_schema
    >>> context = load_schema(Path("example.yaml"))
    >>> print([m.name for m in context.modules])

Model Hierarchy:
    SchemaDocument (root)
    └── ModuleModel - name, namespace, prefix
        └── Statement - container, list, leaf, leaf-list, choice, case,
            typedef, identity, or any other keyword

"""

from yang_to_opcua.models.common import (
    BUILTIN_TYPE_NAMES,
    Identifier,
    PrefixedIdentifier,
    split_prefixed_name,
)
from yang_to_opcua.models.statements import (
    CaseStatement,
    ChoiceStatement,
    ContainerStatement,
    EnumModel,
    IdentityStatement,
    LeafListStatement,
    LeafStatement,
    ListStatement,
    ModuleModel,
    OtherStatement,
    SchemaDocument,
    Statement,
    TypedefStatement,
    TypeModel,
)

__all__ = [
    # Common
    "BUILTIN_TYPE_NAMES",
    "Identifier",
    "PrefixedIdentifier",
    "split_prefixed_name",
    # Statements
    "CaseStatement",
    "ChoiceStatement",
    "ContainerStatement",
    "EnumModel",
    "IdentityStatement",
    "LeafListStatement",
    "LeafStatement",
    "ListStatement",
    "ModuleModel",
    "OtherStatement",
    "SchemaDocument",
    "Statement",
    "TypedefStatement",
    "TypeModel",
]
