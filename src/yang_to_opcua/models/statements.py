"""Models for the resolved schema file.

A schema file describes YANG modules after grouping expansion and augment
merging, as nested statements keyed by ``kind``:

Example:
-------
    ```yaml
    modules:
      - name: example-system
        namespace: urn:example:system
        prefix: sys
        statements:
          - kind: typedef
            name: percent
            type: uint8
          - kind: container
            name: system
            description: System parameters
            children:
              - kind: leaf
                name: load
                type: percent
    ```

"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    model_validator,
)

from yang_to_opcua.models.common import Identifier, NameList, PrefixedIdentifier

# Statement kinds with a dedicated model; everything else is an OtherStatement
DATA_STATEMENT_KINDS = frozenset(
    {"container", "list", "leaf", "leaf-list", "choice", "case", "typedef", "identity"}
)


class EnumModel(BaseModel):
    """A single ``enum`` of an enumeration type.

    Example:
    -------
        ```yaml
        - name: up
          value: 1
        ```

    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str, Field(min_length=1, description="Enum label")]
    value: Annotated[
        int | None,
        Field(
            default=None,
            description="Assigned value; defaults to the previous value + 1",
        ),
    ]
    description: Annotated[str | None, Field(default=None)]


def _coerce_type(value: Any) -> Any:
    """Accept a bare type name as shorthand for ``{name: ...}``."""
    if isinstance(value, str):
        return {"name": value}
    return value


class TypeModel(BaseModel):
    """Type of a leaf, leaf-list or typedef.

    ``name`` is either a YANG built-in type or a (possibly prefixed) typedef
    name. A bare string is accepted in place of the mapping.
    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[PrefixedIdentifier, Field(description="Built-in or typedef name")]
    enums: Annotated[
        list[EnumModel] | None,
        Field(default=None, description="Values of an enumeration"),
    ]
    description: Annotated[str | None, Field(default=None)]

    @model_validator(mode="after")
    def check_enums(self) -> TypeModel:
        """Enumerations need at least one enum."""
        if self.name == "enumeration" and not self.enums:
            raise ValueError("enumeration type requires at least one enum")
        return self


TypeRef = Annotated[TypeModel, BeforeValidator(_coerce_type)]


class _NamedStatement(BaseModel):
    """Fields shared by every named statement."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[Identifier, Field(description="Statement identifier")]
    description: Annotated[str | None, Field(default=None)]


class ContainerStatement(_NamedStatement):
    """A ``container`` statement."""

    kind: Literal["container"]
    children: Annotated[list[Statement], Field(default_factory=list)]


class ListStatement(_NamedStatement):
    """A ``list`` statement."""

    kind: Literal["list"]
    key: Annotated[NameList, Field(default_factory=list, description="Key leaf names")]
    children: Annotated[list[Statement], Field(default_factory=list)]


class LeafStatement(_NamedStatement):
    """A ``leaf`` statement."""

    kind: Literal["leaf"]
    type: TypeRef


class LeafListStatement(_NamedStatement):
    """A ``leaf-list`` statement."""

    kind: Literal["leaf-list"]
    type: TypeRef


class CaseStatement(_NamedStatement):
    """A ``case`` statement."""

    kind: Literal["case"] = "case"
    children: Annotated[list[Statement], Field(default_factory=list)]


class ChoiceStatement(_NamedStatement):
    """A ``choice`` statement.

    Entries of ``cases`` that are not ``case`` statements are short-hand
    cases, wrapped in an implicit case of the same name.
    """

    kind: Literal["choice"]
    cases: Annotated[list[Statement], Field(default_factory=list)]


class TypedefStatement(_NamedStatement):
    """A ``typedef`` statement."""

    kind: Literal["typedef"]
    type: TypeRef


class IdentityStatement(_NamedStatement):
    """An ``identity`` statement."""

    kind: Literal["identity"]
    bases: Annotated[
        list[PrefixedIdentifier],
        Field(default_factory=list, description="Base identities"),
    ]


class OtherStatement(BaseModel):
    """Any other YANG statement (``config``, ``uses``, ``rpc``, ...)."""

    model_config = ConfigDict(extra="forbid")

    kind: Annotated[str, Field(pattern=r"^[a-z][a-z0-9\-]*$", description="YANG keyword")]
    argument: Annotated[str | None, Field(default=None)]


def _statement_tag(value: Any) -> str:
    """Select the statement model from the ``kind`` key."""
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    return kind if kind in DATA_STATEMENT_KINDS else "other"


Statement = Annotated[
    Union[
        Annotated[ContainerStatement, Tag("container")],
        Annotated[ListStatement, Tag("list")],
        Annotated[LeafStatement, Tag("leaf")],
        Annotated[LeafListStatement, Tag("leaf-list")],
        Annotated[ChoiceStatement, Tag("choice")],
        Annotated[CaseStatement, Tag("case")],
        Annotated[TypedefStatement, Tag("typedef")],
        Annotated[IdentityStatement, Tag("identity")],
        Annotated[OtherStatement, Tag("other")],
    ],
    Discriminator(_statement_tag),
]


class ModuleModel(BaseModel):
    """A YANG module."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[Identifier, Field(description="Module name")]
    namespace: Annotated[str, Field(min_length=1, description="Module namespace URI")]
    prefix: Annotated[Identifier, Field(description="Module prefix")]
    description: Annotated[str | None, Field(default=None)]
    statements: Annotated[list[Statement], Field(default_factory=list)]

    def statement_counts(self) -> dict[str, int]:
        """Count statements per keyword, nested statements included."""
        counts: dict[str, int] = {}
        pending: list[Any] = list(self.statements)
        while pending:
            statement = pending.pop()
            counts[statement.kind] = counts.get(statement.kind, 0) + 1
            pending.extend(getattr(statement, "children", ()))
            pending.extend(getattr(statement, "cases", ()))
        return counts


class SchemaDocument(BaseModel):
    """Root model of a resolved schema file."""

    model_config = ConfigDict(extra="forbid")

    modules: Annotated[list[ModuleModel], Field(min_length=1)]

    @model_validator(mode="after")
    def check_unique_modules(self) -> SchemaDocument:
        """Module names and prefixes must be unique."""
        names = [m.name for m in self.modules]
        prefixes = [m.prefix for m in self.modules]
        if len(set(names)) != len(names):
            raise ValueError("duplicate module name")
        if len(set(prefixes)) != len(prefixes):
            raise ValueError("duplicate module prefix")
        return self


for _model in (
    ContainerStatement,
    ListStatement,
    CaseStatement,
    ChoiceStatement,
    ModuleModel,
    SchemaDocument,
):
    _model.model_rebuild()
