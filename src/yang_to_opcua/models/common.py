"""Common types and validators for Pydantic models."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# YANG identifier (RFC 7950 section 6.2)
IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_.\-]*$"

# Identifier optionally qualified by a module prefix or module name
PREFIXED_IDENTIFIER_PATTERN = r"^([A-Za-z_][A-Za-z0-9_.\-]*:)?[A-Za-z_][A-Za-z0-9_.\-]*$"

# YANG built-in types (RFC 7950 section 4.2.4)
BUILTIN_TYPE_NAMES = frozenset(
    {
        "binary",
        "bits",
        "boolean",
        "decimal64",
        "empty",
        "enumeration",
        "identityref",
        "instance-identifier",
        "int8",
        "int16",
        "int32",
        "int64",
        "leafref",
        "string",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "union",
    }
)


def split_prefixed_name(value: str) -> tuple[str | None, str]:
    """Split ``prefix:name`` into its parts.

    Examples
    --------
        >>> split_prefixed_name("ex:percent")
        ('ex', 'percent')
        >>> split_prefixed_name("percent")
        (None, 'percent')

    """
    if ":" in value:
        prefix, name = value.split(":", 1)
        return prefix, name
    return None, value


def parse_name_list(value: Any) -> Any:
    """Accept a whitespace separated string where a list of names is expected.

    YANG writes list keys as ``key "name version";``, so both
    ``"name version"`` and ``["name", "version"]`` are accepted.
    """
    if isinstance(value, str):
        return value.split()
    return value


Identifier = Annotated[
    str,
    Field(pattern=IDENTIFIER_PATTERN, description="YANG identifier"),
]

PrefixedIdentifier = Annotated[
    str,
    Field(
        pattern=PREFIXED_IDENTIFIER_PATTERN,
        description="YANG identifier with optional prefix",
    ),
]

NameList = Annotated[list[str], BeforeValidator(parse_name_list)]
