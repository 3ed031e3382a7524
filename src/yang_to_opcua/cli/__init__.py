"""CLI helpers for yang-to-opcua."""

from yang_to_opcua.cli.error_formatter import ErrorFormatter, ErrorTable, ErrorTree
from yang_to_opcua.cli.exception_handler import handle_exceptions
from yang_to_opcua.cli.pydantic_errors import (
    format_pydantic_location,
    get_suggestion_for_error,
    translate_pydantic_error,
)

__all__ = [
    "ErrorFormatter",
    "ErrorTable",
    "ErrorTree",
    "handle_exceptions",
    "format_pydantic_location",
    "get_suggestion_for_error",
    "translate_pydantic_error",
]
