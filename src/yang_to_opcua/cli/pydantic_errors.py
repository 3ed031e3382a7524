"""Turn pydantic errors on schema files into readable messages."""

from __future__ import annotations

from pydantic_core import ErrorDetails

ERROR_MESSAGES: dict[str, str] = {
    "missing": "Required field is missing",
    "extra_forbidden": "Unknown field for this statement",
    "string_type": "Expected a string",
    "int_type": "Expected an integer",
    "list_type": "Expected a list",
    "dict_type": "Expected a mapping",
    "model_type": "Expected a mapping",
    "literal_error": "Unexpected statement keyword",
    "too_short": "At least one entry is required",
    "string_too_short": "Must not be empty",
    "value_error": "Invalid value",
}

SUGGESTIONS: dict[str, str] = {
    "missing": "Add the field to the statement",
    "extra_forbidden": "Remove the field or check its spelling",
    "string_pattern_mismatch": (
        "Identifiers start with a letter or '_' and contain only letters, "
        "digits, '_', '-' and '.'"
    ),
    "too_short": "Declare at least one module under 'modules'",
}


def translate_pydantic_error(error: ErrorDetails) -> str:
    """Return a short message for one pydantic error.

    Args:
    ----
        error: The pydantic error details.

    Returns:
    -------
        The message, falling back to pydantic's own text.

    """
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type == "string_pattern_mismatch":
        return f"Does not match pattern {ctx.get('pattern', '')}"
    if error_type == "literal_error":
        return f"Must be one of: {ctx.get('expected', 'unknown')}"
    if error_type == "value_error" and "error" in ctx:
        return str(ctx["error"])

    return ERROR_MESSAGES.get(error_type, error["msg"])


def format_pydantic_location(loc: tuple[str | int, ...]) -> str:
    """Format a pydantic location as ``modules[0].statements[2].name``."""
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            if parts:
                parts.append(".")
            parts.append(str(part))
    return "".join(parts)


def get_suggestion_for_error(error: ErrorDetails) -> str | None:
    """Return a fix hint for the error type, if there is one."""
    return SUGGESTIONS.get(error["type"])
