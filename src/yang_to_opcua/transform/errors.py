"""Errors raised while translating a schema.

Every translation failure is fatal: the run stops and no document is
produced. Each error class carries a stable ``code`` for reporting.
"""

from __future__ import annotations


class TranslationError(Exception):
    """Base class for translation failures."""

    code = "T000"

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        """Initialize TranslationError.

        Args:
        ----
            message: Description of the failure.
            path: Schema path of the node being translated, if known.

        """
        self.message = message
        self.path = path
        super().__init__(f"[{self.code}] {message}")


class UnsupportedConstructError(TranslationError):
    """A statement or type kind has no translation."""

    code = "T001"


class InvalidSymbolicNameError(TranslationError):
    """A derived symbolic name is not a valid identifier."""

    code = "T002"


class MultipleInheritanceError(TranslationError):
    """An identity has more than one base identity."""

    code = "T003"


class UnknownPrimitiveTypeError(TranslationError):
    """A built-in type kind is missing from the primitive type table."""

    code = "T004"
