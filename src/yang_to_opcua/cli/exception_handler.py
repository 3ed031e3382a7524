"""CLI exception handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from yang_to_opcua.cli.error_formatter import ErrorFormatter
from yang_to_opcua.cli.pydantic_errors import (
    format_pydantic_location,
    get_suggestion_for_error,
    translate_pydantic_error,
)
from yang_to_opcua.converters.modeldesign_reader import ModelDesignReadError
from yang_to_opcua.models.loader import LoaderError
from yang_to_opcua.schema.decoder import InstanceDataError
from yang_to_opcua.schema.resolver import SchemaResolutionError
from yang_to_opcua.transform.errors import TranslationError
from yang_to_opcua.validation.validator import DocumentValidationError

T = TypeVar("T")

console = Console(stderr=True)

# Errors whose message already says everything, with the panel title to use
_INPUT_ERRORS: tuple[tuple[type[Exception], str], ...] = (
    (LoaderError, "Cannot Load File"),
    (SchemaResolutionError, "Schema Resolution Failed"),
    (InstanceDataError, "Invalid Instance Data"),
    (TranslationError, "Translation Failed"),
    (ModelDesignReadError, "Invalid ModelDesign File"),
)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Report exceptions raised by a CLI command and exit with code 1.

    Args:
    ----
        verbose: Whether to show full tracebacks for unexpected errors.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except DocumentValidationError as e:
                ErrorFormatter(console).format_validation_result(e.result)
                raise typer.Exit(1) from None
            except PydanticValidationError as e:
                _handle_pydantic_error(e, verbose)
                raise typer.Exit(1) from None
            except FileNotFoundError as e:
                _print_panel(f"File not found: {e.filename or 'unknown'}", "Error")
                raise typer.Exit(1) from None
            except PermissionError as e:
                _print_panel(f"Permission denied: {e.filename or 'unknown'}", "Error")
                raise typer.Exit(1) from None
            except Exception as e:
                for error_type, title in _INPUT_ERRORS:
                    if isinstance(e, error_type):
                        _print_panel(str(e), title)
                        break
                else:
                    _handle_generic_error(e, verbose)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _print_panel(message: str, title: str) -> None:
    console.print(Panel(f"[red]{escape(message)}[/red]", title=title, border_style="red"))


def _handle_pydantic_error(error: PydanticValidationError, verbose: bool) -> None:
    console.print("[red bold]Schema Validation Failed[/red bold]")
    console.print()

    for err in error.errors():
        console.print(f"[red]✗[/red] {escape(format_pydantic_location(err['loc']))}")
        console.print(f"  {escape(translate_pydantic_error(err))}")
        console.print(f"  [dim]({err['type']})[/dim]")

        suggestion = get_suggestion_for_error(err)
        if suggestion:
            console.print(f"  [green]💡 {suggestion}[/green]")

        console.print()

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(str(error), markup=False)


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    _print_panel(f"An unexpected error occurred:\n{error}", "Error")

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc(), markup=False)
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
