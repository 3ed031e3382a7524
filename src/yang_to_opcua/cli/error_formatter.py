"""Rich rendering of document validation results."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

if TYPE_CHECKING:
    from yang_to_opcua.validation.errors import ValidationIssue, ValidationResult


def _color(issue: ValidationIssue) -> str:
    return "red" if issue.severity.value == "error" else "yellow"


class ErrorFormatter:
    """Print validation issues one by one, errors before warnings."""

    def __init__(self, console: Console | None = None, show_context: bool = False) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.
            show_context: Also print the context values attached to issues.

        """
        self.console = console or Console(stderr=True)
        self.show_context = show_context

    def format_validation_result(
        self,
        result: ValidationResult,
        source_path: Path | None = None,
    ) -> None:
        """Print a validation result.

        Args:
        ----
            result: The validation result to format.
            source_path: Schema file the document was generated from.

        """
        if result.is_valid and not result.warnings:
            self.console.print("[green]✓ Validation passed[/green]")
            return

        error_count = len(result.errors)
        warning_count = len(result.warnings)

        self.console.print(self._build_summary(error_count, warning_count, source_path))
        self.console.print()

        for issue in result.errors + result.warnings:
            self._print_issue(issue)

        counts = []
        if error_count:
            counts.append(f"[red bold]✗ {error_count} error(s)[/red bold]")
        if warning_count:
            counts.append(f"[yellow]{warning_count} warning(s)[/yellow]")
        self.console.print(", ".join(counts))

    def _build_summary(self, errors: int, warnings: int, source_path: Path | None) -> Panel:
        title = "Validation Failed" if errors else "Validation Warnings"
        style = "red" if errors else "yellow"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")
        if errors:
            content.append(f"Errors: {errors}", style="red bold")
        if warnings:
            if errors:
                content.append("  ")
            content.append(f"Warnings: {warnings}", style="yellow")

        return Panel(content, title=title, border_style=style)

    def _print_issue(self, issue: ValidationIssue) -> None:
        color = _color(issue)
        self.console.print(
            f"[{color} bold]{issue.severity.value.upper()}[/{color} bold] "
            f"[{color}]\\[{issue.code}][/{color}] {escape(issue.message)}"
        )
        if issue.location:
            self.console.print(f"  [dim]at {issue.location}[/dim]")
        if self.show_context and issue.context:
            for key, value in sorted(issue.context.items()):
                self.console.print(f"  [dim]{key} = {value}[/dim]")
        if issue.suggestion:
            self.console.print(f"  [green]💡 {issue.suggestion}[/green]")
        self.console.print()


class ErrorTree:
    """Print validation issues as a tree grouped by code."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error tree formatter."""
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as tree."""
        tree = Tree("[bold]Validation Issues[/bold]")

        by_code: dict[str, list[ValidationIssue]] = {}
        for issue in result.issues:
            by_code.setdefault(issue.code, []).append(issue)

        for code, issues in sorted(by_code.items()):
            branch = tree.add(f"[cyan]{code}[/cyan] ({len(issues)} issues)")
            for issue in issues:
                color = _color(issue)
                location = f" [dim]({issue.location.path})[/dim]" if issue.location else ""
                branch.add(f"[{color}]{escape(issue.message)}[/{color}]{location}")

        self.console.print(tree)


class ErrorTable:
    """Print validation issues as a table."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error table formatter."""
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as table."""
        table = Table(title="Validation Issues")
        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Location", style="dim")
        table.add_column("Message")

        for issue in result.issues:
            color = _color(issue)
            table.add_row(
                issue.code,
                f"[{color}]{issue.severity.value.upper()}[/{color}]",
                str(issue.location) if issue.location else "-",
                escape(issue.message),
            )

        self.console.print(table)
