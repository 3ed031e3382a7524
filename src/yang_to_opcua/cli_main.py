"""Command-line interface for the yang-to-opcua translator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from yang_to_opcua import __version__
from yang_to_opcua.cli.error_formatter import ErrorFormatter, ErrorTable, ErrorTree
from yang_to_opcua.cli.exception_handler import handle_exceptions
from yang_to_opcua.config import DEFAULT_DESIGN_NAME, TranslatorConfig
from yang_to_opcua.converters.modeldesign_reader import ModelDesignReader, ModelDesignSummary
from yang_to_opcua.converters.xml_writer import ModelDesignWriter
from yang_to_opcua.models.loader import (
    load_instance_data,
    load_schema,
    load_schema_document,
    validate_schema_file,
)
from yang_to_opcua.models.statements import SchemaDocument
from yang_to_opcua.transform.errors import TranslationError
from yang_to_opcua.transform.transformer import YangToOpcuaTransformer
from yang_to_opcua.validation.validator import DocumentValidator

app = typer.Typer(
    name="yang-to-opcua",
    help="Translate YANG schemas into OPC UA ModelDesign XML.",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True, style="bold red")

OUTPUT_FORMATS = ("text", "table", "tree")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"yang-to-opcua version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Translate resolved YANG schemas into OPC UA ModelDesign files.

    Schemas are YAML/JSON documents of YANG modules. Optional RFC 7951
    instance data adds Object instances to the generated design.
    """


@app.command()
def validate(
    schema_file: Annotated[
        Path,
        typer.Argument(
            help="Schema file (YAML/JSON) to validate.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    data_file: Annotated[
        Path | None,
        typer.Option(
            "--data",
            "-d",
            help="RFC 7951 instance data file to check against the schema.",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only output errors, no success messages."),
    ] = False,
    show_summary: Annotated[
        bool,
        typer.Option("--summary", "-s", help="Show summary of the schema contents."),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format for document issues: text, table, tree.",
        ),
    ] = "text",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show translation log and issue context."),
    ] = False,
) -> None:
    """Validate a schema file and the document it translates to.

    Loads and resolves the schema, decodes the instance data if given,
    translates both and checks the generated document.

    Examples
    --------
        yang-to-opcua validate system.yaml
        yang-to-opcua validate system.yaml --data system-data.json
        yang-to-opcua validate system.yaml --summary
        yang-to-opcua validate system.yaml --format table

    """
    _configure_logging(verbose)

    if output_format not in OUTPUT_FORMATS:
        error_console.print(
            f"\n[bold red]✗ Unknown format: {output_format}[/bold red]\n"
            f"Supported: {', '.join(OUTPUT_FORMATS)}"
        )
        raise typer.Exit(code=1)

    errors = validate_schema_file(schema_file, data_file)

    if errors:
        error_console.print(f"\n[bold red]✗ Validation failed for {schema_file.name}[/bold red]\n")

        table = Table(title="Validation Errors", show_header=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Location", style="cyan")
        table.add_column("Error", style="red")

        for i, error in enumerate(errors, 1):
            loc, msg = error.split(": ", 1) if ": " in error else ("", error)
            table.add_row(str(i), escape(loc), escape(msg))

        console.print(table)
        raise typer.Exit(code=1)

    schema = load_schema(schema_file)
    data = load_instance_data(data_file, schema) if data_file is not None else None

    try:
        document = YangToOpcuaTransformer().transform(schema, data)
    except TranslationError as e:
        error_console.print(f"\n[bold red]✗ Translation failed: {escape(str(e))}[/bold red]\n")
        raise typer.Exit(code=1) from None

    result = DocumentValidator().validate(document)

    if not result.is_valid or result.warnings:
        if output_format == "table":
            ErrorTable(error_console).print_result(result)
        elif output_format == "tree":
            ErrorTree(error_console).print_result(result)
        else:
            ErrorFormatter(error_console, show_context=verbose).format_validation_result(
                result, schema_file
            )

        if not result.is_valid:
            raise typer.Exit(code=1)

    if not quiet:
        if result.warnings:
            console.print(
                f"\n[bold yellow]⚠ {schema_file.name} is valid with warnings[/bold yellow]\n"
            )
        else:
            console.print(f"\n[bold green]✓ {schema_file.name} is valid[/bold green]\n")

        if show_summary:
            _print_schema_summary(load_schema_document(schema_file))
            _print_design_summary(ModelDesignSummary.from_document(document))


def _print_schema_summary(schema: SchemaDocument) -> None:
    """Print one row per module with its statement counts."""
    table = Table(title="Schema Summary")
    table.add_column("Module", style="cyan")
    table.add_column("Prefix")
    table.add_column("Namespace", style="dim")
    table.add_column("Statements")

    for module in schema.modules:
        counts = module.statement_counts()
        statements = ", ".join(f"{kind}: {count}" for kind, count in sorted(counts.items()))
        table.add_row(module.name, module.prefix, module.namespace, statements or "-")

    console.print(table)


def _print_design_summary(summary: ModelDesignSummary) -> None:
    """Print definition counts of a ModelDesign document."""
    table = Table(title="ModelDesign Contents", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Target Namespace", summary.target_namespace)
    for name, uri in summary.namespaces.items():
        table.add_row(f"Namespace: {name}", uri)

    table.add_row("", "")
    for kind, count in summary.counts.items():
        table.add_row(kind, str(count))
    table.add_row("Total", str(summary.total))

    console.print(table)


@app.command()
def convert(
    schema_file: Annotated[
        Path,
        typer.Argument(
            help="Schema file (YAML/JSON) to translate.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    data_file: Annotated[
        Path | None,
        typer.Option(
            "--data",
            "-d",
            help="RFC 7951 instance data file; adds Object instances.",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output XML path. Defaults to <design-name>.xml next to the schema.",
            dir_okay=False,
            writable=True,
            resolve_path=True,
        ),
    ] = None,
    design_name: Annotated[
        str,
        typer.Option("--design-name", "-n", help="Name of the generated design."),
    ] = DEFAULT_DESIGN_NAME,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite output file if it exists."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Translate and validate without writing output."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Show detailed translation progress."),
    ] = False,
) -> None:
    """Translate a schema (and optional instance data) to ModelDesign XML.

    Examples
    --------
        yang-to-opcua convert system.yaml
        yang-to-opcua convert system.yaml --data system-data.json
        yang-to-opcua convert system.yaml -o build/system.xml --force
        yang-to-opcua convert system.yaml --design-name systemModel --dry-run

    """
    _configure_logging(verbose)
    handle_exceptions(verbose)(_run_convert)(
        schema_file, data_file, output, design_name, force, dry_run, verbose
    )


def _run_convert(
    schema_file: Path,
    data_file: Path | None,
    output: Path | None,
    design_name: str,
    force: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    from rich.progress import Progress, SpinnerColumn, TextColumn

    config = TranslatorConfig(design_name=design_name)

    if output is None:
        output = schema_file.parent / f"{config.design_name}.xml"

    if output.exists() and not force and not dry_run:
        error_console.print(
            f"\n[bold red]✗ Output file already exists: {output}[/bold red]\n"
            "Use --force to overwrite."
        )
        raise typer.Exit(code=1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task("Loading schema...", total=None)
        schema = load_schema(schema_file)
        progress.update(task, description="[green]✓ Schema loaded[/green]")

        if verbose:
            console.print(f"  [dim]Modules: {', '.join(m.name for m in schema.modules)}[/dim]")

        data = None
        if data_file is not None:
            task = progress.add_task("Decoding instance data...", total=None)
            data = load_instance_data(data_file, schema)
            progress.update(task, description="[green]✓ Instance data decoded[/green]")

        task = progress.add_task("Translating...", total=None)
        document = YangToOpcuaTransformer(config).transform(schema, data)
        progress.update(task, description="[green]✓ Translated[/green]")

        task = progress.add_task("Checking document...", total=None)
        DocumentValidator().validate_and_raise(document)
        progress.update(task, description="[green]✓ Checked[/green]")

        if verbose:
            _print_design_summary(ModelDesignSummary.from_document(document))

        writer = ModelDesignWriter()
        if dry_run:
            size = len(writer.write_bytes(document))
            console.print(f"\n[bold green]✓ Would write {size:,} bytes to {output}[/bold green]\n")
            return

        task = progress.add_task(f"Writing {output.name}...", total=None)
        writer.write(document, output)
        progress.update(task, description="[green]✓ Written[/green]")

    console.print(
        f"\n[bold green]✓ Wrote {len(document)} definitions to {output}[/bold green]\n"
    )


@app.command()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Schema file (YAML/JSON) or ModelDesign XML file to inspect.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display information about a schema or ModelDesign file.

    Examples
    --------
        yang-to-opcua info system.yaml
        yang-to-opcua info rootModel.xml

    """
    _configure_logging(False)
    handle_exceptions()(_show_info)(input_file)


def _show_info(input_file: Path) -> None:
    suffix = input_file.suffix.lower()

    if suffix in (".yaml", ".yml", ".json"):
        schema = load_schema_document(input_file)
        console.print(
            Panel.fit(f"[bold]YANG Schema[/bold]\nFile: {input_file}", title="File Info")
        )
        _print_schema_summary(schema)

    elif suffix == ".xml":
        summary = ModelDesignReader().read(input_file)
        console.print(
            Panel.fit(
                f"[bold]OPC UA ModelDesign[/bold]\n"
                f"File: {input_file}\n"
                f"Size: {input_file.stat().st_size:,} bytes",
                title="File Info",
            )
        )
        _print_design_summary(summary)

    else:
        error_console.print(
            f"\n[bold red]✗ Unknown file type: {suffix}[/bold red]\n"
            "Supported: .yaml, .yml, .json, .xml"
        )
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
