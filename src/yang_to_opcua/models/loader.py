"""YAML/JSON file loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from yang_to_opcua.models.statements import SchemaDocument
from yang_to_opcua.schema.data import DataTree
from yang_to_opcua.schema.decoder import InstanceDataError, InstanceDecoder
from yang_to_opcua.schema.nodes import SchemaContext
from yang_to_opcua.schema.resolver import SchemaResolutionError, resolve_schema


class LoaderError(Exception):
    """Error during YAML/JSON file loading."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize LoaderError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON file and return the raw dictionary.

    JSON is a subset of YAML, so both go through ``yaml.safe_load``.

    Args:
    ----
        path: Path to the YAML or JSON file.

    Returns:
    -------
        Parsed dictionary from the file.

    Raises:
    ------
        LoaderError: If the file cannot be loaded or parsed.

    """
    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)

    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise LoaderError(
            f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json",
            path,
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoaderError(f"YAML parsing error: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e

    if data is None:
        raise LoaderError("File is empty", path)

    if not isinstance(data, dict):
        raise LoaderError(
            f"Expected dictionary at root level, got {type(data).__name__}",
            path,
        )

    return data


def load_schema_document(path: Path) -> SchemaDocument:
    """Load and validate a schema file without resolving it.

    Raises
    ------
        LoaderError: If the file cannot be loaded.
        ValidationError: If the file content is invalid.

    """
    return SchemaDocument.model_validate(load_yaml_file(path))


def load_schema(path: Path) -> SchemaContext:
    """Load, validate and resolve a schema file.

    Args:
    ----
        path: Path to the schema file.

    Returns:
    -------
        The resolved schema context.

    Raises:
    ------
        LoaderError: If the file cannot be loaded.
        ValidationError: If the file content is invalid.
        SchemaResolutionError: If a typedef, prefix or identity base
            cannot be resolved.

    """
    return resolve_schema(load_schema_document(path))


def load_instance_data(path: Path, context: SchemaContext) -> DataTree:
    """Load an RFC 7951 instance document and decode it against a schema.

    Raises
    ------
        LoaderError: If the file cannot be loaded.
        InstanceDataError: If the data does not match the schema.

    """
    return InstanceDecoder(context).decode(load_yaml_file(path))


def validate_schema_file(path: Path, data_path: Path | None = None) -> list[str]:
    """Validate a schema file (and optional data file), returning errors.

    This is a non-throwing version of load_schema, useful for validation
    CLI commands.

    Args:
    ----
        path: Path to the schema file.
        data_path: Optional path to an instance data file.

    Returns:
    -------
        List of error messages (empty if valid).

    """
    errors: list[str] = []

    try:
        data = load_yaml_file(path)
    except LoaderError as e:
        return [str(e)]

    try:
        document = SchemaDocument.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            errors.append(f"{loc}: {msg}")
        return errors

    try:
        context = resolve_schema(document)
    except SchemaResolutionError as e:
        return [str(e)]

    if data_path is not None:
        try:
            load_instance_data(data_path, context)
        except (LoaderError, InstanceDataError) as e:
            errors.append(str(e))

    return errors
