"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml
from yang_to_opcua.models.statements import SchemaDocument
from yang_to_opcua.schema.nodes import SchemaContext
from yang_to_opcua.schema.resolver import resolve_schema

SYSTEM_NAMESPACE = "urn:example:system"


def _module(statements: list[dict[str, Any]], **overrides: Any) -> dict[str, Any]:
    module = {
        "name": "example-system",
        "namespace": SYSTEM_NAMESPACE,
        "prefix": "sys",
        "statements": statements,
    }
    module.update(overrides)
    return module


@pytest.fixture
def make_schema() -> Callable[..., dict[str, Any]]:
    """Return a factory wrapping statements into a one-module schema dict."""

    def factory(statements: list[dict[str, Any]], **overrides: Any) -> dict[str, Any]:
        return {"modules": [_module(statements, **overrides)]}

    return factory


@pytest.fixture
def resolve() -> Callable[[dict[str, Any]], SchemaContext]:
    """Return a function validating and resolving a schema dict."""

    def factory(schema: dict[str, Any]) -> SchemaContext:
        return resolve_schema(SchemaDocument.model_validate(schema))

    return factory


@pytest.fixture
def system_schema() -> dict[str, Any]:
    """Return a schema using every translated statement kind."""
    return {
        "modules": [
            _module(
                [
                    {"kind": "yang-version", "argument": "1.1"},
                    {
                        "kind": "typedef",
                        "name": "percent",
                        "type": "uint8",
                        "description": "A percentage",
                    },
                    {
                        "kind": "identity",
                        "name": "interface-type",
                        "description": "Base interface type",
                    },
                    {
                        "kind": "identity",
                        "name": "ethernet",
                        "bases": ["sys:interface-type"],
                        "description": "Ethernet interface",
                    },
                    {
                        "kind": "container",
                        "name": "system",
                        "description": "System parameters",
                        "children": [
                            {
                                "kind": "leaf",
                                "name": "hostname",
                                "type": "string",
                                "description": "Host name",
                            },
                            {
                                "kind": "leaf",
                                "name": "load",
                                "type": "percent",
                                "description": "CPU load",
                            },
                            {
                                "kind": "leaf-list",
                                "name": "dns-server",
                                "type": "string",
                                "description": "DNS servers",
                            },
                            {
                                "kind": "list",
                                "name": "interface",
                                "key": "name",
                                "description": "Interfaces",
                                "children": [
                                    {
                                        "kind": "leaf",
                                        "name": "name",
                                        "type": "string",
                                        "description": "Interface name",
                                    },
                                    {
                                        "kind": "leaf",
                                        "name": "mtu",
                                        "type": "uint16",
                                        "description": "Maximum transmission unit",
                                    },
                                    {"kind": "config", "argument": "true"},
                                ],
                            },
                            {
                                "kind": "choice",
                                "name": "transport",
                                "description": "Transport protocol",
                                "cases": [
                                    {
                                        "kind": "case",
                                        "name": "tcp",
                                        "description": "TCP transport",
                                        "children": [
                                            {
                                                "kind": "leaf",
                                                "name": "port",
                                                "type": "uint16",
                                                "description": "TCP port",
                                            }
                                        ],
                                    },
                                    {
                                        "kind": "case",
                                        "name": "udp",
                                        "description": "UDP transport",
                                        "children": [
                                            {
                                                "kind": "leaf",
                                                "name": "udp-port",
                                                "type": "uint16",
                                                "description": "UDP port",
                                            }
                                        ],
                                    },
                                ],
                            },
                        ],
                    },
                ],
                description="Example system module",
            )
        ]
    }


@pytest.fixture
def system_data() -> dict[str, Any]:
    """Return RFC 7951 instance data for ``system_schema``."""
    return {
        "example-system:system": {
            "hostname": "router",
            "load": 42,
            "dns-server": ["10.0.0.1", "10.0.0.2"],
            "interface": [
                {"name": "eth0", "mtu": 1500},
                {"name": "eth1", "mtu": 9000},
            ],
            "port": 22,
        }
    }


@pytest.fixture
def schema_file(tmp_path: Path, system_schema: dict[str, Any]) -> Path:
    """Write ``system_schema`` as YAML and return its path."""
    path = tmp_path / "system.yaml"
    path.write_text(yaml.safe_dump(system_schema, sort_keys=False))
    return path


@pytest.fixture
def data_file(tmp_path: Path, system_data: dict[str, Any]) -> Path:
    """Write ``system_data`` as JSON and return its path."""
    path = tmp_path / "system-data.json"
    path.write_text(json.dumps(system_data))
    return path
