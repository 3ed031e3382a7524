"""Translator settings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DESIGN_NAME = "rootModel"

# XML prefixes bound by the ModelDesign writer
RESERVED_XML_PREFIXES = frozenset({"opc", "ua", "uax", "xsi", "xsd"})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


class TranslatorConfig(BaseModel):
    """Settings for one translation run.

    Attributes
    ----------
        design_name: Name of the generated design. Used as namespace suffix,
            XML prefix and default output file stem.
        namespace_uri: Target namespace URI; defaults to
            ``urn:yang-to-opcua:<design_name>``.
        publication_date: Publication timestamp of the generated namespace.
        materialize_instances: Emit Object instances from instance data.

    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    design_name: Annotated[
        str,
        Field(
            default=DEFAULT_DESIGN_NAME,
            pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
            description="Design name",
        ),
    ]
    namespace_uri: Annotated[
        str | None,
        Field(default=None, min_length=1, description="Target namespace URI"),
    ]
    publication_date: Annotated[
        datetime,
        Field(default_factory=_utc_now, description="Namespace publication date"),
    ]
    materialize_instances: Annotated[
        bool,
        Field(default=True, description="Emit Object instances from instance data"),
    ]

    @field_validator("design_name")
    @classmethod
    def check_design_name(cls, value: str) -> str:
        """Reject names that clash with the fixed XML prefixes."""
        if value in RESERVED_XML_PREFIXES or value.lower().startswith("xml"):
            raise ValueError(f"design name '{value}' is a reserved XML prefix")
        return value

    @field_validator("publication_date")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def target_namespace(self) -> str:
        """Target namespace URI of the generated design."""
        return self.namespace_uri or f"urn:yang-to-opcua:{self.design_name}"

    @property
    def publication_timestamp(self) -> str:
        """Publication date as ISO-8601 UTC text."""
        return self.publication_date.strftime("%Y-%m-%dT%H:%M:%SZ")
