"""Read ModelDesign XML files back into a summary.

Used by the ``info`` command and by tests to inspect written files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from lxml import etree

from yang_to_opcua.converters.xml_writer import DEFINITION_ELEMENTS, MODEL_DESIGN_URI
from yang_to_opcua.ir.document import ModelDocument

DEFINITION_KINDS = tuple(DEFINITION_ELEMENTS.values())


class ModelDesignReadError(Exception):
    """A file is not a readable ModelDesign document."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize ModelDesignReadError."""
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


@dataclass
class ModelDesignSummary:
    """Normalized summary of a ModelDesign document.

    Attributes
    ----------
        target_namespace: Target namespace URI.
        namespaces: Declared namespaces (name -> URI), in order.
        counts: Number of definitions per element kind.
        symbolic_names: Local symbolic names of all definitions, in order.

    """

    target_namespace: str
    namespaces: dict[str, str] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=lambda: dict.fromkeys(DEFINITION_KINDS, 0))
    symbolic_names: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Total number of definitions."""
        return sum(self.counts.values())

    @classmethod
    def from_document(cls, document: ModelDocument) -> ModelDesignSummary:
        """Summarize an in-memory document."""
        summary = cls(
            target_namespace=document.target_namespace,
            namespaces={ns.name: ns.value for ns in document.namespaces},
        )
        for definition in document.definitions:
            summary.counts[DEFINITION_ELEMENTS[type(definition)]] += 1
            summary.symbolic_names.append(definition.symbolic_name.name)
        return summary


class ModelDesignReader:
    """Read and summarize ModelDesign XML files."""

    def read(self, path: Path) -> ModelDesignSummary:
        """Read a ModelDesign file.

        Raises
        ------
            ModelDesignReadError: If the file is missing, not XML, or not a
                ModelDesign document.

        """
        if not path.is_file():
            raise ModelDesignReadError("File not found", path)
        try:
            tree = etree.parse(str(path))
        except etree.XMLSyntaxError as e:
            raise ModelDesignReadError(f"XML parsing error: {e}", path) from e
        return self.read_element(tree.getroot(), path)

    def read_bytes(self, data: bytes) -> ModelDesignSummary:
        """Read a ModelDesign document from bytes."""
        try:
            root = etree.fromstring(data)
        except etree.XMLSyntaxError as e:
            raise ModelDesignReadError(f"XML parsing error: {e}") from e
        return self.read_element(root)

    def read_element(
        self, root: etree._Element, path: Path | None = None
    ) -> ModelDesignSummary:
        """Summarize a parsed ``ModelDesign`` root element."""
        if root.tag != f"{{{MODEL_DESIGN_URI}}}ModelDesign":
            raise ModelDesignReadError(
                f"Expected ModelDesign root element, got {etree.QName(root.tag).localname}",
                path,
            )

        summary = ModelDesignSummary(target_namespace=root.get("TargetNamespace", ""))
        for child in root:
            if not isinstance(child.tag, str):
                continue
            local = etree.QName(child.tag).localname
            if local == "Namespaces":
                for namespace in child:
                    if isinstance(namespace.tag, str):
                        summary.namespaces[namespace.get("Name", "")] = (namespace.text or "").strip()
            elif local in summary.counts:
                summary.counts[local] += 1
                symbolic_name = child.get("SymbolicName", "")
                summary.symbolic_names.append(symbolic_name.split(":", 1)[-1])
        return summary
