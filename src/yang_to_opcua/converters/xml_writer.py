"""Write ModelDesign XML files.

The ModelDesign dialect is the input format of the OPC Foundation
ModelCompiler. Definitions are written in document order, which is the order
the ModelCompiler requires (every type is declared before it is used).
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

from lxml import etree

from yang_to_opcua.config import RESERVED_XML_PREFIXES, TranslatorConfig
from yang_to_opcua.ir.document import ModelDocument
from yang_to_opcua.ir.types import (
    OPC_UA_BASE_URI,
    UA_TYPES_URI,
    DataTypeDesign,
    DefaultValue,
    Definition,
    Field,
    Member,
    NodeDesign,
    ObjectDesign,
    ObjectMember,
    ObjectTypeDesign,
    Reference,
    ReferenceTypeDesign,
    SymbolicName,
    VariableMember,
    VariableTypeDesign,
)

MODEL_DESIGN_URI = "http://opcfoundation.org/UA/ModelDesign.xsd"
XSI_URI = "http://www.w3.org/2001/XMLSchema-instance"
XSD_URI = "http://www.w3.org/2001/XMLSchema"

# Element name per definition class
DEFINITION_ELEMENTS: dict[type, str] = {
    DataTypeDesign: "DataType",
    ObjectTypeDesign: "ObjectType",
    VariableTypeDesign: "VariableType",
    ReferenceTypeDesign: "ReferenceType",
    ObjectDesign: "Object",
}


def _opc(tag: str) -> str:
    return f"{{{MODEL_DESIGN_URI}}}{tag}"


class ModelDesignWriter:
    """Render a :class:`ModelDocument` as ModelDesign XML.

    Usage:
        writer = ModelDesignWriter()
        writer.write(document, Path("rootModel.xml"))

    Or for in-memory conversion:
        xml_bytes = writer.write_bytes(document)
    """

    def __init__(self, pretty_print: bool = True) -> None:
        """Initialize the writer.

        Args:
        ----
            pretty_print: Indent the XML output.

        """
        self._pretty_print = pretty_print
        self._prefixes: dict[str, str] = {}

    def write(self, document: ModelDocument, output_path: Path) -> None:
        """Write a document to a file.

        Args:
        ----
            document: The document to write.
            output_path: Output file path. Parent directories will be created.

        """
        xml_bytes = self.write_bytes(document)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "wb") as f:
            f.write(xml_bytes)

    def write_bytes(self, document: ModelDocument) -> bytes:
        """Render a document to UTF-8 XML bytes."""
        return etree.tostring(
            self.to_element(document),
            xml_declaration=True,
            encoding="utf-8",
            pretty_print=self._pretty_print,
        )

    def to_element(self, document: ModelDocument) -> etree._Element:
        """Build the ``ModelDesign`` root element of a document."""
        design_prefix = self._design_prefix(document)
        self._prefixes = {OPC_UA_BASE_URI: "ua", document.target_namespace: design_prefix}

        nsmap = {
            "opc": MODEL_DESIGN_URI,
            "ua": OPC_UA_BASE_URI,
            "uax": UA_TYPES_URI,
            "xsi": XSI_URI,
            "xsd": XSD_URI,
            design_prefix: document.target_namespace,
        }
        root = etree.Element(_opc("ModelDesign"), nsmap=nsmap)
        root.set("TargetNamespace", document.target_namespace)

        namespaces = etree.SubElement(root, _opc("Namespaces"))
        for namespace in document.namespaces:
            element = etree.SubElement(namespaces, _opc("Namespace"))
            attributes = {
                "Name": namespace.name,
                "Prefix": namespace.prefix,
                "InternalPrefix": namespace.internal_prefix,
                "XmlNamespace": namespace.xml_namespace,
                "XmlPrefix": namespace.xml_prefix,
                "Version": namespace.version,
                "PublicationDate": namespace.publication_date,
            }
            for key, value in attributes.items():
                if value is not None:
                    element.set(key, value)
            element.text = namespace.value

        for definition in document.definitions:
            root.append(self._definition(definition))

        return root

    def _design_prefix(self, document: ModelDocument) -> str:
        for namespace in document.namespaces:
            if namespace.value == document.target_namespace and namespace.xml_prefix:
                prefix = namespace.xml_prefix
                if prefix in RESERVED_XML_PREFIXES or prefix.lower().startswith("xml"):
                    break
                return prefix
        return "design"

    def _qname(self, name: SymbolicName) -> str:
        """Format a symbolic name as ``prefix:name``."""
        prefix = self._prefixes.get(name.namespace)
        if prefix is None:
            raise ValueError(f"no XML prefix for namespace {name.namespace}")
        return f"{prefix}:{name.name}"

    def _definition(self, definition: Definition) -> etree._Element:
        element = etree.Element(_opc(DEFINITION_ELEMENTS[type(definition)]))
        element.set("SymbolicName", self._qname(definition.symbolic_name))

        if isinstance(definition, (DataTypeDesign, ReferenceTypeDesign)):
            self._set_qname(element, "BaseType", definition.base_type)
        elif isinstance(definition, ObjectTypeDesign):
            self._set_qname(element, "BaseType", definition.base_type)
            if definition.is_abstract:
                element.set("IsAbstract", "true")
        elif isinstance(definition, VariableTypeDesign):
            self._set_qname(element, "BaseType", definition.base_type)
            self._set_qname(element, "DataType", definition.data_type)
            element.set("ValueRank", definition.value_rank.value)
        elif isinstance(definition, ObjectDesign):
            self._set_qname(element, "TypeDefinition", definition.type_definition)

        self._names(element, definition)

        if isinstance(definition, (ObjectTypeDesign, ObjectDesign)):
            self._children(element, definition.children)
        if isinstance(definition, ObjectDesign):
            self._references(element, definition.references)
        if isinstance(definition, DataTypeDesign) and definition.fields:
            self._fields(element, definition.fields)

        return element

    def _set_qname(self, element: etree._Element, key: str, name: SymbolicName | None) -> None:
        if name is not None:
            element.set(key, self._qname(name))

    def _names(self, element: etree._Element, node: NodeDesign) -> None:
        etree.SubElement(element, _opc("BrowseName")).text = node.browse_name
        display_name = etree.SubElement(element, _opc("DisplayName"))
        display_name.set("Key", node.display_name)
        display_name.text = node.display_name
        if node.description is not None:
            etree.SubElement(element, _opc("Description")).text = node.description

    def _children(self, element: etree._Element, members: tuple[Member, ...]) -> None:
        if not members:
            return
        children = etree.SubElement(element, _opc("Children"))
        for member in members:
            children.append(self._member(member))

    def _member(self, member: Member) -> etree._Element:
        if isinstance(member, VariableMember):
            element = etree.Element(_opc("Variable"))
            element.set("SymbolicName", self._qname(member.symbolic_name))
            self._set_qname(element, "TypeDefinition", member.type_definition)
            element.set("ValueRank", member.value_rank.value)
            if member.access_level is not None:
                element.set("AccessLevel", member.access_level.value)
            self._names(element, member)
            if member.default_value is not None:
                self._default_value(element, member.default_value)
            return element

        element = etree.Element(_opc("Object"))
        element.set("SymbolicName", self._qname(member.symbolic_name))
        self._set_qname(element, "TypeDefinition", member.type_definition)
        self._names(element, member)
        if isinstance(member, ObjectMember):
            self._children(element, member.children)
            self._references(element, member.references)
        return element

    def _references(self, element: etree._Element, references: tuple[Reference, ...]) -> None:
        if not references:
            return
        container = etree.SubElement(element, _opc("References"))
        for reference in references:
            item = etree.SubElement(container, _opc("Reference"))
            if reference.is_inverse:
                item.set("IsInverse", "true")
            etree.SubElement(item, _opc("ReferenceType")).text = self._qname(
                reference.reference_type
            )
            etree.SubElement(item, _opc("TargetId")).text = self._qname(reference.target_id)

    def _fields(self, element: etree._Element, fields: tuple[Field, ...]) -> None:
        container = etree.SubElement(element, _opc("Fields"))
        for field in fields:
            item = etree.SubElement(container, _opc("Field"))
            item.set("Name", field.name)
            if field.identifier is not None:
                item.set("Identifier", str(field.identifier))
            if field.description is not None:
                etree.SubElement(item, _opc("Description")).text = field.description

    def _default_value(self, element: etree._Element, default: DefaultValue) -> None:
        container = etree.SubElement(element, _opc("DefaultValue"))
        type_name = default.data_type.name
        if isinstance(default.value, tuple):
            array = etree.SubElement(container, f"{{{UA_TYPES_URI}}}ListOf{type_name}")
            for item in default.value:
                etree.SubElement(array, f"{{{UA_TYPES_URI}}}{type_name}").text = format_value(item)
        else:
            etree.SubElement(container, f"{{{UA_TYPES_URI}}}{type_name}").text = format_value(
                default.value
            )


def format_value(value: Any) -> str:
    """Format a decoded leaf value as XML text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def convert_yang_to_modeldesign(
    schema_path: Path,
    output_path: Path,
    data_path: Path | None = None,
    config: TranslatorConfig | None = None,
) -> ModelDocument:
    """Convert a schema file (and optional instance data) to a ModelDesign file.

    Convenience function for simple conversions.

    Args:
    ----
        schema_path: Input schema file path.
        output_path: Output ModelDesign XML file path.
        data_path: Optional RFC 7951 instance data file path.
        config: Translation settings.

    Returns:
    -------
        The generated document.

    Raises:
    ------
        LoaderError: If an input file cannot be loaded.
        pydantic.ValidationError: If the schema file is invalid.
        TranslationError: If the schema cannot be translated.

    """
    from yang_to_opcua.models.loader import load_instance_data, load_schema
    from yang_to_opcua.transform.transformer import YangToOpcuaTransformer

    schema = load_schema(schema_path)
    data = load_instance_data(data_path, schema) if data_path is not None else None

    document = YangToOpcuaTransformer(config).transform(schema, data)

    ModelDesignWriter().write(document, output_path)
    return document
