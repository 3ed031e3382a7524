"""Main YANG to OPC UA ModelDesign transformer."""

from __future__ import annotations

import logging

from yang_to_opcua.config import TranslatorConfig
from yang_to_opcua.ir.document import ModelDocument
from yang_to_opcua.ir.types import OPC_UA_BASE_URI, UA_TYPES_URI, Namespace
from yang_to_opcua.schema.data import (
    ContainerData,
    DataNode,
    DataTree,
    LeafData,
    LeafListData,
    ListData,
    find_child,
)
from yang_to_opcua.schema.nodes import (
    ChoiceNode,
    ContainerNode,
    IdentityNode,
    LeafListNode,
    LeafNode,
    ListNode,
    Module,
    OpaqueStatement,
    SchemaContext,
    SchemaNode,
    TypedefNode,
)
from yang_to_opcua.transform.context import TranslationContext
from yang_to_opcua.transform.errors import UnsupportedConstructError
from yang_to_opcua.transform.naming import SymbolNamer
from yang_to_opcua.transform.registry import TypeFamily
from yang_to_opcua.transform.shapes import ShapeTranslator

logger = logging.getLogger(__name__)

# Module-level statements that carry no structure
MODULE_IGNORED_KEYWORDS = frozenset(
    {
        "namespace",
        "prefix",
        "import",
        "include",
        "organization",
        "contact",
        "description",
        "revision",
        "feature",
        "reference",
        "yang-version",
        "grouping",
        "augment",
        "extension",
        "deviation",
    }
)


def build_namespaces(config: TranslatorConfig) -> tuple[Namespace, ...]:
    """Build the namespace declarations of a generated document.

    The first declaration is the OPC UA base vocabulary, the second the
    generated design.
    """
    target = config.target_namespace
    return (
        Namespace(
            name="OpcUa",
            value=OPC_UA_BASE_URI,
            version="1.03",
            publication_date="2013-12-02T00:00:00Z",
            prefix="Opc.Ua",
            internal_prefix="Opc.Ua.Server",
            xml_namespace=UA_TYPES_URI,
            xml_prefix="OpcUa",
        ),
        Namespace(
            name=f"YangToOpcUa_{config.design_name}",
            value=target,
            version="0.1",
            publication_date=config.publication_timestamp,
            prefix=config.design_name,
            internal_prefix=config.design_name,
            xml_namespace=target,
            xml_prefix=config.design_name,
        ),
    )


class YangToOpcuaTransformer:
    """Transform a resolved YANG schema into a ModelDesign document.

    This is the main entry point of the translation. Modules are walked in
    declaration order, and so are the statements of each module, which
    makes the generated names reproducible.

    Usage:
        transformer = YangToOpcuaTransformer(TranslatorConfig(design_name="demo"))
        document = transformer.transform(schema, data)
    """

    def __init__(self, config: TranslatorConfig | None = None) -> None:
        """Initialize the transformer.

        Args:
        ----
            config: Translation settings; defaults are used when omitted.

        """
        self.config = config or TranslatorConfig()

    def transform(self, schema: SchemaContext, data: DataTree | None = None) -> ModelDocument:
        """Transform a schema (and optional instance data) into a document.

        Args:
        ----
            schema: The resolved schema.
            data: Decoded instance data; Object instances are emitted for it
                unless ``materialize_instances`` is off.

        Returns:
        -------
            The generated ModelDesign document.

        Raises:
        ------
            TranslationError: If any construct cannot be translated.

        """
        document = ModelDocument(
            target_namespace=self.config.target_namespace,
            namespaces=build_namespaces(self.config),
        )
        context = TranslationContext(
            schema=schema,
            document=document,
            namer=SymbolNamer(self.config.target_namespace),
        )
        shapes = ShapeTranslator(context)

        if not self.config.materialize_instances:
            data = None

        for module in schema.modules:
            logger.info("processing module %s", module.name)
            self._add_module(shapes, module, data)

        logger.debug(
            "Generated %d definitions (%d registered types)",
            len(document),
            len(context.registry),
        )
        return document

    def _add_module(self, shapes: ShapeTranslator, module: Module, data: DataTree | None) -> None:
        """Translate the top-level statements of a module."""
        data_children = data.children if data is not None else None

        for statement in module.statements:
            if isinstance(statement, OpaqueStatement):
                if statement.keyword in MODULE_IGNORED_KEYWORDS:
                    logger.debug("Ignoring '%s' in module %s", statement.keyword, module.name)
                    continue
                raise UnsupportedConstructError(
                    f"statement of type [{statement.keyword}] not supported", statement.path
                )

            if isinstance(statement, IdentityNode):
                shapes.translate_identity(statement)
            elif isinstance(statement, ContainerNode):
                self._add_container(shapes, statement, data_children)
            elif isinstance(statement, TypedefNode):
                shapes.translate_typedef(statement)
            elif isinstance(statement, LeafNode):
                shapes.leaf_type(statement)
                self._skip_data(statement, data_children, LeafData)
            elif isinstance(statement, LeafListNode):
                shapes.leaf_list_type(statement)
                self._skip_data(statement, data_children, LeafListData)
            elif isinstance(statement, ListNode):
                shapes.list_types(statement)
                self._skip_data(statement, data_children, ListData)
            elif isinstance(statement, ChoiceNode):
                shapes.choice_type(statement)
            else:
                raise UnsupportedConstructError(
                    f"statement of type [{type(statement).__name__}] not supported",
                    statement.path,
                )

    def _add_container(
        self,
        shapes: ShapeTranslator,
        container: ContainerNode,
        data_children: tuple[DataNode, ...] | None,
    ) -> None:
        """Register a top-level container, and its instance when data exists."""
        type_name = shapes.context.namer.name_for(container, "ContainerType")
        first_registration = not shapes.context.registry.is_registered(
            TypeFamily.OBJECT_TYPE, type_name
        )
        shapes.container_type(container)

        container_data = find_child(data_children, container.qname, ContainerData)
        if container_data is not None and first_registration:
            shapes.instances.container_instance(container, type_name, container_data)

    def _skip_data(
        self,
        node: SchemaNode,
        data_children: tuple[DataNode, ...] | None,
        data_class: type,
    ) -> None:
        if find_child(data_children, node.qname, data_class) is not None:
            logger.warning(
                "Skipping instance data of top-level %s; only containers are materialized",
                node.name,
            )
