"""Resolve a validated schema file into the read-only schema tree.

The resolver assigns every statement its qualified name and path, resolves
typedef references through the enclosing scopes and identity bases through
module prefixes. The result is a :class:`SchemaContext` that the translator
consumes without further lookups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from yang_to_opcua.models.common import BUILTIN_TYPE_NAMES, split_prefixed_name
from yang_to_opcua.models.statements import (
    CaseStatement,
    ChoiceStatement,
    ContainerStatement,
    EnumModel,
    IdentityStatement,
    LeafListStatement,
    LeafStatement,
    ListStatement,
    ModuleModel,
    OtherStatement,
    SchemaDocument,
    TypedefStatement,
    TypeModel,
)
from yang_to_opcua.schema.nodes import (
    CaseNode,
    ChoiceNode,
    ContainerNode,
    EnumValue,
    IdentityNode,
    LeafListNode,
    LeafNode,
    ListNode,
    Module,
    OpaqueStatement,
    QName,
    SchemaContext,
    SchemaNode,
    TypeDefinition,
    TypedefNode,
)

logger = logging.getLogger(__name__)


class SchemaResolutionError(ValueError):
    """A reference in the schema file cannot be resolved."""

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        """Initialize SchemaResolutionError.

        Args:
        ----
            message: What could not be resolved.
            path: Schema path of the statement holding the reference.

        """
        self.path = path
        location = "/" + "/".join(path) if path else ""
        super().__init__(f"{location}: {message}" if location else message)


@dataclass
class _Scope:
    """Typedefs visible at one level of the schema tree."""

    namespace: str
    parent: _Scope | None = None
    typedefs: dict[str, _TypedefEntry] = field(default_factory=dict)


@dataclass
class _TypedefEntry:
    """A typedef statement together with where it was declared."""

    statement: TypedefStatement
    namespace: str
    path: tuple[str, ...]
    scope: _Scope


class SchemaResolver:
    """Turn a :class:`SchemaDocument` into a :class:`SchemaContext`.

    Example:
    -------
        >>> resolver = SchemaResolver(document)
        >>> context = resolver.resolve()
        >>> [m.name for m in context.modules]
        ['example-system']

    """

    def __init__(self, document: SchemaDocument) -> None:
        """Initialize the resolver with a validated schema document."""
        self._document = document
        self._namespaces: dict[str, str] = {}
        for module in document.modules:
            self._namespaces[module.prefix] = module.namespace
            self._namespaces[module.name] = module.namespace
        self._module_scopes: dict[str, _Scope] = {}
        self._identities: set[QName] = set()
        self._typedef_types: dict[int, TypeDefinition] = {}
        self._resolving: set[int] = set()

    def resolve(self) -> SchemaContext:
        """Resolve all modules.

        Returns
        -------
            The resolved schema context.

        Raises
        ------
            SchemaResolutionError: If a typedef, prefix or identity base
                cannot be resolved, or typedefs refer to each other in a cycle.

        """
        for module in self._document.modules:
            self._module_scopes[module.namespace] = self._make_scope(
                module.statements, module.namespace, (), None
            )
            for statement in module.statements:
                if isinstance(statement, IdentityStatement):
                    self._identities.add(QName(module.namespace, statement.name))

        modules = [self._resolve_module(module) for module in self._document.modules]
        return SchemaContext.from_modules(modules)

    def _resolve_module(self, module: ModuleModel) -> Module:
        logger.debug("Resolving module %s", module.name)
        scope = self._module_scopes[module.namespace]
        statements = tuple(
            self._resolve_statement(statement, module.namespace, (), scope)
            for statement in module.statements
        )
        return Module(
            name=module.name,
            namespace=module.namespace,
            prefix=module.prefix,
            statements=statements,
            description=module.description,
        )

    def _make_scope(
        self,
        statements: list,
        namespace: str,
        path: tuple[str, ...],
        parent: _Scope | None,
    ) -> _Scope:
        scope = _Scope(namespace=namespace, parent=parent)
        for statement in statements:
            if not isinstance(statement, TypedefStatement):
                continue
            if statement.name in scope.typedefs:
                raise SchemaResolutionError(
                    f"duplicate typedef '{statement.name}'", path + (statement.name,)
                )
            scope.typedefs[statement.name] = _TypedefEntry(
                statement=statement,
                namespace=namespace,
                path=path + (statement.name,),
                scope=scope,
            )
        return scope

    def _resolve_statement(
        self,
        statement: object,
        namespace: str,
        parent_path: tuple[str, ...],
        scope: _Scope,
    ) -> SchemaNode:
        if isinstance(statement, OtherStatement):
            return OpaqueStatement(
                qname=QName(namespace, statement.kind),
                path=parent_path + (statement.kind,),
                keyword=statement.kind,
                argument=statement.argument,
            )

        path = parent_path + (statement.name,)
        qname = QName(namespace, statement.name)

        if isinstance(statement, ContainerStatement):
            return ContainerNode(
                qname=qname,
                path=path,
                description=statement.description,
                children=self._resolve_children(statement.children, namespace, path, scope),
            )

        if isinstance(statement, ListStatement):
            children = self._resolve_children(statement.children, namespace, path, scope)
            leaf_names = {c.name for c in children if isinstance(c, LeafNode)}
            for key in statement.key:
                if key not in leaf_names:
                    raise SchemaResolutionError(f"list key '{key}' is not a leaf", path)
            return ListNode(
                qname=qname,
                path=path,
                description=statement.description,
                children=children,
                keys=tuple(statement.key),
            )

        if isinstance(statement, LeafStatement):
            return LeafNode(
                qname=qname,
                path=path,
                description=statement.description,
                type=self._resolve_type(statement.type, namespace, path, scope),
            )

        if isinstance(statement, LeafListStatement):
            return LeafListNode(
                qname=qname,
                path=path,
                description=statement.description,
                type=self._resolve_type(statement.type, namespace, path, scope),
            )

        if isinstance(statement, ChoiceStatement):
            return ChoiceNode(
                qname=qname,
                path=path,
                description=statement.description,
                cases=self._resolve_cases(statement, namespace, path, scope),
            )

        if isinstance(statement, CaseStatement):
            return self._resolve_case(statement, namespace, path, scope)

        if isinstance(statement, TypedefStatement):
            entry = scope.typedefs[statement.name]
            return TypedefNode(
                qname=qname,
                path=path,
                description=statement.description,
                type=self._typedef_type(entry),
            )

        if isinstance(statement, IdentityStatement):
            return IdentityNode(
                qname=qname,
                path=path,
                description=statement.description,
                bases=tuple(self._identity_base(b, namespace, path) for b in statement.bases),
            )

        raise SchemaResolutionError(f"unexpected statement {type(statement).__name__}", path)

    def _resolve_children(
        self,
        children: list,
        namespace: str,
        path: tuple[str, ...],
        scope: _Scope,
    ) -> tuple[SchemaNode, ...]:
        child_scope = self._make_scope(children, namespace, path, scope)
        return tuple(
            self._resolve_statement(child, namespace, path, child_scope) for child in children
        )

    def _resolve_case(
        self,
        statement: CaseStatement,
        namespace: str,
        path: tuple[str, ...],
        scope: _Scope,
    ) -> CaseNode:
        return CaseNode(
            qname=QName(namespace, statement.name),
            path=path,
            description=statement.description,
            children=self._resolve_children(statement.children, namespace, path, scope),
        )

    def _resolve_cases(
        self,
        statement: ChoiceStatement,
        namespace: str,
        path: tuple[str, ...],
        scope: _Scope,
    ) -> tuple[CaseNode, ...]:
        cases: list[CaseNode] = []
        for entry in statement.cases:
            if isinstance(entry, OtherStatement):
                logger.debug("Ignoring '%s' in choice %s", entry.kind, "/".join(path))
                continue
            case_path = path + (entry.name,)
            if isinstance(entry, CaseStatement):
                cases.append(self._resolve_case(entry, namespace, case_path, scope))
                continue
            # Short-hand case: the entry is the only child of an implicit case
            cases.append(
                CaseNode(
                    qname=QName(namespace, entry.name),
                    path=case_path,
                    children=(self._resolve_statement(entry, namespace, case_path, scope),),
                )
            )
        return tuple(cases)

    def _namespace_for(self, prefix: str, path: tuple[str, ...]) -> str:
        try:
            return self._namespaces[prefix]
        except KeyError:
            raise SchemaResolutionError(f"unknown prefix '{prefix}'", path) from None

    def _lookup_typedef(
        self, name: str, scope: _Scope, path: tuple[str, ...]
    ) -> _TypedefEntry:
        prefix, local = split_prefixed_name(name)
        current: _Scope | None = scope
        if prefix is not None:
            namespace = self._namespace_for(prefix, path)
            if namespace != scope.namespace:
                current = self._module_scopes[namespace]

        while current is not None:
            if local in current.typedefs:
                return current.typedefs[local]
            current = current.parent
        raise SchemaResolutionError(f"unresolved typedef '{name}'", path)

    def _typedef_type(self, entry: _TypedefEntry) -> TypeDefinition:
        key = id(entry.statement)
        if key in self._typedef_types:
            return self._typedef_types[key]
        if key in self._resolving:
            raise SchemaResolutionError(
                f"typedef '{entry.statement.name}' refers to itself", entry.path
            )

        self._resolving.add(key)
        try:
            inner = self._resolve_type(
                entry.statement.type, entry.namespace, entry.path, entry.scope
            )
        finally:
            self._resolving.discard(key)

        resolved = TypeDefinition(
            qname=QName(entry.namespace, entry.statement.name),
            path=entry.path,
            kind=inner.kind,
            base=inner,
            enums=inner.enums,
            description=entry.statement.description,
        )
        self._typedef_types[key] = resolved
        return resolved

    def _resolve_type(
        self,
        model: TypeModel,
        namespace: str,
        owner_path: tuple[str, ...],
        scope: _Scope,
    ) -> TypeDefinition:
        prefix, local = split_prefixed_name(model.name)
        enums = self._resolve_enums(model.enums, owner_path) if model.enums else ()

        if prefix is None and local in BUILTIN_TYPE_NAMES:
            if enums and local != "enumeration":
                raise SchemaResolutionError(f"enums given for type '{local}'", owner_path)
            return TypeDefinition(
                qname=QName(namespace, local),
                path=owner_path + (local,),
                kind=local,
                enums=enums,
                description=model.description,
            )

        base = self._typedef_type(self._lookup_typedef(model.name, scope, owner_path))
        if not enums and model.description is None:
            return base
        if enums and base.kind != "enumeration":
            raise SchemaResolutionError(
                f"enums given for non-enumeration typedef '{model.name}'", owner_path
            )
        return TypeDefinition(
            qname=QName(namespace, local),
            path=owner_path + (local,),
            kind=base.kind,
            base=base,
            enums=enums or base.enums,
            description=model.description,
        )

    def _resolve_enums(
        self, models: list[EnumModel], path: tuple[str, ...]
    ) -> tuple[EnumValue, ...]:
        values: list[EnumValue] = []
        seen: set[str] = set()
        next_value = 0
        for model in models:
            if model.name in seen:
                raise SchemaResolutionError(f"duplicate enum '{model.name}'", path)
            seen.add(model.name)
            value = next_value if model.value is None else model.value
            next_value = max(next_value, value + 1)
            values.append(EnumValue(name=model.name, value=value, description=model.description))
        return tuple(values)

    def _identity_base(self, name: str, namespace: str, path: tuple[str, ...]) -> QName:
        prefix, local = split_prefixed_name(name)
        base_namespace = namespace if prefix is None else self._namespace_for(prefix, path)
        qname = QName(base_namespace, local)
        if qname not in self._identities:
            raise SchemaResolutionError(f"unresolved identity base '{name}'", path)
        return qname


def resolve_schema(document: SchemaDocument) -> SchemaContext:
    """Resolve a validated schema document.

    Args:
    ----
        document: The validated schema file model.

    Returns:
    -------
        The resolved schema context.

    Raises:
    ------
        SchemaResolutionError: If a reference cannot be resolved.

    """
    return SchemaResolver(document).resolve()
