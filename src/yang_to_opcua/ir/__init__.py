"""Output model for the YANG to OPC UA translation.

The output model is an ordered, append-only document of ModelDesign
definitions:

1. DataTypes for typedefs and enumerations
2. ObjectTypes for identities, containers, lists, choices and cases
3. VariableTypes for leaves and leaf-lists
4. ReferenceTypes linking list elements to their list
5. Object instances materialized from instance data
"""

from yang_to_opcua.ir.document import (
    DuplicateDefinitionError,
    ModelDocument,
    TypeReference,
    type_references,
)
from yang_to_opcua.ir.types import (
    OPC_UA_BASE_URI,
    UA_TYPES_URI,
    AccessLevel,
    DataTypeDesign,
    DefaultValue,
    Definition,
    Field,
    Member,
    Namespace,
    NodeDesign,
    ObjectDesign,
    ObjectMember,
    ObjectTypeDesign,
    Reference,
    ReferenceTypeDesign,
    SymbolicName,
    ValueRank,
    VariableMember,
    VariableTypeDesign,
    opcua_ref,
)

__all__ = [
    # Names
    "OPC_UA_BASE_URI",
    "UA_TYPES_URI",
    "SymbolicName",
    "opcua_ref",
    # Members
    "AccessLevel",
    "DefaultValue",
    "Field",
    "Member",
    "ObjectMember",
    "Reference",
    "ValueRank",
    "VariableMember",
    # Definitions
    "DataTypeDesign",
    "Definition",
    "NodeDesign",
    "ObjectDesign",
    "ObjectTypeDesign",
    "ReferenceTypeDesign",
    "VariableTypeDesign",
    # Document
    "DuplicateDefinitionError",
    "ModelDocument",
    "Namespace",
    "TypeReference",
    "type_references",
]
