"""Tests for the document validators."""

from yang_to_opcua.ir.document import ModelDocument
from yang_to_opcua.ir.types import (
    DataTypeDesign,
    ObjectDesign,
    ObjectMember,
    ObjectTypeDesign,
    Reference,
    SymbolicName,
    VariableMember,
    VariableTypeDesign,
    opcua_ref,
)
from yang_to_opcua.validation.document_validators import (
    ForwardReferenceValidator,
    MissingDescriptionValidator,
    UniqueSymbolicNameValidator,
    UnresolvedReferenceValidator,
)
from yang_to_opcua.validation.errors import ErrorCodes, ValidationResult, ValidationSeverity

TARGET = "urn:yang-to-opcua:rootModel"


def _name(name: str) -> SymbolicName:
    return SymbolicName(TARGET, name)


def _object_type(name: str, **kwargs) -> ObjectTypeDesign:
    kwargs.setdefault("description", "An object type")
    return ObjectTypeDesign(symbolic_name=_name(name), browse_name=name, display_name=name, **kwargs)


def _variable(name: str, type_name: str) -> VariableMember:
    return VariableMember(
        symbolic_name=_name(name),
        browse_name=name,
        display_name=name,
        type_definition=_name(type_name),
    )


def _document(*definitions) -> ModelDocument:
    document = ModelDocument(target_namespace=TARGET)
    for definition in definitions:
        document.append(definition)
    return document


class TestUniqueSymbolicNameValidator:
    """Tests for UniqueSymbolicNameValidator."""

    def test_unique_names(self) -> None:
        """Should pass when names are unique."""
        result = ValidationResult()
        UniqueSymbolicNameValidator().validate(_document(_object_type("ns0__a")), result)

        assert result.is_valid

    def test_duplicate_definitions(self) -> None:
        """Should report definitions sharing a name."""
        document = ModelDocument(
            target_namespace=TARGET,
            definitions=[_object_type("ns0__a"), _object_type("ns0__a")],
        )
        result = ValidationResult()

        UniqueSymbolicNameValidator().validate(document, result)

        (issue,) = result.by_code(ErrorCodes.E100_DUPLICATE_SYMBOLIC_NAME)
        assert "defined 2 times" in issue.message

    def test_duplicate_members(self) -> None:
        """Should report members sharing a name below the same node."""
        leaf_type = VariableTypeDesign(
            symbolic_name=_name("ns0__t"), browse_name="t", display_name="t", description="T"
        )
        container = _object_type(
            "ns0__c",
            children=(_variable("ns0__x", "ns0__t"), _variable("ns0__x", "ns0__t")),
        )
        result = ValidationResult()

        UniqueSymbolicNameValidator().validate(_document(leaf_type, container), result)

        (issue,) = result.errors
        assert issue.location.path == "ns0__c.ns0__x"
        assert issue.location.position == 1

    def test_duplicate_nested_members(self) -> None:
        """Should check the children of object members."""
        nested = ObjectMember(
            symbolic_name=_name("ns0__inner"),
            browse_name="inner",
            display_name="inner",
            children=(_variable("ns0__x", "ns0__t"), _variable("ns0__x", "ns0__t")),
        )
        result = ValidationResult()

        UniqueSymbolicNameValidator().validate(
            _document(_object_type("ns0__c", children=(nested,))), result
        )

        assert result.errors[0].location.path == "ns0__c.ns0__inner.ns0__x"


class TestForwardReferenceValidator:
    """Tests for ForwardReferenceValidator."""

    def test_backward_reference(self) -> None:
        """Should accept references to earlier definitions."""
        document = _document(
            _object_type("ns0__base"),
            _object_type("ns0__derived", base_type=_name("ns0__base")),
        )
        result = ValidationResult()

        ForwardReferenceValidator().validate(document, result)

        assert result.issues == []

    def test_forward_reference(self) -> None:
        """Should report a base type defined later."""
        document = _document(
            _object_type("ns0__derived", base_type=_name("ns0__base")),
            _object_type("ns0__base"),
        )
        result = ValidationResult()

        ForwardReferenceValidator().validate(document, result)

        (issue,) = result.by_code(ErrorCodes.E001_FORWARD_REFERENCE)
        assert issue.location.path == "ns0__derived.BaseType"
        assert issue.context == {"target": "ns0__base"}
        assert "definition #1" in issue.message

    def test_builtin_ignored(self) -> None:
        """Should skip the built-in vocabulary."""
        result = ValidationResult()

        ForwardReferenceValidator().validate(
            _document(_object_type("ns0__a", base_type=opcua_ref("BaseObjectType"))), result
        )

        assert result.issues == []

    def test_instance_targets_ignored(self) -> None:
        """Should not treat reference targets of instances as types."""
        instance = ObjectDesign(
            symbolic_name=_name("ns0__eInstance0"),
            browse_name="e 0",
            display_name="e 0",
            references=(
                Reference(
                    reference_type=opcua_ref("HasComponent"),
                    target_id=_name("ns0__laterInstance_ns0__e"),
                    is_inverse=True,
                ),
            ),
        )
        result = ValidationResult()

        ForwardReferenceValidator().validate(_document(instance), result)
        UnresolvedReferenceValidator().validate(_document(instance), result)

        assert result.issues == []


class TestUnresolvedReferenceValidator:
    """Tests for UnresolvedReferenceValidator."""

    def test_unresolved_member_type(self) -> None:
        """Should report member types defined nowhere."""
        document = _document(_object_type("ns0__c", children=(_variable("ns0__x", "ns0__t"),)))
        result = ValidationResult()

        UnresolvedReferenceValidator().validate(document, result)

        (issue,) = result.by_code(ErrorCodes.E002_UNRESOLVED_REFERENCE)
        assert issue.location.path == "ns0__c.TypeDefinition"
        assert "'ns0__t' is not defined" in issue.message


class TestMissingDescriptionValidator:
    """Tests for MissingDescriptionValidator."""

    def test_missing_description(self) -> None:
        """Should warn about types without a description."""
        data_type = DataTypeDesign(
            symbolic_name=_name("ns0__d"),
            browse_name="d",
            display_name="d",
            base_type=opcua_ref("Byte"),
        )
        result = ValidationResult()

        MissingDescriptionValidator().validate(_document(data_type), result)

        (issue,) = result.issues
        assert issue.severity == ValidationSeverity.WARNING
        assert issue.code == ErrorCodes.W003_MISSING_DESCRIPTION
        assert issue.message == "DataTypeDesign has no description"
        assert result.is_valid

    def test_instances_not_checked(self) -> None:
        """Should only look at type definitions."""
        instance = ObjectDesign(
            symbolic_name=_name("ns0__aContainerInstance"), browse_name="a", display_name="a"
        )
        result = ValidationResult()

        MissingDescriptionValidator().validate(_document(instance), result)

        assert result.issues == []
