"""Tests for translator settings."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError
from yang_to_opcua.config import DEFAULT_DESIGN_NAME, TranslatorConfig


class TestTranslatorConfig:
    """Tests for TranslatorConfig."""

    def test_defaults(self) -> None:
        """Should derive the namespace from the default design name."""
        config = TranslatorConfig()

        assert config.design_name == DEFAULT_DESIGN_NAME
        assert config.target_namespace == "urn:yang-to-opcua:rootModel"
        assert config.materialize_instances is True

    def test_explicit_namespace(self) -> None:
        """Should prefer an explicit namespace URI."""
        config = TranslatorConfig(namespace_uri="http://example.com/system/")

        assert config.target_namespace == "http://example.com/system/"

    def test_publication_timestamp(self) -> None:
        """Should format the publication date as UTC."""
        config = TranslatorConfig(publication_date=datetime(2024, 1, 2, 3, 4, 5))

        assert config.publication_timestamp == "2024-01-02T03:04:05Z"

    def test_publication_date_converted_to_utc(self) -> None:
        """Should convert aware timestamps to UTC."""
        cest = timezone(timedelta(hours=2))
        config = TranslatorConfig(publication_date=datetime(2024, 6, 1, 12, 0, tzinfo=cest))

        assert config.publication_timestamp == "2024-06-01T10:00:00Z"

    def test_invalid_design_name(self) -> None:
        """Should reject design names that cannot be XML prefixes."""
        with pytest.raises(ValidationError):
            TranslatorConfig(design_name="my model")

    @pytest.mark.parametrize("name", ["ua", "opc", "uax", "xsi", "xsd", "xmlModel"])
    def test_reserved_design_name(self, name: str) -> None:
        """Should reject design names bound to the writer's fixed prefixes."""
        with pytest.raises(ValidationError, match="reserved XML prefix"):
            TranslatorConfig(design_name=name)

    def test_unknown_setting(self) -> None:
        """Should reject unknown settings."""
        with pytest.raises(ValidationError):
            TranslatorConfig(compression="zstd")

    def test_frozen(self) -> None:
        """Should not allow changing settings."""
        config = TranslatorConfig()

        with pytest.raises(ValidationError):
            config.design_name = "other"
