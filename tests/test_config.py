"""Tests for configuration models."""

from pathlib import Path

import pytest
from blockdoc import ArticleSerializer
from blockdoc.models import BlockdocConfig, SerializeConfig
from pydantic import ValidationError

pytest.importorskip("yaml")


class TestSerializeConfig:
    """Tests for SerializeConfig."""

    def test_defaults(self):
        """Test default settings."""
        config = SerializeConfig()

        assert config.pretty_print is True
        assert config.indent == 4
        assert config.parser == "html.parser"

    def test_rejects_unknown_fields(self):
        """Test extra=forbid."""
        with pytest.raises(ValidationError):
            SerializeConfig(prettyprint=False)

    def test_rejects_negative_indent(self):
        """Test indent bounds."""
        with pytest.raises(ValidationError):
            SerializeConfig(indent=-1)

    def test_serializer_uses_config(self):
        """Test that the serializer picks up the config."""
        serializer = ArticleSerializer(SerializeConfig(pretty_print=False))

        assert serializer.config.pretty_print is False
        assert "\n" not in serializer.serialize("<p>x</p>")


class TestBlockdocConfig:
    """Tests for BlockdocConfig YAML handling."""

    def test_from_yaml(self):
        """Test loading from a YAML string."""
        config = BlockdocConfig.from_yaml(
            """
serialize:
  pretty_print: false
  indent: 2
log_level: DEBUG
"""
        )

        assert config.serialize.pretty_print is False
        assert config.serialize.indent == 2
        assert config.log_level == "DEBUG"

    def test_empty_yaml_gives_defaults(self):
        """Test an empty document."""
        assert BlockdocConfig.from_yaml("") == BlockdocConfig()

    def test_yaml_round_trip(self):
        """Test to_yaml / from_yaml."""
        config = BlockdocConfig(serialize=SerializeConfig(indent=8), log_file=Path("out.log"))

        assert BlockdocConfig.from_yaml(config.to_yaml()) == config

    def test_from_yaml_file(self, tmp_path):
        """Test loading from a file."""
        path = tmp_path / "blockdoc.yaml"
        path.write_text("log_level: ERROR\n", encoding="utf-8")

        assert BlockdocConfig.from_yaml_file(path).log_level == "ERROR"

    def test_invalid_log_level(self):
        """Test log level validation."""
        with pytest.raises(ValidationError):
            BlockdocConfig.from_yaml("log_level: LOUD\n")
