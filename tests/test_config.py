"""Tests for configuration models."""

import pytest
from copypage.models import (
    DEFAULT_CONTENT_SELECTOR,
    ClipboardConfig,
    ContentConfig,
    CopyPageConfig,
    OutputConfig,
)
from pydantic import ValidationError


class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        """Test the out-of-the-box configuration."""
        config = CopyPageConfig()

        assert config.content.selector == DEFAULT_CONTENT_SELECTOR == ".theme-doc-markdown.markdown"
        assert config.content.remove_selectors == []
        assert config.content.unknown_tags == "recurse"
        assert config.output.converter == "rules"
        assert config.output.include_title is True
        assert config.output.base_url is None
        assert config.clipboard.acknowledge_seconds == 2.0
        assert config.clipboard.fallback is True
        assert config.log_level == "INFO"


class TestValidation:
    """Tests for rejected configurations."""

    def test_extra_fields_forbidden(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ValidationError):
            CopyPageConfig(bogus=True)

    def test_negative_acknowledgment(self):
        """Test that the acknowledgment time cannot be negative."""
        with pytest.raises(ValidationError):
            ClipboardConfig(acknowledge_seconds=-1)

    def test_zero_timeout(self):
        """Test that the clipboard timeout must be positive."""
        with pytest.raises(ValidationError):
            ClipboardConfig(timeout=0)

    def test_unknown_tag_policy(self):
        """Test that only recurse/skip are accepted."""
        with pytest.raises(ValidationError):
            ContentConfig(unknown_tags="explode")

    def test_converter_choice(self):
        """Test that only known converters are accepted."""
        with pytest.raises(ValidationError):
            OutputConfig(converter="pandoc")

    def test_empty_selector(self):
        """Test that the content selector cannot be empty."""
        with pytest.raises(ValidationError):
            ContentConfig(selector="")


class TestYaml:
    """Tests for YAML loading and dumping."""

    def test_from_yaml(self):
        """Test loading nested sections from YAML."""
        config = CopyPageConfig.from_yaml(
            """
content:
  selector: article
  remove_selectors:
    - .admonition-icon
output:
  converter: html2text
  include_title: false
clipboard:
  acknowledge_seconds: 3
log_level: DEBUG
"""
        )

        assert config.content.selector == "article"
        assert config.content.remove_selectors == [".admonition-icon"]
        assert config.output.converter == "html2text"
        assert config.output.include_title is False
        assert config.clipboard.acknowledge_seconds == 3.0
        assert config.log_level == "DEBUG"

    def test_empty_yaml(self):
        """Test that an empty document gives the defaults."""
        assert CopyPageConfig.from_yaml("") == CopyPageConfig()

    def test_round_trip(self):
        """Test dumping and reloading a config."""
        config = CopyPageConfig(content=ContentConfig(selector="main"))

        dumped = config.to_yaml()

        assert "selector: main" in dumped
        assert CopyPageConfig.from_yaml(dumped) == config

    def test_from_yaml_file(self, tmp_path):
        """Test loading from a file."""
        path = tmp_path / "copypage.yaml"
        path.write_text("output:\n  base_url: https://docs.example.com\n")

        config = CopyPageConfig.from_yaml_file(path)

        assert config.output.base_url == "https://docs.example.com"
