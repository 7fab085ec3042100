"""Pydantic configuration models for copypage."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

# Content container rendered by the docs theme
DEFAULT_CONTENT_SELECTOR = ".theme-doc-markdown.markdown"


class ContentConfig(BaseModel):
    """Configuration for locating and filtering the page content."""

    selector: str = Field(
        DEFAULT_CONTENT_SELECTOR,
        min_length=1,
        description="CSS selector of the content root element",
    )
    remove_selectors: list[str] = Field(
        default_factory=list,
        description="Extra CSS selectors to remove before conversion (extends defaults)",
    )
    unknown_tags: Literal["recurse", "skip"] = Field(
        "recurse",
        description="How to treat elements with no serialization rule",
    )

    model_config = {"extra": "forbid"}


class OutputConfig(BaseModel):
    """Configuration for the produced Markdown."""

    converter: Literal["rules", "html2text"] = Field(
        "rules",
        description="Conversion backend: built-in rule set or html2text",
    )
    include_title: bool = Field(True, description="Prepend a '# Title' line")
    base_url: Optional[str] = Field(
        None,
        description="Resolve relative link and image URLs against this URL",
    )

    model_config = {"extra": "forbid"}


class ClipboardConfig(BaseModel):
    """Configuration for the clipboard write and acknowledgment state."""

    acknowledge_seconds: float = Field(
        2.0,
        ge=0,
        description="How long the 'copied' state stays set after a copy",
    )
    timeout: float = Field(5.0, gt=0, description="Seconds to wait for a clipboard command")
    fallback: bool = Field(True, description="Fall back to the Tk clipboard if commands fail")

    model_config = {"extra": "forbid"}


class CopyPageConfig(BaseModel):
    """
    Root configuration model for copypage.

    Example:
        config = CopyPageConfig(
            content=ContentConfig(selector="article"),
            output=OutputConfig(include_title=False),
        )

    YAML format:
        content:
          selector: article
          remove_selectors:
            - .admonition-icon
        output:
          converter: rules
        clipboard:
          acknowledge_seconds: 2
    """

    content: ContentConfig = Field(default_factory=ContentConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    clipboard: ClipboardConfig = Field(default_factory=ClipboardConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "CopyPageConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "CopyPageConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text(encoding="utf-8"))
