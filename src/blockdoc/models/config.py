"""Pydantic configuration models for blockdoc."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class SerializeConfig(BaseModel):
    """Configuration for HTML parsing and JSON output."""

    pretty_print: bool = Field(True, description="Indent serialized JSON")
    indent: int = Field(4, ge=0, description="Indentation width for pretty JSON")
    parser: str = Field(
        "html.parser",
        description="BeautifulSoup tree builder (html.parser, lxml, html5lib)",
    )

    model_config = {"extra": "forbid"}


class BlockdocConfig(BaseModel):
    """
    Root configuration model for blockdoc.

    YAML format:
        serialize:
          pretty_print: false
          parser: lxml
        log_level: DEBUG
    """

    serialize: SerializeConfig = Field(default_factory=SerializeConfig)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "BlockdocConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "BlockdocConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text(encoding="utf-8"))
