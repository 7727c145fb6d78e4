"""Parse options and site configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from frontmatter_gen.filesystem import validate_path_safety
from frontmatter_gen.validation import DEFAULT_REJECT_PATTERNS, MAX_KEYS, MAX_NESTING_DEPTH

__all__ = ["ConfigError", "ParseOptions", "SiteConfig"]

_LANGUAGE_CODE = re.compile(r"^[a-z]{2}-[A-Z]{2}$")


@dataclass(frozen=True)
class ParseOptions:
    """Per-call options for parsing and validation.

    Attributes:
        max_depth: Deepest allowed nesting of arrays and objects.
        max_keys: Largest allowed number of top-level keys.
        validate: Run the depth and key checks after parsing.
        check_input: Scan the whole document for reject patterns before
            extraction.
        reject_patterns: Regular expressions rejected by the input scan.
    """

    max_depth: int = MAX_NESTING_DEPTH
    max_keys: int = MAX_KEYS
    validate: bool = True
    check_input: bool = False
    reject_patterns: tuple[str, ...] = DEFAULT_REJECT_PATTERNS

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.max_keys < 1:
            raise ValueError("max_keys must be at least 1")


class ConfigError(ValueError):
    """Error loading or validating a site configuration."""

    pass


class SiteConfig(BaseModel):
    """Metadata and directory layout of a site built from frontmatter documents."""

    model_config = ConfigDict(extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    site_name: str
    site_title: str = "My Site"
    site_description: str = "A site built from Markdown and frontmatter"
    language: str = "en-GB"
    base_url: str = "http://localhost:8000"
    content_dir: Path = Path("content")
    output_dir: Path = Path("public")
    template_dir: Path = Path("templates")
    serve_dir: Path | None = None
    server_enabled: bool = False
    server_port: int = Field(default=8000, ge=0, le=65535)

    @field_validator("site_name")
    @classmethod
    def _check_site_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Site name cannot be empty")
        return value

    @field_validator("language")
    @classmethod
    def _check_language(cls, value: str) -> str:
        if not _LANGUAGE_CODE.match(value):
            raise ValueError(f"Invalid language code '{value}': must be in format 'xx-XX'")
        return value

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid URL format: {value}")
        return value

    @field_validator("content_dir", "output_dir", "template_dir", "serve_dir")
    @classmethod
    def _check_path(cls, value: Path | None) -> Path | None:
        if value is not None:
            validate_path_safety(value)
        return value

    @model_validator(mode="after")
    def _check_server(self) -> SiteConfig:
        if self.server_enabled and self.server_port < 1024:
            raise ValueError(f"Invalid port number: {self.server_port}")
        return self

    @property
    def active_port(self) -> int | None:
        """Port the development server listens on, or None if it is disabled."""
        return self.server_port if self.server_enabled else None

    def __str__(self) -> str:
        return (
            f"Site: {self.site_name} ({self.site_title})\n"
            f"Content: {self.content_dir}\n"
            f"Output: {self.output_dir}\n"
            f"Templates: {self.template_dir}"
        )

    @classmethod
    def from_file(cls, path: Path) -> SiteConfig:
        """Load a site configuration from a TOML file.

        Args:
            path: Path to the configuration file.

        Returns:
            Validated SiteConfig with a freshly generated id.

        Raises:
            ConfigError: If the file cannot be read, parsed, or validated.
        """
        from frontmatter_gen.engine import parse
        from frontmatter_gen.errors import FrontmatterError
        from frontmatter_gen.types import Format

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config file: {path}: {e}") from e

        try:
            data = parse(content, Format.TOML).to_python()
        except FrontmatterError as e:
            raise ConfigError(f"Failed to parse TOML configuration: {e}") from e

        data.pop("id", None)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e
