"""Format-specific parser/serializer pairs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from frontmatter_gen.errors import UnsupportedFormatError
from frontmatter_gen.types import Format, Frontmatter

from .base import BaseFormatAdapter
from .json_adapter import JsonAdapter
from .toml_adapter import TomlAdapter
from .yaml_adapter import YamlAdapter


@runtime_checkable
class FormatAdapter(Protocol):
    """Protocol defining the interface for format adapters.

    An adapter owns the translation between one backing format library and
    the value model. New formats can be added by registering another
    adapter without touching the engine.
    """

    format: Format

    def parse(self, raw: str) -> Frontmatter:
        """Parse a raw block into a Frontmatter mapping.

        Args:
            raw: Block text without delimiters.

        Returns:
            Parsed mapping.

        Raises:
            ParseError: If the block fails the format's grammar.
        """
        ...

    def emit(self, frontmatter: Frontmatter) -> str:
        """Serialize a Frontmatter mapping.

        Raises:
            ConversionError: If the mapping cannot be expressed in the format.
        """
        ...


__all__ = [
    "BaseFormatAdapter",
    "FormatAdapter",
    "JsonAdapter",
    "TomlAdapter",
    "YamlAdapter",
    "get_adapter",
]


ADAPTERS: dict[Format, type[BaseFormatAdapter]] = {
    Format.YAML: YamlAdapter,
    Format.TOML: TomlAdapter,
    Format.JSON: JsonAdapter,
}


def get_adapter(format: Format) -> FormatAdapter:
    """Get an adapter instance for a format.

    Args:
        format: Target format.

    Returns:
        Adapter instance.

    Raises:
        UnsupportedFormatError: If no adapter handles the format.
    """
    adapter_class = ADAPTERS.get(format)
    if adapter_class is None:
        raise UnsupportedFormatError()
    return adapter_class()
