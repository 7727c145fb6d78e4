"""Frontmatter engine: the single entry point for extraction and emission.

The engine wires the extractor, format detector, adapters and validator
together. Adapters are registered in a lookup table keyed by format, so new
formats can be added without modifying `extract`, `parse` or `emit`.

Pattern: Facade - callers see three operations and never touch the
extractor or adapters directly.
"""

from __future__ import annotations

import logging

from frontmatter_gen.adapters import ADAPTERS, FormatAdapter, get_adapter
from frontmatter_gen.config import ParseOptions
from frontmatter_gen.errors import (
    ConversionError,
    ExtractionError,
    UnsupportedFormatError,
)
from frontmatter_gen.extractor import YAML_DELIMITER, detect_format, extract_raw_frontmatter
from frontmatter_gen.types import Format, Frontmatter
from frontmatter_gen.validation import validate_frontmatter, validate_input

logger = logging.getLogger(__name__)

__all__ = ["FrontmatterEngine", "emit", "extract", "parse", "to_format"]


class FrontmatterEngine:
    """Extracts, parses and emits frontmatter.

    The engine holds no per-call state; limits travel with each call in a
    ParseOptions, so one instance can be shared freely.
    """

    def __init__(self) -> None:
        """Initialize the engine with the built-in adapters."""
        self._adapters: dict[Format, FormatAdapter] = {}
        for format in ADAPTERS:
            self.register_adapter(get_adapter(format))

    def register_adapter(self, adapter: FormatAdapter) -> None:
        """Register an adapter, replacing any adapter for the same format.

        Args:
            adapter: Adapter to register. Its `format` attribute selects the
                slot it fills.

        Raises:
            UnsupportedFormatError: If the adapter claims Format.UNSUPPORTED.
        """
        if adapter.format is Format.UNSUPPORTED:
            raise UnsupportedFormatError()
        self._adapters[adapter.format] = adapter

    def get_adapter(self, format: Format) -> FormatAdapter:
        """Get the adapter for a format.

        Raises:
            UnsupportedFormatError: If no adapter is registered for it.
        """
        adapter = self._adapters.get(format)
        if adapter is None:
            raise UnsupportedFormatError()
        return adapter

    def extract(
        self, content: str | bytes, options: ParseOptions | None = None
    ) -> tuple[Frontmatter, str]:
        """Extract and parse the frontmatter of a document.

        Args:
            content: Full document text. Bytes are decoded as UTF-8.
            options: Parse options; defaults apply when omitted.

        Returns:
            Tuple of (parsed frontmatter, residual document body).

        Raises:
            FrontmatterError: If any step fails.

        Example:
            >>> fm, body = FrontmatterEngine().extract("---\\ntitle: Hi\\n---\\nBody")
            >>> fm["title"].as_str(), body
            ('Hi', 'Body')
        """
        options = options or ParseOptions()
        text = self._decode(content)

        if options.check_input:
            validate_input(text, options.reject_patterns)

        raw_block, residual = extract_raw_frontmatter(text)
        format = detect_format(raw_block)
        logger.debug("Detected %s front matter", format.value)
        return self.parse(raw_block, format, options), residual

    def parse(
        self, raw: str, format: Format, options: ParseOptions | None = None
    ) -> Frontmatter:
        """Parse a raw block in a known format, skipping extraction.

        Args:
            raw: Block text without delimiters.
            format: Format of the block.
            options: Parse options; defaults apply when omitted.

        Returns:
            Parsed and, unless disabled, validated frontmatter.

        Raises:
            UnsupportedFormatError: If format is Format.UNSUPPORTED.
            ConversionError: If the block's shape contradicts the format.
            FrontmatterError: If parsing or validation fails.
        """
        options = options or ParseOptions()
        if format is Format.UNSUPPORTED:
            raise UnsupportedFormatError(line=1)

        raw = raw.strip()
        self._check_shape(raw, format)
        frontmatter = self.get_adapter(format).parse(raw)

        if options.validate:
            validate_frontmatter(frontmatter, options.max_depth, options.max_keys)
            logger.debug(
                "Validated %d keys (max_depth=%d, max_keys=%d)",
                len(frontmatter),
                options.max_depth,
                options.max_keys,
            )
        return frontmatter

    def emit(self, frontmatter: Frontmatter, format: Format) -> str:
        """Serialize frontmatter to a format. Never validates.

        Args:
            frontmatter: Mapping to serialize.
            format: Target format.

        Returns:
            Serialized text without delimiters.

        Raises:
            UnsupportedFormatError: If format is Format.UNSUPPORTED.
            ConversionError: If the mapping cannot be expressed in the format.
        """
        if format is Format.UNSUPPORTED:
            raise UnsupportedFormatError(line=1)
        return self.get_adapter(format).emit(frontmatter)

    to_format = emit

    @staticmethod
    def _decode(content: str | bytes) -> str:
        if isinstance(content, bytes):
            try:
                return content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ExtractionError(f"input is not valid UTF-8: {e}") from e
        if not isinstance(content, str):
            raise ExtractionError(f"expected text, got {type(content).__name__}")
        return content

    @staticmethod
    def _check_shape(raw: str, format: Format) -> None:
        """Reject blocks whose shape cannot belong to the requested format."""
        if format is Format.TOML and "=" not in raw:
            raise ConversionError("TOML front matter must contain key = value pairs")
        if format is Format.JSON and not raw.startswith("{"):
            raise ConversionError("JSON front matter must start with '{'")
        if format is Format.YAML and not raw.startswith(YAML_DELIMITER):
            # Delimiters are normally stripped by the extractor
            logger.debug("YAML front matter does not start with %s", YAML_DELIMITER)


_default_engine = FrontmatterEngine()


def extract(
    content: str | bytes, options: ParseOptions | None = None
) -> tuple[Frontmatter, str]:
    """Extract and parse frontmatter with the default engine."""
    return _default_engine.extract(content, options)


def parse(raw: str, format: Format, options: ParseOptions | None = None) -> Frontmatter:
    """Parse a raw block with the default engine."""
    return _default_engine.parse(raw, format, options)


def emit(frontmatter: Frontmatter, format: Format) -> str:
    """Serialize frontmatter with the default engine."""
    return _default_engine.emit(frontmatter, format)


to_format = emit
