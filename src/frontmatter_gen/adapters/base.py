"""Base format adapter with the shared translation layer.

Every adapter parses a raw block with its backing library and translates
the library's native data into the value model, and the reverse for
emission. The translation is the same for all formats; adapters vary only
in how they call their library and in a few format-specific node types.

Pattern: Template Method - `parse` and `emit` define the skeleton, and
subclasses provide `load` and `dump`.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from frontmatter_gen.errors import (
    ConversionError,
    DepthLimitExceededError,
    InvalidFormatError,
    ParseError,
)
from frontmatter_gen.types import (
    Array,
    Boolean,
    Format,
    Frontmatter,
    Null,
    Number,
    Object,
    String,
    Tagged,
    Value,
)

logger = logging.getLogger(__name__)


class BaseFormatAdapter(ABC):
    """Base class for format adapters.

    Subclasses set `format` and implement `load` and `dump`. Hooks such as
    `native_null` and `native_tagged` cover values a format cannot express
    directly.
    """

    format: Format

    @abstractmethod
    def load(self, raw: str) -> Any:
        """Parse raw text into the library's native data.

        Raises:
            ParseError: If the library rejects the text.
        """
        ...

    @abstractmethod
    def dump(self, data: dict[str, Any]) -> str:
        """Serialize native data to text.

        Raises:
            ConversionError: If the library refuses the data.
        """
        ...

    def parse(self, raw: str) -> Frontmatter:
        """Parse a raw block into a Frontmatter mapping.

        Args:
            raw: Block text without delimiters.

        Returns:
            Parsed mapping.

        Raises:
            ParseError: If the block fails the format's grammar or is not a
                mapping.
            InvalidFormatError: If the block contains a cyclic reference.
            DepthLimitExceededError: If the library runs out of stack.
        """
        try:
            data = self.load(raw)
            return self.to_frontmatter(data)
        except RecursionError:
            raise DepthLimitExceededError(None, sys.getrecursionlimit()) from None

    def emit(self, frontmatter: Frontmatter) -> str:
        """Serialize a Frontmatter mapping to this format."""
        try:
            data = self.native_mapping(frontmatter)
        except RecursionError:
            raise ConversionError("value is nested too deeply to serialize") from None
        return self.dump(data)

    # ------------------------------------------------------------------
    # Native data -> value model
    # ------------------------------------------------------------------

    def to_frontmatter(self, data: Any) -> Frontmatter:
        """Translate the top-level native object into a Frontmatter."""
        if not isinstance(data, Mapping):
            raise ParseError(
                f"front matter is not a valid mapping (got {type(data).__name__})",
                format=self.format.value,
            )
        return self._to_mapping(data, set())

    def to_value(self, obj: Any, active: set[int]) -> Value:
        """Translate one native object into a Value.

        Args:
            obj: Native object produced by the backing library.
            active: ids of the containers on the current path, used to
                reject self-referencing structures.
        """
        if isinstance(obj, Mapping):
            return Object(self._to_mapping(obj, active))
        if isinstance(obj, (list, tuple)):
            self._enter(obj, active)
            try:
                items = tuple(self.to_value(item, active) for item in obj)
            finally:
                active.discard(id(obj))
            return Array(items)
        try:
            return Value.from_python(obj)
        except TypeError as e:
            raise ConversionError(str(e)) from e

    def _to_mapping(self, data: Mapping[Any, Any], active: set[int]) -> Frontmatter:
        self._enter(data, active)
        try:
            result = Frontmatter()
            for key, value in data.items():
                if not isinstance(key, str):
                    logger.warning(
                        "Non-string key %r ignored in %s front matter", key, self.format.value
                    )
                    continue
                result[key] = self.to_value(value, active)
            return result
        finally:
            active.discard(id(data))

    @staticmethod
    def _enter(container: Any, active: set[int]) -> None:
        if id(container) in active:
            raise InvalidFormatError("Invalid front matter: cyclic reference")
        active.add(id(container))

    # ------------------------------------------------------------------
    # Value model -> native data
    # ------------------------------------------------------------------

    def native_mapping(self, frontmatter: Frontmatter) -> dict[str, Any]:
        """Translate a Frontmatter into a plain dict for the library."""
        return {key: self.to_native(value) for key, value in frontmatter.items()}

    def to_native(self, value: Value) -> Any:
        """Translate a Value into native data. Whole numbers become int."""
        if isinstance(value, Null):
            return self.native_null()
        if isinstance(value, (String, Boolean, Number)):
            return value.to_python()
        if isinstance(value, Array):
            return [self.to_native(item) for item in value.items]
        if isinstance(value, Object):
            return self.native_mapping(value.fields)
        if isinstance(value, Tagged):
            return self.native_tagged(value.tag, self.to_native(value.value))
        raise ConversionError(f"unknown value type {type(value).__name__}")

    def native_null(self) -> Any:
        """Native form of Null."""
        return None

    def native_tagged(self, tag: str, native: Any) -> Any:
        """Native form of a Tagged value. Formats without tags drop the tag."""
        logger.debug("Dropping tag %s: %s has no type tags", tag, self.format.value)
        return native
