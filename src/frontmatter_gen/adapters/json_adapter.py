"""JSON adapter backed by the standard library json module."""

from __future__ import annotations

import json
import logging
from typing import Any

from frontmatter_gen.adapters.base import BaseFormatAdapter
from frontmatter_gen.errors import ConversionError, ParseError
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

# Average printed width of a number
_NUMBER_SIZE = 8


def estimate_json_size(frontmatter: Frontmatter) -> int:
    """Estimate the length of the compact JSON form of a mapping."""
    size = 2  # {}
    for key, value in frontmatter.items():
        size += len(key) + 3  # "key":
        size += estimate_value_size(value)
        size += 1  # ,
    return size


def estimate_value_size(value: Value) -> int:
    """Estimate the length of the compact JSON form of a value."""
    if isinstance(value, Null):
        return 4
    if isinstance(value, String):
        return len(value.value) + 2
    if isinstance(value, Number):
        return _NUMBER_SIZE
    if isinstance(value, Boolean):
        return 5
    if isinstance(value, Array):
        return 2 + sum(estimate_value_size(item) for item in value.items)
    if isinstance(value, Object):
        return estimate_json_size(value.fields)
    if isinstance(value, Tagged):
        return len(value.tag) + 2 + estimate_value_size(value.value)
    return 0


class JsonAdapter(BaseFormatAdapter):
    """Translate between compact JSON and the value model."""

    format = Format.JSON

    def load(self, raw: str) -> Any:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(e.msg, line=e.lineno, column=e.colno, format=self.format.value) from e

    def dump(self, data: dict[str, Any]) -> str:
        try:
            return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ConversionError(str(e)) from e

    def emit(self, frontmatter: Frontmatter) -> str:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Emitting JSON, estimated %d chars", estimate_json_size(frontmatter))
        return super().emit(frontmatter)
