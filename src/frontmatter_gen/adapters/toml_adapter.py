"""TOML adapter.

Parsing uses the standard library's tomllib; tomllib cannot write, so
emission goes through tomlkit.
"""

from __future__ import annotations

import datetime
import re
import tomllib
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from frontmatter_gen.adapters.base import BaseFormatAdapter
from frontmatter_gen.errors import ConversionError, ParseError
from frontmatter_gen.types import Format, String, Value

# tomllib reports positions only inside the message before Python 3.14
_POSITION = re.compile(r"\(at line (\d+), column (\d+)\)")


class TomlAdapter(BaseFormatAdapter):
    """Translate between TOML and the value model.

    Datetimes become strings in ISO 8601 form. TOML has no null, so Null
    values cannot be emitted.
    """

    format = Format.TOML

    def load(self, raw: str) -> Any:
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            line = getattr(e, "lineno", None)
            column = getattr(e, "colno", None)
            message = getattr(e, "msg", None) or str(e)
            match = _POSITION.search(str(e))
            if line is None and match:
                line, column = int(match.group(1)), int(match.group(2))
                message = _POSITION.sub("", message).strip()
            raise ParseError(message, line=line, column=column, format=self.format.value) from e

    def dump(self, data: dict[str, Any]) -> str:
        try:
            return tomlkit.dumps(data)
        except (TOMLKitError, TypeError, ValueError) as e:
            raise ConversionError(str(e)) from e

    def to_value(self, obj: Any, active: set[int]) -> Value:
        if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
            return String(obj.isoformat())
        return super().to_value(obj, active)

    def native_null(self) -> Any:
        raise ConversionError("TOML has no null value")
