"""Shared data types for frontmatter parsing.

The value model is a closed set of immutable node classes rooted at
`Value`. Nested mappings are `Frontmatter` instances, a mutable mapping with
unique string keys, so user code can edit a parsed result in place.
"""

from __future__ import annotations

import datetime
import logging
import math
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

__all__ = [
    "Array",
    "Boolean",
    "Format",
    "Frontmatter",
    "Null",
    "Number",
    "Object",
    "String",
    "Tagged",
    "Value",
    "clone_value",
    "escape_str",
    "format_number",
    "value_depth",
]


_FORMAT_ALIASES = {"li": "yaml", "tkv": "toml", "bof": "json", "yml": "yaml"}


class Format(str, Enum):
    """Serialization shape of a frontmatter block."""

    YAML = "yaml"
    TOML = "toml"
    JSON = "json"
    UNSUPPORTED = "unsupported"

    @classmethod
    def default(cls) -> Format:
        """Return the default format (JSON)."""
        return cls.JSON

    @classmethod
    def from_name(cls, name: str) -> Format:
        """Look up a format by name, case-insensitively.

        Args:
            name: Format name (yaml, toml, json) or alias (li, tkv, bof).

        Returns:
            Matching Format.

        Raises:
            ValueError: If the name is not a supported format.
        """
        key = name.strip().lower()
        key = _FORMAT_ALIASES.get(key, key)
        if key == cls.UNSUPPORTED.value:
            raise ValueError(f"Unsupported format: {name}")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unsupported format: {name}") from None


def escape_str(text: str) -> str:
    """Escape backslashes and double quotes for display."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def format_number(number: float) -> str:
    """Format a number, dropping the fractional part of whole values."""
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number)


class Value:
    """Base class for every node of a parsed frontmatter tree."""

    __slots__ = ()

    def as_str(self) -> str | None:
        """Return the text of a String, else None."""
        return None

    def as_float(self) -> float | None:
        """Return the payload of a Number, else None."""
        return None

    def as_bool(self) -> bool | None:
        """Return the payload of a Boolean, else None."""
        return None

    def as_list(self) -> tuple[Value, ...] | None:
        """Return the items of an Array, else None."""
        return None

    def as_object(self) -> Frontmatter | None:
        """Return the mapping of an Object, else None."""
        return None

    def as_tagged(self) -> tuple[str, Value] | None:
        """Return (tag, value) of a Tagged node, else None."""
        return None

    def is_null(self) -> bool:
        return isinstance(self, Null)

    def is_string(self) -> bool:
        return isinstance(self, String)

    def is_number(self) -> bool:
        return isinstance(self, Number)

    def is_boolean(self) -> bool:
        return isinstance(self, Boolean)

    def is_array(self) -> bool:
        return isinstance(self, Array)

    def is_object(self) -> bool:
        return isinstance(self, Object)

    def is_tagged(self) -> bool:
        return isinstance(self, Tagged)

    def to_python(self) -> Any:
        """Convert to plain Python data.

        Whole numbers become int; Tagged nodes lose their tag.
        """
        raise NotImplementedError

    @staticmethod
    def from_python(obj: Any) -> Value:
        """Convert plain Python data into a Value tree.

        Args:
            obj: None, bool, int, float, str, date/time, list/tuple, mapping,
                or an existing Value.

        Returns:
            Equivalent Value.

        Existing Values are deep-copied so the result never shares mutable
        nodes with obj.

        Raises:
            TypeError: If obj (or something nested in it) has no Value form.
        """
        if isinstance(obj, Value):
            return clone_value(obj)
        if obj is None:
            return Null()
        # bool is an int subclass, so it must be checked first
        if isinstance(obj, bool):
            return Boolean(obj)
        if isinstance(obj, int):
            return Number(widen_int(obj))
        if isinstance(obj, float):
            return Number(obj)
        if isinstance(obj, str):
            return String(obj)
        if isinstance(obj, (datetime.date, datetime.time)):
            return String(obj.isoformat())
        if isinstance(obj, Mapping):
            return Object(Frontmatter.from_python(obj))
        if isinstance(obj, (list, tuple)):
            return Array(tuple(Value.from_python(item) for item in obj))
        raise TypeError(f"Cannot convert {type(obj).__name__} to a frontmatter value")


def clone_value(value: Value) -> Value:
    """Copy every container in a value tree.

    Scalars are immutable and are reused. The walk uses an explicit stack, so
    deeply nested values do not hit the recursion limit.
    """
    built: list[Value] = []
    stack: list[tuple[Value, bool]] = [(value, False)]
    while stack:
        node, children_done = stack.pop()
        if isinstance(node, Array):
            children: tuple[Value, ...] = node.items
        elif isinstance(node, Object):
            children = tuple(node.fields.values())
        elif isinstance(node, Tagged):
            children = (node.value,)
        else:
            built.append(node)
            continue

        if not children_done:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))
            continue

        start = len(built) - len(children)
        copies = built[start:]
        del built[start:]
        if isinstance(node, Array):
            built.append(Array(tuple(copies)))
        elif isinstance(node, Object):
            fields = Frontmatter()
            fields._data.update(zip(node.fields, copies))
            built.append(Object(fields))
        else:
            built.append(Tagged(node.tag, copies[0]))
    return built[0]


def widen_int(number: int) -> float:
    """Widen an integer to float, warning when precision is lost."""
    if abs(number) > 2**53:
        logger.warning("Integer %d exceeds float precision", number)
    return float(number)


@dataclass(frozen=True)
class Null(Value):
    """The absent value."""

    def to_python(self) -> None:
        return None

    def __str__(self) -> str:
        return "null"


@dataclass(frozen=True)
class String(Value):
    value: str

    def as_str(self) -> str:
        return self.value

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return f'"{escape_str(self.value)}"'


@dataclass(frozen=True)
class Number(Value):
    """A double-precision number. Integers are widened on construction."""

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise TypeError("Number cannot hold a bool; use Boolean")
        object.__setattr__(self, "value", float(self.value))

    def as_float(self) -> float:
        return self.value

    def to_python(self) -> int | float:
        if math.isfinite(self.value) and self.value.is_integer():
            return int(self.value)
        return self.value

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Boolean(Value):
    value: bool

    def as_bool(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Array(Value):
    """An ordered sequence of values."""

    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def as_list(self) -> tuple[Value, ...]:
        return self.items

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]

    def __str__(self) -> str:
        return "[" + ", ".join(str(item) for item in self.items) + "]"


@dataclass(frozen=True)
class Object(Value):
    """A nested mapping.

    The mapping is mutable, so Objects are unhashable, as is any Array or
    Tagged value that contains one.
    """

    fields: Frontmatter = field(default_factory=lambda: Frontmatter())

    __hash__ = None  # type: ignore[assignment]

    def as_object(self) -> Frontmatter:
        return self.fields

    def to_python(self) -> dict[str, Any]:
        return self.fields.to_python()

    def __str__(self) -> str:
        return str(self.fields)


@dataclass(frozen=True)
class Tagged(Value):
    """A value wrapped in an explicit YAML type tag such as ``!color``."""

    tag: str
    value: Value

    def as_tagged(self) -> tuple[str, Value]:
        return self.tag, self.value

    def to_python(self) -> Any:
        return self.value.to_python()

    def __str__(self) -> str:
        return f"{self.tag} {self.value}"


class Frontmatter(MutableMapping[str, Value]):
    """Mapping of unique string keys to values.

    Inserting an existing key replaces its value. Assigned values go through
    `Value.from_python`, so plain Python data is converted and existing
    Values are copied. No node is ever shared between two mappings.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None) -> None:
        self._data: dict[str, Value] = {}
        if data is not None:
            self.update(data)

    def __getitem__(self, key: str) -> Value:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Frontmatter keys must be str, not {type(key).__name__}")
        self._data[key] = Value.from_python(value)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Frontmatter({self._data!r})"

    def __str__(self) -> str:
        entries = (f'"{escape_str(k)}": {self._data[k]}' for k in sorted(self._data))
        return "{" + ", ".join(entries) + "}"

    def merge(self, other: Mapping[str, Any]) -> None:
        """Merge another mapping into this one; its values win on conflict."""
        for key, value in other.items():
            self[key] = value

    def is_null(self, key: str) -> bool:
        """Check whether a key is present and holds Null."""
        value = self._data.get(key)
        return value is not None and value.is_null()

    def to_python(self) -> dict[str, Any]:
        """Convert to a plain dict."""
        return {key: value.to_python() for key, value in self._data.items()}

    @classmethod
    def from_python(cls, data: Mapping[Any, Any]) -> Frontmatter:
        """Build from a plain mapping, skipping non-string keys."""
        result = cls()
        for key, value in data.items():
            if not isinstance(key, str):
                logger.warning("Non-string key %r ignored in frontmatter mapping", key)
                continue
            result[key] = value
        return result


def value_depth(value: Value) -> int:
    """Return the nesting depth of a value.

    Scalars have depth 0, each Array or Object adds one level, and Tagged
    wrappers are transparent.
    """
    depth = 0
    stack: list[tuple[Value, int]] = [(value, 0)]
    while stack:
        node, level = stack.pop()
        while isinstance(node, Tagged):
            node = node.value
        if isinstance(node, Array):
            level += 1
            stack.extend((item, level) for item in node.items)
        elif isinstance(node, Object):
            level += 1
            stack.extend((item, level) for item in node.fields.values())
        depth = max(depth, level)
    return depth
