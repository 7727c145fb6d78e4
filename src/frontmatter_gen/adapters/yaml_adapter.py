"""YAML adapter backed by PyYAML.

Uses a SafeLoader subclass that keeps local tags (``!name``) instead of
rejecting them, so tagged nodes survive as `Tagged` values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml

from frontmatter_gen.adapters.base import BaseFormatAdapter
from frontmatter_gen.errors import ConversionError, ParseError
from frontmatter_gen.types import Format, Tagged, Value


@dataclass(frozen=True)
class TaggedData:
    """Native stand-in for a locally tagged YAML node."""

    tag: str
    value: Any


class FrontmatterLoader(yaml.SafeLoader):
    """Safe loader that turns local tags into TaggedData."""


class FrontmatterDumper(yaml.SafeDumper):
    """Safe dumper that writes TaggedData back with its tag."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _construct_tagged(loader: FrontmatterLoader, suffix: str, node: yaml.Node) -> TaggedData:
    tag = "!" + suffix
    if isinstance(node, yaml.ScalarNode):
        # Resolve the scalar as if it were untagged, so "!n 42" keeps a number
        implicit = (node.style is None, node.style is not None)
        resolved = loader.resolve(yaml.ScalarNode, node.value, implicit)
        plain = yaml.ScalarNode(resolved, node.value, node.start_mark, node.end_mark, node.style)
        return TaggedData(tag, loader.construct_object(plain, deep=True))
    if isinstance(node, yaml.SequenceNode):
        return TaggedData(tag, loader.construct_sequence(node, deep=True))
    return TaggedData(tag, loader.construct_mapping(node, deep=True))


def _represent_tagged(dumper: FrontmatterDumper, data: TaggedData) -> yaml.Node:
    node = dumper.represent_data(data.value)
    node.tag = data.tag
    return node


FrontmatterLoader.add_multi_constructor("!", _construct_tagged)
FrontmatterDumper.add_representer(TaggedData, _represent_tagged)


class YamlAdapter(BaseFormatAdapter):
    """Translate between YAML and the value model."""

    format = Format.YAML

    def load(self, raw: str) -> Any:
        try:
            data = yaml.load(raw, Loader=FrontmatterLoader)
        except yaml.MarkedYAMLError as e:
            mark = e.problem_mark or e.context_mark
            raise ParseError(
                e.problem or str(e),
                line=mark.line + 1 if mark else None,
                column=mark.column + 1 if mark else None,
                format=self.format.value,
            ) from e
        except yaml.YAMLError as e:
            raise ParseError(str(e), format=self.format.value) from e
        # An empty block is an empty mapping
        return {} if data is None else data

    def dump(self, data: dict[str, Any]) -> str:
        try:
            return yaml.dump(
                data,
                Dumper=FrontmatterDumper,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        except yaml.YAMLError as e:
            raise ConversionError(str(e)) from e

    def to_value(self, obj: Any, active: set[int]) -> Value:
        if isinstance(obj, TaggedData):
            return Tagged(obj.tag, self.to_value(obj.value, active))
        return super().to_value(obj, active)

    def native_tagged(self, tag: str, native: Any) -> Any:
        return TaggedData(tag, native)
