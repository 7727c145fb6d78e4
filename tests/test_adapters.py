"""Tests for the YAML, TOML and JSON adapters."""

from __future__ import annotations

import logging

import pytest

from frontmatter_gen.adapters import (
    FormatAdapter,
    JsonAdapter,
    TomlAdapter,
    YamlAdapter,
    get_adapter,
    json_adapter,
)
from frontmatter_gen.adapters.json_adapter import estimate_json_size, estimate_value_size
from frontmatter_gen.errors import (
    ConversionError,
    InvalidFormatError,
    ParseError,
    UnsupportedFormatError,
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
)


class TestRegistry:
    """Tests for adapter lookup."""

    @pytest.mark.parametrize(
        ("format", "adapter_class"),
        [(Format.YAML, YamlAdapter), (Format.TOML, TomlAdapter), (Format.JSON, JsonAdapter)],
    )
    def test_get_adapter(self, format: Format, adapter_class: type) -> None:
        """Test each format maps to its adapter."""
        adapter = get_adapter(format)
        assert isinstance(adapter, adapter_class)
        assert isinstance(adapter, FormatAdapter)
        assert adapter.format is format

    def test_unsupported(self) -> None:
        """Test the unsupported marker has no adapter."""
        with pytest.raises(UnsupportedFormatError):
            get_adapter(Format.UNSUPPORTED)


class TestYamlAdapter:
    """Tests for YamlAdapter."""

    def test_parse_scalars(self) -> None:
        """Test YAML scalars map onto the value model."""
        fm = YamlAdapter().parse("s: text\nn: 3\nf: 1.5\nb: true\nz: ~")
        assert fm["s"] == String("text")
        assert fm["n"] == Number(3)
        assert fm["f"] == Number(1.5)
        assert fm["b"] == Boolean(True)
        assert fm["z"] == Null()

    def test_parse_collections(self) -> None:
        """Test sequences and mappings become Array and Object."""
        fm = YamlAdapter().parse("tags:\n  - a\n  - b\nauthor:\n  name: Ada\n")
        assert fm["tags"] == Array((String("a"), String("b")))
        assert fm["author"] == Object(Frontmatter({"name": "Ada"}))

    def test_dates_become_strings(self) -> None:
        """Test YAML timestamps become ISO strings."""
        fm = YamlAdapter().parse("date: 2023-05-20")
        assert fm["date"] == String("2023-05-20")

    def test_local_tags_preserved(self) -> None:
        """Test local tags become Tagged values."""
        fm = YamlAdapter().parse("color: !rgb red\nsize: !px 12\nlist: !set [a]")
        assert fm["color"] == Tagged("!rgb", String("red"))
        assert fm["size"] == Tagged("!px", Number(12))
        assert fm["list"] == Tagged("!set", Array((String("a"),)))

    def test_quoted_tagged_scalar_stays_string(self) -> None:
        """Test a quoted tagged scalar is not resolved to a number."""
        fm = YamlAdapter().parse("v: !ver '12'")
        assert fm["v"] == Tagged("!ver", String("12"))

    def test_tagged_round_trip(self) -> None:
        """Test tags survive emission and reparsing."""
        adapter = YamlAdapter()
        fm = Frontmatter({"color": Tagged("!rgb", String("red"))})
        assert adapter.parse(adapter.emit(fm)) == fm

    def test_non_string_keys_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test non-string keys are skipped with a warning."""
        fm = YamlAdapter().parse("1: one\nname: two")
        assert list(fm) == ["name"]
        assert "Non-string key" in caplog.text

    def test_empty_block(self) -> None:
        """Test an empty block is an empty mapping."""
        assert len(YamlAdapter().parse("")) == 0

    def test_not_a_mapping(self) -> None:
        """Test a top-level sequence is rejected."""
        with pytest.raises(ParseError, match="not a valid mapping"):
            YamlAdapter().parse("- a\n- b")

    def test_syntax_error_has_position(self) -> None:
        """Test grammar errors report a 1-based line."""
        with pytest.raises(ParseError) as exc_info:
            YamlAdapter().parse("title: Hello\nbad: [unclosed")
        assert exc_info.value.line is not None
        assert exc_info.value.line >= 1
        assert exc_info.value.format == "yaml"

    def test_aliases_are_cloned(self) -> None:
        """Test non-cyclic aliases resolve to copies."""
        fm = YamlAdapter().parse("base: &b {x: 1}\ncopy: *b")
        assert fm["copy"] == fm["base"]

    def test_cyclic_alias_rejected(self) -> None:
        """Test a self-referencing structure is rejected."""
        with pytest.raises(InvalidFormatError, match="cyclic"):
            YamlAdapter().parse("a: &x [*x]")

    def test_emit(self, sample_frontmatter: Frontmatter) -> None:
        """Test block-style emission."""
        text = YamlAdapter().emit(sample_frontmatter)
        assert "title: My Post" in text
        assert "tags:\n- r\n- b" in text

    def test_emit_whole_number_without_decimals(self) -> None:
        """Test whole numbers are written as integers."""
        text = YamlAdapter().emit(Frontmatter({"n": 1.0, "f": 0.25}))
        assert "n: 1\n" in text
        assert "f: 0.25" in text


class TestTomlAdapter:
    """Tests for TomlAdapter."""

    def test_parse_tables(self) -> None:
        """Test tables become Object values."""
        fm = TomlAdapter().parse('title = "X"\n[author]\nname = "Ada"\n')
        assert fm["title"] == String("X")
        assert fm["author"] == Object(Frontmatter({"name": "Ada"}))

    def test_datetimes_become_strings(self) -> None:
        """Test TOML datetimes become ISO strings."""
        fm = TomlAdapter().parse("d = 2023-05-20\nt = 2023-05-20T10:00:00Z")
        assert fm["d"] == String("2023-05-20")
        assert fm["t"] == String("2023-05-20T10:00:00+00:00")

    def test_syntax_error(self) -> None:
        """Test grammar errors become ParseError with a line."""
        with pytest.raises(ParseError) as exc_info:
            TomlAdapter().parse('title = "X"\nbroken = @\nother = 1')
        assert exc_info.value.line == 2
        assert exc_info.value.format == "toml"

    def test_emit(self, sample_frontmatter: Frontmatter) -> None:
        """Test inline arrays and quoted strings."""
        text = TomlAdapter().emit(sample_frontmatter)
        assert 'title = "My Post"' in text
        assert 'tags = ["r", "b"]' in text

    def test_emit_null_fails(self) -> None:
        """Test Null has no TOML form."""
        with pytest.raises(ConversionError, match="null"):
            TomlAdapter().emit(Frontmatter({"x": None}))

    def test_emit_drops_tags(self) -> None:
        """Test tags are dropped and the inner value kept."""
        text = TomlAdapter().emit(Frontmatter({"c": Tagged("!rgb", String("red"))}))
        assert 'c = "red"' in text

    def test_emit_nested_table(self) -> None:
        """Test nested objects round-trip through tables."""
        fm = Frontmatter({"author": {"name": "Ada", "posts": 2}})
        adapter = TomlAdapter()
        assert adapter.parse(adapter.emit(fm)) == fm


class TestJsonAdapter:
    """Tests for JsonAdapter."""

    def test_parse(self) -> None:
        """Test JSON values map onto the value model."""
        fm = JsonAdapter().parse('{"a": null, "b": [1, 2.5], "c": {"d": false}}')
        assert fm["a"] == Null()
        assert fm["b"] == Array((Number(1), Number(2.5)))
        assert fm["c"] == Object(Frontmatter({"d": False}))

    def test_duplicate_keys_last_wins(self) -> None:
        """Test a repeated key keeps the last value."""
        fm = JsonAdapter().parse('{"a": 1, "a": 2}')
        assert fm["a"] == Number(2)

    def test_syntax_error(self) -> None:
        """Test malformed JSON reports the library's position."""
        with pytest.raises(ParseError) as exc_info:
            JsonAdapter().parse('{"a": }')
        assert exc_info.value.line == 1
        assert exc_info.value.column == 7

    def test_emit_compact(self, sample_frontmatter: Frontmatter) -> None:
        """Test emission has no insignificant whitespace."""
        text = JsonAdapter().emit(sample_frontmatter)
        assert '"title":"My Post"' in text
        assert '"tags":["r","b"]' in text
        assert " " not in text.replace("My Post", "")

    def test_emit_numbers(self) -> None:
        """Test whole numbers lose their fraction and others keep precision."""
        text = JsonAdapter().emit(Frontmatter({"n": 42.0, "f": 0.1}))
        assert text == '{"n":42,"f":0.1}'

    def test_emit_non_finite_fails(self) -> None:
        """Test NaN cannot be written as JSON."""
        with pytest.raises(ConversionError):
            JsonAdapter().emit(Frontmatter({"x": float("nan")}))

    def test_emit_unicode_unescaped(self) -> None:
        """Test non-ASCII text is written as-is."""
        assert JsonAdapter().emit(Frontmatter({"t": "café"})) == '{"t":"café"}'


class TestJsonSizeEstimate:
    """Tests for the JSON size estimator."""

    def test_value_sizes(self) -> None:
        """Test per-variant estimates."""
        assert estimate_value_size(Null()) == 4
        assert estimate_value_size(String("abc")) == 5
        assert estimate_value_size(Number(1)) == 8
        assert estimate_value_size(Boolean(True)) == 5
        assert estimate_value_size(Array((Null(), Null()))) == 10

    def test_mapping_size(self) -> None:
        """Test keys add their length plus quoting and separators."""
        assert estimate_json_size(Frontmatter({"ab": None})) == 2 + 5 + 4 + 1

    def test_nested_object(self) -> None:
        """Test objects are estimated recursively."""
        inner = Frontmatter({"k": True})
        assert estimate_value_size(Object(inner)) == estimate_json_size(inner)

    def test_skipped_without_debug_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test emit does not walk the tree for the estimate unless debugging."""
        monkeypatch.setattr(json_adapter.logger, "isEnabledFor", lambda level: False)

        def fail(frontmatter: Frontmatter) -> int:
            raise AssertionError("estimate computed")

        monkeypatch.setattr(json_adapter, "estimate_json_size", fail)
        assert JsonAdapter().emit(Frontmatter({"a": 1})) == '{"a":1}'

    def test_logged_with_debug_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the estimate is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger=json_adapter.__name__):
            JsonAdapter().emit(Frontmatter({"ab": None}))
        assert "estimated 12 chars" in caplog.text
