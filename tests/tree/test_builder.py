"""Tests for ValueBuilder: decoded JSON -> JsonValue trees.

Covers:
- Every scalar kind, with bool checked before int
- Objects become read-only mappings, arrays become tuples
- Already-built values pass through unchanged
- Unsupported types and non-string keys raise TypeError
- Integers beyond the int-to-str digit limit raise ValueError
- Building from JSON text
"""

from __future__ import annotations

import json
import sys

import pytest

from json_conform.tree.builder import ValueBuilder
from json_conform.tree.nodes import JsonValue, ValueKind


@pytest.fixture
def builder() -> ValueBuilder:
    return ValueBuilder()


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestScalars:
    def test_true_is_bool_not_int(self, builder: ValueBuilder) -> None:
        assert builder.build(True).kind == ValueKind.BOOL

    def test_false_is_bool_not_int(self, builder: ValueBuilder) -> None:
        node = builder.build(False)
        assert node.kind == ValueKind.BOOL
        assert node.value is False

    def test_int(self, builder: ValueBuilder) -> None:
        assert builder.build(42) == JsonValue(ValueKind.INT, 42)

    def test_float(self, builder: ValueBuilder) -> None:
        assert builder.build(4.2) == JsonValue(ValueKind.FLOAT, 4.2)

    def test_integral_float_stays_float(self, builder: ValueBuilder) -> None:
        assert builder.build(5.0).kind == ValueKind.FLOAT

    def test_string(self, builder: ValueBuilder) -> None:
        assert builder.build("x") == JsonValue(ValueKind.STRING, "x")

    def test_none(self, builder: ValueBuilder) -> None:
        assert builder.build(None) == JsonValue(ValueKind.NULL, None)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


class TestContainers:
    def test_object_members(self, builder: ValueBuilder) -> None:
        node = builder.build({"a": 1, "b": "x"})
        assert node.kind == ValueKind.OBJECT
        assert node.get("a") == JsonValue(ValueKind.INT, 1)
        assert node.get("b") == JsonValue(ValueKind.STRING, "x")

    def test_object_members_read_only(self, builder: ValueBuilder) -> None:
        node = builder.build({"a": 1})
        with pytest.raises(TypeError):
            node.value["a"] = JsonValue(ValueKind.INT, 2)

    def test_object_does_not_alias_source(self, builder: ValueBuilder) -> None:
        source = {"a": 1}
        node = builder.build(source)
        source["b"] = 2
        assert node.get("b") is None

    def test_array_is_tuple(self, builder: ValueBuilder) -> None:
        node = builder.build([1, 2])
        assert node.kind == ValueKind.ARRAY
        assert isinstance(node.value, tuple)

    def test_tuple_accepted_as_array(self, builder: ValueBuilder) -> None:
        assert builder.build((1, 2)) == builder.build([1, 2])

    def test_nested(self, builder: ValueBuilder) -> None:
        node = builder.build({"a": [{"b": [None]}]})
        inner = node.get("a").elements[0].get("b").elements[0]  # type: ignore[union-attr]
        assert inner.kind == ValueKind.NULL

    def test_built_value_passes_through(self, builder: ValueBuilder) -> None:
        node = builder.build({"a": 1})
        assert builder.build(node) is node


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_set_rejected(self, builder: ValueBuilder) -> None:
        with pytest.raises(TypeError, match="Unsupported JSON value type"):
            builder.build({1, 2})

    def test_nested_unsupported_rejected(self, builder: ValueBuilder) -> None:
        with pytest.raises(TypeError):
            builder.build({"a": [object()]})

    def test_non_string_key_rejected(self, builder: ValueBuilder) -> None:
        with pytest.raises(TypeError, match="keys must be strings"):
            builder.build({1: "a"})

    @pytest.mark.skipif(
        not 0 < sys.get_int_max_str_digits() < 5000, reason="int-to-str digit limit above 5000"
    )
    def test_int_beyond_digit_limit_rejected(self, builder: ValueBuilder) -> None:
        with pytest.raises(ValueError, match="digit limit"):
            builder.build({"a": 10**5000})

    def test_large_int_within_limit_accepted(self, builder: ValueBuilder) -> None:
        assert builder.build(10**100) == JsonValue(ValueKind.INT, 10**100)


# ---------------------------------------------------------------------------
# JSON text
# ---------------------------------------------------------------------------


class TestBuildText:
    def test_build_text(self, builder: ValueBuilder) -> None:
        node = builder.build_text('{"a": [1, 1.0, true]}')
        kinds = [item.kind for item in node.get("a").elements]  # type: ignore[union-attr]
        assert kinds == [ValueKind.INT, ValueKind.FLOAT, ValueKind.BOOL]

    def test_build_text_bytes(self, builder: ValueBuilder) -> None:
        assert builder.build_text(b"[1]") == builder.build([1])

    def test_invalid_text_raises(self, builder: ValueBuilder) -> None:
        with pytest.raises(json.JSONDecodeError):
            builder.build_text("{not json")
