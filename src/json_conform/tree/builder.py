"""ValueBuilder: converts any decoded JSON value into a JsonValue tree.

Uses recursive dispatch to convert Python dicts, lists and scalar values
into immutable JsonValue nodes.  Object members are frozen behind a
read-only mapping view and array elements into a tuple, so a built tree
can be shared between comparison passes without copying.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from json_conform.tree.nodes import JsonValue, ValueKind

# Shared singletons for the constant scalars
_NULL = JsonValue(ValueKind.NULL, None)
_TRUE = JsonValue(ValueKind.BOOL, True)
_FALSE = JsonValue(ValueKind.BOOL, False)


def _check_int_renderable(value: int) -> None:
    limit = sys.get_int_max_str_digits()
    # Below this bit length the decimal form is always shorter than the limit
    if not limit or value.bit_length() < (limit - 1) * 3:
        return
    try:
        str(value)
    except ValueError as exc:
        msg = f"Integer exceeds the {limit}-digit limit for rendering JSON numbers"
        raise ValueError(msg) from exc


@dataclass
class ValueBuilder:
    """Converts any valid decoded JSON value into a JsonValue tree.

    The dispatch order is critical: bool MUST be checked before int
    because bool is a subclass of int in Python (isinstance(True, int)
    is True).  Already-built JsonValue nodes are returned unchanged.

    Example::
        builder = ValueBuilder()
        tree = builder.build({"id": 1, "tags": ["a"]})
        # tree.kind == ValueKind.OBJECT
        # tree.get("id") == JsonValue(ValueKind.INT, 1)
    """

    def build(self, value: Any) -> JsonValue:
        """Convert a decoded JSON value to a JsonValue tree.

        Args:
            value: dict, list, tuple, str, int, float, bool or None.

        Returns:
            The root JsonValue.

        Raises:
            TypeError: If value (or anything nested in it) is not a JSON type,
                or an object has a non-string key.
            ValueError: If an integer has more digits than the interpreter's
                int-to-str conversion limit.
        """
        if isinstance(value, JsonValue):
            return value

        # CRITICAL: bool MUST be checked before int
        if isinstance(value, bool):
            return _TRUE if value else _FALSE

        if value is None:
            return _NULL

        if isinstance(value, int):
            _check_int_renderable(value)
            return JsonValue(ValueKind.INT, value)

        if isinstance(value, float):
            return JsonValue(ValueKind.FLOAT, value)

        if isinstance(value, str):
            return JsonValue(ValueKind.STRING, value)

        if isinstance(value, dict):
            return self._build_object(value)

        if isinstance(value, (list, tuple)):
            return JsonValue(ValueKind.ARRAY, tuple(self.build(item) for item in value))

        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")

    def build_text(self, text: str | bytes) -> JsonValue:
        """Decode JSON text and build its tree.

        Raises:
            json.JSONDecodeError: If the text is not valid JSON.
            ValueError: If a number literal exceeds the integer digit limit.
        """
        return self.build(json.loads(text))

    def _build_object(self, obj: dict[Any, Any]) -> JsonValue:
        members: dict[str, JsonValue] = {}
        for key, val in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be strings, got {type(key)!r}")
            members[key] = self.build(val)
        return JsonValue(ValueKind.OBJECT, MappingProxyType(members))
