"""Scalar equality with optional directional type coercion.

Coercion renders the *actual* value as text and parses that text into
the *expected* value's type; the reverse direction is never attempted.

Safe coercions (expected kind <- actual text):
    - INT    <- "42"          (decimal integer literal, exact match)
    - FLOAT  <- "3.14", "5"   (decimal number literal, exact match)
    - STRING <- any text      (text must equal the string)
    - BOOL   <- "true"/"false"
    - NULL   <- "null"/"None"

Objects and arrays are never coerced.
"""

from __future__ import annotations

import math
import re

from json_conform.tree.nodes import JsonValue, ValueKind

# Decimal integer literal, optional sign
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# Decimal number literal (including scientific notation)
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

NULL_SPELLINGS = frozenset({"null", "None"})

# Floats at or above this magnitude render in exponent form
_EXPONENT_THRESHOLD = 1e21


def render_text(value: JsonValue) -> str:
    """Return the textual rendering of a scalar used for coercion.

    Strings render as themselves, booleans as ``true``/``false``, null as
    ``null``.  Integral floats below 1e21 drop their fraction so that
    ``5.0`` renders as ``"5"``.
    """
    kind = value.kind
    if kind == ValueKind.STRING:
        return str(value.value)
    if kind == ValueKind.BOOL:
        return "true" if value.value else "false"
    if kind == ValueKind.NULL:
        return "null"
    if kind == ValueKind.FLOAT:
        number: float = value.value
        if math.isfinite(number) and number.is_integer() and abs(number) < _EXPONENT_THRESHOLD:
            return str(int(number))
        return repr(number)
    return value.render()


def _coerced_equal(expected: JsonValue, actual: JsonValue) -> bool:
    text = render_text(actual)
    kind = expected.kind

    if kind == ValueKind.INT:
        return bool(INTEGER_PATTERN.fullmatch(text)) and int(text) == expected.value

    if kind == ValueKind.FLOAT:
        return bool(NUMBER_PATTERN.fullmatch(text)) and float(text) == expected.value

    if kind == ValueKind.STRING:
        return text == expected.value

    if kind == ValueKind.BOOL:
        return text == ("true" if expected.value else "false")

    if kind == ValueKind.NULL:
        return text in NULL_SPELLINGS

    return False


def values_equal(expected: JsonValue, actual: JsonValue, coerce: bool = False) -> bool:
    """Decide whether two scalars are equal.

    Args:
        expected: Value from the expected tree.
        actual:   Value from the actual tree.
        coerce:   Apply the directional coercion rules when the values are
                  not identical.

    Returns:
        True when identical in kind and value, or (with ``coerce``) when the
        actual value's text parses to the expected value.
    """
    if expected == actual:
        return True
    if not coerce or expected.is_container or actual.is_container:
        return False
    return _coerced_equal(expected, actual)
