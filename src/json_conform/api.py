"""Public API functions for json-conform.

This module provides the three user-facing functions: compare, conforms
and summary.  Each call creates a fresh TreeComparator to guarantee zero
global state mutation between calls.
"""

from __future__ import annotations

from typing import Any

from json_conform.algorithm.config import CompareDirection, ComparisonConfig
from json_conform.comparator import TreeComparator
from json_conform.result import DiffLog
from json_conform.tree.nodes import Document

__all__ = ["compare", "conforms", "summary"]


def compare(
    left: Any,
    right: Any,
    config: ComparisonConfig | None = None,
    direction: CompareDirection = CompareDirection.RIGHT_AS_ACTUAL,
    left_name: str = "left",
    right_name: str = "right",
) -> DiffLog:
    """Compare two JSON values and return the DiffLog of their differences.

    Args:
        left:   Left JSON value (dict, list, str, int, float, bool, None),
                JsonValue or Document.
        right:  Right JSON value, JsonValue or Document.
        config: Key declarations, ignore paths and coercion switch.
                Defaults to ``ComparisonConfig()`` when None.
        direction: Which side is validated.  Defaults to validating the
                right value against the left one.
        left_name:  Root label of left-as-actual paths (ignored for Documents).
        right_name: Root label of right-as-actual paths (ignored for Documents).

    Returns:
        A DiffLog with every finding, in discovery order.
    """
    if not isinstance(left, Document):
        left = Document.from_python(left_name, left)
    if not isinstance(right, Document):
        right = Document.from_python(right_name, right)
    comparator = TreeComparator(config=config)
    return comparator.compare(left, right, direction=direction)


def conforms(
    actual: Any,
    expected: Any,
    config: ComparisonConfig | None = None,
) -> bool:
    """Return True if ``actual`` has everything ``expected`` has.

    Members and elements present only in ``actual`` are allowed, except
    that arrays must have the same length.

    Args:
        actual:   The JSON value under validation.
        expected: The reference JSON value.
        config:   Optional ComparisonConfig.

    Returns:
        True when validating ``actual`` against ``expected`` finds nothing.
    """
    log = compare(expected, actual, config=config, left_name="expected", right_name="actual")
    return log.total == 0


def summary(
    left: Any,
    right: Any,
    config: ComparisonConfig | None = None,
    direction: CompareDirection = CompareDirection.RIGHT_AS_ACTUAL,
) -> str:
    """Return the textual summary block for comparing two JSON values.

    Returns:
        The ``TOTAL: <n> differences`` block with one line per kind.
    """
    return compare(left, right, config=config, direction=direction).summary()
