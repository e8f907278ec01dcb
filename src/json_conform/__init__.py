"""json-conform - structural conformance diffs for JSON documents."""

from __future__ import annotations

from json_conform.algorithm.config import CompareDirection, ComparisonConfig
from json_conform.api import compare, conforms, summary
from json_conform.comparator import TreeComparator
from json_conform.result import DiffKind, DiffLog, DiffRecord
from json_conform.tree.nodes import Document, JsonValue, ValueKind

__version__: str = "0.1.0"
__all__: list[str] = [
    "CompareDirection",
    "ComparisonConfig",
    "DiffKind",
    "DiffLog",
    "DiffRecord",
    "Document",
    "JsonValue",
    "TreeComparator",
    "ValueKind",
    "compare",
    "conforms",
    "summary",
]
