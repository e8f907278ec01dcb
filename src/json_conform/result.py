"""DiffRecord and DiffLog: the findings produced by a comparison run.

A DiffLog is created empty at the start of each pass, filled by the
TreeComparator in discovery order (depth-first, left-to-right) and read
by the caller once the pass completes.  It is never shared between
concurrent runs.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum, auto
from typing import Any

from json_conform.tree.nodes import JsonValue
from json_conform.tree.path import relabel_root

__all__ = ["DiffKind", "DiffLog", "DiffRecord"]


class DiffKind(StrEnum):
    """The six kinds of finding.

    - MISSING_PROPERTY: an expected object member is absent from the actual object.
    - INCORRECT_TYPE:   values (or roots) of different kinds.
    - LACK_OF_ITEMS:    the actual array is shorter than the expected one.
    - EXCEEDING_ITEMS:  the actual array is longer than the expected one.
    - UNEQUAL_VALUE:    same-kind scalars with different values.
    - MISSING_ITEM:     no actual element matches an expected element's key fields.
    """

    MISSING_PROPERTY = auto()
    INCORRECT_TYPE = auto()
    LACK_OF_ITEMS = auto()
    EXCEEDING_ITEMS = auto()
    UNEQUAL_VALUE = auto()
    MISSING_ITEM = auto()


# Summary line titles, in summary order
_SUMMARY_TITLES: dict[DiffKind, str] = {
    DiffKind.MISSING_PROPERTY: "Missing Properties",
    DiffKind.INCORRECT_TYPE: "Incorrect Type",
    DiffKind.LACK_OF_ITEMS: "Lack of Items",
    DiffKind.EXCEEDING_ITEMS: "Exceeding Items",
    DiffKind.UNEQUAL_VALUE: "Unequal Values",
    DiffKind.MISSING_ITEM: "Missing Items",
}

SUMMARY_RULE = "-------------------"


def _render_key_value(value: JsonValue | None) -> str:
    return "<absent>" if value is None else value.render()


@dataclass(frozen=True, slots=True)
class DiffRecord:
    """One detected discrepancy.

    Attributes:
        kind:     Classification of the finding.
        path:     Display path of the location in the expected tree.
        expected: Expected value, or expected array length for
                  LACK_OF_ITEMS / EXCEEDING_ITEMS.
        actual:   Actual value, or actual array length.  None for
                  MISSING_PROPERTY and MISSING_ITEM.
        keys:     For MISSING_ITEM, the key field values searched for
                  (None marks a field absent from the expected element).
    """

    kind: DiffKind
    path: str
    expected: Any = None
    actual: Any = None
    keys: Mapping[str, JsonValue | None] | None = None

    @property
    def description(self) -> str:
        """Human-readable description of the finding, without the path."""
        kind = self.kind
        if kind == DiffKind.MISSING_PROPERTY:
            return "property is missing"
        if kind == DiffKind.INCORRECT_TYPE:
            return (
                f"incorrect type: expected {self.expected} {self.expected.type_label}, "
                f"got {self.actual} {self.actual.type_label} instead"
            )
        if kind == DiffKind.UNEQUAL_VALUE:
            return f"unequal values: expected {self.expected}, got {self.actual} instead"
        if kind == DiffKind.LACK_OF_ITEMS:
            return (
                f"lack of items in array: expected {self.expected} items, "
                f"got only {self.actual}"
            )
        if kind == DiffKind.EXCEEDING_ITEMS:
            return (
                f"too many items in array: expected {self.expected} items, "
                f"got {self.actual}"
            )
        # MISSING_ITEM (the final DiffKind variant)
        targets = ", ".join(
            f"{name}: {_render_key_value(value)}"
            for name, value in (self.keys or {}).items()
        )
        return f"missing array item: expected <object> with {targets}"

    @property
    def message(self) -> str:
        """Path on the first line, description on the second."""
        return f"{self.path}\n{self.description}"


@dataclass(slots=True)
class DiffLog:
    """Ordered collection of DiffRecords with per-kind counters.

    Attributes:
        records: Findings in discovery order.
        aborted: True when the walk was stopped before completion.
    """

    records: list[DiffRecord] = field(default_factory=list)
    aborted: bool = False
    _counts: Counter[DiffKind] = field(default_factory=Counter, repr=False)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def add(self, record: DiffRecord) -> None:
        self.records.append(record)
        self._counts[record.kind] += 1

    def missing_property(self, path: str, expected: JsonValue) -> None:
        self.add(DiffRecord(DiffKind.MISSING_PROPERTY, path, expected=expected))

    def incorrect_type(self, path: str, expected: JsonValue, actual: JsonValue) -> None:
        self.add(DiffRecord(DiffKind.INCORRECT_TYPE, path, expected, actual))

    def unequal_value(self, path: str, expected: JsonValue, actual: JsonValue) -> None:
        self.add(DiffRecord(DiffKind.UNEQUAL_VALUE, path, expected, actual))

    def lack_of_items(self, path: str, expected_len: int, actual_len: int) -> None:
        self.add(DiffRecord(DiffKind.LACK_OF_ITEMS, path, expected_len, actual_len))

    def exceeding_items(self, path: str, expected_len: int, actual_len: int) -> None:
        self.add(DiffRecord(DiffKind.EXCEEDING_ITEMS, path, expected_len, actual_len))

    def missing_item(
        self,
        path: str,
        expected: JsonValue,
        keys: Mapping[str, JsonValue | None],
    ) -> None:
        self.add(
            DiffRecord(DiffKind.MISSING_ITEM, path, expected=expected, keys=dict(keys))
        )

    def extend(self, other: DiffLog) -> None:
        """Append every record of ``other``; propagates its aborted flag."""
        for record in other.records:
            self.add(record)
        self.aborted = self.aborted or other.aborted

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def count(self, kind: DiffKind) -> int:
        return self._counts[kind]

    @property
    def counts(self) -> dict[DiffKind, int]:
        """Counter per kind, every kind present (zero when unseen)."""
        return {kind: self._counts[kind] for kind in DiffKind}

    @property
    def total(self) -> int:
        return len(self.records)

    def of_kind(self, kind: DiffKind) -> list[DiffRecord]:
        return [record for record in self.records if record.kind == kind]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DiffRecord]:
        return iter(self.records)

    # ------------------------------------------------------------------
    # Transformation and rendering
    # ------------------------------------------------------------------

    def relabeled(self, old: str, new: str) -> DiffLog:
        """Return a copy whose record paths have root ``old`` replaced by ``new``."""
        log = DiffLog(aborted=self.aborted)
        for record in self.records:
            log.add(replace(record, path=relabel_root(record.path, old, new)))
        return log

    def summary(self) -> str:
        """Return the textual summary block (totals per kind)."""
        lines = [SUMMARY_RULE, f"TOTAL: {self.total} differences"]
        lines.extend(
            f"- {title}: {self._counts[kind]}" for kind, title in _SUMMARY_TITLES.items()
        )
        return "\n".join(lines) + "\n"

    def render(self) -> str:
        """Return every record message followed by the summary."""
        parts = [record.message for record in self.records]
        if self.aborted:
            parts.append("comparison aborted before completion")
        parts.append(self.summary())
        return "\n\n".join(parts)
