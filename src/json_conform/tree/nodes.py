"""JsonValue tagged union and ValueKind StrEnum for decoded JSON documents.

Provides the foundational value model used by every other component:
the comparator dispatches on ``JsonValue.kind`` rather than on the
Python type of a decoded value, so a malformed document can never make
the walk treat a scalar as a container.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any


class ValueKind(StrEnum):
    """Enumeration of the seven JSON value kinds.

    JSON has a single number class, but integers and floats are kept
    apart: the distinction drives type-mismatch detection and coercion.
    """

    NULL = auto()
    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    OBJECT = auto()
    ARRAY = auto()


_TYPE_LABELS: dict[ValueKind, str] = {
    ValueKind.NULL: "<null>",
    ValueKind.BOOL: "<bool>",
    ValueKind.INT: "<int>",
    ValueKind.FLOAT: "<float>",
    ValueKind.STRING: "<str>",
    ValueKind.OBJECT: "<object>",
    ValueKind.ARRAY: "<array>",
}

_CONTAINERS = frozenset({ValueKind.OBJECT, ValueKind.ARRAY})


@dataclass(frozen=True, slots=True)
class JsonValue:
    """An immutable node of a decoded JSON tree.

    Attributes:
        kind:  Which variant this value is (see ValueKind).
        value: The payload.  ``None`` for NULL, ``bool``/``int``/``float``/``str``
               for scalars, a read-only ``Mapping[str, JsonValue]`` for OBJECT
               and a ``tuple[JsonValue, ...]`` for ARRAY.

    Equality is raw identity: kind and payload must both match, so
    ``1``, ``1.0`` and ``true`` are pairwise unequal.
    """

    kind: ValueKind
    value: Any = None

    @classmethod
    def from_python(cls, value: Any) -> JsonValue:
        """Build a JsonValue tree from a decoded Python JSON value."""
        # Deferred import: builder depends on this module.
        from json_conform.tree.builder import ValueBuilder

        return ValueBuilder().build(value)

    # ------------------------------------------------------------------
    # Kind predicates
    # ------------------------------------------------------------------

    @property
    def is_object(self) -> bool:
        return self.kind == ValueKind.OBJECT

    @property
    def is_array(self) -> bool:
        return self.kind == ValueKind.ARRAY

    @property
    def is_container(self) -> bool:
        return self.kind in _CONTAINERS

    @property
    def type_label(self) -> str:
        """Display label of the kind, e.g. ``<int>``."""
        return _TYPE_LABELS[self.kind]

    # ------------------------------------------------------------------
    # Container access
    # ------------------------------------------------------------------

    def get(self, name: str) -> JsonValue | None:
        """Return the member ``name`` of an OBJECT, or None when absent.

        Raises:
            TypeError: If this value is not an OBJECT.
        """
        if self.kind != ValueKind.OBJECT:
            msg = f"get() requires an object, got {self.type_label}"
            raise TypeError(msg)
        members: Mapping[str, JsonValue] = self.value
        return members.get(name)

    def items(self) -> Iterator[tuple[str, JsonValue]]:
        """Iterate OBJECT members in sorted key order."""
        if self.kind != ValueKind.OBJECT:
            msg = f"items() requires an object, got {self.type_label}"
            raise TypeError(msg)
        members: Mapping[str, JsonValue] = self.value
        for name in sorted(members):
            yield name, members[name]

    @property
    def size(self) -> int:
        """Number of members (OBJECT) or elements (ARRAY)."""
        if self.kind not in _CONTAINERS:
            msg = f"size requires an object or array, got {self.type_label}"
            raise TypeError(msg)
        return len(self.value)

    @property
    def elements(self) -> tuple[JsonValue, ...]:
        """Elements of an ARRAY, in document order."""
        if self.kind != ValueKind.ARRAY:
            msg = f"elements requires an array, got {self.type_label}"
            raise TypeError(msg)
        return self.value

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_python(self) -> Any:
        """Return the plain Python equivalent (dict, list, str, ...)."""
        if self.kind == ValueKind.OBJECT:
            return {name: member.to_python() for name, member in self.value.items()}
        if self.kind == ValueKind.ARRAY:
            return [item.to_python() for item in self.value]
        return self.value

    def render(self) -> str:
        """Render for diff messages: strings bare, everything else as JSON."""
        if self.kind == ValueKind.STRING:
            return str(self.value)
        return json.dumps(
            self.to_python(), sort_keys=True, ensure_ascii=False, separators=(",", ":")
        )

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class Document:
    """A named JSON tree: one side of a comparison.

    Attributes:
        name: Label used as the root segment of finished diff paths
              (usually the file name the document was loaded from).
        root: The document's root value.
    """

    name: str
    root: JsonValue

    @classmethod
    def from_python(cls, name: str, value: Any) -> Document:
        return cls(name=name, root=JsonValue.from_python(value))
