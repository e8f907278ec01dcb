"""ElementPool: consumable working copy of an actual array for keyed matching.

The pool never mutates the array it was built from.  Consumption is
tracked in a numpy boolean mask indexed by element position, so matching
and removal never alias the live sequence being iterated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import numpy as np

from json_conform.tree.nodes import JsonValue


def key_values(element: JsonValue, fields: Sequence[str]) -> dict[str, JsonValue | None]:
    """Return ``field -> value`` for each key field of an object element.

    Fields absent from the element map to None.
    """
    return {name: element.get(name) for name in fields}


class ElementPool:
    """Working copy of an actual array whose elements are consumed once.

    Example::

        pool = ElementPool(actual_array.elements)
        match = pool.take({"id": JsonValue(ValueKind.INT, 2)})
        # match is the first unconsumed object whose "id" is 2, or None
    """

    def __init__(self, elements: Sequence[JsonValue]) -> None:
        self._elements: tuple[JsonValue, ...] = tuple(elements)
        self._consumed: np.ndarray = np.zeros(len(self._elements), dtype=bool)

    def __len__(self) -> int:
        return len(self._elements)

    @property
    def remaining(self) -> int:
        """Number of elements not consumed yet."""
        return int(np.count_nonzero(~self._consumed))

    def find(self, targets: Mapping[str, JsonValue | None]) -> int | None:
        """Return the index of the first unconsumed object matching ``targets``.

        An element matches when every target field compares raw-equal
        (no coercion); a field absent from both sides matches.  Non-object
        elements never match.
        """
        for idx in np.flatnonzero(~self._consumed).tolist():
            candidate = self._elements[idx]
            if not candidate.is_object:
                continue
            if all(candidate.get(name) == value for name, value in targets.items()):
                return idx
        return None

    def take(self, targets: Mapping[str, JsonValue | None]) -> JsonValue | None:
        """Consume and return the first element matching ``targets``, or None."""
        idx = self.find(targets)
        if idx is None:
            return None
        self._consumed[idx] = True
        return self._elements[idx]
