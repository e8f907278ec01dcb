"""ComparisonConfig and CompareDirection for comparison runs.

ComparisonConfig is a frozen (immutable) dataclass holding the
caller-supplied key declarations, ignore paths and coercion switch.
CompareDirection selects which document plays the "expected" role.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto

from json_conform.tree.path import SEPARATOR

DEFAULT_ROOT_LABEL = "DATA"


class CompareDirection(StrEnum):
    """Which document is validated against which.

    - RIGHT_AS_ACTUAL: left is expected, right is validated against it.
    - LEFT_AS_ACTUAL:  right is expected, left is validated against it.
    - BOTH:            both passes, findings accumulated into one log.
    """

    RIGHT_AS_ACTUAL = auto()
    LEFT_AS_ACTUAL = auto()
    BOTH = auto()


def _string_items(name: str, values: Iterable[str]) -> list[str]:
    if isinstance(values, str):
        msg = f"{name} must be a collection of strings, not a single string"
        raise TypeError(msg)
    items = list(values)
    for item in items:
        if not isinstance(item, str):
            msg = f"{name} entries must be strings, got {type(item)!r}"
            raise TypeError(msg)
    return items


@dataclass(frozen=True, slots=True)
class ComparisonConfig:
    """Immutable configuration for one comparison run.

    Attributes:
        key_declarations: Declarations of the form ``DATA.cats.<array>.id``
            (or ``DATA//cats//<array>//id``) naming a field that identifies
            the elements of the array at that location.  Several
            declarations for the same array form a composite key.
        ignore_paths: Paths such as ``DATA//user//updated_at`` whose value
            mismatches are not reported.  Missing properties and type
            mismatches at those paths are still reported.
        coerce_types: When True, scalars of different types are equal if
            the actual value's text parses to the expected value
            (e.g. ``5`` vs ``"5"``).  Default False.
        root_label: Canonical label of the document root used by key
            declarations and ignore paths.  Default ``"DATA"``.
    """

    key_declarations: tuple[str, ...] = ()
    ignore_paths: frozenset[str] = field(default_factory=frozenset)
    coerce_types: bool = False
    root_label: str = DEFAULT_ROOT_LABEL

    def __post_init__(self) -> None:
        keys = _string_items("key_declarations", self.key_declarations)
        ignores = _string_items("ignore_paths", self.ignore_paths)
        object.__setattr__(self, "key_declarations", tuple(keys))
        object.__setattr__(self, "ignore_paths", frozenset(ignores))
        if not isinstance(self.coerce_types, bool):
            msg = f"coerce_types must be a bool, got {type(self.coerce_types)!r}"
            raise TypeError(msg)
        if not self.root_label:
            msg = "root_label must be a non-empty string"
            raise ValueError(msg)
        if SEPARATOR in self.root_label or "." in self.root_label:
            msg = f"root_label must not contain '{SEPARATOR}' or '.', got {self.root_label!r}"
            raise ValueError(msg)
