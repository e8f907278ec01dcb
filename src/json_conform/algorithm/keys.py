"""KeyResolver: which key fields and ignore paths apply at a given path.

Key declarations name, per array location, the element fields that
identify corresponding elements across two arrays::

    DATA.cats.<array>.id          # dot form
    DATA//cats//<array>//id       # equivalent "//" form

When the comparator reaches the array at ``DATA//cats//<array>``,
``matching_keys`` strips that prefix from every declaration; remainders
without a further separator (here ``id``) are key fields of this array.
Remainders that still contain a separator belong to a nested array and
are picked up once the walk reaches it.  Element indices are dropped from
the current path before matching (``DATA//a//<array>//0//b//<array>`` is
looked up as ``DATA//a//<array>//b//<array>``).

Ignore paths are matched against the normalized current path (bracketed
annotations stripped, root segment replaced by the canonical label), with
or without its element indices.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from cachetools import LRUCache

from json_conform.algorithm.config import DEFAULT_ROOT_LABEL
from json_conform.tree.path import ARRAY_MARKER, SEPARATOR, normalize, segments, strip_indices

logger = logging.getLogger(__name__)

__all__ = ["KeyResolver", "parse_declaration"]


def parse_declaration(declaration: str, root_label: str = DEFAULT_ROOT_LABEL) -> str | None:
    """Convert a key declaration to ``//`` form, or None when malformed.

    A well-formed declaration starts with the root label, has at least
    three non-empty segments and its second-last segment is the array
    marker.  Dot form is accepted when the declaration contains no ``//``.
    """
    text = declaration.strip()
    if SEPARATOR in text:
        parts = segments(text)
    else:
        parts = text.split(".")

    if len(parts) < 3 or any(not part for part in parts):
        return None
    if parts[0] != root_label or parts[-2] != ARRAY_MARKER:
        return None
    return SEPARATOR.join(parts)


class KeyResolver:
    """Resolves key fields and ignore decisions for the current path.

    Malformed key declarations are logged at WARNING and dropped, so they
    never switch an array to key-based matching.  Ignore paths without a
    separator (other than the bare root label) are dropped the same way.
    Resolved key tuples are memoized per path in a per-instance ``LRUCache``
    guarded by a lock, so one resolver may serve concurrent comparison runs.

    Example::

        resolver = KeyResolver(["DATA.cats.<array>.id"])
        resolver.matching_keys("DATA//cats//<array>")   # ("id",)
        resolver.matching_keys("DATA//dogs//<array>")   # ()
    """

    def __init__(
        self,
        key_declarations: Iterable[str] = (),
        ignore_paths: Iterable[str] = (),
        root_label: str = DEFAULT_ROOT_LABEL,
        max_cache_size: int = 256,
    ) -> None:
        self._root_label = root_label
        self._declarations: tuple[str, ...] = self._parse_declarations(key_declarations)
        self._ignore_paths: frozenset[str] = self._parse_ignore_paths(ignore_paths)
        self._cache: LRUCache[str, tuple[str, ...]] = LRUCache(maxsize=max_cache_size)
        self._cache_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def declarations(self) -> tuple[str, ...]:
        """The well-formed declarations, in ``//`` form."""
        return self._declarations

    @property
    def ignore_paths(self) -> frozenset[str]:
        """The root-normalized ignore paths."""
        return self._ignore_paths

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def matching_keys(self, current_path: str) -> tuple[str, ...]:
        """Return the key fields of the array at ``current_path``.

        Element indices in the path are dropped first, so a declaration
        for a nested array applies to that array inside every element.

        Args:
            current_path: Path of the array node, ending in the array marker.

        Returns:
            Field names in declaration order, without duplicates.  Empty
            when no declaration applies (positional comparison).
        """
        array_path = strip_indices(current_path)
        with self._cache_lock:
            cached = self._cache.get(array_path)
        if cached is not None:
            return cached

        prefix = array_path + SEPARATOR
        fields: dict[str, None] = {}
        for declaration in self._declarations:
            if not declaration.startswith(prefix):
                continue
            remainder = declaration[len(prefix) :]
            if SEPARATOR not in remainder:
                fields[remainder] = None

        result = tuple(fields)
        with self._cache_lock:
            self._cache[array_path] = result
        return result

    def is_ignored(self, current_path: str) -> bool:
        """Return True when value mismatches at ``current_path`` are ignored.

        Matches either the exact normalized path or its index-free form, so
        ``DATA//items//<array>//name`` covers ``name`` in every element.
        """
        if not self._ignore_paths:
            return False
        normalized = normalize(current_path, self._root_label)
        return (
            normalized in self._ignore_paths
            or strip_indices(normalized) in self._ignore_paths
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _parse_declarations(self, declarations: Iterable[str]) -> tuple[str, ...]:
        parsed: list[str] = []
        for declaration in declarations:
            normalized = parse_declaration(declaration, self._root_label)
            if normalized is None:
                logger.warning(
                    "Ignoring malformed key declaration %r (expected %s.<segment>...%s.<field>)",
                    declaration,
                    self._root_label,
                    ARRAY_MARKER,
                )
                continue
            parsed.append(normalized)
        return tuple(parsed)

    def _parse_ignore_paths(self, ignore_paths: Iterable[str]) -> frozenset[str]:
        parsed: set[str] = set()
        for path in ignore_paths:
            if SEPARATOR not in path and path != self._root_label:
                logger.warning(
                    "Dropping ignore path %r without a '//' separator "
                    "(expected %s%s<segment>...)",
                    path,
                    self._root_label,
                    SEPARATOR,
                )
                continue
            parsed.add(normalize(path, self._root_label))
        return frozenset(parsed)
