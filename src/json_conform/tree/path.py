"""Path builder for the "//"-delimited display paths of diff records.

A path is a root label followed by ``//``-joined segments: object member
names, the array marker (``<array>``, once per array) and stringified
element indices.  For example ``DATA//cats//<array>//1//name``.

All functions are pure; the comparator threads the current path through
its recursive calls as an explicit argument.
"""

from __future__ import annotations

import re

SEPARATOR = "//"
ARRAY_MARKER = "<array>"

# Bracketed annotations such as "[3]" or "[id=2]"
_ANNOTATION = re.compile(r"\[[^()]*?\]")


def extend(parent: str, segment: str | int) -> str:
    """Append ``segment`` to ``parent``.

    Returns ``parent + "//" + segment``, or ``"//" + segment`` when the
    parent is empty.
    """
    if parent:
        return f"{parent}{SEPARATOR}{segment}"
    return f"{SEPARATOR}{segment}"


def segments(path: str) -> list[str]:
    """Split a path into its segments (the root label first)."""
    return path.split(SEPARATOR)


def relabel_root(path: str, old: str, new: str) -> str:
    """Replace the root segment of ``path`` with ``new`` when it equals ``old``."""
    root, sep, rest = path.partition(SEPARATOR)
    if root != old:
        return path
    return f"{new}{sep}{rest}"


def normalize(path: str, root_label: str) -> str:
    """Normalize a path for ignore-list lookups.

    Strips bracketed annotations, collapses the doubled separators they
    leave behind and substitutes ``root_label`` for the root segment.
    """
    cleaned = _ANNOTATION.sub("", path)
    while SEPARATOR * 2 in cleaned:
        cleaned = cleaned.replace(SEPARATOR * 2, SEPARATOR)
    root, sep, rest = cleaned.partition(SEPARATOR)
    if not root and not sep:
        return root_label
    return f"{root_label}{sep}{rest}"


def strip_indices(path: str) -> str:
    """Drop the element index that follows each array marker.

    ``DATA//a//<array>//0//b//<array>`` becomes ``DATA//a//<array>//b//<array>``,
    the index-free form key declarations are written in.
    """
    parts = segments(path)
    kept = [
        part
        for idx, part in enumerate(parts)
        if not (idx > 0 and parts[idx - 1] == ARRAY_MARKER and part.isdigit())
    ]
    return SEPARATOR.join(kept)
