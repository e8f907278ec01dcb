"""Tests for the "//" path builder."""

from __future__ import annotations

import pytest

from json_conform.tree.path import (
    ARRAY_MARKER,
    extend,
    normalize,
    relabel_root,
    segments,
    strip_indices,
)


class TestExtend:
    def test_extend_non_empty_parent(self) -> None:
        assert extend("DATA", "cats") == "DATA//cats"

    def test_extend_empty_parent(self) -> None:
        assert extend("", "cats") == "//cats"

    def test_extend_with_index(self) -> None:
        assert extend("DATA//cats//<array>", 3) == "DATA//cats//<array>//3"

    def test_array_marker(self) -> None:
        assert extend("DATA//cats", ARRAY_MARKER) == "DATA//cats//<array>"


class TestSegments:
    def test_segments(self) -> None:
        assert segments("DATA//a//<array>//0") == ["DATA", "a", "<array>", "0"]

    def test_root_only(self) -> None:
        assert segments("DATA") == ["DATA"]


class TestRelabelRoot:
    def test_relabels_matching_root(self) -> None:
        assert relabel_root("DATA//a//b", "DATA", "right.json") == "right.json//a//b"

    def test_relabels_bare_root(self) -> None:
        assert relabel_root("DATA", "DATA", "right.json") == "right.json"

    def test_leaves_other_roots(self) -> None:
        assert relabel_root("left.json//a", "DATA", "right.json") == "left.json//a"

    def test_only_first_segment(self) -> None:
        assert relabel_root("DATA//DATA", "DATA", "x") == "x//DATA"


class TestNormalize:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("DATA//a//b", "DATA//a//b"),
            ("right.json//a//b", "DATA//a//b"),
            ("DATA//a[0]//b", "DATA//a//b"),
            ("DATA//[0]//b", "DATA//b"),
            ("DATA//a[1]//b[id=2]//c", "DATA//a//b//c"),
            ("//a", "DATA//a"),
            ("DATA", "DATA"),
            ("", "DATA"),
        ],
    )
    def test_normalize(self, path: str, expected: str) -> None:
        assert normalize(path, "DATA") == expected


class TestStripIndices:
    def test_strips_index_after_marker(self) -> None:
        assert strip_indices("DATA//a//<array>//0//b//<array>") == "DATA//a//<array>//b//<array>"

    def test_keeps_numeric_member_names(self) -> None:
        assert strip_indices("DATA//2024//x") == "DATA//2024//x"

    def test_root_array_index(self) -> None:
        assert strip_indices("DATA//<array>//12//name") == "DATA//<array>//name"

    def test_no_indices(self) -> None:
        assert strip_indices("DATA//a") == "DATA//a"
