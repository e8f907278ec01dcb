"""Tests for ProgressObserver Protocol conformance.

Verifies that:
- User-defined classes with a conformant ``element_visited`` method satisfy the Protocol.
- Classes without ``element_visited`` do not satisfy it.
- The CLI's rich progress reporter satisfies the Protocol structurally.
"""

from __future__ import annotations

from rich.progress import Progress

from json_conform.cli import _ProgressReporter
from json_conform.protocols import ProgressObserver


class _UserObserver:
    """Minimal user-defined observer conforming to ProgressObserver."""

    def element_visited(self, path: str) -> None:
        pass


class _WrongNameObserver:
    """Class with wrong method name; should NOT satisfy Protocol."""

    def visited(self, path: str) -> None:
        pass


class TestProgressObserverConformance:
    def test_user_observer_satisfies_protocol(self) -> None:
        assert isinstance(_UserObserver(), ProgressObserver)

    def test_wrong_name_does_not_satisfy_protocol(self) -> None:
        assert not isinstance(_WrongNameObserver(), ProgressObserver)

    def test_plain_object_does_not_satisfy_protocol(self) -> None:
        assert not isinstance(object(), ProgressObserver)

    def test_progress_reporter_satisfies_protocol(self) -> None:
        progress = Progress(disable=True)
        reporter = _ProgressReporter(progress)
        assert isinstance(reporter, ProgressObserver)
        reporter.element_visited("DATA//<array>//0")
        reporter.element_visited("DATA//<array>//1")
        assert progress.tasks[0].completed == 2
