"""ProgressObserver Protocol for the comparator's progress side channel.

Any object with a conformant ``element_visited`` method can observe a
comparison run, no inheritance required.  Observers are advisory: they
never influence the findings, and running without one produces the same
DiffLog.

Example::

    from json_conform.protocols import ProgressObserver

    class Counter:
        def __init__(self) -> None:
            self.visited = 0

        def element_visited(self, path: str) -> None:
            self.visited += 1

    assert isinstance(Counter(), ProgressObserver)  # True, structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressObserver(Protocol):
    """Structural protocol for progress observers.

    ``element_visited`` is called once per expected element of every
    array that is not nested inside another array.  It must not block.
    """

    def element_visited(self, path: str) -> None: ...
