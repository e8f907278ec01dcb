"""TreeComparator: orchestrator that walks two JSON trees and records findings.

This is the central wiring layer between the value model, the key
resolver, the value comparator and the diff log.

Architecture:
- Every pass walks the *expected* tree and looks up the corresponding
  actual values, so every finding addresses a location in the expected
  tree.  Extra members present only in the actual tree are not reported;
  symmetry comes from running both directions.
- Passes are walked under the canonical root label (``DATA`` by default)
  that key declarations and ignore paths are written against.  The
  finished log is relabeled with the name of the document under
  validation.
- The current path is threaded through the recursion as an argument and
  each pass owns a fresh DiffLog, so a comparator holds no per-run state
  and independent runs may execute in parallel.
- Arrays are compared positionally unless the KeyResolver finds key
  fields for the array's path, in which case elements are matched by key
  through an ElementPool (each actual element is consumed at most once).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from json_conform.algorithm.config import CompareDirection, ComparisonConfig
from json_conform.algorithm.keys import KeyResolver
from json_conform.algorithm.matcher import ElementPool, key_values
from json_conform.algorithm.values import values_equal
from json_conform.result import DiffLog
from json_conform.tree.builder import ValueBuilder
from json_conform.tree.nodes import Document, JsonValue
from json_conform.tree.path import ARRAY_MARKER, extend

if TYPE_CHECKING:
    from json_conform.protocols import ProgressObserver

logger = logging.getLogger(__name__)

__all__ = ["TreeComparator"]


class TreeComparator:
    """Orchestrator for structural JSON comparison.

    Wires ``KeyResolver``, ``values_equal`` and ``DiffLog`` together into
    the three comparison directions.  A comparator can be reused: every
    call returns a new, independent DiffLog.

    Example::

        from json_conform.comparator import TreeComparator
        from json_conform.algorithm.config import ComparisonConfig
        from json_conform.tree.nodes import Document

        cmp = TreeComparator(ComparisonConfig(key_declarations=("DATA.cats.<array>.id",)))
        left = Document.from_python("left.json", {"cats": [{"id": 1, "name": "Nyan"}]})
        right = Document.from_python("right.json", {"cats": [{"id": 1, "name": "Marx"}]})
        log = cmp.compare_right_as_actual(left, right)
        print(log.render())
        # right.json//cats//<array>//0//name
        # unequal values: expected Nyan, got Marx instead
        # ...
    """

    def __init__(
        self,
        config: ComparisonConfig | None = None,
        observer: ProgressObserver | None = None,
        should_stop: Callable[[], bool] | None = None,
        max_cache_size: int = 256,
    ) -> None:
        """Initialise the comparator.

        Args:
            config: Key declarations, ignore paths and coercion switch.
                Defaults to ``ComparisonConfig()``.
            observer: Optional progress observer, notified once per element
                of every array not nested inside another array.
            should_stop: Optional cancellation check (e.g.
                ``threading.Event().is_set``), consulted at the top of every
                recursive step.  Once it returns True the walk unwinds and
                the log is marked ``aborted``.
            max_cache_size: Size of the resolver's per-path key cache.
        """
        self._config: ComparisonConfig = config if config is not None else ComparisonConfig()
        self._resolver = KeyResolver(
            self._config.key_declarations,
            self._config.ignore_paths,
            root_label=self._config.root_label,
            max_cache_size=max_cache_size,
        )
        self._observer = observer
        self._should_stop = should_stop
        self._builder = ValueBuilder()

    @property
    def config(self) -> ComparisonConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(
        self,
        left: Document | Any,
        right: Document | Any,
        direction: CompareDirection = CompareDirection.RIGHT_AS_ACTUAL,
    ) -> DiffLog:
        """Compare two documents in the given direction.

        Args:
            left:  Left Document, or a JsonValue / decoded JSON value
                   (named ``"left"``).
            right: Right Document, or a JsonValue / decoded JSON value
                   (named ``"right"``).
            direction: Which side plays the expected role.

        Returns:
            A fresh DiffLog.
        """
        if direction == CompareDirection.RIGHT_AS_ACTUAL:
            return self.compare_right_as_actual(left, right)
        if direction == CompareDirection.LEFT_AS_ACTUAL:
            return self.compare_left_as_actual(left, right)
        return self.compare_both_directions(left, right)

    def compare_right_as_actual(self, left: Document | Any, right: Document | Any) -> DiffLog:
        """Validate the right document against the left one.

        Paths in the returned log are rooted at the right document's name.
        """
        left_doc = self._as_document(left, "left")
        right_doc = self._as_document(right, "right")
        return self._run_pass(left_doc.root, right_doc.root, right_doc.name)

    def compare_left_as_actual(self, left: Document | Any, right: Document | Any) -> DiffLog:
        """Validate the left document against the right one.

        Paths in the returned log are rooted at the left document's name.
        """
        left_doc = self._as_document(left, "left")
        right_doc = self._as_document(right, "right")
        return self._run_pass(right_doc.root, left_doc.root, left_doc.name)

    def compare_both_directions(self, left: Document | Any, right: Document | Any) -> DiffLog:
        """Run both passes and accumulate their findings into one log.

        Right-as-actual findings come first (rooted at the right document's
        name), followed by left-as-actual findings (rooted at the left
        document's name).
        """
        left_doc = self._as_document(left, "left")
        right_doc = self._as_document(right, "right")
        log = DiffLog()
        log.extend(self._run_pass(left_doc.root, right_doc.root, right_doc.name))
        if not log.aborted:
            log.extend(self._run_pass(right_doc.root, left_doc.root, left_doc.name))
        return log

    def compare_trees(self, expected: JsonValue | Any, actual: JsonValue | Any) -> DiffLog:
        """Run a single pass; paths keep the canonical root label.

        Root dispatch: two arrays or two objects are walked; two scalars are
        compared as values; any other pairing is a single INCORRECT_TYPE at
        the root and nothing underneath is inspected.
        """
        expected_root = self._builder.build(expected)
        actual_root = self._builder.build(actual)
        root = self._config.root_label
        log = DiffLog()

        t0 = time.perf_counter()
        if expected_root.is_array and actual_root.is_array:
            self._compare_array(root, expected_root, actual_root, log, observed=True)
        elif expected_root.is_object and actual_root.is_object:
            self._compare_object(root, expected_root, actual_root, log, observed=True)
        elif not expected_root.is_container and not actual_root.is_container:
            self._compare_scalar(root, expected_root, actual_root, log)
        else:
            log.incorrect_type(root, expected_root, actual_root)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        logger.debug(
            "Comparison pass finished: %d differences in %.2f ms%s",
            log.total,
            elapsed_ms,
            " (aborted)" if log.aborted else "",
        )
        return log

    # ------------------------------------------------------------------
    # Pass orchestration
    # ------------------------------------------------------------------

    def _as_document(self, value: Document | Any, default_name: str) -> Document:
        if isinstance(value, Document):
            return value
        return Document(name=default_name, root=self._builder.build(value))

    def _run_pass(self, expected: JsonValue, actual: JsonValue, label: str) -> DiffLog:
        logger.debug("Comparing with %r as the actual document", label)
        log = self.compare_trees(expected, actual)
        return log.relabeled(self._config.root_label, label)

    def _stopped(self, log: DiffLog) -> bool:
        if log.aborted:
            return True
        if self._should_stop is not None and self._should_stop():
            logger.debug("Comparison stopped on request")
            log.aborted = True
        return log.aborted

    def _notify(self, path: str, observed: bool) -> None:
        if observed and self._observer is not None:
            self._observer.element_visited(path)

    # ------------------------------------------------------------------
    # Structural dispatch
    # ------------------------------------------------------------------

    def _compare_object(
        self,
        path: str,
        expected: JsonValue,
        actual: JsonValue,
        log: DiffLog,
        observed: bool,
    ) -> None:
        """Compare every member of ``expected`` against ``actual``.

        Members are visited in sorted key order so the findings never depend
        on mapping iteration order.
        """
        if self._stopped(log):
            return
        for key, expected_value in expected.items():
            member_path = extend(path, key)
            actual_value = actual.get(key)
            if actual_value is None:
                log.missing_property(member_path, expected_value)
                continue
            self._compare_member(member_path, expected_value, actual_value, log, observed)

    def _compare_member(
        self,
        path: str,
        expected: JsonValue,
        actual: JsonValue,
        log: DiffLog,
        observed: bool,
    ) -> None:
        """Dispatch on the expected value's kind, checking the actual kind first."""
        if expected.is_object:
            if actual.is_object:
                self._compare_object(path, expected, actual, log, observed)
            else:
                log.incorrect_type(path, expected, actual)
        elif expected.is_array:
            if actual.is_array:
                self._compare_array(path, expected, actual, log, observed)
            else:
                log.incorrect_type(path, expected, actual)
        elif expected != actual:
            self._compare_scalar(path, expected, actual, log)

    def _compare_scalar(
        self,
        path: str,
        expected: JsonValue,
        actual: JsonValue,
        log: DiffLog,
    ) -> None:
        """Record INCORRECT_TYPE or UNEQUAL_VALUE for two unequal values.

        A kind mismatch that survives coercion takes priority over a value
        mismatch.  Ignored paths suppress UNEQUAL_VALUE only.
        """
        if values_equal(expected, actual, coerce=self._config.coerce_types):
            return
        if expected.kind != actual.kind:
            log.incorrect_type(path, expected, actual)
        elif not self._resolver.is_ignored(path):
            log.unequal_value(path, expected, actual)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _compare_array(
        self,
        path: str,
        expected: JsonValue,
        actual: JsonValue,
        log: DiffLog,
        observed: bool,
    ) -> None:
        if self._stopped(log):
            return
        array_path = extend(path, ARRAY_MARKER)
        keys = self._resolver.matching_keys(array_path)

        expected_len, actual_len = expected.size, actual.size
        if expected_len > actual_len:
            log.lack_of_items(array_path, expected_len, actual_len)
        elif expected_len < actual_len:
            log.exceeding_items(array_path, expected_len, actual_len)

        if keys:
            self._compare_array_by_key(array_path, expected, actual, keys, log, observed)
        else:
            self._compare_array_by_order(array_path, expected, actual, log, observed)

    def _compare_array_by_order(
        self,
        path: str,
        expected: JsonValue,
        actual: JsonValue,
        log: DiffLog,
        observed: bool,
    ) -> None:
        actual_elements = actual.elements
        for idx, expected_value in enumerate(expected.elements):
            # Surplus expected elements are already covered by LACK_OF_ITEMS
            if idx >= len(actual_elements) or self._stopped(log):
                break
            element_path = extend(path, idx)
            self._notify(element_path, observed)
            self._compare_member(
                element_path, expected_value, actual_elements[idx], log, observed=False
            )

    def _compare_array_by_key(
        self,
        path: str,
        expected: JsonValue,
        actual: JsonValue,
        keys: Sequence[str],
        log: DiffLog,
        observed: bool,
    ) -> None:
        """Match object elements by key fields, each actual element at most once.

        Non-object expected elements are not eligible for key matching; they
        are compared against the full actual array at the same index and never
        consume from the pool.
        """
        actual_elements = actual.elements
        pool = ElementPool(actual_elements)
        for idx, expected_value in enumerate(expected.elements):
            if self._stopped(log):
                break
            element_path = extend(path, idx)
            self._notify(element_path, observed)

            if not expected_value.is_object:
                if idx < len(actual_elements):
                    self._compare_member(
                        element_path, expected_value, actual_elements[idx], log, observed=False
                    )
                continue

            targets = key_values(expected_value, keys)
            match = pool.take(targets)
            if match is None:
                log.missing_item(element_path, expected_value, targets)
                continue
            self._compare_object(element_path, expected_value, match, log, observed=False)
