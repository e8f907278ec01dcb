"""pytest plugin for json-conform.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_conform import ComparisonConfig, compare


@pytest.fixture(scope="session")
def assert_json_conforms() -> Any:
    """Fixture that returns a callable JSON conformance asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh TreeComparator per call).

    Usage in tests::

        def test_payload(assert_json_conforms):
            assert_json_conforms({"id": 1, "extra": True}, {"id": 1})

        def test_missing_member(assert_json_conforms):
            with pytest.raises(AssertionError, match=r"property is missing"):
                assert_json_conforms({}, {"id": 1})

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that
        raises ``AssertionError`` when validating ``actual`` against
        ``expected`` finds any difference.
    """

    def _assert(
        actual: Any,
        expected: Any,
        config: ComparisonConfig | None = None,
    ) -> None:
        """Assert that ``actual`` conforms to ``expected``.

        Raises:
            AssertionError: When differences exist, with every finding and
                the summary in the message.
        """
        log = compare(expected, actual, config=config, left_name="expected", right_name="actual")
        if log.total:
            raise AssertionError(
                f"JSON document does not conform: {log.total} differences\n"
                f"{log.render()}"
            )

    return _assert
