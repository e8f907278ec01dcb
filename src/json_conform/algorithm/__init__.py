"""algorithm subpackage: configuration, key resolution and value rules.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_conform.algorithm import ComparisonConfig, KeyResolver, values_equal

    config = ComparisonConfig(key_declarations=("DATA.cats.<array>.id",))
    resolver = KeyResolver(config.key_declarations)
    resolver.matching_keys("DATA//cats//<array>")   # ("id",)
"""

from __future__ import annotations

from json_conform.algorithm.config import CompareDirection, ComparisonConfig
from json_conform.algorithm.keys import KeyResolver
from json_conform.algorithm.matcher import ElementPool
from json_conform.algorithm.values import render_text, values_equal

__all__ = [
    "CompareDirection",
    "ComparisonConfig",
    "ElementPool",
    "KeyResolver",
    "render_text",
    "values_equal",
]
