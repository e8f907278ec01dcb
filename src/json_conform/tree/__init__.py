"""Tree subpackage for the JSON value model.

Re-exports the public API for the tree module:
- JsonValue: immutable tagged-union node of a decoded JSON tree
- ValueKind: StrEnum of the seven value kinds (NULL, BOOL, INT, FLOAT, STRING, OBJECT, ARRAY)
- Document: a named JSON tree, one side of a comparison
- ValueBuilder: converts decoded Python JSON values into JsonValue trees
"""

from json_conform.tree.builder import ValueBuilder
from json_conform.tree.nodes import Document, JsonValue, ValueKind

__all__ = ["Document", "JsonValue", "ValueBuilder", "ValueKind"]
