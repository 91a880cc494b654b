"""Structural predicates that classify single syntax nodes.

WHY: Every container shape is built from the same few pieces — a list
of chunk ids, a list of module wrappers, a bare module id. The shape
matchers compose these predicates instead of re-checking node details.

HOW: classify_id() maps a node onto the IdKind sum type. The boolean
predicates are thin compositions over it and over the node variants
from syntax.py.

RULES:
- Module ids are non-negative integer literals or string literals;
  ``true``/``false``, negative numbers (unary minus) and fractions are not
- A chunk id list is an array literal of module ids only; a sparse slot
  disqualifies it
- A module wrapper is an anonymous function/arrow, a bare module id
  (deduplication alias) or ``[id, ...args]`` with at least two elements
- A module list is an object whose every member has a static key (or a
  computed identifier key, keyed by its name) and a wrapper value, or an
  array whose every element is a wrapper or a sparse slot
- The array-concat shape is ``Array(n).concat([...])`` with a single
  non-negative integer n and a single array argument
- All predicates are pure
"""

from __future__ import annotations

import enum
from typing import Optional

from bundle_extractor.core.syntax import (
    ArrayLiteral,
    Call,
    Function,
    Identifier,
    Literal,
    Member,
    ObjectLiteral,
    Property,
    PropertyKey,
    SyntaxNode,
)


class IdKind(enum.Enum):
    """What kind of module/chunk id a node is, if any."""

    INTEGER = "integer"
    STRING = "string"
    NOT_AN_ID = "not_an_id"


def classify_id(node: Optional[SyntaxNode]) -> IdKind:
    if not isinstance(node, Literal):
        return IdKind.NOT_AN_ID
    value = node.value
    if isinstance(value, bool):
        return IdKind.NOT_AN_ID
    if isinstance(value, int) and value >= 0:
        return IdKind.INTEGER
    if isinstance(value, str):
        return IdKind.STRING
    return IdKind.NOT_AN_ID


def is_module_id(node: Optional[SyntaxNode]) -> bool:
    return classify_id(node) is not IdKind.NOT_AN_ID


def is_numeric_id(node: Optional[SyntaxNode]) -> bool:
    return classify_id(node) is IdKind.INTEGER


def is_chunk_id_list(node: SyntaxNode) -> bool:
    """True for ``[0, 1]`` or ``["main", "vendor"]``.

    Chunk ids are strings when named chunks are enabled.
    """
    return isinstance(node, ArrayLiteral) and all(
        is_module_id(element) for element in node.elements
    )


def is_module_wrapper(node: SyntaxNode) -> bool:
    """True if ``node`` can stand for one module inside a module list."""
    if isinstance(node, Function):
        return node.name is None
    if is_module_id(node):
        return True
    return (
        isinstance(node, ArrayLiteral)
        and len(node.elements) > 1
        and is_module_id(node.elements[0])
    )


def property_module_key(prop: Property) -> PropertyKey:
    """The module id an object member is keyed by, or None if it has none.

    ``{[k]: ...}`` is keyed by the identifier name ``"k"``.
    """
    if prop.key is not None:
        return prop.key
    if isinstance(prop.computed_key, Identifier):
        return prop.computed_key.name
    return None


def is_module_list(node: SyntaxNode) -> bool:
    """True for ``{id: wrapper, ...}`` or ``[wrapper, , wrapper, ...]``."""
    if isinstance(node, ObjectLiteral):
        return all(
            property_module_key(prop) is not None and is_module_wrapper(prop.value)
            for prop in node.properties
        )
    if isinstance(node, ArrayLiteral):
        # Array indexes are module ids; missing ids leave holes
        return all(
            element is None or is_module_wrapper(element)
            for element in node.elements
        )
    return False


def is_array_concat(node: SyntaxNode) -> bool:
    """True for the id-compaction shape ``Array(<min id>).concat([...])``.

    Webpack 1 emits this when module ids start far above zero, so the
    array indexes plus the minimum id are the module ids.
    """
    if not isinstance(node, Call) or not isinstance(node.callee, Member):
        return False
    target = node.callee.object
    return (
        isinstance(target, Call)
        and isinstance(target.callee, Identifier)
        and target.callee.name == "Array"
        and len(target.arguments) == 1
        and is_numeric_id(target.arguments[0])
        and not node.callee.computed
        and node.callee.property_name == "concat"
        and len(node.arguments) == 1
        and isinstance(node.arguments[0], ArrayLiteral)
    )
