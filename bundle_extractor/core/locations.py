"""Module id → byte range extraction from a recognized module list.

WHY: Once a matcher has identified the module list inside a container,
the only remaining work is to pair every module id with the byte span
of its wrapper expression. Keeping this separate from the matchers
means each matcher only decides *where* the list is.

HOW: locations_from_module_list() walks an object literal (ids are the
keys) or an array literal (ids are the indexes).
locations_from_array_concat() handles ``Array(minId).concat([...])``
where ids are the indexes shifted by minId.

RULES:
- Ranges are the wrapper expression's own ``[start, end)``, untouched
- Sparse array slots produce no entry
- Ids are strings; integers are rendered in decimal
- Anything other than an object or array literal yields an empty map
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

from bundle_extractor.core.classify import is_array_concat, property_module_key
from bundle_extractor.core.syntax import (
    ArrayLiteral,
    ObjectLiteral,
    SyntaxNode,
)


@dataclass(frozen=True)
class SourceRange:
    """A ``[start, end)`` byte range in the bundle source."""

    start: int
    end: int

    @classmethod
    def of(cls, node: SyntaxNode) -> SourceRange:
        return cls(node.start, node.end)

    @property
    def length(self) -> int:
        return self.end - self.start


ModuleLocationMap = Dict[str, SourceRange]


def module_id_key(value: Union[str, int, float]) -> str:
    """Render a module id the way it is keyed in every location map."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _locations_from_elements(
    elements: Sequence[Optional[SyntaxNode]], offset: int = 0
) -> ModuleLocationMap:
    locations: ModuleLocationMap = {}
    for index, element in enumerate(elements):
        if element is None:
            continue
        locations[module_id_key(index + offset)] = SourceRange.of(element)
    return locations


def locations_from_module_list(node: SyntaxNode) -> ModuleLocationMap:
    """Map module ids to wrapper ranges for an object or array module list."""
    if isinstance(node, ObjectLiteral):
        locations: ModuleLocationMap = {}
        for prop in node.properties:
            key = property_module_key(prop)
            if key is None:
                continue
            locations[module_id_key(key)] = SourceRange.of(prop.value)
        return locations

    if isinstance(node, ArrayLiteral):
        return _locations_from_elements(node.elements)

    return {}


def locations_from_array_concat(node: SyntaxNode) -> ModuleLocationMap:
    """Map module ids for ``Array(minId).concat([<minId>, <minId + 1>, ...])``.

    The minimum id is the literal passed to ``Array()``; the modules are
    the elements of the single array passed to ``concat``.

    Raises:
        ValueError: If ``node`` does not have the array-concat shape.
    """
    if not is_array_concat(node):
        raise ValueError("Expected an Array(<min id>).concat([...]) expression")
    min_id = node.callee.object.arguments[0].value
    return _locations_from_elements(node.arguments[0].elements, offset=min_id)
