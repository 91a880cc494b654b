"""Recognizers for the known module container call shapes.

WHY: Webpack wraps the module list differently depending on version,
output target and optimizations. Each shape is a call expression that
looks a lot like the others (and like ordinary application code), so
every recognizer checks the full structure before claiming a match.

HOW: Each matcher takes a Call node and returns the module location map
when the call has its shape, or None. MATCHERS lists them in priority
order; the driver tries them in that order at every call it visits.

RULES:
- Shapes, in priority order:
    1. jsonp chunk:      loader([<chunks>], <modules>, ...)
    2. compacted chunk:  loader([<chunks>], Array(<min id>).concat([...]))
    3. main bundle:      (function (modules) {...})(<modules>)
    4. webpack 4 chunk:  (window.q = window.q || []).push([[<chunks>], <modules>, ...])
- The loader function name is configurable in webpack (jsonpFunction),
  so shapes 1 and 2 accept any plain identifier callee
- Shape 4 only recognizes a queue stored on ``window`` (``window.q`` or
  ``window["q"]``); ``.push`` itself must be a plain property access
- A near miss is not an error; the matcher just returns None
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from bundle_extractor.core.classify import (
    is_array_concat,
    is_chunk_id_list,
    is_module_list,
)
from bundle_extractor.core.locations import (
    ModuleLocationMap,
    locations_from_array_concat,
    locations_from_module_list,
)
from bundle_extractor.core.syntax import (
    ArrayLiteral,
    Assignment,
    Call,
    Function,
    Identifier,
    Member,
)

Matcher = Callable[[Call], Optional[ModuleLocationMap]]


def match_chunk_modules_call(node: Call) -> Optional[ModuleLocationMap]:
    """Additional chunk without the runtime: ``webpackJsonp([<chunks>], <modules>)``."""
    args = node.arguments
    if (
        isinstance(node.callee, Identifier)
        and len(args) >= 2
        and is_chunk_id_list(args[0])
        and is_module_list(args[1])
    ):
        return locations_from_module_list(args[1])
    return None


def match_chunk_array_concat_call(node: Call) -> Optional[ModuleLocationMap]:
    """Additional chunk with compacted ids.

    ``webpackJsonp([<chunks>], Array(<min id>).concat([<module>, ...]))``
    """
    args = node.arguments
    if (
        isinstance(node.callee, Identifier)
        and len(args) in (2, 3)
        and is_chunk_id_list(args[0])
        and is_array_concat(args[1])
    ):
        return locations_from_array_concat(args[1])
    return None


def match_anonymous_iife(node: Call) -> Optional[ModuleLocationMap]:
    """Main bundle: the runtime IIFE receives the module list as its only argument."""
    args = node.arguments
    if (
        isinstance(node.callee, Function)
        and not node.callee.is_arrow
        and node.callee.name is None
        and len(args) == 1
        and is_module_list(args[0])
    ):
        return locations_from_module_list(args[0])
    return None


def _is_window_queue_push(node: Call) -> bool:
    callee = node.callee
    if not isinstance(callee, Member) or callee.computed or callee.property_name != "push":
        return False
    target = callee.object
    if not isinstance(target, Assignment) or not isinstance(target.left, Member):
        return False
    queue_owner = target.left.object
    return isinstance(queue_owner, Identifier) and queue_owner.name == "window"


def match_window_queue_push(node: Call) -> Optional[ModuleLocationMap]:
    """Webpack 4 chunk pushed onto the global jsonp queue.

    ``(window.webpackJsonp = window.webpackJsonp || []).push([[<chunks>], <modules>, [<entries>]])``

    The optional third element (entry modules to run) is ignored.
    """
    if not _is_window_queue_push(node) or len(node.arguments) != 1:
        return None
    payload = node.arguments[0]
    if (
        isinstance(payload, ArrayLiteral)
        and len(payload.elements) >= 2
        and is_chunk_id_list(payload.elements[0])
        and is_module_list(payload.elements[1])
    ):
        return locations_from_module_list(payload.elements[1])
    return None


MATCHERS: Tuple[Tuple[str, Matcher], ...] = (
    ("chunk-modules", match_chunk_modules_call),
    ("chunk-array-concat", match_chunk_array_concat_call),
    ("anonymous-iife", match_anonymous_iife),
    ("window-queue-push", match_window_queue_push),
)
"""Container matchers in priority order, keyed by a name used in logs."""


def match_container(node: Call) -> Optional[Tuple[str, ModuleLocationMap]]:
    """Try every matcher in priority order; return the first hit and its name."""
    for name, matcher in MATCHERS:
        locations = matcher(node)
        if locations is not None:
            return name, locations
    return None
