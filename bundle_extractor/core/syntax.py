"""Syntax tree variants and the tree-sitter adapter that produces them.

WHY: The shape matchers only care about a handful of JavaScript node
kinds — calls, identifiers, member access, function literals, array and
object literals, literal values and assignments. Working against
tree-sitter's raw concrete syntax tree would scatter string comparisons
on node type names (and grammar-version differences) across every
matcher. A closed set of frozen dataclasses keeps the matchers simple
and makes every kind they inspect explicit.

HOW: parse_source() runs tree-sitter with the tree-sitter-javascript
grammar over the UTF-8 encoded text, refuses trees that contain syntax
errors, and converts the concrete tree bottom-up into SyntaxNode
variants. Anything the matchers never look inside becomes ``Other``,
which still carries its children so the driver can traverse through it.

RULES:
- start/end are UTF-8 byte offsets into the encoded source, end exclusive
- Parenthesized expressions are transparent: ``(function(){})`` is the
  Function node with the range of ``function(){}``
- Comments are dropped; they never count as array elements or arguments
- Sparse array slots are ``None`` in ArrayLiteral.elements
- Integral number literals (``5``, ``5.0``, ``0x5``) have an int value;
  bigints and ``null`` have value None
- Conversion is iterative so minified bundles with very deep
  expression trees do not hit the recursion limit
- A tree with an ERROR or MISSING node raises BundleParseError
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

JS_LANGUAGE = Language(tree_sitter_javascript.language())

# Older grammar releases name function expressions "function".
_FUNCTION_TYPES = frozenset({
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
})

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})

LiteralValue = Union[int, float, str, bool, None]
PropertyKey = Union[str, int, float, None]


class BundleParseError(ValueError):
    """Raised when the bundle text is not valid JavaScript.

    Attributes:
        offset: Byte offset of the first error or missing token.
        line: 1-based line of the error.
        column: 1-based byte column of the error.
    """

    def __init__(self, offset: int, line: int, column: int) -> None:
        self.offset = offset
        self.line = line
        self.column = column
        super().__init__(
            "Bundle is not valid JavaScript: syntax error at line {}, column {}".format(
                line, column
            )
        )


# ---------------------------------------------------------------------------
# Node variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SyntaxNode:
    """Common base of every variant: a ``[start, end)`` byte range."""

    start: int
    end: int

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        return ()


@dataclass(frozen=True)
class Identifier(SyntaxNode):
    name: str


@dataclass(frozen=True)
class Literal(SyntaxNode):
    value: LiteralValue


@dataclass(frozen=True)
class Call(SyntaxNode):
    """A call expression ``callee(arguments...)``."""

    callee: SyntaxNode
    arguments: Tuple[SyntaxNode, ...]

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        return (self.callee,) + self.arguments


@dataclass(frozen=True)
class Member(SyntaxNode):
    """Property access ``object.name`` or ``object[index]``.

    For computed access ``property_name`` is the string value of a string
    literal index and None for any other index expression.
    """

    object: SyntaxNode
    property_name: Optional[str]
    computed: bool = False
    index: Optional[SyntaxNode] = None

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        if self.index is not None:
            return (self.object, self.index)
        return (self.object,)


@dataclass(frozen=True)
class Function(SyntaxNode):
    """A function, generator or arrow function expression.

    ``name`` is None for anonymous functions; arrows are always anonymous.
    The runtime IIFE is never an arrow, so arrows are flagged.
    Parameters and body are only reachable through ``children``.
    """

    name: Optional[str]
    body: Tuple[SyntaxNode, ...] = ()
    is_arrow: bool = False

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        return self.body


@dataclass(frozen=True)
class ArrayLiteral(SyntaxNode):
    elements: Tuple[Optional[SyntaxNode], ...]

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        return tuple(e for e in self.elements if e is not None)


@dataclass(frozen=True)
class Property:
    """One member of an object literal.

    ``key`` is the static key (identifier name, string or number), or
    None when the member has no static key (spread, non-literal computed
    key). Methods, shorthand properties and spreads carry an ``Other``
    value.
    """

    key: PropertyKey
    value: SyntaxNode
    computed_key: Optional[SyntaxNode] = None


@dataclass(frozen=True)
class ObjectLiteral(SyntaxNode):
    properties: Tuple[Property, ...]

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        nodes: List[SyntaxNode] = []
        for prop in self.properties:
            if prop.computed_key is not None:
                nodes.append(prop.computed_key)
            nodes.append(prop.value)
        return tuple(nodes)


@dataclass(frozen=True)
class Assignment(SyntaxNode):
    left: SyntaxNode
    right: SyntaxNode

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        return (self.left, self.right)


@dataclass(frozen=True)
class Other(SyntaxNode):
    """Any node kind the matchers never inspect (statements, operators...)."""

    kind: str
    nodes: Tuple[SyntaxNode, ...] = ()

    @property
    def children(self) -> Tuple[SyntaxNode, ...]:
        return self.nodes


# ---------------------------------------------------------------------------
# Literal decoding
# ---------------------------------------------------------------------------

def number_value(text: str) -> Optional[Union[int, float]]:
    """Decode a JavaScript numeric literal.

    Integral values come back as int so ``5`` and ``5.0`` are the same id.
    BigInt literals (``5n``) return None.
    """
    text = text.replace("_", "")
    lowered = text.lower()
    if lowered.endswith("n"):
        return None
    if lowered.startswith(("0x", "0o", "0b")):
        return int(lowered, 0)
    if len(text) > 1 and text[0] == "0" and text.isdigit():
        # Legacy octal (017) unless a non-octal digit makes it decimal (019)
        if all(c in "01234567" for c in text):
            return int(text, 8)
        return int(text)
    value = float(text)
    if value.is_integer():
        return int(value)
    return value


def _unescape(sequence: str) -> str:
    body = sequence[1:]
    head = body[:1]
    if head == "u":
        if body.startswith("u{"):
            return chr(int(body[2:-1], 16))
        return chr(int(body[1:5], 16))
    if head == "x":
        return chr(int(body[1:3], 16))
    if body in _LINE_CONTINUATIONS:
        return ""
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.isdigit() and all(c in "01234567" for c in body):
        return chr(int(body, 8))
    return body


# ---------------------------------------------------------------------------
# tree-sitter → SyntaxNode conversion
# ---------------------------------------------------------------------------

def _syntax_children(ts: Node) -> List[Node]:
    return [c for c in ts.named_children if c.type != "comment"]


def _first_error(node: Node) -> Node:
    while True:
        if node.is_error or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                node = child
                break
        else:
            return node


class _Converter:
    """Bottom-up conversion of one concrete tree into SyntaxNode variants."""

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._built: Dict[int, Any] = {}

    def convert(self, root: Node) -> SyntaxNode:
        stack: List[Tuple[Node, bool]] = [(root, False)]
        while stack:
            ts, ready = stack.pop()
            if ready:
                self._built[ts.id] = self._build(ts)
                continue
            stack.append((ts, True))
            for child in reversed(_syntax_children(ts)):
                stack.append((child, False))
        return self._built.pop(root.id)

    def _text(self, ts: Node) -> str:
        return self._source[ts.start_byte:ts.end_byte].decode("utf-8")

    def _take(self, ts: Node) -> Dict[int, Any]:
        """Pop the already-built children of ``ts``, keyed by node id."""
        return {c.id: self._built.pop(c.id) for c in _syntax_children(ts)}

    def _build(self, ts: Node) -> Any:
        kind = ts.type
        kids = self._take(ts)
        start, end = ts.start_byte, ts.end_byte

        if kind == "parenthesized_expression" and len(kids) == 1:
            return next(iter(kids.values()))

        if kind == "identifier":
            return Identifier(start, end, self._text(ts))

        if kind == "number":
            return Literal(start, end, number_value(self._text(ts)))

        if kind == "string":
            return Literal(start, end, self._string_value(ts))

        if kind in ("true", "false"):
            return Literal(start, end, kind == "true")

        if kind == "null":
            return Literal(start, end, None)

        if kind == "call_expression":
            function = ts.child_by_field_name("function")
            arguments = ts.child_by_field_name("arguments")
            # Tagged templates share the call_expression node type
            if arguments is not None and arguments.type == "arguments":
                return Call(
                    start,
                    end,
                    kids[function.id],
                    kids[arguments.id].children,
                )

        if kind == "member_expression":
            obj = ts.child_by_field_name("object")
            prop = ts.child_by_field_name("property")
            return Member(start, end, kids[obj.id], self._text(prop))

        if kind == "subscript_expression":
            obj = ts.child_by_field_name("object")
            index = kids[ts.child_by_field_name("index").id]
            name = index.value if isinstance(index, Literal) and isinstance(index.value, str) else None
            return Member(start, end, kids[obj.id], name, computed=True, index=index)

        if kind in _FUNCTION_TYPES:
            name = ts.child_by_field_name("name")
            return Function(
                start,
                end,
                self._text(name) if name is not None else None,
                tuple(kids.values()),
                is_arrow=kind == "arrow_function",
            )

        if kind == "array":
            return ArrayLiteral(start, end, self._array_elements(ts, kids))

        if kind == "object":
            props = tuple(
                v if isinstance(v, Property) else Property(None, v)
                for v in kids.values()
            )
            return ObjectLiteral(start, end, props)

        if kind == "pair":
            return self._pair(ts, kids)

        if kind == "assignment_expression":
            left = ts.child_by_field_name("left")
            right = ts.child_by_field_name("right")
            return Assignment(start, end, kids[left.id], kids[right.id])

        nodes = []
        for value in kids.values():
            if isinstance(value, Property):
                if value.computed_key is not None:
                    nodes.append(value.computed_key)
                nodes.append(value.value)
            else:
                nodes.append(value)
        return Other(start, end, kind, tuple(nodes))

    def _string_value(self, ts: Node) -> str:
        parts = []
        for child in ts.named_children:
            if child.type == "escape_sequence":
                parts.append(_unescape(self._text(child)))
            elif child.type != "comment":
                parts.append(self._text(child))
        return "".join(parts)

    def _array_elements(
        self, ts: Node, kids: Dict[int, Any]
    ) -> Tuple[Optional[SyntaxNode], ...]:
        elements: List[Optional[SyntaxNode]] = []
        current: Optional[SyntaxNode] = None
        for child in ts.children:
            if child.type == ",":
                elements.append(current)
                current = None
            elif child.id in kids:
                current = kids[child.id]
        # A trailing comma does not add a slot: [a,] has one element
        if current is not None:
            elements.append(current)
        return tuple(elements)

    def _pair(self, ts: Node, kids: Dict[int, Any]) -> Property:
        key_ts = ts.child_by_field_name("key")
        value_ts = ts.child_by_field_name("value")
        value = kids[value_ts.id]

        if key_ts.type == "computed_property_name":
            inner = kids[key_ts.id]
            # computed_property_name has been built as Other wrapping the expression
            expr = inner.children[0] if inner.children else inner
            if isinstance(expr, Literal) and isinstance(expr.value, (str, int, float)):
                return Property(expr.value, value, expr)
            return Property(None, value, expr)

        key = kids[key_ts.id]
        if isinstance(key, Literal):
            return Property(key.value, value)
        # property_identifier, private names and the like
        return Property(self._text(key_ts), value)


def parse_source(source: Union[str, bytes]) -> SyntaxNode:
    """Parse JavaScript source text into the SyntaxNode tree.

    WHY: The extractor needs byte offsets it can slice the original text
    with, and must not guess at partially parsed input.

    HOW: Encodes text as UTF-8, parses with tree-sitter's JavaScript
    grammar, and converts the tree to SyntaxNode variants.

    RULES:
    - str input is encoded as UTF-8; bytes are parsed as given
    - Any syntax error raises BundleParseError (no error recovery)
    - A new Parser is created per call; nothing is shared between calls

    Args:
        source: The JavaScript text, or its UTF-8 encoding.

    Returns:
        The root SyntaxNode (an ``Other`` of kind "program").

    Raises:
        BundleParseError: If the text is not valid JavaScript.
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    parser = Parser()
    parser.language = JS_LANGUAGE
    tree = parser.parse(data)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        row, column = bad.start_point
        raise BundleParseError(bad.start_byte, row + 1, column + 1)
    return _Converter(data).convert(root)
