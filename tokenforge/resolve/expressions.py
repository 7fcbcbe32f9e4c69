#!/usr/bin/env python3
"""Reference and arithmetic expression parsing.

Token values may embed references (``{color.brand.primary}``) and simple
arithmetic (``{spacing.base} * 2 + 4``). This module parses such strings
into explicit structures and evaluates them with a small interpreter:

- ValueTemplate: ordered Text and Reference segments of a value string
- Number / UnaryOp / BinaryOp: arithmetic expression tree
- evaluate(): pure interpreter with standard operator precedence

Units are stripped from numeric literals before computing and are not
reattached; downstream value transforms decide final units.

Example:
    >>> template = parse_template("{spacing.base} * 2")
    >>> template.references
    ['spacing.base']
    >>> evaluate(parse_arithmetic("8px * 2 + 4"))
    20.0
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, List, Optional, Tuple, Union

from tokenforge.core.errors import ExpressionError

REFERENCE_PATTERN = re.compile(r"\{([^{}]+)\}")
_NUMBER_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?([a-zA-Z%]*)")
_OPERATORS = "+-*/()"


@dataclass(frozen=True)
class Text:
    """Literal text between references."""

    text: str


@dataclass(frozen=True)
class Reference:
    """A ``{path}`` reference to another token."""

    path: str


Segment = Union[Text, Reference]


@dataclass(frozen=True)
class ValueTemplate:
    """A value string split into literal and reference segments."""

    source: str
    segments: Tuple[Segment, ...]

    @property
    def references(self) -> List[str]:
        return [s.path for s in self.segments if isinstance(s, Reference)]

    @property
    def has_references(self) -> bool:
        return any(isinstance(s, Reference) for s in self.segments)

    @property
    def is_single_reference(self) -> bool:
        """True when the whole value is exactly one reference."""
        return len(self.segments) == 1 and isinstance(self.segments[0], Reference)

    def substitute(self, lookup: Callable[[str], Any]) -> Any:
        """Replace every reference with its looked-up value.

        A value made of exactly one reference takes the referenced value
        as-is (numbers stay numbers, composites stay mappings). Otherwise
        all referenced values must be scalars and are spliced into text.

        Raises:
            ExpressionError: If a composite value would be embedded in text
        """
        if self.is_single_reference:
            return lookup(self.segments[0].path)

        parts = []
        for segment in self.segments:
            if isinstance(segment, Text):
                parts.append(segment.text)
                continue
            value = lookup(segment.path)
            if isinstance(value, (dict, list)):
                raise ExpressionError(
                    f"Cannot embed composite token {{{segment.path}}} in {self.source!r}"
                )
            parts.append(stringify(value))
        return "".join(parts)


@lru_cache(maxsize=4096)
def parse_template(value: str) -> ValueTemplate:
    """Split a value string into Text and Reference segments."""
    segments: List[Segment] = []
    position = 0
    for match in REFERENCE_PATTERN.finditer(value):
        if match.start() > position:
            segments.append(Text(value[position:match.start()]))
        segments.append(Reference(match.group(1).strip()))
        position = match.end()
    if position < len(value):
        segments.append(Text(value[position:]))
    return ValueTemplate(source=value, segments=tuple(segments))


def find_references(value: Any) -> List[str]:
    """Collect reference paths from a scalar or composite value."""
    if isinstance(value, str):
        return parse_template(value).references
    if isinstance(value, dict):
        found: List[str] = []
        for item in value.values():
            found.extend(find_references(item))
        return found
    if isinstance(value, list):
        found = []
        for item in value:
            found.extend(find_references(item))
        return found
    return []


def stringify(value: Any) -> str:
    """Render a resolved scalar for splicing into text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return ""
    return str(value)


# Arithmetic expression tree


@dataclass(frozen=True)
class Number:
    value: float
    unit: str = ""


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


Node = Union[Number, UnaryOp, BinaryOp]


def tokenize(text: str) -> Optional[List[Tuple[str, Any]]]:
    """Lex an arithmetic string.

    Returns:
        List of ("num", Number) and ("op", str) tokens, or None when the
        text contains anything other than numbers, units and operators
    """
    tokens: List[Tuple[str, Any]] = []
    position = 0
    while position < len(text):
        char = text[position]
        if char.isspace():
            position += 1
        elif char in _OPERATORS:
            tokens.append(("op", char))
            position += 1
        else:
            match = _NUMBER_PATTERN.match(text, position)
            if not match:
                return None
            number = float(match.group(0)[: len(match.group(0)) - len(match.group(2))])
            tokens.append(("num", Number(number, match.group(2))))
            position = match.end()
    return tokens


class _Parser:
    """Recursive descent parser.

    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := ("+" | "-") factor | NUMBER | "(" expr ")"
    """

    def __init__(self, tokens: List[Tuple[str, Any]]):
        self.tokens = tokens
        self.position = 0
        self.binary_ops = 0

    def peek(self) -> Optional[Tuple[str, Any]]:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def take(self) -> Tuple[str, Any]:
        token = self.tokens[self.position]
        self.position += 1
        return token

    def parse(self) -> Optional[Node]:
        node = self.expr()
        if node is None or self.peek() is not None:
            return None
        return node

    def expr(self) -> Optional[Node]:
        left = self.term()
        while left is not None and self.peek() in (("op", "+"), ("op", "-")):
            op = self.take()[1]
            right = self.term()
            if right is None:
                return None
            left = BinaryOp(op, left, right)
            self.binary_ops += 1
        return left

    def term(self) -> Optional[Node]:
        left = self.factor()
        while left is not None and self.peek() in (("op", "*"), ("op", "/")):
            op = self.take()[1]
            right = self.factor()
            if right is None:
                return None
            left = BinaryOp(op, left, right)
            self.binary_ops += 1
        return left

    def factor(self) -> Optional[Node]:
        token = self.peek()
        if token is None:
            return None
        kind, value = token
        if kind == "num":
            self.take()
            return value
        if value in ("+", "-"):
            self.take()
            operand = self.factor()
            return UnaryOp(value, operand) if operand is not None else None
        if value == "(":
            self.take()
            node = self.expr()
            if node is None or self.peek() != ("op", ")"):
                return None
            self.take()
            return node
        return None


@lru_cache(maxsize=4096)
def parse_arithmetic(text: str) -> Optional[Node]:
    """Parse text as an arithmetic expression.

    Only strings with at least one binary operator count as expressions,
    so plain literals such as ``"-4px"`` or ``"1.5"`` are left alone.

    Returns:
        Expression tree, or None if the text is not arithmetic
    """
    tokens = tokenize(text)
    if not tokens:
        return None
    parser = _Parser(tokens)
    node = parser.parse()
    if node is None or parser.binary_ops == 0:
        return None
    return node


def evaluate(node: Node) -> float:
    """Evaluate an expression tree.

    Raises:
        ExpressionError: On division by zero
    """
    if isinstance(node, Number):
        return node.value
    if isinstance(node, UnaryOp):
        operand = evaluate(node.operand)
        return -operand if node.op == "-" else operand

    left = evaluate(node.left)
    right = evaluate(node.right)
    if node.op == "+":
        return left + right
    if node.op == "-":
        return left - right
    if node.op == "*":
        return left * right
    if right == 0:
        raise ExpressionError("Division by zero in token expression")
    return left / right


def format_number(value: float) -> Union[int, float]:
    """Drop float noise and collapse integral results to int."""
    rounded = round(value, 6)
    if rounded.is_integer():
        return int(rounded)
    return rounded
