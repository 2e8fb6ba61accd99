"""Truthiness, boolean logic and the alternative (default value) operation."""

from __future__ import annotations

from typing import Callable, Union

from yamlops.node import ExpressionError, Kind, Node, unwrap_doc

# An operand may be a node, nothing (None), or a callable producing one lazily.
Operand = Union[Node, None, Callable[[], Union[Node, None]]]

_TRUE = {"true", "True", "TRUE"}
_FALSE = {"false", "False", "FALSE"}


def boolean_node(value: bool) -> Node:
    """Return a ``!!bool`` scalar node."""
    return Node(kind=Kind.SCALAR, tag="!!bool", value="true" if value else "false")


def is_truthy(node: Node | None) -> bool:
    """Null and false are falsy; everything else, including "" and 0, is truthy."""
    if node is None:
        return False
    node = unwrap_doc(node)
    if node.tag == "!!null":
        return False
    if node.kind is Kind.SCALAR and node.tag == "!!bool":
        if node.value in _TRUE:
            return True
        if node.value in _FALSE:
            return False
        raise ExpressionError(f"cannot decode {node.value!r} as a boolean")
    return True


def _resolve(operand: Operand) -> Node | None:
    return operand() if callable(operand) else operand


def logical_not(node: Node) -> Node:
    """Return the boolean negation of a node's truthiness."""
    return boolean_node(not is_truthy(node))


def logical_or(lhs: Node | None, rhs: Operand) -> Node:
    """Return ``lhs or rhs``; ``rhs`` is not evaluated when ``lhs`` is truthy."""
    if is_truthy(lhs):
        return boolean_node(True)
    return boolean_node(is_truthy(_resolve(rhs)))


def logical_and(lhs: Node | None, rhs: Operand) -> Node:
    """Return ``lhs and rhs``; ``rhs`` is not evaluated when ``lhs`` is falsy."""
    if not is_truthy(lhs):
        return boolean_node(False)
    return boolean_node(is_truthy(_resolve(rhs)))


def _find_boolean(
    want: bool, node: Node, condition: Callable[[Node], Node | None] | None
) -> bool:
    node = unwrap_doc(node)
    if node.kind is not Kind.SEQUENCE:
        raise ExpressionError(f"any only supports arrays, was {node.tag}")
    for child in node.content:
        if condition is not None:
            child = condition(child)
            if child is None:
                continue
        if is_truthy(child) == want:
            return True
    return False


def any_of(node: Node, condition: Callable[[Node], Node | None] | None = None) -> Node:
    """True if any element (or its condition result) is truthy; false when empty."""
    return boolean_node(_find_boolean(True, node, condition))


def all_of(node: Node, condition: Callable[[Node], Node | None] | None = None) -> Node:
    """True if every element (or its condition result) is truthy; true when empty."""
    return boolean_node(not _find_boolean(False, node, condition))


def alternative(lhs: Node | None, rhs: Operand) -> Node | None:
    """Return ``lhs`` when truthy, otherwise ``rhs``, evaluated only when needed."""
    if lhs is not None and is_truthy(lhs):
        return lhs
    right = _resolve(rhs)
    if right is None:
        return lhs
    return right