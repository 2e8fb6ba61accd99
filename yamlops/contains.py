"""Containment tests between YAML nodes: substrings, subsets and sub-objects."""

from __future__ import annotations

from yamlops.booleans import boolean_node
from yamlops.node import ExpressionError, Kind, Node, find_in_array, unwrap_doc


def _contains_array_element(array: Node, item: Node) -> bool:
    return any(contains(child, item) for child in array.content)


def _contains_array(lhs: Node, rhs: Node) -> bool:
    if rhs.kind is not Kind.SEQUENCE:
        return _contains_array_element(lhs, rhs)
    return all(_contains_array_element(lhs, item) for item in rhs.content)


def _contains_object(lhs: Node, rhs: Node) -> bool:
    if rhs.kind is not Kind.MAPPING:
        return False
    for key, value in zip(rhs.content[::2], rhs.content[1::2]):
        index = find_in_array(lhs, key)
        if index is None or index % 2 != 0:
            return False
        if not contains(lhs.content[index + 1], value):
            return False
    return True


def contains(lhs: Node, rhs: Node) -> bool:
    """Report whether ``rhs`` is contained in ``lhs``.

    Strings contain substrings, arrays contain subsets (element-wise) and
    objects contain sub-objects; other scalars must be equal.
    """
    if lhs.kind is Kind.MAPPING:
        return _contains_object(lhs, rhs)
    if lhs.kind is Kind.SEQUENCE:
        return _contains_array(lhs, rhs)
    if lhs.kind is Kind.SCALAR:
        if rhs.kind is not Kind.SCALAR or lhs.tag != rhs.tag:
            return False
        if lhs.tag == "!!null":
            return rhs.tag == "!!null"
        if lhs.tag == "!!str":
            return rhs.value in lhs.value
        return lhs.value == rhs.value
    raise ExpressionError(f"{lhs.tag} not yet supported for contains")


def contains_node(lhs: Node, rhs: Node) -> Node:
    """Return a ``!!bool`` node telling whether ``lhs`` contains ``rhs``."""
    lhs = unwrap_doc(lhs)
    rhs = unwrap_doc(rhs)
    if lhs.kind != rhs.kind:
        raise ExpressionError(f"{rhs.tag} cannot check contained in {lhs.tag}")
    return boolean_node(contains(lhs, rhs))