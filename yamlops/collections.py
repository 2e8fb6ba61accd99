"""Collecting nodes into arrays, building maps, deleting children and reading columns."""

from __future__ import annotations

from itertools import product
from typing import Iterable

from yamlops.node import ExpressionError, Kind, Node, Style, unwrap_doc


def collect(nodes: Iterable[Node]) -> Node:
    """Return a ``!!seq`` node holding every given node (documents unwrapped)."""
    return Node(
        kind=Kind.SEQUENCE,
        tag="!!seq",
        content=[unwrap_doc(node) for node in nodes],
    )


def map_pair(key: Node, value: Node) -> Node:
    """Return a single-entry ``!!map`` node."""
    return Node(kind=Kind.MAPPING, tag="!!map", content=[unwrap_doc(key), unwrap_doc(value)])


def create_map(keys: Iterable[Node], values: Iterable[Node]) -> Node:
    """Return a flow sequence of one-entry maps for every key paired with every value."""
    value_list = list(values)
    pairs = [map_pair(key, value) for key, value in product(keys, value_list)]
    return Node(kind=Kind.SEQUENCE, tag="!!seq", style=Style.FLOW, content=pairs)


def delete_key(mapping: Node, key: str) -> Node:
    """Remove every entry with key ``key`` from a map, in place, and return it."""
    node = unwrap_doc(mapping)
    if node.kind is not Kind.MAPPING:
        raise ExpressionError(f"Cannot delete key from a node of tag {node.tag}")
    node.content = [
        child
        for k, v in zip(node.content[::2], node.content[1::2])
        if k.value != key
        for child in (k, v)
    ]
    return mapping


def delete_index(sequence: Node, index: int) -> Node:
    """Remove the item at ``index`` from a sequence, in place, and return it.

    An index outside the sequence leaves it unchanged.
    """
    node = unwrap_doc(sequence)
    if node.kind is not Kind.SEQUENCE:
        raise ExpressionError(f"Cannot delete index from a node of tag {node.tag}")
    node.content = [child for position, child in enumerate(node.content) if position != index]
    return sequence


def column_of(node: Node) -> Node:
    """Return the source column of ``node`` as an ``!!int`` scalar (0 if unknown)."""
    return Node(kind=Kind.SCALAR, tag="!!int", value=str(node.column))