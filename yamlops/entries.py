"""Conversion between maps (or arrays) and lists of key/value entries."""

from __future__ import annotations

from typing import Callable

from yamlops.node import ExpressionError, Kind, Node, unwrap_doc


def _entry(key: Node, value: Node) -> Node:
    return Node(
        kind=Kind.MAPPING,
        tag="!!map",
        content=[
            Node(kind=Kind.SCALAR, tag="!!str", value="key"),
            key,
            Node(kind=Kind.SCALAR, tag="!!str", value="value"),
            value,
        ],
    )


def to_entries(node: Node) -> Node | None:
    """Return a sequence of ``{key, value}`` maps for a map or array.

    Null yields None; any other scalar raises ExpressionError.
    """
    unwrapped = unwrap_doc(node)
    sequence = Node(kind=Kind.SEQUENCE, tag="!!seq")
    if unwrapped.kind is Kind.MAPPING:
        pairs = zip(unwrapped.content[::2], unwrapped.content[1::2])
        sequence.content = [_entry(key, value) for key, value in pairs]
    elif unwrapped.kind is Kind.SEQUENCE:
        sequence.content = [
            _entry(Node(kind=Kind.SCALAR, tag="!!int", value=str(index)), value)
            for index, value in enumerate(unwrapped.content)
        ]
    elif unwrapped.tag == "!!null":
        return None
    else:
        raise ExpressionError(f"{node.tag} has no keys")
    return sequence


def _lookup(entry: Node, name: str, position: int) -> Node:
    found = []
    if entry.kind is Kind.MAPPING:
        found = [
            value
            for key, value in zip(entry.content[::2], entry.content[1::2])
            if key.value == name
        ]
    if len(found) != 1:
        raise ExpressionError(
            f"expected to find one '{name}' entry but found {len(found)} in position {position}"
        )
    return found[0]


def from_entries(node: Node) -> Node:
    """Build a map from a sequence of ``{key, value}`` maps."""
    unwrapped = unwrap_doc(node)
    if unwrapped.kind is not Kind.SEQUENCE:
        raise ExpressionError("from entries only runs against arrays")
    mapping = Node(kind=Kind.MAPPING, tag="!!map")
    for position, entry in enumerate(unwrapped.content):
        entry = unwrap_doc(entry)
        mapping.content.extend(
            (_lookup(entry, "key", position), _lookup(entry, "value", position))
        )
    return mapping


def with_entries(node: Node, transform: Callable[[Node], Node | None]) -> Node | None:
    """Apply ``transform`` to each entry of a map and rebuild the map.

    Entries for which ``transform`` returns None are dropped.
    """
    entries = to_entries(node)
    if entries is None:
        return None
    kept = Node(kind=Kind.SEQUENCE, tag="!!seq")
    for entry in entries.content:
        result = transform(entry)
        if result is not None:
            kept.content.append(unwrap_doc(result))
    return from_entries(kept)