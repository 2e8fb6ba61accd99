"""Anchors, aliases and the explosion of aliases and merge keys into plain data."""

from __future__ import annotations

import logging

from yamlops.node import Kind, Node, create_string_scalar_node, deep_clone_content

log = logging.getLogger("yamlops")

_MERGE_KEY = "<<"


def get_anchor(node: Node) -> Node:
    """Return the anchor name of ``node`` as a string scalar ("" when unset)."""
    return create_string_scalar_node(node.anchor)


def set_anchor(node: Node, name: str) -> Node:
    """Set the anchor of ``node`` to ``name`` and return the node."""
    node.anchor = name
    return node


def get_alias(node: Node) -> Node:
    """Return the alias name of ``node`` as a string scalar."""
    return create_string_scalar_node(node.value)


def set_alias(node: Node, name: str) -> Node:
    """Turn ``node`` into an alias of ``name``; a blank name changes nothing."""
    if name != "":
        node.kind = Kind.ALIAS
        node.value = name
    return node


def explode(node: Node) -> Node:
    """Replace aliases by copies of their targets and merge ``<<`` keys, in place.

    Anchors are removed along the way. Returns ``node``.
    """
    node.anchor = ""
    if node.kind in (Kind.SEQUENCE, Kind.DOCUMENT):
        for child in node.content:
            explode(child)
    elif node.kind is Kind.ALIAS:
        target = node.alias
        if target is not None:
            node.kind = target.kind
            node.style = target.style
            node.tag = target.tag
            node.content = deep_clone_content(target.content)
            node.value = target.value
            node.alias = None
    elif node.kind is Kind.MAPPING:
        if any(key.value == _MERGE_KEY for key in node.content[::2]):
            _reconstruct_aliased_map(node)
        else:
            for key, value in zip(node.content[::2], node.content[1::2]):
                explode(key)
                explode(value)
    return node


def _reconstruct_aliased_map(node: Node) -> None:
    new_content: list[Node] = []
    for index in range(0, len(node.content), 2):
        key = node.content[index]
        value = node.content[index + 1]
        log.debug("traversing %s", key.value)
        if key.value != _MERGE_KEY:
            _override_entry(node, key, value, index, new_content)
        elif value.kind is Kind.SEQUENCE:
            # Later entries in a merge list have lower priority, so apply them first.
            for position in range(len(value.content) - 1, -1, -1):
                _apply_alias(node, value.content[position].alias, position, new_content)
        else:
            _apply_alias(node, value.alias, index, new_content)
    node.content = new_content


def _apply_alias(node: Node, alias: Node | None, start: int, new_content: list[Node]) -> None:
    if alias is None:
        return
    for key, value in zip(alias.content[::2], alias.content[1::2]):
        log.debug("applying alias key %s", key.value)
        _override_entry(node, key, value, start, new_content)


def _override_entry(
    node: Node, key: Node, value: Node, start: int, new_content: list[Node]
) -> None:
    explode(value)
    for index in range(0, len(new_content), 2):
        existing = new_content[index]
        if existing.value == key.value and existing.alias is None and key.alias is None:
            new_content[index + 1] = value
            return
    for index in range(start + 2, len(node.content), 2):
        later = node.content[index]
        if later.value == key.value and later.alias is None:
            log.debug("content will be overridden at index %s", index)
            return
    explode(key)
    new_content.extend((key, value))