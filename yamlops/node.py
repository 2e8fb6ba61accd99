"""YAML node model and the helpers that compare, clone and classify nodes."""

from __future__ import annotations

import dataclasses
import enum
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Any

import yaml

log = logging.getLogger("yamlops")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class ExpressionError(Exception):
    """Raised when an expression cannot be evaluated against its input."""


class Kind(enum.IntEnum):
    """The structural kind of a YAML node."""

    DOCUMENT = 1
    SEQUENCE = 2
    MAPPING = 4
    SCALAR = 8
    ALIAS = 16


class Style(enum.Flag):
    """Presentation style flags of a YAML node."""

    NONE = 0
    TAGGED = 1
    DOUBLE_QUOTED = 2
    SINGLE_QUOTED = 4
    LITERAL = 8
    FOLDED = 16
    FLOW = 32


@dataclass(eq=False)
class Node:
    """A YAML node: a document, sequence, mapping, scalar or alias."""

    kind: Kind = Kind.SCALAR
    style: Style = Style.NONE
    tag: str = ""
    value: str = ""
    anchor: str = ""
    alias: Node | None = None
    content: list[Node] = field(default_factory=list)
    head_comment: str = ""
    line_comment: str = ""
    foot_comment: str = ""
    line: int = 0
    column: int = 0


def deep_clone_content(content: list[Node]) -> list[Node]:
    """Return deep clones of every node in ``content``."""
    return [deep_clone(child) for child in content]


def deep_clone(node: Node | None) -> Node | None:
    """Return a deep copy of ``node``, including its children and alias target."""
    if node is None:
        return None
    return dataclasses.replace(
        node,
        content=deep_clone_content(node.content),
        alias=deep_clone(node.alias),
    )


def unwrap_doc(node: Node) -> Node:
    """Return the root of a document node, or the node itself otherwise."""
    if node.kind is Kind.DOCUMENT and node.content:
        return node.content[0]
    return node


def find_in_array(array: Node, item: Node) -> int | None:
    """Return the index of the first child of ``array`` equal to ``item``."""
    for index, child in enumerate(array.content):
        if recursive_node_equal(child, item):
            return index
    return None


def find_key_in_map(mapping: Node, item: Node) -> int | None:
    """Return the content index of the key in ``mapping`` equal to ``item``."""
    for index in range(0, len(mapping.content), 2):
        if recursive_node_equal(mapping.content[index], item):
            return index
    return None


def _sequences_equal(lhs: Node, rhs: Node) -> bool:
    if len(lhs.content) != len(rhs.content):
        return False
    return all(recursive_node_equal(a, b) for a, b in zip(lhs.content, rhs.content))


def _mappings_equal(lhs: Node, rhs: Node) -> bool:
    if len(lhs.content) != len(rhs.content):
        return False
    for key, value in zip(lhs.content[::2], lhs.content[1::2]):
        index = find_in_array(rhs, key)
        if index is None or index + 1 >= len(rhs.content):
            return False
        if not recursive_node_equal(value, rhs.content[index + 1]):
            return False
    return True


def recursive_node_equal(lhs: Node, rhs: Node) -> bool:
    """Compare two nodes structurally, guessing the type behind custom tags."""
    if lhs.kind != rhs.kind:
        return False
    if lhs.kind is Kind.SCALAR:
        if guess_tag_from_custom_type(lhs) != guess_tag_from_custom_type(rhs):
            return False
    if lhs.tag == "!!null":
        return True
    if lhs.kind is Kind.SCALAR:
        return lhs.value == rhs.value
    if lhs.kind is Kind.SEQUENCE:
        return _sequences_equal(lhs, rhs)
    if lhs.kind is Kind.MAPPING:
        return _mappings_equal(lhs, rhs)
    return False


def guess_tag_from_custom_type(node: Node) -> str:
    """Return the standard tag a custom-tagged scalar's value resolves to."""
    if node.tag.startswith("!!"):
        return node.tag
    if node.value == "":
        log.warning("node has no value to guess the type with")
        return node.tag
    try:
        parsed = parse_snippet(node.value)
    except ExpressionError as err:
        log.warning("could not guess underlying tag type %s", err)
        return node.tag
    guessed = unwrap_doc(parsed).tag
    log.info("guessing the tag %s is a %s", node.tag, guessed)
    return guessed


# Plain scalar resolution, following the YAML 1.2 core schema.
_PLAIN_RESOLVERS = [
    ("!!null", re.compile(r"~|null|Null|NULL|")),
    ("!!bool", re.compile(r"true|True|TRUE|false|False|FALSE")),
    ("!!int", re.compile(r"[-+]?(?:0b[01]+|0o[0-7]+|0x[0-9a-fA-F]+|[0-9]+)")),
    (
        "!!float",
        re.compile(
            r"[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
            r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN)"
        ),
    ),
    (
        "!!timestamp",
        re.compile(
            r"[0-9]{4}-[0-9]{1,2}-[0-9]{1,2}"
            r"(?:[Tt ][0-9]{1,2}:[0-9]{1,2}:[0-9]{1,2}(?:\.[0-9]+)?"
            r"(?:[ \t]*(?:Z|[-+][0-9]{1,2}(?::[0-9]{2})?))?)?"
        ),
    ),
    ("!!merge", re.compile(r"<<")),
]

_SCALAR_STYLES = {
    "'": Style.SINGLE_QUOTED,
    '"': Style.DOUBLE_QUOTED,
    "|": Style.LITERAL,
    ">": Style.FOLDED,
}

_STANDARD_PREFIX = "tag:yaml.org,2002:"


def _resolve_plain(value: str) -> str:
    for tag, pattern in _PLAIN_RESOLVERS:
        if pattern.fullmatch(value):
            return tag
    return "!!str"


def _short_tag(tag: str) -> str:
    if tag.startswith(_STANDARD_PREFIX):
        return "!!" + tag[len(_STANDARD_PREFIX):]
    return tag


def _scalar_tag(event: yaml.ScalarEvent) -> str:
    if event.tag is None:
        if event.implicit[0] and event.style is None:
            return _resolve_plain(event.value)
        return "!!str"
    if event.tag == "!":
        return "!!str"
    return _short_tag(event.tag)


def _collection_tag(event: yaml.CollectionStartEvent, default: str) -> str:
    if event.tag is None or event.tag == "!":
        return default
    return _short_tag(event.tag)


def _position(event: yaml.Event) -> dict[str, int]:
    mark = event.start_mark
    if mark is None:
        return {}
    return {"line": mark.line + 1, "column": mark.column + 1}


def _register(node: Node, event: yaml.NodeEvent, anchors: dict[str, Node]) -> None:
    if event.anchor:
        node.anchor = event.anchor
        anchors[event.anchor] = node


def _compose(events, anchors: dict[str, Node]) -> Node | None:
    """Build the next node from the event stream; None at a closing event."""
    event = next(events)
    if isinstance(event, yaml.AliasEvent):
        target = anchors.get(event.anchor)
        if target is None:
            raise ExpressionError(f"unknown anchor '{event.anchor}' referenced")
        return Node(kind=Kind.ALIAS, value=event.anchor, alias=target, **_position(event))
    if isinstance(event, yaml.ScalarEvent):
        node = Node(
            kind=Kind.SCALAR,
            style=_SCALAR_STYLES.get(event.style, Style.NONE),
            tag=_scalar_tag(event),
            value=event.value,
            **_position(event),
        )
        _register(node, event, anchors)
        return node
    if isinstance(event, (yaml.SequenceStartEvent, yaml.MappingStartEvent)):
        is_sequence = isinstance(event, yaml.SequenceStartEvent)
        node = Node(
            kind=Kind.SEQUENCE if is_sequence else Kind.MAPPING,
            style=Style.FLOW if event.flow_style else Style.NONE,
            tag=_collection_tag(event, "!!seq" if is_sequence else "!!map"),
            **_position(event),
        )
        _register(node, event, anchors)
        while (child := _compose(events, anchors)) is not None:
            node.content.append(child)
        return node
    return None


def _parse_documents(text: str) -> list[Node]:
    documents = []
    events = yaml.parse(io.StringIO(text), Loader=yaml.SafeLoader)
    try:
        for event in events:
            if not isinstance(event, yaml.DocumentStartEvent):
                continue
            anchors: dict[str, Node] = {}
            document = Node(kind=Kind.DOCUMENT, **_position(event))
            root = _compose(events, anchors)
            if root is not None:
                document.content.append(root)
                _compose(events, anchors)
            documents.append(document)
    except yaml.YAMLError as err:
        raise ExpressionError(str(err)) from err
    return documents


def parse_snippet(text: str) -> Node:
    """Parse the first YAML document in ``text`` and return its root node."""
    documents = _parse_documents(text)
    if not documents or not documents[0].content:
        raise ExpressionError("bad data")
    return documents[0].content[0]


def _parse_int_text(text: str) -> tuple[str, int]:
    if text.startswith(("0x", "0X")):
        digits, pattern, base, template = text[2:], r"[-+]?[0-9a-fA-F]+", 16, "0x{:X}"
    else:
        digits, pattern, base, template = text, r"[-+]?[0-9]+", 10, "{}"
    if not re.fullmatch(pattern, digits):
        raise ValueError(f"invalid syntax parsing {text!r} as an integer")
    number = int(digits, base)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value out of range parsing {text!r} as an integer")
    return template, number


def parse_int64(text: str) -> tuple[str, int]:
    """Parse a decimal or 0x-prefixed hex integer.

    Returns a format template that reproduces the notation, and the number.
    """
    return _parse_int_text(text)


def parse_int(text: str) -> int:
    """Parse a decimal or 0x-prefixed hex integer into an int."""
    return _parse_int_text(text)[1]


def create_string_scalar_node(value: str) -> Node:
    """Create a ``!!str`` scalar node."""
    return Node(kind=Kind.SCALAR, tag="!!str", value=value)


def create_scalar_node(value: Any, string_value: str) -> Node:
    """Create a scalar node whose tag follows the Python type of ``value``."""
    if value is None:
        tag = "!!null"
    elif isinstance(value, bool):
        tag = "!!bool"
    elif isinstance(value, int):
        tag = "!!int"
    elif isinstance(value, float):
        tag = "!!float"
    elif isinstance(value, str):
        tag = "!!str"
    else:
        tag = ""
    return Node(kind=Kind.SCALAR, tag=tag, value=string_value)


def head_comment(node: Node) -> str:
    """Return the head comment without its first ``#``."""
    return node.head_comment.replace("#", "", 1)


def line_comment(node: Node) -> str:
    """Return the line comment without its first ``#``."""
    return node.line_comment.replace("#", "", 1)


def foot_comment(node: Node) -> str:
    """Return the foot comment without its first ``#``."""
    return node.foot_comment.replace("#", "", 1)


def head_and_line_comment(node: Node) -> str:
    """Return the head comment followed by the line comment."""
    return head_comment(node) + line_comment(node)


_KIND_NAMES = {
    Kind.SCALAR: "ScalarNode",
    Kind.SEQUENCE: "SequenceNode",
    Kind.MAPPING: "MappingNode",
    Kind.DOCUMENT: "DocumentNode",
    Kind.ALIAS: "AliasNode",
}


def kind_string(kind: Kind) -> str:
    """Return a readable name for a node kind."""
    return _KIND_NAMES.get(kind, "unknown!")