"""Reading and writing the head, line and foot comments of YAML nodes."""

from __future__ import annotations

import enum

from yamlops.node import Kind, Node, create_string_scalar_node


class CommentKind(enum.Flag):
    """Which comment of a node to read or write."""

    LINE = 1
    HEAD = 2
    FOOT = 4
    ALL = 7


def get_comment(node: Node, kind: CommentKind) -> Node:
    """Return the requested comment of ``node`` as a string scalar.

    The leading ``# `` of every comment line is removed. When ``kind`` names
    several comments, line wins over head, and head over foot.
    """
    if CommentKind.LINE in kind:
        comment = node.line_comment
    elif CommentKind.HEAD in kind:
        comment = node.head_comment
    elif CommentKind.FOOT in kind:
        comment = node.foot_comment
    else:
        comment = ""
    comment = comment.removeprefix("# ").replace("\n# ", "\n")
    return create_string_scalar_node(comment)


def set_comment(node: Node, comment: str, kinds: CommentKind = CommentKind.ALL) -> Node:
    """Set the comments named by ``kinds`` on ``node`` and return the node.

    A foot comment on a document is kept as a full ``# `` comment line; an
    empty comment clears it.
    """
    if CommentKind.LINE in kinds:
        node.line_comment = comment
    if CommentKind.HEAD in kinds:
        node.head_comment = comment
    if CommentKind.FOOT in kinds:
        if node.kind is Kind.DOCUMENT and comment:
            node.foot_comment = "# " + comment
        else:
            node.foot_comment = comment
    return node