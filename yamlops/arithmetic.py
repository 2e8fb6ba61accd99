"""Addition of YAML nodes: merging maps, concatenating sequences and adding scalars."""

from __future__ import annotations

import logging

from yamlops.datetime import RFC3339, format_time, parse_duration, parse_time
from yamlops.node import (
    ExpressionError,
    Kind,
    Node,
    deep_clone,
    deep_clone_content,
    find_key_in_map,
    guess_tag_from_custom_type,
    parse_int64,
    unwrap_doc,
)

log = logging.getLogger("yamlops")


def _format_float(number: float) -> str:
    text = repr(number)
    if "e" not in text and text.endswith(".0"):
        text = text[:-2]
    return text


def _to_nodes(rhs: Node, lhs: Node) -> list[Node]:
    if rhs.tag == "!!null":
        return []
    clone = deep_clone(rhs)
    if rhs.kind is Kind.SEQUENCE:
        return clone.content
    if lhs.content:
        clone.style = lhs.content[0].style
    return [clone]


def add(lhs: Node, rhs: Node, layout: str = RFC3339) -> Node:
    """Return ``lhs + rhs`` as a new node; the inputs are left unchanged."""
    lhs = unwrap_doc(lhs)
    rhs = unwrap_doc(rhs)
    if lhs.tag == "!!null":
        return rhs
    if lhs.kind is Kind.MAPPING:
        if rhs.kind is not Kind.MAPPING:
            raise ExpressionError(f"{rhs.tag} cannot be added to a {lhs.tag}")
        result = add_maps(lhs, rhs)
    elif lhs.kind is Kind.SEQUENCE:
        result = add_sequences(lhs, rhs)
    elif lhs.kind is Kind.SCALAR:
        if rhs.kind is not Kind.SCALAR:
            raise ExpressionError(f"{rhs.tag} cannot be added to a {lhs.tag}")
        result = add_scalars(lhs, rhs, layout)
    else:
        raise ExpressionError(f"{rhs.tag} cannot be added to a {lhs.tag}")
    result.anchor = lhs.anchor
    return result


def add_scalars(lhs: Node, rhs: Node, layout: str = RFC3339) -> Node:
    """Add two scalars: date plus duration, string concatenation, or numbers."""
    lhs_tag = lhs.tag
    rhs_tag = guess_tag_from_custom_type(rhs)
    lhs_is_custom = not lhs_tag.startswith("!!")
    if lhs_is_custom:
        lhs_tag = guess_tag_from_custom_type(lhs)

    is_date_time = lhs.tag == "!!timestamp"
    if lhs_tag == "!!str" and layout != RFC3339:
        try:
            parse_time(layout, lhs.value)
            is_date_time = True
        except ValueError:
            is_date_time = False

    if is_date_time:
        return add_date_times(layout, lhs, rhs)

    result = Node(kind=Kind.SCALAR, style=lhs.style)
    if lhs_tag == "!!str":
        result.tag, result.value = lhs.tag, lhs.value + rhs.value
    elif rhs_tag == "!!str":
        result.tag, result.value = rhs.tag, lhs.value + rhs.value
    elif lhs_tag == "!!int" and rhs_tag == "!!int":
        try:
            template, lhs_num = parse_int64(lhs.value)
            _, rhs_num = parse_int64(rhs.value)
        except ValueError as err:
            raise ExpressionError(str(err)) from err
        result.tag, result.value = lhs.tag, template.format(lhs_num + rhs_num)
    elif lhs_tag in ("!!int", "!!float") and rhs_tag in ("!!int", "!!float"):
        try:
            total = float(lhs.value) + float(rhs.value)
        except ValueError as err:
            raise ExpressionError(str(err)) from err
        result.tag = lhs.tag if lhs_is_custom else "!!float"
        result.value = _format_float(total)
    else:
        raise ExpressionError(f"{lhs_tag} cannot be added to {rhs_tag}")
    return result


def add_date_times(layout: str, lhs: Node, rhs: Node) -> Node:
    """Add the duration held by ``rhs`` to the date-time held by ``lhs``."""
    try:
        duration = parse_duration(rhs.value)
    except ValueError as err:
        raise ExpressionError(f"unable to parse duration [{rhs.value}]: {err}") from err
    try:
        moment = parse_time(layout, lhs.value)
    except ValueError as err:
        raise ExpressionError(str(err)) from err
    shifted = (moment.astimezone(moment.tzinfo) + duration) if moment.utcoffset() is None else (
        (moment - moment.utcoffset()).replace(tzinfo=None) + duration
    )
    if moment.utcoffset() is not None:
        import datetime as _dt

        shifted = shifted.replace(tzinfo=_dt.timezone.utc).astimezone(moment.tzinfo)
    return Node(kind=Kind.SCALAR, style=lhs.style, tag=lhs.tag,
                value=format_time(shifted, layout))


def add_sequences(lhs: Node, rhs: Node) -> Node:
    """Append ``rhs`` (its items, if a sequence) to a copy of ``lhs``."""
    return Node(
        kind=Kind.SEQUENCE,
        style=lhs.style if lhs.content else Node().style,
        tag=lhs.tag,
        content=deep_clone_content(lhs.content) + _to_nodes(rhs, lhs),
    )


def add_maps(lhs: Node, rhs: Node) -> Node:
    """Shallow-merge ``rhs`` into a copy of ``lhs``; ``rhs`` wins on shared keys."""
    result = Node(
        kind=Kind.MAPPING,
        style=lhs.style if lhs.content else Node().style,
        tag=lhs.tag,
        content=list(lhs.content),
    )
    for key, value in zip(rhs.content[::2], rhs.content[1::2]):
        index = find_key_in_map(result, key)
        log.debug("finding %s at %s", key.value, index)
        if index is None:
            result.content.extend((key, value))
        else:
            result.content[index + 1] = value
    return result