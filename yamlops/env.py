"""Environment variable lookup and ``${VAR}`` substitution in strings."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Union

from yamlops.node import ExpressionError, Node, create_string_scalar_node, parse_snippet, unwrap_doc


class EnvSubstError(ExpressionError):
    """Raised when a substitution refers to a missing or empty variable, or is malformed."""


_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_OPERATORS = (":-", ":=", ":+", "-", "=", "+")


@dataclass
class _Substitution:
    name: str
    operator: str = ""
    default: list[Union[str, "_Substitution"]] | None = None


_Part = Union[str, _Substitution]


def _parse(text: str, pos: int = 0, nested: bool = False) -> tuple[list[_Part], int]:
    parts: list[_Part] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            parts.append("".join(literal))
            literal.clear()

    while pos < len(text):
        char = text[pos]
        if nested and char == "}":
            break
        if char != "$":
            literal.append(char)
            pos += 1
            continue
        if text.startswith("$$", pos):
            literal.append("$")
            pos += 2
            continue
        if text.startswith("${", pos):
            match = _NAME.match(text, pos + 2)
            if not match:
                raise EnvSubstError(f"bad substitution in {text!r}")
            name = match.group()
            pos = match.end()
            operator = next((op for op in _OPERATORS if text.startswith(op, pos)), "")
            default = None
            if operator:
                default, pos = _parse(text, pos + len(operator), nested=True)
            if not text.startswith("}", pos):
                raise EnvSubstError(f"closing brace expected in {text!r}")
            pos += 1
            flush()
            parts.append(_Substitution(name, operator, default))
            continue
        match = _NAME.match(text, pos + 1)
        if match:
            flush()
            parts.append(_Substitution(match.group()))
            pos = match.end()
            continue
        literal.append("$")
        pos += 1
    flush()
    return parts, pos


class _Evaluator:
    def __init__(self, environ: Mapping[str, str], no_unset: bool, no_empty: bool):
        self.environ = environ
        self.no_unset = no_unset
        self.no_empty = no_empty

    def variable(self, name: str) -> str:
        if name not in self.environ:
            if self.no_unset:
                raise EnvSubstError(f"variable ${{{name}}} not set")
            return ""
        value = self.environ[name]
        if value == "" and self.no_empty:
            raise EnvSubstError(f"variable ${{{name}}} set but empty")
        return value

    def render(self, parts: list[_Part]) -> str:
        return "".join(part if isinstance(part, str) else self.value(part) for part in parts)

    def value(self, sub: _Substitution) -> str:
        if sub.default is not None:
            if sub.operator in (":-", ":="):
                try:
                    value = self.variable(sub.name)
                except EnvSubstError:
                    value = ""
                return value if value else self.render(sub.default)
            if sub.operator in ("+", ":+"):
                return self.render(sub.default) if sub.name in self.environ else ""
            if sub.name not in self.environ:
                return self.render(sub.default)
        return self.variable(sub.name)


def env_value(name: str, as_string: bool = False, environ: Mapping[str, str] | None = None) -> Node:
    """Return the value of environment variable ``name`` as a node.

    With ``as_string`` the raw text becomes a string scalar; otherwise it is
    read as YAML and must not be empty.
    """
    env = os.environ if environ is None else environ
    raw = env.get(name, "")
    if as_string:
        return create_string_scalar_node(raw)
    if raw == "":
        raise ExpressionError(f"Value for env variable '{name}' not provided in env()")
    return parse_snippet(raw)


def envsubst(
    text: str,
    no_unset: bool = False,
    no_empty: bool = False,
    fail_fast: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Substitute ``$VAR`` and ``${VAR...}`` references in ``text``.

    Supports ``-``, ``:-``, ``=``, ``:=``, ``+`` and ``:+`` defaults and ``$$``
    escapes. All errors are reported together unless ``fail_fast`` is set.
    """
    env = os.environ if environ is None else environ
    parts, _ = _parse(text)
    evaluator = _Evaluator(env, no_unset, no_empty)
    output: list[str] = []
    errors: list[str] = []
    for part in parts:
        if isinstance(part, str):
            output.append(part)
            continue
        try:
            output.append(evaluator.value(part))
        except EnvSubstError as err:
            if fail_fast:
                raise
            errors.append(str(err))
    if errors:
        raise EnvSubstError("\n".join(errors))
    return "".join(output)


def envsubst_node(
    node: Node,
    no_unset: bool = False,
    no_empty: bool = False,
    fail_fast: bool = False,
    environ: Mapping[str, str] | None = None,
) -> Node:
    """Return a string node with the variables in a string node's value substituted."""
    target = unwrap_doc(node)
    if target.tag != "!!str":
        raise ExpressionError(
            f"cannot substitute with {target.tag}, can only substitute strings. "
            "Hint: Most often you'll want to use '|=' over '=' for this operation"
        )
    return create_string_scalar_node(
        envsubst(target.value, no_unset, no_empty, fail_fast, environ)
    )