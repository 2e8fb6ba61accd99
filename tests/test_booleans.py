import pytest

from yamlops.booleans import (
    alternative,
    all_of,
    any_of,
    boolean_node,
    is_truthy,
    logical_and,
    logical_not,
    logical_or,
)
from yamlops.node import ExpressionError, Kind, Node, parse_snippet


def node(text):
    return parse_snippet(text)


def explode():
    raise AssertionError("right-hand side should not be evaluated")


def test_boolean_node():
    assert (boolean_node(True).tag, boolean_node(True).value) == ("!!bool", "true")
    assert boolean_node(False).value == "false"


def test_or():
    assert logical_or(node("true"), node("false")).value == "true"
    assert logical_or(node("false"), node("false")).value == "false"


def test_or_missing_operands():
    assert logical_or(None, None).value == "false"


def test_or_short_circuits():
    assert logical_or(node("true"), explode).value == "true"


def test_and():
    assert logical_and(node("true"), node("false")).value == "false"
    assert logical_and(node("true"), lambda: node("cat")).value == "true"


def test_and_short_circuits():
    assert logical_and(node("false"), explode).value == "false"


@pytest.mark.parametrize(
    "text, expected",
    [("true", "false"), ("false", "true"), ('"cat"', "false"), ('""', "false"),
     ("1", "false"), ("0", "false"), ("~", "true")],
)
def test_not(text, expected):
    assert logical_not(node(text)).value == expected


def test_bad_boolean():
    with pytest.raises(ExpressionError):
        is_truthy(Node(kind=Kind.SCALAR, tag="!!bool", value="maybe"))


@pytest.mark.parametrize(
    "text, expected", [("[false, true]", "true"), ("[]", "false"), ("[false, false]", "false")]
)
def test_any(text, expected):
    assert any_of(node(text)).value == expected


@pytest.mark.parametrize(
    "text, expected", [("[true, true]", "true"), ("[false, true]", "false"), ("[]", "true")]
)
def test_all(text, expected):
    assert all_of(node(text)).value == expected


def test_any_with_condition():
    def awesome(n):
        return boolean_node(n.value == "awesome")

    assert any_of(node("[rad, awesome]"), awesome).value == "true"
    assert any_of(node("[meh, whatever]"), awesome).value == "false"


def test_all_with_condition():
    def is_str(n):
        return boolean_node(n.tag == "!!str")

    assert all_of(node("[rad, awesome]"), is_str).value == "true"
    assert all_of(node("[meh, 12]"), is_str).value == "false"


def test_condition_without_result_is_ignored():
    assert all_of(node("[false]"), lambda n: None).value == "true"


def test_any_requires_array():
    with pytest.raises(ExpressionError, match="only supports arrays"):
        any_of(node("{a: b}"))


def test_alternative_lhs_defined():
    assert alternative(node("bridge"), node('"hello"')).value == "bridge"


def test_alternative_lhs_missing():
    assert alternative(None, node('"hello"')).value == "hello"


@pytest.mark.parametrize("text", ["~", "false"])
def test_alternative_lhs_falsy(text):
    assert alternative(node(text), node('"hello"')).value == "hello"


def test_alternative_rhs_lazy():
    assert alternative(node("2"), explode).value == "2"
    assert alternative(node("false"), lambda: node("true")).value == "true"


def test_alternative_without_rhs_keeps_lhs():
    result = alternative(node("false"), None)
    assert (result.tag, result.value) == ("!!bool", "false")