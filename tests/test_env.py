import re

import pytest

from yamlops.env import EnvSubstError, env_value, envsubst, envsubst_node
from yamlops.node import ExpressionError, Kind, Node


def test_read_string_variable():
    node = env_value("myenv", environ={"myenv": "cat meow"})
    assert (node.tag, node.value) == ("!!str", "cat meow")


def test_read_boolean_variable():
    node = env_value("myenv", environ={"myenv": "true"})
    assert (node.tag, node.value) == ("!!bool", "true")


def test_read_numeric_variable():
    node = env_value("myenv", environ={"myenv": "12"})
    assert (node.tag, node.value) == ("!!int", "12")


def test_read_yaml_variable():
    node = env_value("myenv", environ={"myenv": "{b: fish}"})
    assert node.kind is Kind.MAPPING
    assert [child.value for child in node.content] == ["b", "fish"]


def test_read_boolean_as_string():
    node = env_value("myenv", as_string=True, environ={"myenv": "true"})
    assert (node.tag, node.value) == ("!!str", "true")


def test_read_numeric_as_string():
    node = env_value("myenv", as_string=True, environ={"myenv": "12"})
    assert (node.tag, node.value) == ("!!str", "12")


def test_missing_variable_raises():
    with pytest.raises(ExpressionError, match=re.escape("Value for env variable 'nope' not provided in env()")):
        env_value("nope", environ={})


def test_missing_variable_as_string_is_empty():
    assert env_value("nope", as_string=True, environ={}).value == ""


def test_envsubst_replaces():
    assert envsubst("the ${myenv} meows", environ={"myenv": "cat"}) == "the cat meows"


def test_envsubst_missing_variable():
    assert envsubst("the ${myenvnonexisting} meows", environ={}) == "the  meows"


def test_envsubst_no_unset_fails():
    with pytest.raises(EnvSubstError, match=re.escape("variable ${myenvnonexisting} not set")):
        envsubst("the ${myenvnonexisting} meows", no_unset=True, environ={})


def test_envsubst_no_empty_ignores_missing():
    assert envsubst("the ${myenvnonexisting} meows", no_empty=True, environ={}) == "the  meows"


def test_envsubst_no_empty_fails_on_empty():
    with pytest.raises(EnvSubstError, match=re.escape("variable ${myenv} set but empty")):
        envsubst("the ${myenv} meows", no_empty=True, environ={"myenv": ""})


def test_envsubst_default():
    assert envsubst("the ${myenvnonexisting-dog} meows", environ={}) == "the dog meows"


def test_envsubst_default_skips_no_unset():
    result = envsubst("the ${myenvnonexisting-dog} meows", no_unset=True, environ={})
    assert result == "the dog meows"


def test_envsubst_default_with_blank_variable_fails_no_empty():
    with pytest.raises(EnvSubstError, match=re.escape("variable ${myEmptyEnv} set but empty")):
        envsubst("the ${myEmptyEnv-dog} meows", no_empty=True, environ={"myEmptyEnv": ""})


def test_envsubst_all_errors_reported():
    with pytest.raises(EnvSubstError) as info:
        envsubst("the ${notThere} ${alsoNotThere}", no_unset=True, environ={})
    assert str(info.value) == "variable ${notThere} not set\nvariable ${alsoNotThere} not set"


def test_envsubst_fail_fast():
    with pytest.raises(EnvSubstError) as info:
        envsubst("the ${notThere} ${alsoNotThere}", no_unset=True, fail_fast=True, environ={})
    assert str(info.value) == "variable ${notThere} not set"


def test_envsubst_colon_default_used_when_empty():
    assert envsubst("${v:-dog}", environ={"v": ""}) == "dog"


def test_envsubst_plus_uses_alternative_when_set():
    assert envsubst("${v+yes}|${w+yes}", environ={"v": "x"}) == "yes|"


def test_envsubst_plain_dollar_name_and_escape():
    assert envsubst("$v and $$v", environ={"v": "cat"}) == "cat and $v"


def test_envsubst_unclosed_brace_raises():
    with pytest.raises(EnvSubstError):
        envsubst("${v", environ={"v": "cat"})


def test_envsubst_node_in_document():
    node = Node(kind=Kind.SCALAR, tag="!!str", value="${myenv}")
    result = envsubst_node(node, environ={"myenv": "cat meow"})
    assert (result.tag, result.value) == ("!!str", "cat meow")


def test_envsubst_node_rejects_non_strings():
    node = Node(kind=Kind.SCALAR, tag="!!int", value="3")
    with pytest.raises(ExpressionError, match="cannot substitute with !!int"):
        envsubst_node(node, environ={})