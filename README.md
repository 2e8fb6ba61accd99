# yamlops

A library of operations on YAML node trees. Unlike plain Python dictionaries,
its `Node` tree keeps tags, styles, anchors, aliases, comments, and line and
column positions.

## Installation

    pip install yamlops

To run the test suite, install the test extra:

    pip install "yamlops[test]"

## Modules

- `yamlops.node`
  - The `Node` dataclass, with the `Kind` and `Style` enums.
  - `parse_snippet` reads the first document of a YAML text into a `Node` tree.
  - `deep_clone`, `deep_clone_content` and `unwrap_doc`.
  - Structural equality: `recursive_node_equal`, `find_in_array` and
    `find_key_in_map`. Custom-tagged scalars are compared by the type their
    value resolves to (`guess_tag_from_custom_type`).
  - Scalar helpers: `create_scalar_node`, `create_string_scalar_node`,
    `parse_int64` and `parse_int`. The integer parsers accept decimal and
    `0x` hex within the 64-bit range.
  - Comment helpers: `head_comment`, `line_comment`, `foot_comment` and
    `head_and_line_comment`.
  - `kind_string`.
- `yamlops.glob`: `match_key` and `deep_match` match a name against a glob
  pattern with `*` and `?`, in linear time.
- `yamlops.arithmetic`: `add(lhs, rhs, layout)` returns a new node. It handles
  the cases below.
  - It shallow-merges maps (`add_maps`). Values from `rhs` win.
  - It appends to sequences (`add_sequences`). Appending null adds nothing.
  - It concatenates strings.
  - It adds ints and keeps hex notation. If either side is a float, it adds
    floats.
  - It adds a duration such as `"3h10m"` to a timestamp, or to a string that
    parses with a custom `layout` (`add_date_times`).
- `yamlops.booleans`
  - `is_truthy`: null and false are falsy. Everything else is truthy,
    including `""` and `0`.
  - `boolean_node`, `logical_not`, `logical_or` and `logical_and`. The right
    operand may be a callable, which is evaluated only when it is needed.
  - `any_of` and `all_of`, each with an optional per-element condition.
  - `alternative`, the "value or default" operation.
- `yamlops.anchors`
  - `explode` replaces aliases with copies of their targets, applies `<<`
    merge keys and removes anchors, in place.
  - `get_anchor`, `set_anchor`, `get_alias` and `set_alias`.
- `yamlops.contains`: `contains` and `contains_node` test containment.
  - Strings contain substrings.
  - Sequences contain subsets.
  - Maps contain sub-maps.
- `yamlops.entries`: `to_entries`, `from_entries` and `with_entries`.
- `yamlops.comments`: `get_comment` and `set_comment`, for the kinds in
  `CommentKind` (`LINE`, `HEAD`, `FOOT`, `ALL`).
- `yamlops.env`
  - `env_value` reads an environment variable as YAML, or as a plain string.
  - `envsubst` and `envsubst_node` expand `$VAR` and `${VAR}`.
    - They also expand the `-`, `:-`, `=`, `:=`, `+` and `:+` forms, and
      `$$` escapes.
    - They can fail on unset variables (`no_unset`) or empty ones (`no_empty`).
    - They report all errors together, or only the first with `fail_fast`.
- `yamlops.datetime`
  - `parse_time` and `format_time` use reference-time layouts such as
    `"Monday, 02-Jan-06 at 3:04PM MST"`. The default is the RFC 3339 layout
    `RFC3339`.
  - `parse_duration`.
  - `now_node`, which takes an optional clock.
  - `format_datetime`.
  - `to_timezone`, which accepts IANA zone names, `UTC` and `Local`.
- `yamlops.collections`: `collect`, `map_pair`, `create_map`, `delete_key`,
  `delete_index` and `column_of`.

## Example

```python
from yamlops.node import parse_snippet
from yamlops.arithmetic import add

lhs = parse_snippet("[1, 2]")
rhs = parse_snippet("[3, 4]")
result = add(lhs, rhs)
print([child.value for child in result.content])  # ['1', '2', '3', '4']
```

## Errors

Operations that cannot be carried out raise `yamlops.node.ExpressionError`,
for example `!!seq cannot be added to a !!map`. Substitution failures raise
`yamlops.env.EnvSubstError`, a subclass of `ExpressionError`, for example
`variable ${NAME} not set`.

## What it does not do

The package has the operations only. It does not have the following:

- It has no expression language that chains the operations together.
- It has no command-line tool.
- It cannot write a `Node` tree back out as YAML, JSON or any other text
  format. Trees can be built with `parse_snippet`, or by hand, and then
  inspected as Python objects.