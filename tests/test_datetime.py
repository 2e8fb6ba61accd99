import datetime as dt

import pytest

from yamlops.datetime import (
    RFC3339,
    format_datetime,
    format_time,
    now_node,
    parse_duration,
    parse_time,
    to_timezone,
)
from yamlops.node import ExpressionError, Kind, Node

CUSTOM = "Monday, 02-Jan-06 at 3:04PM MST"


def scalar(value, tag="!!str"):
    return Node(kind=Kind.SCALAR, tag=tag, value=value)


def fixed_clock():
    return dt.datetime(2021, 5, 19, 1, 2, 3, tzinfo=dt.timezone.utc)


def test_format_from_rfc3339():
    result = format_datetime(scalar("2001-12-15T02:59:43.1Z", "!!timestamp"),
                             "Monday, 02-Jan-06 at 3:04PM")
    assert result.value == "Saturday, 15-Dec-01 at 2:59AM"
    assert result.tag == "!!str"


def test_format_from_custom_layout():
    result = format_datetime(scalar("Saturday, 15-Dec-01 at 2:59AM"), "2006-01-02",
                             "Monday, 02-Jan-06 at 3:04PM")
    assert result.value == "2001-12-15"


def test_format_day_of_week():
    result = format_datetime(scalar("2001-12-15T02:59:43.1Z"), "Monday")
    assert (result.tag, result.value) == ("!!str", "Saturday")


def test_now():
    node = now_node(fixed_clock)
    assert (node.tag, node.value) == ("!!timestamp", "2021-05-19T01:02:03Z")


def test_now_in_sydney():
    result = to_timezone(now_node(fixed_clock), "Australia/Sydney")
    assert result.value == "2021-05-19T11:02:03+10:00"
    assert result.tag == "!!timestamp"


def test_timezone_with_custom_format():
    result = to_timezone(scalar("Saturday, 15-Dec-01 at 2:59AM GMT"), "Australia/Sydney", CUSTOM)
    assert result.value == "Saturday, 15-Dec-01 at 1:59PM AEDT"


def test_bad_timezone():
    with pytest.raises(ExpressionError, match="could not load tz"):
        to_timezone(scalar("2021-01-01T00:00:00Z"), "Not/AZone")


def test_unparseable_datetime():
    with pytest.raises(ExpressionError, match="could not parse datetime"):
        format_datetime(scalar("cat"), "2006")


def test_parse_duration():
    assert parse_duration("3h10m") == dt.timedelta(hours=3, minutes=10)
    assert parse_duration("-1.5s") == dt.timedelta(seconds=-1.5)
    assert parse_duration("0") == dt.timedelta(0)


@pytest.mark.parametrize("text", ["", "3", "h", "3x"])
def test_bad_duration(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_round_trip_rfc3339():
    moment = parse_time(RFC3339, "2021-01-01T03:10:00+02:00")
    assert format_time(moment, RFC3339) == "2021-01-01T03:10:00+02:00"
    assert moment.utcoffset() == dt.timedelta(hours=2)


def test_parse_mismatch():
    with pytest.raises(ValueError):
        parse_time(RFC3339, "2021/01/01")