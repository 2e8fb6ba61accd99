"""Date-time parsing, formatting and time-zone conversion using reference layouts.

Layouts follow the reference-time convention: the moment
``Mon Jan 2 15:04:05 MST 2006`` written the way the date should look.
"""

from __future__ import annotations

import datetime as _dt
import re
from typing import Callable
from zoneinfo import ZoneInfo

from yamlops.node import ExpressionError, Kind, Node, parse_snippet

RFC3339 = "2006-01-02T15:04:05Z07:00"

_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_TOKEN_RE = re.compile(
    r"January|Jan|Monday|Mon|MST|2006|Z07:00|Z0700|Z07|-07:00|-0700|-07|_2"
    r"|[.,](?:0+|9+)(?![0-9])|01|02|03|04|05|06|15|PM|pm|1|2|3|4|5"
)

_DURATION_UNITS = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}
_DURATION_PART = re.compile(r"([0-9]*\.?[0-9]*)(ns|us|µs|μs|ms|s|m|h)")


def _tokenize(layout: str) -> list[tuple[bool, str]]:
    """Split a layout into (is_token, text) pieces."""
    pieces: list[tuple[bool, str]] = []
    pos = 0
    while pos < len(layout):
        match = _TOKEN_RE.match(layout, pos)
        if match:
            pieces.append((True, match.group()))
            pos = match.end()
            continue
        if pieces and not pieces[-1][0]:
            pieces[-1] = (False, pieces[-1][1] + layout[pos])
        else:
            pieces.append((False, layout[pos]))
        pos += 1
    return pieces


def parse_duration(text: str) -> _dt.timedelta:
    """Parse a duration such as ``3h10m`` or ``-1.5s``."""
    body = text
    sign = 1
    if body[:1] in ("-", "+"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return _dt.timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")
    total = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if not match or match.group(1) in ("", "."):
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return _dt.timedelta(microseconds=sign * total)


def _take_name(text: str, pos: int, names: list[str]) -> tuple[int, int]:
    for index, name in enumerate(names):
        if text.startswith(name, pos):
            return index, pos + len(name)
    raise ValueError(f"cannot parse {text[pos:]!r} as a name")


def parse_time(layout: str, text: str) -> _dt.datetime:
    """Parse ``text`` using a reference ``layout``; raise ValueError on mismatch."""
    year, month, day = 1, 1, 1
    hour = minute = second = micro = 0
    pm: bool | None = None
    tz: _dt.tzinfo = _dt.timezone.utc
    pos = 0
    pieces = _tokenize(layout)

    def number(low: int, high: int) -> int:
        nonlocal pos
        match = re.compile(rf"[0-9]{{{low},{high}}}").match(text, pos)
        if not match:
            raise ValueError(f"cannot parse {text[pos:]!r} as a number")
        pos = match.end()
        return int(match.group())

    def fraction() -> int:
        nonlocal pos
        match = re.compile(r"[.,]([0-9]+)").match(text, pos)
        if not match:
            raise ValueError(f"cannot parse {text[pos:]!r} as a fraction")
        pos = match.end()
        return int((match.group(1) + "000000")[:6])

    for index, (is_token, piece) in enumerate(pieces):
        if not is_token:
            if not text.startswith(piece, pos):
                raise ValueError(f"cannot parse {text[pos:]!r} as {piece!r}")
            pos += len(piece)
            continue
        if piece == "2006":
            year = number(4, 4)
        elif piece == "06":
            short = number(2, 2)
            year = short + (1900 if short >= 69 else 2000)
        elif piece in ("01", "1"):
            month = number(len(piece), 2)
        elif piece == "January":
            month, pos = _take_name(text, pos, _MONTHS)
            month += 1
        elif piece == "Jan":
            month, pos = _take_name(text, pos, [m[:3] for m in _MONTHS])
            month += 1
        elif piece == "Monday":
            _, pos = _take_name(text, pos, _WEEKDAYS)
        elif piece == "Mon":
            _, pos = _take_name(text, pos, [w[:3] for w in _WEEKDAYS])
        elif piece in ("02", "2"):
            day = number(len(piece), 2)
        elif piece == "_2":
            if text.startswith(" ", pos):
                pos += 1
            day = number(1, 2)
        elif piece in ("15", "03", "3"):
            hour = number(1 if piece != "03" else 2, 2)
        elif piece in ("04", "4"):
            minute = number(len(piece), 2)
        elif piece in ("05", "5"):
            second = number(len(piece), 2)
            following = pieces[index + 1][1] if index + 1 < len(pieces) else ""
            if (
                not _TOKEN_RE.fullmatch(following or "x") or following[:1] not in ".,"
            ) and re.match(r"[.,][0-9]", text[pos:pos + 2]):
                micro = fraction()
        elif piece[0] in ".,":
            micro = fraction()
        elif piece in ("PM", "pm"):
            marker = text[pos:pos + 2].upper()
            if marker not in ("AM", "PM"):
                raise ValueError(f"cannot parse {text[pos:]!r} as AM/PM")
            pm = marker == "PM"
            pos += 2
        elif piece == "MST":
            match = re.compile(r"[A-Z]{3,5}").match(text, pos)
            if not match:
                raise ValueError(f"cannot parse {text[pos:]!r} as a zone name")
            pos = match.end()
            name = match.group()
            tz = _dt.timezone.utc if name == "UTC" else _dt.timezone(_dt.timedelta(0), name)
        else:
            if piece.startswith("Z") and text.startswith("Z", pos):
                pos += 1
                tz = _dt.timezone.utc
                continue
            match = re.compile(r"([-+])([0-9]{2})(?::?([0-9]{2}))?").match(text, pos)
            if not match:
                raise ValueError(f"cannot parse {text[pos:]!r} as a zone offset")
            pos = match.end()
            offset = _dt.timedelta(hours=int(match.group(2)), minutes=int(match.group(3) or 0))
            tz = _dt.timezone(-offset if match.group(1) == "-" else offset)
    if pos != len(text):
        raise ValueError(f"extra text {text[pos:]!r}")
    if pm is True and hour < 12:
        hour += 12
    elif pm is False and hour == 12:
        hour = 0
    return _dt.datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)


def _format_offset(moment: _dt.datetime, piece: str) -> str:
    offset = moment.utcoffset() or _dt.timedelta(0)
    if piece.startswith("Z") and offset == _dt.timedelta(0):
        return "Z"
    sign = "-" if offset < _dt.timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    hours, minutes = divmod(minutes, 60)
    if piece.endswith(":00"):
        return f"{sign}{hours:02d}:{minutes:02d}"
    if piece.endswith("0700"):
        return f"{sign}{hours:02d}{minutes:02d}"
    return f"{sign}{hours:02d}"


def format_time(moment: _dt.datetime, layout: str) -> str:
    """Format ``moment`` according to a reference ``layout``."""
    hour12 = moment.hour % 12 or 12
    out = []
    for is_token, piece in _tokenize(layout):
        if not is_token:
            out.append(piece)
            continue
        simple = {
            "2006": f"{moment.year:04d}",
            "06": f"{moment.year % 100:02d}",
            "01": f"{moment.month:02d}",
            "1": str(moment.month),
            "January": _MONTHS[moment.month - 1],
            "Jan": _MONTHS[moment.month - 1][:3],
            "Monday": _WEEKDAYS[moment.weekday()],
            "Mon": _WEEKDAYS[moment.weekday()][:3],
            "02": f"{moment.day:02d}",
            "2": str(moment.day),
            "_2": f"{moment.day:2d}",
            "15": f"{moment.hour:02d}",
            "03": f"{hour12:02d}",
            "3": str(hour12),
            "04": f"{moment.minute:02d}",
            "4": str(moment.minute),
            "05": f"{moment.second:02d}",
            "5": str(moment.second),
            "PM": "PM" if moment.hour >= 12 else "AM",
            "pm": "pm" if moment.hour >= 12 else "am",
        }
        if piece in simple:
            out.append(simple[piece])
        elif piece == "MST":
            out.append(moment.tzname() or _format_offset(moment, "-0700"))
        elif piece[0] in ".,":
            digits = f"{moment.microsecond * 1000:09d}"[: len(piece) - 1]
            if piece[1] == "9":
                digits = digits.rstrip("0")
                out.append(piece[0] + digits if digits else "")
            else:
                out.append(piece[0] + digits)
        else:
            out.append(_format_offset(moment, piece))
    return "".join(out)


def _parse_node_time(node: Node, layout: str) -> _dt.datetime:
    try:
        return parse_time(layout, node.value)
    except ValueError as err:
        raise ExpressionError(
            f"could not parse datetime of [{node.value}] using layout [{layout}]: {err}"
        ) from err


def now_node(clock: Callable[[], _dt.datetime] | None = None) -> Node:
    """Return a ``!!timestamp`` node holding the current time in RFC3339."""
    moment = clock() if clock is not None else _dt.datetime.now().astimezone()
    return Node(kind=Kind.SCALAR, tag="!!timestamp", value=format_time(moment, RFC3339))


def format_datetime(node: Node, fmt: str, layout: str = RFC3339) -> Node:
    """Reformat a date-time node; the result is re-read as YAML when possible."""
    text = format_time(_parse_node_time(node, layout), fmt)
    try:
        return parse_snippet(text)
    except ExpressionError:
        return Node(kind=Kind.SCALAR, tag="!!str", value=text)


def _load_zone(zone: str) -> _dt.tzinfo:
    if zone in ("", "UTC"):
        return _dt.timezone.utc
    if zone == "Local":
        return _dt.datetime.now().astimezone().tzinfo
    try:
        return ZoneInfo(zone)
    except (KeyError, ValueError, OSError) as err:
        raise ExpressionError(f"could not load tz [{zone}]: {err}") from err


def to_timezone(node: Node, zone: str, layout: str = RFC3339) -> Node:
    """Return the date-time of ``node`` expressed in time zone ``zone``."""
    tzinfo = _load_zone(zone)
    moment = _parse_node_time(node, layout).astimezone(tzinfo)
    return Node(kind=Kind.SCALAR, tag=node.tag, value=format_time(moment, layout))