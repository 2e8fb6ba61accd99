"""Glob-style matching of map keys and values."""

from __future__ import annotations

import logging

log = logging.getLogger("yamlops")


def match_key(name: str, pattern: str) -> bool:
    """Report whether ``name`` matches ``pattern``, where ``*`` and ``?`` are wildcards."""
    if pattern == "":
        return name == pattern
    log.debug("pattern: %s", pattern)
    if pattern == "*":
        return True
    return deep_match(name, pattern)


def deep_match(name: str, pattern: str) -> bool:
    """Report whether ``name`` matches the glob ``pattern`` in linear time."""
    px = nx = 0
    next_px = next_nx = 0
    while px < len(pattern) or nx < len(name):
        if px < len(pattern):
            char = pattern[px]
            if char == "?":
                if nx < len(name):
                    px += 1
                    nx += 1
                    continue
            elif char == "*":
                # Try to match here; on failure, restart one character later.
                next_px, next_nx = px, nx + 1
                px += 1
                continue
            elif nx < len(name) and name[nx] == char:
                px += 1
                nx += 1
                continue
        if 0 < next_nx <= len(name):
            px, nx = next_px, next_nx
            continue
        return False
    return True