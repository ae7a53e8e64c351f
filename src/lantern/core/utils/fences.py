"""Code fence detection shared by slide splitting and region scanning"""

import re
from typing import NamedTuple


FENCE_RE = re.compile(r'^ {0,3}(`{3,}|~{3,})(.*)$')


class Fence(NamedTuple):
    char:   str
    length: int
    info:   str


def open_fence(line: str) -> Fence | None:
    """Return the Fence opened by line, or None if it is not a fence opener."""
    m = FENCE_RE.match(line)
    if not m:
        return None
    marker, info = m.group(1), m.group(2).strip()
    if marker[0] == '`' and '`' in info:
        return None
    return Fence(marker[0], len(marker), info)


def closes_fence(line: str, fence: Fence) -> bool:
    """True if line is a closing fence for the given opener."""
    m = FENCE_RE.match(line)
    if not m:
        return False
    marker, rest = m.group(1), m.group(2)
    return marker[0] == fence.char and len(marker) >= fence.length and not rest.strip()


def find_close(lines: list[str], start: int, fence: Fence) -> int | None:
    """Index of the first line at or after start that closes fence, else None."""
    for i in range(start, len(lines)):
        if closes_fence(lines[i], fence):
            return i
    return None
