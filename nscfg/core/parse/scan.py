from __future__ import annotations

import re
from typing import Iterator, Optional

OPENERS = "([{"
CLOSERS = ")]}"

_RAW_STRING = re.compile(r'r(#*)"')


def _is_ident(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _skip_string(text: str, i: int) -> int:
    """Return the index just past the string literal opening at text[i]."""
    j = i + 1
    n = len(text)
    while j < n:
        if text[j] == "\\":
            j += 2
            continue
        if text[j] == '"':
            return j + 1
        j += 1
    return n


def _raw_string_end(text: str, i: int) -> Optional[int]:
    prev_ok = i == 0 or not _is_ident(text[i - 1])
    if not prev_ok and text[i - 1] == "b":
        prev_ok = i == 1 or not _is_ident(text[i - 2])
    if not prev_ok:
        return None
    m = _RAW_STRING.match(text, i)
    if m is None:
        return None
    closing = '"' + m.group(1)
    j = text.find(closing, m.end())
    return len(text) if j < 0 else j + len(closing)


def _char_literal_end(text: str, i: int) -> Optional[int]:
    # 'a' and '\n' are literals; 'a on its own is a lifetime.
    n = len(text)
    if i + 1 < n and text[i + 1] == "\\":
        j = i + 2
        if j >= n:
            return None
        if text[j] == "u" and text[j + 1 : j + 2] == "{":
            close = text.find("}", j)
            if close < 0:
                return None
            j = close + 1
        elif text[j] == "x":
            j += 3
        else:
            j += 1
        return j + 1 if j < n and text[j] == "'" else None
    if i + 2 < n and text[i + 2] == "'":
        return i + 3
    return None


def scan(text: str) -> Iterator[tuple[int, str, int]]:
    """Yield (index, char, depth) for each code character of `text`.

    String and char literals and comments are skipped. Openers report the
    depth outside of the group they open, closers the depth they return to.
    """
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if ch == "/" and nxt == "/":
            j = text.find("\n", i)
            i = n if j < 0 else j
            continue
        if ch == "/" and nxt == "*":
            j = text.find("*/", i + 2)
            i = n if j < 0 else j + 2
            continue
        if ch == '"':
            i = _skip_string(text, i)
            continue
        if ch == "r":
            end = _raw_string_end(text, i)
            if end is not None:
                i = end
                continue
        if ch == "'":
            end = _char_literal_end(text, i)
            if end is not None:
                i = end
                continue

        if ch in CLOSERS:
            depth = max(depth - 1, 0)
            yield i, ch, depth
        elif ch in OPENERS:
            yield i, ch, depth
            depth += 1
        else:
            yield i, ch, depth
        i += 1


def top_level(text: str) -> Iterator[tuple[int, str]]:
    """Code characters of `text` that sit at nesting depth 0."""
    for i, ch, depth in scan(text):
        if depth == 0:
            yield i, ch


def matching_close(text: str, open_index: int) -> Optional[int]:
    """Index of the closer matching the opener at `open_index`, if any."""
    target: Optional[int] = None
    for i, ch, depth in scan(text[open_index:]):
        if i == 0:
            target = depth
            continue
        if ch in CLOSERS and depth == target:
            return open_index + i
    return None
