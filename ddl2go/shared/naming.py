"""Naming utilities for code generation."""

from __future__ import annotations

import json
from functools import lru_cache


@lru_cache(maxsize=1024)
def to_camel_first_upper(value: str) -> str:
    """Convert a snake_case identifier to an exported Go name.

    Each underscore-separated piece gets its first letter upper-cased; the
    rest of the piece is kept as written.

    Examples:
        >>> to_camel_first_upper("user_id")
        'UserId'
        >>> to_camel_first_upper("created_at")
        'CreatedAt'
        >>> to_camel_first_upper("orderID")
        'OrderID'
    """
    return "".join(piece[:1].upper() + piece[1:] for piece in value.split("_"))


@lru_cache(maxsize=256)
def go_string_literal(value: str) -> str:
    """Quote a string for Go literal embedding."""
    return json.dumps(value, ensure_ascii=False)


def unquote_identifier(value: str) -> str:
    """Strip MySQL identifier quoting (backticks or double quotes)."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "`\"":
        quote = value[0]
        return value[1:-1].replace(quote * 2, quote)
    return value


_ESCAPES = {"0": "\0", "b": "\b", "n": "\n", "r": "\r", "t": "\t", "Z": "\x1a"}


def unquote_string(value: str) -> str:
    """Decode a single- or double-quoted MySQL string literal."""
    if len(value) < 2 or value[0] != value[-1] or value[0] not in "'\"":
        return value
    quote = value[0]
    body = value[1:-1]
    chars: list[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            chars.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        if char == quote and i + 1 < len(body) and body[i + 1] == quote:
            chars.append(quote)
            i += 2
            continue
        chars.append(char)
        i += 1
    return "".join(chars)
