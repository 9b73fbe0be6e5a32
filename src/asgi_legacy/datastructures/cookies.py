# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Request cookies decoded from the ``Cookie`` header.

A request header carries only ``name=value`` pairs separated by ``;``.
Unlike ``Set-Cookie`` there are no attributes, so every name is a cookie,
``path`` and ``expires`` included::

    'sid=abc; path=/x; theme="dark"'
        → [Cookie("sid", "abc"), Cookie("path", "/x"), Cookie("theme", "dark")]

The header is decoded all or nothing: one malformed pair and no cookie is
reported.
"""

from __future__ import annotations

import logging
import re

__all__ = ["Cookie", "parse_cookies"]

logger = logging.getLogger(__name__)

# RFC 9110 token
_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_VALUE_RE = re.compile(r'[^\x00-\x1f\x7f";\\]*')


class Cookie:
    """A single name/value pair sent by the client."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"Cookie(name={self.name!r}, value={self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Cookie):
            return self.name == other.name and self.value == other.value
        if isinstance(other, tuple) and len(other) == 2:
            return bool(self.name == other[0] and self.value == other[1])
        return False

    def __hash__(self) -> int:
        return hash((self.name, self.value))


def parse_cookies(header: str | None) -> list[Cookie]:
    """
    Decode a ``Cookie`` header into cookies, in header order.

    Quoted values are unquoted and empty chunks (``a=1;;b=2``) are skipped.
    A missing or empty header yields an empty list, and so does a malformed
    one: a pair without ``=``, a name that is not a token, or a value with
    an unbalanced quote or a forbidden character. Cookie problems never
    abort request handling.

    Example:
        >>> parse_cookies('session=abc; theme="dark"')
        [Cookie(name='session', value='abc'), Cookie(name='theme', value='dark')]
        >>> parse_cookies("a=1; b c=2")
        []
    """
    if not header:
        return []
    cookies: list[Cookie] = []
    for chunk in header.split(";"):
        if not chunk.strip():
            continue
        name, sep, value = chunk.partition("=")
        name, value = name.strip(), value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        if not sep or not _NAME_RE.fullmatch(name) or not _VALUE_RE.fullmatch(value):
            logger.debug(f"Ignoring malformed Cookie header {header!r}: bad pair {chunk!r}")
            return []
        cookies.append(Cookie(name, value))
    return cookies
