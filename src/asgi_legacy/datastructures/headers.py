# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Case-insensitive request header store with multi-value support.

Purpose
=======
The legacy contract exposes headers three ways: first value by name, every
value by name, and the list of names. HTTP header names are
case-insensitive (RFC 9110) and the same header may be repeated. ASGI
delivers headers as ``list[tuple[bytes, bytes]]`` in Latin-1.

Processing Schema::

    ASGI scope["headers"] (bytes, case-preserving):
    [(b"Accept-Language", b"fr"), (b"Cookie", b"a=1"), (b"Cookie", b"b=2")]
                        ↓
    Index (lowercase name → values in wire order, names in first-seen order):
    {"accept-language": ["fr"], "cookie": ["a=1", "b=2"]}
                        ↓
    headers.get("ACCEPT-LANGUAGE")  → "fr"
    headers.getlist("cookie")       → ["a=1", "b=2"]
    headers.keys()                  → ["accept-language", "cookie"]

Definition::

    class Headers:
        def __init__(self, raw_headers: Iterable[tuple[bytes, bytes]]) -> None
        def get(self, key: str, default: str | None = None) -> str | None
        def getlist(self, key: str) -> list[str]
        def keys(self) -> list[str]

    def headers_from_scope(scope: Mapping[str, Any]) -> Headers
"""

from collections.abc import Iterable, Mapping
from typing import Any

__all__ = ["Headers", "headers_from_scope"]


class Headers:
    """
    Read-only, case-insensitive view of the request headers.

    Example:
        >>> headers = Headers([(b"Content-Type", b"text/plain"), (b"X-Tag", b"a"), (b"x-tag", b"b")])
        >>> headers.get("content-type")
        'text/plain'
        >>> headers.getlist("X-TAG")
        ['a', 'b']
        >>> headers.keys()
        ['content-type', 'x-tag']
    """

    __slots__ = ("_index",)

    def __init__(self, raw_headers: Iterable[tuple[bytes, bytes]]) -> None:
        self._index: dict[str, list[str]] = {}
        for raw_name, raw_value in raw_headers:
            name = raw_name.decode("latin-1").lower()
            self._index.setdefault(name, []).append(raw_value.decode("latin-1"))

    def get(self, key: str, default: str | None = None) -> str | None:
        """First value of header ``key``, or ``default`` when it was not sent."""
        values = self._index.get(key.lower())
        return values[0] if values else default

    def getlist(self, key: str) -> list[str]:
        """Every value of header ``key`` in wire order, as a new list."""
        return list(self._index.get(key.lower(), ()))

    def keys(self) -> list[str]:
        """Lowercase header names, each once, in the order first received."""
        return list(self._index)

    def __repr__(self) -> str:
        return f"Headers({self._index!r})"


def headers_from_scope(scope: Mapping[str, Any]) -> Headers:
    """
    Create Headers from an ASGI scope.

    Returns empty Headers when the scope has no "headers" key.

    Example:
        >>> headers_from_scope({"headers": [(b"host", b"example.com")]}).get("host")
        'example.com'
    """
    return Headers(scope.get("headers") or [])
