# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Query-sourced parameters, as parsed by the network layer.

Purpose
=======
This is the first of the two multi-maps the Parameter View reconciles.
It is built once from the request query string and is read-only to the
adapter. Names are case-sensitive, values are URL-decoded and kept in wire
order per name.

Parsing Schema::

    Query string: "name=john&tags=python&tags=web&empty="
                        ↓
                urllib.parse.parse_qs(keep_blank_values=True)
                        ↓
    {"name": ["john"], "tags": ["python", "web"], "empty": [""]}

Note that this parse is independent of the URI Resolver: the resolver
repairs the raw query for URI purposes, while parameter values always come
from here.

Definition::

    class QueryParams:
        def __init__(self, query_string: bytes | str) -> None
        def getlist(self, key: str) -> list[str]
        def keys(self) -> list[str]
        def __contains__(self, key: object) -> bool

    def query_params_from_scope(scope: Mapping[str, Any]) -> QueryParams
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs

__all__ = ["QueryParams", "query_params_from_scope"]


class QueryParams:
    """
    Query-sourced parameters: name to values, names in first-seen order.

    Example:
        >>> params = QueryParams(b"name=john&tags=python&tags=web")
        >>> params.getlist("tags")
        ['python', 'web']
        >>> params.keys()
        ['name', 'tags']
        >>> "name" in params, "missing" in params
        (True, False)
    """

    __slots__ = ("_params",)

    def __init__(self, query_string: bytes | str) -> None:
        # Bytes are Latin-1 on the wire; percent-escapes decode as UTF-8.
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        self._params: dict[str, list[str]] = parse_qs(query_string, keep_blank_values=True)

    def getlist(self, key: str) -> list[str]:
        """
        Values of ``key`` in wire order.

        Returns a new list, empty when the parameter is absent, so callers
        may extend it freely.
        """
        return list(self._params.get(key, ()))

    def keys(self) -> list[str]:
        return list(self._params)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._params

    def __repr__(self) -> str:
        return f"QueryParams({self._params!r})"


def query_params_from_scope(scope: Mapping[str, Any]) -> QueryParams:
    """
    Create QueryParams from an ASGI scope.

    Returns empty QueryParams when the scope has no "query_string" key.
    """
    return QueryParams(scope.get("query_string") or b"")
