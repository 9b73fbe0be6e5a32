# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Canonical request URI resolution.

Purpose
=======
Every scheme/host/port/path/URL accessor of the adapter reads one value: the
canonical URI of the request, computed once when the adapter is built. The
network layer either hands over a pre-combined absolute URI (used as-is) or
only the pieces, in which case the URI is synthesized from them.

Raw query strings coming off the wire are often not valid URI syntax
(``a=b=1|c=d``). The synthesized path therefore repairs the query pair by
pair before parsing, so that a bad value never makes the request
unaddressable.

Resolution Schema::

    RawRequestFields
        precombined_absolute_uri?  ──yes──►  parse as-is ──────────────┐
                │ no                                                   │
                ▼                                                      │
        scheme + "://" + host + raw_path                               │
        + "?" + rebuild_query(raw_query)   (when raw_query is not None)│
                │                                                      │
                ▼                                                      ▼
                         CanonicalUri (strictly validated)

Query Repair (``rebuild_query``)::

    "a=b=1|c=d|e=f&g=h&flag&=x"
        split on "&"   →  ["a=b=1|c=d|e=f", "g=h", "flag", "=x"]
        "flag"         →  dropped (no "=")
        "=x"           →  dropped (empty key)
        key verbatim, value form-encoded (space → "+", reserved escaped)
                       →  "a=b%3D1%7Cc%3Dd%7Ce%3Df&g=h"

Validation
==========
The parsed URI must be absolute, have an authority, contain only RFC 3986
characters and well-formed percent-escapes, and carry a numeric port when a
port is given. Anything else raises ``UriResolutionError``. Keys are not
re-encoded, so a key with illegal characters still fails resolution. Square
brackets are legal in the query and fragment, so array keys such as
``ids[]=1`` resolve.

Definition::

    class RawRequestFields:
        scheme, host, raw_path, raw_query, precombined_absolute_uri

    class CanonicalUri:
        @property scheme -> str        # case preserved
        @property host -> str          # case preserved, [] kept for IPv6
        @property port -> int | None   # explicit port only
        @property effective_port -> int  # 443 for https, else 80 when absent
        @property raw_path -> str
        @property path -> str          # unquoted, "/" when empty
        @property query -> str | None  # None when the URI has no "?"
        def without_query(self) -> str

    def rebuild_query(raw_query: str) -> str
    def resolve_uri(fields: RawRequestFields) -> CanonicalUri
"""

from __future__ import annotations

import logging
import re
from urllib.parse import quote_plus, unquote, urlsplit

from .exceptions import UriResolutionError

__all__ = ["RawRequestFields", "CanonicalUri", "rebuild_query", "resolve_uri"]

logger = logging.getLogger(__name__)

_PCHAR = r"A-Za-z0-9\-._~!$&'()*+,;=:@"
_PCT = r"%[0-9A-Fa-f]{2}"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_AUTHORITY_RE = re.compile(rf"^(?:[{_PCHAR}\[\]]|{_PCT})*$")
_PATH_RE = re.compile(rf"^(?:[{_PCHAR}/]|{_PCT})*$")
_QUERY_RE = re.compile(rf"^(?:[{_PCHAR}/?\[\]]|{_PCT})*$")


class RawRequestFields:
    """
    Read-only snapshot of what the network layer knows about the request URI.

    Attributes:
        scheme: Request scheme as reported by the server (``http``, ``https``).
        host: Host, optionally with ``:port``.
        raw_path: Path exactly as received.
        raw_query: Query string without ``?``, or None if the request had none.
        precombined_absolute_uri: Absolute URI when the server supplies one.
    """

    __slots__ = ("scheme", "host", "raw_path", "raw_query", "precombined_absolute_uri")

    def __init__(
        self,
        scheme: str,
        host: str,
        raw_path: str,
        raw_query: str | None = None,
        precombined_absolute_uri: str | None = None,
    ) -> None:
        self.scheme = scheme
        self.host = host
        self.raw_path = raw_path
        self.raw_query = raw_query
        self.precombined_absolute_uri = precombined_absolute_uri

    def __repr__(self) -> str:
        return (
            f"RawRequestFields(scheme={self.scheme!r}, host={self.host!r}, "
            f"raw_path={self.raw_path!r}, raw_query={self.raw_query!r}, "
            f"precombined_absolute_uri={self.precombined_absolute_uri!r})"
        )


class CanonicalUri:
    """
    Parsed, validated absolute request URI.

    Construction validates the string and raises ``UriResolutionError`` when
    it is not a well-formed absolute URI. All components are computed up
    front; instances never change afterwards.

    Example:
        >>> uri = CanonicalUri("https://Example.org/a%20b?x=1")
        >>> uri.host, uri.path, uri.query, uri.effective_port
        ('Example.org', '/a b', 'x=1', 443)
        >>> uri.without_query()
        'https://Example.org/a%20b'
    """

    __slots__ = ("_uri", "_scheme", "_netloc", "_host", "_port", "_raw_path", "_query")

    def __init__(self, uri: str) -> None:
        _check_characters(uri)
        try:
            parts = urlsplit(uri)
        except ValueError as e:
            raise UriResolutionError(uri, str(e)) from e

        scheme = uri[: len(parts.scheme)]
        if not scheme or not _SCHEME_RE.match(scheme):
            raise UriResolutionError(uri, "not an absolute URI")
        if not uri[len(scheme) + 1 :].startswith("//") or not parts.netloc:
            raise UriResolutionError(uri, "missing authority")
        if not _AUTHORITY_RE.match(parts.netloc):
            raise UriResolutionError(uri, "illegal character in authority")
        if not _PATH_RE.match(parts.path):
            raise UriResolutionError(uri, "illegal character in path")
        if not _QUERY_RE.match(parts.query) or not _QUERY_RE.match(parts.fragment):
            raise UriResolutionError(uri, "illegal character in query")
        try:
            port = parts.port
        except ValueError as e:
            raise UriResolutionError(uri, str(e)) from e

        self._uri = uri
        self._scheme = scheme
        self._netloc = parts.netloc
        self._host = _host_from_netloc(parts.netloc)
        self._port = port
        self._raw_path = parts.path
        self._query = parts.query if "?" in uri.split("#", 1)[0] else None

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def netloc(self) -> str:
        return self._netloc

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int | None:
        """Explicit port, or None when the URI does not carry one."""
        return self._port

    @property
    def effective_port(self) -> int:
        """Explicit port, else 443 for https (any case) and 80 otherwise."""
        if self._port is not None:
            return self._port
        return 443 if self._scheme.lower() == "https" else 80

    @property
    def raw_path(self) -> str:
        return self._raw_path

    @property
    def path(self) -> str:
        """Decoded path. Returns '/' if the URI has an empty path."""
        return unquote(self._raw_path) or "/"

    @property
    def query(self) -> str | None:
        return self._query

    def without_query(self) -> str:
        """Scheme, authority and path, with no query string or fragment."""
        return f"{self._scheme}://{self._netloc}{self._raw_path}"

    def __str__(self) -> str:
        return self._uri

    def __repr__(self) -> str:
        return f"CanonicalUri({self._uri!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CanonicalUri):
            return self._uri == other._uri
        if isinstance(other, str):
            return self._uri == other
        return False

    def __hash__(self) -> int:
        return hash(self._uri)


def rebuild_query(raw_query: str) -> str:
    """
    Re-encode a raw query string so that it is valid URI syntax.

    Pairs without ``=`` or with an empty key are dropped. The key is kept
    verbatim; everything after the first ``=`` is form-encoded.

    Example:
        >>> rebuild_query("a=b=1|c=d|e=f&g=h")
        'a=b%3D1%7Cc%3Dd%7Ce%3Df&g=h'
        >>> rebuild_query("flag&=x&q=hello world")
        'q=hello+world'
    """
    pairs: list[str] = []
    for pair in raw_query.split("&"):
        index = pair.find("=")
        if index <= 0:
            logger.debug(f"Dropping query pair {pair!r}")
            continue
        key, value = pair[:index], pair[index + 1 :]
        pairs.append(f"{key}={quote_plus(value, encoding='utf-8')}")
    return "&".join(pairs)


def resolve_uri(fields: RawRequestFields) -> CanonicalUri:
    """
    Derive the canonical URI of a request.

    Args:
        fields: What the network layer reported.

    Returns:
        The canonical URI.

    Raises:
        UriResolutionError: If the result is not a well-formed absolute URI.
    """
    if fields.precombined_absolute_uri:
        logger.debug(f"Using absolute URI {fields.precombined_absolute_uri!r}")
        return CanonicalUri(fields.precombined_absolute_uri)

    uri = f"{fields.scheme}://{fields.host}{fields.raw_path}"
    if fields.raw_query is not None:
        uri += "?" + rebuild_query(fields.raw_query)
    logger.debug(f"Synthesized request URI {uri!r}")
    return CanonicalUri(uri)


def _check_characters(uri: str) -> None:
    match = re.search(rf"[^{_PCHAR}/?#\[\]%]|%(?![0-9A-Fa-f]{{2}})", uri)
    if match is not None:
        raise UriResolutionError(uri, f"illegal character at index {match.start()}")


def _host_from_netloc(netloc: str) -> str:
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        return hostport[: hostport.find("]") + 1]
    return hostport.partition(":")[0]
