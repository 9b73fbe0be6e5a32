# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Server-side view of an inbound request.

This module describes what the adapter needs from the network layer and
binds it to ASGI:

- ServerRequest: Abstract interface the adapter consumes
- AsgiServerRequest: Implementation over an ASGI HTTP scope

Architecture:
    ServerRequest (ABC)
        └── AsgiServerRequest     # ASGI HTTP scope (uvicorn, hypercorn, ...)

A ServerRequest is a read-only snapshot. The adapter reads it once at
construction for the URI fields and keeps it for header, parameter and
address lookups during the rest of the request.

Example:
    request = AsgiServerRequest(scope)
    request.host          # "example.com:8080"
    request.query         # "a=1&b=2" or None
    request.params.getlist("a")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from urllib.parse import quote

from .config import AdapterConfig, default_config
from .datastructures import (
    Address,
    Headers,
    QueryParams,
    headers_from_scope,
    query_params_from_scope,
)
from .types import Scope
from .uri import RawRequestFields

__all__ = ["ServerRequest", "AsgiServerRequest"]

# Characters allowed unescaped in a path segment, plus "/".
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


class ServerRequest(ABC):
    """
    Abstract request as delivered by the network layer.

    Properties:
        method: HTTP method (GET, POST, ...)
        scheme: URL scheme as reported by the server
        host: Host, with ":port" when the server reports one
        path: Request path as received (not decoded)
        query: Raw query string without "?", None when absent
        absolute_uri: Pre-combined absolute URI, None when not supplied
        headers: Case-insensitive header store
        params: Query-sourced parameters
        remote_address: Client address, None when unknown
        version: Protocol version string (e.g. "HTTP/1.1")
    """

    __slots__ = ()

    @property
    @abstractmethod
    def method(self) -> str:
        """HTTP method."""

    @property
    @abstractmethod
    def scheme(self) -> str:
        """URL scheme: http or https."""

    @property
    @abstractmethod
    def host(self) -> str:
        """Host, with optional port."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Request path, not decoded."""

    @property
    @abstractmethod
    def query(self) -> str | None:
        """Raw query string, None when the request has none."""

    @property
    @abstractmethod
    def absolute_uri(self) -> str | None:
        """Absolute URI when the server supplies one."""

    @property
    @abstractmethod
    def headers(self) -> Headers:
        """Request headers."""

    @property
    @abstractmethod
    def params(self) -> QueryParams:
        """Query-sourced parameters."""

    @property
    @abstractmethod
    def remote_address(self) -> Address | None:
        """Client address."""

    @property
    @abstractmethod
    def version(self) -> str:
        """Protocol version string."""

    def uri_fields(self) -> RawRequestFields:
        """Snapshot of the fields the URI Resolver works from."""
        return RawRequestFields(
            scheme=self.scheme,
            host=self.host,
            raw_path=self.path,
            raw_query=self.query,
            precombined_absolute_uri=self.absolute_uri,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} method={self.method} path={self.path!r}>"


class AsgiServerRequest(ServerRequest):
    """
    ServerRequest over an ASGI HTTP scope.

    Every value is computed once in the constructor; the scope is not read
    again afterwards.

    Args:
        scope: ASGI HTTP scope.
        config: Adapter configuration, defaults to ``default_config()``.

    Raises:
        ValueError: If the scope is not an HTTP scope.
    """

    __slots__ = (
        "_scope",
        "_method",
        "_scheme",
        "_host",
        "_path",
        "_query",
        "_absolute_uri",
        "_headers",
        "_params",
        "_remote_address",
        "_version",
    )

    def __init__(self, scope: Scope, config: AdapterConfig | None = None) -> None:
        if scope.get("type", "http") != "http":
            raise ValueError(f"Expected an http scope, got {scope.get('type')!r}")
        config = config or default_config()

        self._scope = scope
        self._method = str(scope.get("method", "GET")).upper()
        self._scheme = str(scope.get("scheme") or config.default_scheme)
        self._headers = headers_from_scope(scope)
        self._params = query_params_from_scope(scope)
        self._host = self._host_from_scope(config.default_host)
        self._path = self._path_from_scope()

        query_string = scope.get("query_string") or b""
        self._query: str | None = query_string.decode("latin-1") or None

        extensions = scope.get("extensions") or {}
        self._absolute_uri: str | None = extensions.get("absolute_uri")

        client = scope.get("client")
        self._remote_address = Address(host=client[0], port=client[1]) if client else None
        self._version = f"HTTP/{scope.get('http_version', '1.1')}"

    def _host_from_scope(self, default_host: str) -> str:
        host = self._headers.get("host")
        if host:
            return host
        server = self._scope.get("server")
        if server:
            name, port = server[0], server[1]
            if port is None:
                return str(name)
            if (self._scheme == "http" and port == 80) or (self._scheme == "https" and port == 443):
                return str(name)
            return f"{name}:{port}"
        return default_host

    def _path_from_scope(self) -> str:
        root_path = self._scope.get("root_path", "")
        raw_path = self._scope.get("raw_path")
        if raw_path:
            path = raw_path.decode("latin-1")
            # raw_path may or may not include root_path depending on the server
            if root_path and not path.startswith(quote(root_path, safe=_PATH_SAFE)):
                path = quote(root_path, safe=_PATH_SAFE) + path
            return path
        return quote(root_path + self._scope.get("path", "/"), safe=_PATH_SAFE)

    @property
    def scope(self) -> Scope:
        """Raw ASGI scope dict."""
        return self._scope

    @property
    def method(self) -> str:
        return self._method

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def path(self) -> str:
        return self._path

    @property
    def query(self) -> str | None:
        return self._query

    @property
    def absolute_uri(self) -> str | None:
        return self._absolute_uri

    @property
    def headers(self) -> Headers:
        return self._headers

    @property
    def params(self) -> QueryParams:
        return self._params

    @property
    def remote_address(self) -> Address | None:
        return self._remote_address

    @property
    def version(self) -> str:
        return self._version
