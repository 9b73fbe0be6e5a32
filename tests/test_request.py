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

"""Tests for ServerRequest and its ASGI binding.

Test coverage based on request.py module docstring (source of truth).
"""

from __future__ import annotations

from typing import Any

import pytest

from asgi_legacy.config import AdapterConfig
from asgi_legacy.datastructures import Address, Headers, QueryParams
from asgi_legacy.request import AsgiServerRequest, ServerRequest
from asgi_legacy.uri import RawRequestFields


# =============================================================================
# Test Fixtures / Helpers
# =============================================================================


def make_scope(
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    headers: list[tuple[bytes, bytes]] | None = None,
    scheme: str = "http",
    server: tuple[str, int] | None = ("localhost", 8000),
    client: tuple[str, int] | None = ("127.0.0.1", 50000),
    root_path: str = "",
) -> dict[str, Any]:
    """Create a mock ASGI HTTP scope."""
    return {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string,
        "headers": headers or [],
        "scheme": scheme,
        "server": server,
        "client": client,
        "root_path": root_path,
    }


CONFIG = AdapterConfig(use_env=False)


def make_request(**kwargs: Any) -> AsgiServerRequest:
    return AsgiServerRequest(make_scope(**kwargs), CONFIG)


# =============================================================================
# Test: Constructor
# =============================================================================


class TestAsgiServerRequestConstructor:
    """Tests for AsgiServerRequest.__init__."""

    def test_is_server_request(self) -> None:
        """AsgiServerRequest implements ServerRequest."""
        assert isinstance(make_request(), ServerRequest)

    def test_stores_scope(self) -> None:
        """Constructor stores scope accessible via property."""
        scope = make_scope(method="POST", path="/test")
        request = AsgiServerRequest(scope, CONFIG)
        assert request.scope is scope

    def test_rejects_non_http_scope(self) -> None:
        """Only http scopes are accepted."""
        scope = make_scope()
        scope["type"] = "websocket"
        with pytest.raises(ValueError):
            AsgiServerRequest(scope, CONFIG)

    def test_server_request_is_abstract(self) -> None:
        """ServerRequest cannot be instantiated."""
        with pytest.raises(TypeError):
            ServerRequest()  # type: ignore[abstract]


class TestMethod:
    """Tests for the method property."""

    def test_method(self) -> None:
        """Method is taken from the scope."""
        assert make_request(method="POST").method == "POST"

    def test_method_uppercased(self) -> None:
        """Method is upper-cased."""
        assert make_request(method="patch").method == "PATCH"

    def test_method_default(self) -> None:
        """Method defaults to GET if not in scope."""
        scope = make_scope()
        del scope["method"]
        assert AsgiServerRequest(scope, CONFIG).method == "GET"


class TestScheme:
    """Tests for the scheme property."""

    def test_scheme_https(self) -> None:
        """Scheme is taken from the scope."""
        assert make_request(scheme="https").scheme == "https"

    def test_scheme_default(self) -> None:
        """Scheme falls back to the configured default."""
        scope = make_scope()
        del scope["scheme"]
        assert AsgiServerRequest(scope, CONFIG).scheme == "http"

    def test_scheme_default_from_config(self) -> None:
        """A configured default_scheme is used when the scope has none."""
        scope = make_scope()
        del scope["scheme"]
        config = AdapterConfig(default_scheme="https", use_env=False)
        assert AsgiServerRequest(scope, config).scheme == "https"


class TestHost:
    """Tests for the host property."""

    def test_host_header_wins(self) -> None:
        """The Host header is used verbatim."""
        request = make_request(headers=[(b"host", b"example.com:8080")])
        assert request.host == "example.com:8080"

    def test_server_with_port(self) -> None:
        """Without Host, the server address is used."""
        assert make_request(server=("10.0.0.5", 8000)).host == "10.0.0.5:8000"

    def test_server_default_http_port_omitted(self) -> None:
        """Port 80 is omitted for http."""
        assert make_request(server=("example.com", 80)).host == "example.com"

    def test_server_default_https_port_omitted(self) -> None:
        """Port 443 is omitted for https."""
        assert make_request(scheme="https", server=("example.com", 443)).host == "example.com"

    def test_server_non_default_port_kept(self) -> None:
        """Port 443 on http is not a default port."""
        assert make_request(server=("example.com", 443)).host == "example.com:443"

    def test_no_host_no_server(self) -> None:
        """Falls back to the configured default host."""
        assert make_request(server=None).host == "localhost"


class TestPath:
    """Tests for the path property."""

    def test_path_from_scope(self) -> None:
        """Path is taken from scope['path']."""
        assert make_request(path="/api/v1/users").path == "/api/v1/users"

    def test_path_is_quoted(self) -> None:
        """A decoded path is re-quoted."""
        assert make_request(path="/a b/ü").path == "/a%20b/%C3%BC"

    def test_raw_path_preferred(self) -> None:
        """raw_path is used as received when present."""
        scope = make_scope(path="/a b")
        scope["raw_path"] = b"/a%20b"
        assert AsgiServerRequest(scope, CONFIG).path == "/a%20b"

    def test_root_path_prefixed(self) -> None:
        """root_path is prefixed to path."""
        assert make_request(path="/users", root_path="/api").path == "/api/users"

    def test_root_path_prefixed_to_raw_path(self) -> None:
        """root_path is added to raw_path when missing."""
        scope = make_scope(path="/users", root_path="/api")
        scope["raw_path"] = b"/users"
        assert AsgiServerRequest(scope, CONFIG).path == "/api/users"

    def test_root_path_not_duplicated(self) -> None:
        """raw_path already carrying root_path is kept."""
        scope = make_scope(path="/users", root_path="/api")
        scope["raw_path"] = b"/api/users"
        assert AsgiServerRequest(scope, CONFIG).path == "/api/users"

    def test_path_default(self) -> None:
        """Path defaults to / if not in scope."""
        scope = make_scope()
        del scope["path"]
        assert AsgiServerRequest(scope, CONFIG).path == "/"


class TestQuery:
    """Tests for query and params."""

    def test_query_raw(self) -> None:
        """query is the undecoded query string."""
        request = make_request(query_string=b"a=b=1|c&q=x+y")
        assert request.query == "a=b=1|c&q=x+y"

    def test_query_none_when_empty(self) -> None:
        """An empty query string reads as no query."""
        assert make_request().query is None

    def test_params(self) -> None:
        """params decodes the query string."""
        request = make_request(query_string=b"a=1&a=2&q=x+y")
        assert isinstance(request.params, QueryParams)
        assert request.params.getlist("a") == ["1", "2"]
        assert request.params.getlist("q") == ["x y"]


class TestOtherProperties:
    """Tests for headers, address, version and absolute_uri."""

    def test_headers(self) -> None:
        """headers wraps scope['headers']."""
        request = make_request(headers=[(b"X-Custom", b"v")])
        assert isinstance(request.headers, Headers)
        assert request.headers.get("x-custom") == "v"

    def test_remote_address(self) -> None:
        """remote_address wraps scope['client']."""
        request = make_request(client=("192.168.1.10", 4242))
        assert request.remote_address == Address("192.168.1.10", 4242)

    def test_remote_address_none(self) -> None:
        """No client gives None."""
        assert make_request(client=None).remote_address is None

    def test_version_default(self) -> None:
        """Version defaults to HTTP/1.1."""
        assert make_request().version == "HTTP/1.1"

    def test_version_from_scope(self) -> None:
        """Version uses http_version."""
        scope = make_scope()
        scope["http_version"] = "2"
        assert AsgiServerRequest(scope, CONFIG).version == "HTTP/2"

    def test_absolute_uri_absent(self) -> None:
        """No extension means no pre-combined URI."""
        assert make_request().absolute_uri is None

    def test_absolute_uri_extension(self) -> None:
        """The absolute_uri extension is exposed."""
        scope = make_scope()
        scope["extensions"] = {"absolute_uri": "http://test.org/test?a=b"}
        assert AsgiServerRequest(scope, CONFIG).absolute_uri == "http://test.org/test?a=b"


class TestUriFields:
    """Tests for ServerRequest.uri_fields."""

    def test_fields_snapshot(self) -> None:
        """uri_fields collects scheme, host, path, query and absolute URI."""
        request = make_request(
            scheme="https",
            path="/test",
            query_string=b"a=1",
            headers=[(b"host", b"test.org")],
        )
        fields = request.uri_fields()
        assert isinstance(fields, RawRequestFields)
        assert fields.scheme == "https"
        assert fields.host == "test.org"
        assert fields.raw_path == "/test"
        assert fields.raw_query == "a=1"
        assert fields.precombined_absolute_uri is None

    def test_repr(self) -> None:
        """repr shows method and path."""
        assert repr(make_request(method="GET", path="/x")) == "<AsgiServerRequest method=GET path='/x'>"
