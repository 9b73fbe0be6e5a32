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
Legacy request contract over an ASGI request.

This module provides the request-access surface legacy consumers are written
against, backed by a request from a non-blocking ASGI server:

- LegacyRequest: Abstract contract (the full surface)
- UNSUPPORTED_OPERATIONS: Policy table for the parts with no transport behind them
- LegacyRequestAdapter: Implementation over a ServerRequest
- create_legacy_request: ASGI entry point (scope + receive -> adapter)

Architecture:
    LegacyRequest (ABC)
        ├── real operations      # abstract, implemented by the adapter
        ├── derived operations   # concrete, defined on top of the real ones
        └── unsupported          # installed from UNSUPPORTED_OPERATIONS
    LegacyRequestAdapter(LegacyRequest)
        ├── CanonicalUri         # scheme/host/port/path/URL accessors
        ├── ParameterView        # query + form parameters
        └── ServerRequest        # headers, method, address projections

Two strata:
    Real operations do actual work (URI resolution, parameter
    reconciliation, header projection). Everything else the legacy contract
    requires (sessions, authentication, multipart parts, async dispatch,
    attributes) is listed once in UNSUPPORTED_OPERATIONS with the fixed
    result it returns. Attribute mutation raises UnsupportedOperation
    instead of returning, so callers never believe it took effect.

Lifecycle:
    One adapter per inbound request, built when the request arrives and
    dropped when it completes. The canonical URI is resolved in the
    constructor; a malformed URI fails construction.

Example:
    async def app(scope, receive, send):
        request = await create_legacy_request(scope, receive)
        user = request.get_parameter("user")
        port = request.get_server_port()
        ...
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from .config import AdapterConfig, default_config
from .dates import http_date_to_millis
from .datastructures import Cookie, Locale, parse_cookies, primary_language_tag
from .exceptions import InvalidDateHeader, InvalidIntHeader, UnsupportedOperation
from .forms import read_form_params
from .parameters import ParameterView
from .request import AsgiServerRequest, ServerRequest
from .types import Receive, Scope
from .uri import CanonicalUri, resolve_uri

__all__ = [
    "LegacyRequest",
    "LegacyRequestAdapter",
    "UNSUPPORTED_OPERATIONS",
    "create_legacy_request",
]

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1

# Legacy operation name -> fixed result. UnsupportedOperation means "raise".
UNSUPPORTED_OPERATIONS: dict[str, Any] = {
    # authentication
    "get_auth_type": None,
    "get_remote_user": None,
    "is_user_in_role": False,
    "get_user_principal": None,
    "authenticate": False,
    "login": None,
    "logout": None,
    # sessions
    "get_requested_session_id": None,
    "get_session": None,
    "change_session_id": None,
    "is_requested_session_id_valid": False,
    "is_requested_session_id_from_cookie": False,
    "is_requested_session_id_from_url": False,
    # container mapping
    "get_context_path": None,
    "get_servlet_path": None,
    "get_path_translated": None,
    "get_real_path": None,
    "get_servlet_context": None,
    "get_request_dispatcher": None,
    "get_dispatcher_type": None,
    # body
    "get_character_encoding": None,
    "set_character_encoding": None,
    "get_input_stream": None,
    "get_reader": None,
    "get_parts": (),
    "get_part": None,
    "upgrade": None,
    # attributes
    "get_attribute": None,
    "get_attribute_names": (),
    "set_attribute": UnsupportedOperation,
    "remove_attribute": UnsupportedOperation,
    # connection
    "get_remote_port": 0,
    "get_local_name": None,
    "get_local_addr": None,
    "get_local_port": 0,
    # async processing
    "start_async": None,
    "is_async_started": False,
    "is_async_supported": False,
    "get_async_context": None,
}


def _unsupported(name: str, result: Any) -> Callable[..., Any]:
    """Build the method installed for one UNSUPPORTED_OPERATIONS entry."""
    if result is UnsupportedOperation:

        def operation(self: LegacyRequest, *args: Any, **kwargs: Any) -> Any:
            logger.warning(f"Unsupported operation {name}() attempted")
            raise UnsupportedOperation(name)

        operation.__doc__ = "Not supported: always raises UnsupportedOperation."
    else:

        def operation(self: LegacyRequest, *args: Any, **kwargs: Any) -> Any:
            logger.debug(f"Unsupported operation {name}() called")
            return result

        operation.__doc__ = f"Not supported: always returns {result!r}."

    operation.__name__ = name
    operation.__qualname__ = f"LegacyRequest.{name}"
    return operation


def with_unsupported_operations(cls: type) -> type:
    """Class decorator installing every UNSUPPORTED_OPERATIONS entry on ``cls``."""
    for name, result in UNSUPPORTED_OPERATIONS.items():
        setattr(cls, name, _unsupported(name, result))
    return cls


@with_unsupported_operations
class LegacyRequest(ABC):
    """
    The legacy request-access contract.

    Subclasses implement the real operations. Derived operations are
    defined here in terms of them, and unsupported operations come from
    UNSUPPORTED_OPERATIONS.

    Collections the legacy contract enumerates are returned as lists.
    """

    __slots__ = ()

    # -- request line ----------------------------------------------------

    @abstractmethod
    def get_method(self) -> str:
        """HTTP method name."""

    @abstractmethod
    def get_scheme(self) -> str:
        """Scheme of the canonical URI."""

    @abstractmethod
    def get_server_name(self) -> str:
        """Host of the canonical URI."""

    @abstractmethod
    def get_server_port(self) -> int:
        """Port of the canonical URI (443 for https, else 80, when implicit)."""

    @abstractmethod
    def get_request_uri(self) -> str:
        """Decoded path of the canonical URI."""

    @abstractmethod
    def get_request_url(self) -> str:
        """Canonical URI without its query string."""

    @abstractmethod
    def get_query_string(self) -> str | None:
        """Raw query string, None when the request has none."""

    @abstractmethod
    def get_path_info(self) -> str | None:
        """Path as received by the server."""

    @abstractmethod
    def get_protocol(self) -> str:
        """Protocol version, e.g. ``HTTP/1.1``."""

    def is_secure(self) -> bool:
        """True when the scheme is https (any case)."""
        return self.get_scheme().lower() == "https"

    # -- headers ---------------------------------------------------------

    @abstractmethod
    def get_header(self, name: str) -> str | None:
        """First value of a header, None when absent. Case-insensitive."""

    @abstractmethod
    def get_headers(self, name: str) -> list[str]:
        """Every value of a header, empty when absent. Case-insensitive."""

    @abstractmethod
    def get_header_names(self) -> list[str]:
        """Names of the headers present."""

    @abstractmethod
    def get_int_header(self, name: str) -> int:
        """Header as an int, -1 when absent. Surrounding whitespace is not tolerated."""

    @abstractmethod
    def get_date_header(self, name: str) -> int:
        """Header as milliseconds since the epoch, -1 when absent."""

    def get_content_length(self) -> int:
        return self.get_int_header("content-length")

    @abstractmethod
    def get_content_length_long(self) -> int:
        """Content-Length without width limit, -1 when absent."""

    def get_content_type(self) -> str | None:
        return self.get_header("content-type")

    # -- parameters ------------------------------------------------------

    @abstractmethod
    def get_parameter(self, name: str) -> str | None:
        """First value of a parameter, query before form."""

    @abstractmethod
    def get_parameter_values(self, name: str) -> list[str]:
        """All values of a parameter, query values first."""

    @abstractmethod
    def get_parameter_names(self) -> list[str]:
        """Every parameter name, once."""

    @abstractmethod
    def get_parameter_map(self) -> dict[str, list[str]]:
        """Every parameter with all its values."""

    # -- client, locale, cookies -----------------------------------------

    @abstractmethod
    def get_remote_addr(self) -> str | None:
        """Client address as a string, None when unknown."""

    def get_remote_host(self) -> str | None:
        return self.get_remote_addr()

    @abstractmethod
    def get_locale(self) -> Locale:
        """Preferred locale of the client."""

    def get_locales(self) -> list[Locale]:
        return [self.get_locale()]

    @abstractmethod
    def get_cookies(self) -> list[Cookie]:
        """Cookies sent by the client, empty when none or malformed."""


class LegacyRequestAdapter(LegacyRequest):
    """
    LegacyRequest over a ServerRequest.

    Args:
        request: The request as delivered by the network layer.
        form_params: Form-sourced parameters decoded from the body, or None.
            Read by reference, never modified.
        config: Adapter configuration, defaults to ``default_config()``.

    Raises:
        UriResolutionError: If the request URI cannot be resolved.

    Example:
        >>> adapter = LegacyRequestAdapter.from_scope(scope, {"user": ["ann"]})
        >>> adapter.get_parameter_values("user")
        ['ann']
    """

    __slots__ = ("_request", "_uri", "_params", "_config")

    def __init__(
        self,
        request: ServerRequest,
        form_params: Mapping[str, Sequence[str]] | None = None,
        config: AdapterConfig | None = None,
    ) -> None:
        self._request = request
        self._config = config or default_config()
        self._uri = resolve_uri(request.uri_fields())
        self._params = ParameterView(request.params, form_params)

    @classmethod
    def from_scope(
        cls,
        scope: Scope,
        form_params: Mapping[str, Sequence[str]] | None = None,
        config: AdapterConfig | None = None,
    ) -> LegacyRequestAdapter:
        """Build an adapter straight from an ASGI HTTP scope."""
        config = config or default_config()
        return cls(AsgiServerRequest(scope, config), form_params, config)

    @property
    def server_request(self) -> ServerRequest:
        return self._request

    @property
    def uri(self) -> CanonicalUri:
        """Canonical request URI, resolved at construction."""
        return self._uri

    @property
    def parameters(self) -> ParameterView:
        return self._params

    # -- request line ----------------------------------------------------

    def get_method(self) -> str:
        return self._request.method

    def get_scheme(self) -> str:
        return self._uri.scheme

    def get_server_name(self) -> str:
        return self._uri.host

    def get_server_port(self) -> int:
        return self._uri.effective_port

    def get_request_uri(self) -> str:
        return self._uri.path

    def get_request_url(self) -> str:
        return self._uri.without_query()

    def get_query_string(self) -> str | None:
        return self._request.query

    def get_path_info(self) -> str | None:
        return self._request.path

    def get_protocol(self) -> str:
        return self._request.version

    # -- headers ---------------------------------------------------------

    def get_header(self, name: str) -> str | None:
        return self._request.headers.get(name)

    def get_headers(self, name: str) -> list[str]:
        return self._request.headers.getlist(name)

    def get_header_names(self) -> list[str]:
        return self._request.headers.keys()

    def get_int_header(self, name: str) -> int:
        value = self._parse_int_header(name)
        if not _INT_MIN <= value <= _INT_MAX:
            raise InvalidIntHeader(name, str(self.get_header(name)))
        return value

    def get_content_length_long(self) -> int:
        return self._parse_int_header("content-length")

    def _parse_int_header(self, name: str) -> int:
        header = self.get_header(name)
        if header is None:
            return -1
        if not _INT_RE.fullmatch(header):
            raise InvalidIntHeader(name, header)
        return int(header)

    def get_date_header(self, name: str) -> int:
        header = self.get_header(name)
        if header is None:
            return -1
        try:
            return http_date_to_millis(header)
        except ValueError as e:
            raise InvalidDateHeader(name, header) from e

    # -- parameters ------------------------------------------------------

    def get_parameter(self, name: str) -> str | None:
        return self._params.get_single(name)

    def get_parameter_values(self, name: str) -> list[str]:
        return self._params.get_all(name)

    def get_parameter_names(self) -> list[str]:
        return self._params.names()

    def get_parameter_map(self) -> dict[str, list[str]]:
        return self._params.as_map()

    # -- client, locale, cookies -----------------------------------------

    def get_remote_addr(self) -> str | None:
        address = self._request.remote_address
        if address is None:
            return None
        return str(address)

    def get_locale(self) -> Locale:
        header = self.get_header("accept-language")
        if not header:
            return self._config.default_locale
        tag = primary_language_tag(header)
        if not tag or tag == "*":
            return self._config.default_locale
        try:
            return Locale.from_tag(tag)
        except ValueError:
            logger.debug(f"Unparseable Accept-Language {header!r}, using default locale")
            return self._config.default_locale

    def get_cookies(self) -> list[Cookie]:
        return parse_cookies("; ".join(self.get_headers("cookie")))

    def __repr__(self) -> str:
        return f"<LegacyRequestAdapter method={self.get_method()} uri={str(self._uri)!r}>"


async def create_legacy_request(
    scope: Scope,
    receive: Receive,
    config: AdapterConfig | None = None,
) -> LegacyRequestAdapter:
    """
    Build a LegacyRequestAdapter for an ASGI HTTP request.

    Reads the body when it is urlencoded, so that form parameters take part
    in parameter lookups.

    Raises:
        UriResolutionError: If the request URI cannot be resolved.
        ValueError: If the scope is not HTTP or the form body is too large.
    """
    config = config or default_config()
    request = AsgiServerRequest(scope, config)
    form_params = await read_form_params(scope, receive, max_size=config.max_form_size)
    return LegacyRequestAdapter(request, form_params, config)
