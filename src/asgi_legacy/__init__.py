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

"""asgi-legacy - Legacy request-access contract over ASGI requests.

Main components:
    LegacyRequest: The legacy request contract (real + unsupported operations)
    LegacyRequestAdapter: Implementation over a request from an ASGI server
    create_legacy_request: Build an adapter from scope + receive

Core:
    resolve_uri / CanonicalUri: Canonical request URI, with query repair
    ParameterView: Query and form parameters merged with query precedence

Usage:
    from asgi_legacy import create_legacy_request

    async def app(scope, receive, send):
        request = await create_legacy_request(scope, receive)
        name = request.get_parameter("name")
"""

__version__ = "0.1.0"

from .config import AdapterConfig, default_config
from .datastructures import (
    Address,
    Cookie,
    Headers,
    Locale,
    QueryParams,
    headers_from_scope,
    parse_cookies,
    query_params_from_scope,
)
from .dates import http_date_to_millis, parse_http_date
from .exceptions import (
    ConfigError,
    InvalidDateHeader,
    InvalidHeaderValue,
    InvalidIntHeader,
    UnsupportedOperation,
    UriResolutionError,
)
from .forms import read_form_params
from .legacy import (
    UNSUPPORTED_OPERATIONS,
    LegacyRequest,
    LegacyRequestAdapter,
    create_legacy_request,
)
from .parameters import ParameterView
from .request import AsgiServerRequest, ServerRequest
from .types import Message, Receive, Scope, Send
from .uri import CanonicalUri, RawRequestFields, rebuild_query, resolve_uri

__all__ = [
    # Adapter
    "LegacyRequest",
    "LegacyRequestAdapter",
    "UNSUPPORTED_OPERATIONS",
    "create_legacy_request",
    # Network layer
    "ServerRequest",
    "AsgiServerRequest",
    "read_form_params",
    # Core
    "CanonicalUri",
    "RawRequestFields",
    "rebuild_query",
    "resolve_uri",
    "ParameterView",
    "http_date_to_millis",
    "parse_http_date",
    # Data structures
    "Address",
    "Cookie",
    "Headers",
    "Locale",
    "QueryParams",
    "headers_from_scope",
    "parse_cookies",
    "query_params_from_scope",
    # Configuration
    "AdapterConfig",
    "default_config",
    # Exceptions
    "ConfigError",
    "InvalidDateHeader",
    "InvalidHeaderValue",
    "InvalidIntHeader",
    "UnsupportedOperation",
    "UriResolutionError",
    # ASGI types
    "Message",
    "Receive",
    "Scope",
    "Send",
]
