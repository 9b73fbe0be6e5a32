# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Data structures for the request adapter.

Pythonic wrappers around the raw values an ASGI server hands over, plus the
small value types the legacy contract returns.

Mapping from ASGI to asgi-legacy classes::

    ASGI Raw Data                          asgi-legacy Classes
    ─────────────────                      ──────────────────
    scope["client"] = ("1.2.3.4", 80)      →  Address(host, port)
    scope["headers"] = [(b"...", b"...")]  →  Headers (case-insensitive)
    scope["query_string"] = b"a=1&b=2"     →  QueryParams (parsed)
    Accept-Language header                 →  Locale
    Cookie header                          →  list[Cookie]

Modules
=======
- ``address``: Client address wrapper
- ``headers``: Case-insensitive HTTP headers
- ``query_params``: Parsed query string parameters
- ``locale``: Language tag value and Accept-Language helper
- ``cookies``: Cookie header decoding
"""

from .address import Address
from .cookies import Cookie, parse_cookies
from .headers import Headers, headers_from_scope
from .locale import Locale, primary_language_tag
from .query_params import QueryParams, query_params_from_scope

__all__ = [
    "Address",
    "Cookie",
    "Headers",
    "Locale",
    "QueryParams",
    "headers_from_scope",
    "parse_cookies",
    "primary_language_tag",
    "query_params_from_scope",
]
