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
Exception classes for asgi-legacy.

Every error raised by the adapter is one of these types. Each inherits from
the builtin that already describes its meaning, so callers written against
plain ``ValueError`` / ``NotImplementedError`` keep working.

Module Structure
----------------
::

    ValueError
        ├── UriResolutionError      # canonical URI cannot be built
        └── InvalidHeaderValue      # header cannot be converted
                ├── InvalidDateHeader
                └── InvalidIntHeader
    NotImplementedError
        └── UnsupportedOperation    # mutation the adapter cannot honour
    Exception
        └── ConfigError             # invalid adapter configuration

When Each Is Raised
-------------------
- UriResolutionError: at adapter construction, when the pre-combined URI or
  the synthesized one is not a well-formed absolute URI. No partial adapter
  is ever returned.
- InvalidDateHeader: ``get_date_header()`` on a value that is not an HTTP
  date. A missing header is not an error (the accessor returns -1).
- InvalidIntHeader: ``get_int_header()`` / ``get_content_length()`` on a
  non-numeric value.
- UnsupportedOperation: ``set_attribute()`` / ``remove_attribute()``. Callers
  may assume a mutation took effect, so these never silently no-op.
- ConfigError: ``AdapterConfig`` built with out-of-range values.

Degradations that are NOT errors: a malformed ``Cookie`` header yields no
cookies, and a malformed query pair is dropped during URI reconstruction.

Example:
    >>> try:
    ...     request.get_date_header("If-Modified-Since")
    ... except InvalidDateHeader as e:
    ...     logger.info(f"Ignoring bad {e.name}: {e.value!r}")
"""

__all__ = [
    "UriResolutionError",
    "InvalidHeaderValue",
    "InvalidDateHeader",
    "InvalidIntHeader",
    "UnsupportedOperation",
    "ConfigError",
]


class UriResolutionError(ValueError):
    """
    The request URI cannot be turned into a canonical absolute URI.

    Attributes:
        uri: The assembled or pre-combined URI string that was rejected.
        reason: Short description of what is wrong with it.
    """

    def __init__(self, uri: str, reason: str) -> None:
        self.uri = uri
        self.reason = reason
        super().__init__(f"Invalid request URI {uri!r}: {reason}")

    def __repr__(self) -> str:
        return f"UriResolutionError(uri={self.uri!r}, reason={self.reason!r})"


class InvalidHeaderValue(ValueError):
    """
    A header value cannot be converted to the requested type.

    Attributes:
        name: Header name as requested by the caller.
        value: Raw header value.
    """

    kind = "value"

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Header {name!r} is not a valid {self.kind}: {value!r}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, value={self.value!r})"


class InvalidDateHeader(InvalidHeaderValue):
    """Header value is not an HTTP date."""

    kind = "date"


class InvalidIntHeader(InvalidHeaderValue):
    """Header value is not an integer."""

    kind = "integer"


class UnsupportedOperation(NotImplementedError):
    """
    The legacy contract requires an operation the transport cannot provide.

    Attributes:
        name: Name of the legacy operation that was called.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name}() is not supported by this request adapter")

    def __repr__(self) -> str:
        return f"UnsupportedOperation(name={self.name!r})"


class ConfigError(Exception):
    """Configuration error."""
