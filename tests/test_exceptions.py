# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for exception classes."""

import pytest

from asgi_legacy.exceptions import (
    ConfigError,
    InvalidDateHeader,
    InvalidHeaderValue,
    InvalidIntHeader,
    UnsupportedOperation,
    UriResolutionError,
)


class TestUriResolutionError:
    """Tests for UriResolutionError."""

    def test_attributes(self) -> None:
        """uri and reason are kept."""
        exc = UriResolutionError("http://h/a b", "illegal character")
        assert exc.uri == "http://h/a b"
        assert exc.reason == "illegal character"

    def test_message(self) -> None:
        """str() names the URI and the reason."""
        exc = UriResolutionError("x", "not an absolute URI")
        assert str(exc) == "Invalid request URI 'x': not an absolute URI"

    def test_is_value_error(self) -> None:
        """Can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise UriResolutionError("x", "bad")

    def test_repr(self) -> None:
        """repr shows both fields."""
        exc = UriResolutionError("x", "bad")
        assert repr(exc) == "UriResolutionError(uri='x', reason='bad')"


class TestInvalidHeaderValue:
    """Tests for the header conversion errors."""

    def test_int_header(self) -> None:
        """InvalidIntHeader carries name and value."""
        exc = InvalidIntHeader("Content-Length", "abc")
        assert exc.name == "Content-Length"
        assert exc.value == "abc"
        assert str(exc) == "Header 'Content-Length' is not a valid integer: 'abc'"

    def test_date_header(self) -> None:
        """InvalidDateHeader message mentions a date."""
        exc = InvalidDateHeader("If-Modified-Since", "yesterday")
        assert str(exc) == "Header 'If-Modified-Since' is not a valid date: 'yesterday'"

    def test_hierarchy(self) -> None:
        """Both are InvalidHeaderValue and ValueError."""
        for cls in (InvalidIntHeader, InvalidDateHeader):
            assert issubclass(cls, InvalidHeaderValue)
            assert issubclass(cls, ValueError)

    def test_repr_uses_subclass_name(self) -> None:
        """repr shows the concrete class."""
        assert repr(InvalidIntHeader("a", "b")) == "InvalidIntHeader(name='a', value='b')"


class TestUnsupportedOperation:
    """Tests for UnsupportedOperation."""

    def test_name_and_message(self) -> None:
        """Message names the operation."""
        exc = UnsupportedOperation("set_attribute")
        assert exc.name == "set_attribute"
        assert str(exc) == "set_attribute() is not supported by this request adapter"

    def test_is_not_implemented_error(self) -> None:
        """Can be caught as NotImplementedError."""
        with pytest.raises(NotImplementedError):
            raise UnsupportedOperation("remove_attribute")

    def test_repr(self) -> None:
        """repr shows the name."""
        assert repr(UnsupportedOperation("x")) == "UnsupportedOperation(name='x')"


class TestConfigError:
    """Tests for ConfigError."""

    def test_is_exception(self) -> None:
        """Plain Exception subclass, not a ValueError."""
        assert issubclass(ConfigError, Exception)
        assert not issubclass(ConfigError, ValueError)
