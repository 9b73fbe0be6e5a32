# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for HTTP-date parsing."""

from datetime import datetime, timezone

import pytest

from asgi_legacy.dates import http_date_to_millis, parse_http_date


class TestParseHttpDate:
    """Tests for parse_http_date."""

    def test_imf_fixdate(self):
        """The preferred HTTP date format is parsed."""
        parsed = parse_http_date("Sun, 06 Nov 1994 08:49:37 GMT")
        assert parsed == datetime(1994, 11, 6, 8, 49, 37, tzinfo=timezone.utc)

    def test_result_is_aware(self):
        """The result always carries a timezone."""
        assert parse_http_date("Sun, 06 Nov 1994 08:49:37 GMT").tzinfo is not None

    def test_offset(self):
        """Numeric offsets are honoured."""
        parsed = parse_http_date("Sun, 06 Nov 1994 10:49:37 +0200")
        assert parsed == datetime(1994, 11, 6, 8, 49, 37, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", "yesterday", "2024-13-45"])
    def test_invalid(self, value):
        """Non-dates raise ValueError."""
        with pytest.raises(ValueError):
            parse_http_date(value)


class TestHttpDateToMillis:
    """Tests for http_date_to_millis."""

    def test_epoch(self):
        """The epoch is zero."""
        assert http_date_to_millis("Thu, 01 Jan 1970 00:00:00 GMT") == 0

    def test_one_second(self):
        """One second after the epoch is 1000."""
        assert http_date_to_millis("Thu, 01 Jan 1970 00:00:01 GMT") == 1000

    def test_known_date(self):
        """A known date converts to its epoch milliseconds."""
        assert http_date_to_millis("Sun, 06 Nov 1994 08:49:37 GMT") == 784111777000
