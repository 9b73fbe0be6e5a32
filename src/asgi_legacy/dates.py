# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Stateless HTTP-date parsing.

Nothing here keeps state between calls, so the functions are safe to call
from any task without locking.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime

__all__ = ["parse_http_date", "http_date_to_millis"]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_http_date(value: str) -> datetime:
    """
    Parse an HTTP date (``Sun, 06 Nov 1994 08:49:37 GMT``) into an aware datetime.

    Dates without zone information are taken as UTC.

    Raises:
        ValueError: If ``value`` is not a date.
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Not an HTTP date: {value!r}") from e
    if parsed is None:
        raise ValueError(f"Not an HTTP date: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def http_date_to_millis(value: str) -> int:
    """
    Milliseconds since 1970-01-01T00:00:00Z for an HTTP date.

    Example:
        >>> http_date_to_millis("Thu, 01 Jan 1970 00:00:01 GMT")
        1000
    """
    return (parse_http_date(value) - EPOCH) // timedelta(milliseconds=1)
