# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Form-sourced parameters read from an ASGI request body.

Only ``application/x-www-form-urlencoded`` bodies are decoded. Any other
content type (multipart included) yields an empty mapping and the body is
left unread.
"""

from __future__ import annotations

from urllib.parse import parse_qs

from .datastructures import headers_from_scope
from .types import Receive, Scope

__all__ = ["FORM_URLENCODED", "read_form_params"]

FORM_URLENCODED = "application/x-www-form-urlencoded"


async def read_form_params(
    scope: Scope,
    receive: Receive,
    max_size: int | None = None,
) -> dict[str, list[str]]:
    """
    Read and decode an urlencoded request body.

    Args:
        scope: ASGI HTTP scope (for the Content-Type header).
        receive: ASGI receive callable.
        max_size: Largest accepted body in bytes, None for no limit.

    Returns:
        Parameter name to values in body order, blank values kept.

    Raises:
        ValueError: If the body is larger than ``max_size`` or cannot be
            decoded with the declared charset.
    """
    content_type = headers_from_scope(scope).get("content-type") or ""
    media_type, _, options = content_type.partition(";")
    if media_type.strip().lower() != FORM_URLENCODED:
        return {}

    charset = "utf-8"
    for option in options.split(";"):
        key, _, value = option.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            charset = value.strip().strip('"')

    chunks: list[bytes] = []
    size = 0
    more_body = True
    while more_body:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunk = message.get("body", b"")
        size += len(chunk)
        if max_size is not None and size > max_size:
            raise ValueError(f"Form body exceeds {max_size} bytes")
        chunks.append(chunk)
        more_body = message.get("more_body", False)

    try:
        body = b"".join(chunks).decode(charset)
    except (LookupError, UnicodeDecodeError) as e:
        raise ValueError(f"Cannot decode form body as {charset!r}: {e}") from e
    return parse_qs(body, keep_blank_values=True, encoding=charset)
