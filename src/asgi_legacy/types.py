# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ASGI type definitions for asgi-legacy.

Purpose
=======
The adapter sits on top of an ASGI server. Only the request side of the
ASGI interface is consumed: the HTTP ``scope`` describing the connection and
the ``receive`` callable delivering body chunks. ``Send`` is kept for
callers that pass the full ASGI triple around.

Type Definitions
================
Scope : MutableMapping[str, Any]
    Connection metadata (method, path, raw_path, query_string, headers,
    scheme, server, client, http_version, root_path, extensions).

Message : MutableMapping[str, Any]
    One ASGI event, e.g. ``{"type": "http.request", "body": b"...",
    "more_body": False}``.

Receive : Callable[[], Awaitable[Message]]
    Async callable returning the next incoming message.

Send : Callable[[Message], Awaitable[None]]
    Async callable emitting an outgoing message.

Design Decisions
================
MutableMapping instead of TypedDict: ASGI servers add their own extension
keys, so the scope stays a generic mapping and validation happens where the
scope is read (``AsgiServerRequest``).
"""

from typing import Any, Awaitable, Callable, MutableMapping

__all__ = ["Scope", "Message", "Receive", "Send"]

# ASGI Scope - connection metadata
Scope = MutableMapping[str, Any]

# ASGI Message - sent/received data
Message = MutableMapping[str, Any]

# ASGI Receive - callable to receive messages
Receive = Callable[[], Awaitable[Message]]

# ASGI Send - callable to send messages
Send = Callable[[Message], Awaitable[None]]
