# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Address wrapper for the ASGI client tuple.

ASGI Mapping::

    scope["client"] = ("1.2.3.4", 52100)  →  Address(host, port)
    str(address)                          →  "1.2.3.4:52100"

The string form is what the legacy ``get_remote_addr()`` reports.
"""

__all__ = ["Address"]


class Address:
    """
    Client address wrapper.

    Attributes:
        host: The hostname or IP address.
        port: The port number.

    Example:
        >>> addr = Address("192.168.1.1", 8080)
        >>> str(addr)
        '192.168.1.1:8080'
        >>> addr == ("192.168.1.1", 8080)
        True
    """

    __slots__ = ("host", "port")

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    def __repr__(self) -> str:
        return f"Address(host={self.host!r}, port={self.port})"

    def __eq__(self, other: object) -> bool:
        """Compare with another Address or an ASGI-style ``(host, port)`` tuple."""
        if isinstance(other, Address):
            return self.host == other.host and self.port == other.port
        if isinstance(other, tuple) and len(other) == 2:
            return bool(self.host == other[0] and self.port == other[1])
        return False
