# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Locale value derived from a language tag.

Only the shape the legacy contract needs: a language and an optional region,
compared case-insensitively and rendered as a BCP 47 tag (``en-US``).
``primary_language_tag()`` extracts the first entry of an
``Accept-Language`` header; quality values and the remaining entries are
ignored.

Example::

    >>> Locale.from_tag("fr")
    Locale('fr')
    >>> str(Locale.from_tag("en_us"))
    'en-US'
    >>> primary_language_tag("fr-CA,fr;q=0.9,en;q=0.8")
    'fr-CA'
"""

from __future__ import annotations

import re

__all__ = ["Locale", "primary_language_tag"]

_TAG_RE = re.compile(r"^(?P<language>[A-Za-z]{1,8}|\*)(?:[-_](?P<region>[A-Za-z0-9]{1,8}))?(?:[-_][A-Za-z0-9]{1,8})*$")


class Locale:
    """
    Language plus optional region.

    Attributes:
        language: Lowercase language subtag (``"*"`` for the wildcard range).
        region: Uppercase region subtag, empty string if none.
    """

    __slots__ = ("language", "region")

    def __init__(self, language: str, region: str = "") -> None:
        self.language = language.lower()
        self.region = region.upper()

    @classmethod
    def from_tag(cls, tag: str) -> Locale:
        """
        Parse a language tag such as ``fr``, ``en-US`` or ``pt_BR``.

        Subtags after the region (scripts, variants) are accepted and dropped.

        Raises:
            ValueError: If ``tag`` is not a language tag.
        """
        match = _TAG_RE.match(tag.strip())
        if match is None:
            raise ValueError(f"Invalid language tag: {tag!r}")
        return cls(match.group("language"), match.group("region") or "")

    @property
    def tag(self) -> str:
        if self.region:
            return f"{self.language}-{self.region}"
        return self.language

    def __str__(self) -> str:
        return self.tag

    def __repr__(self) -> str:
        return f"Locale({self.tag!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Locale):
            return self.language == other.language and self.region == other.region
        if isinstance(other, str):
            try:
                return self == Locale.from_tag(other)
            except ValueError:
                return False
        return False

    def __hash__(self) -> int:
        return hash((self.language, self.region))


def primary_language_tag(header: str) -> str:
    """Return the first language range of an ``Accept-Language`` value, stripped."""
    first = header.split(",", 1)[0]
    return first.split(";", 1)[0].strip()
