# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Unified view over query-sourced and form-sourced request parameters.

Purpose
=======
Legacy consumers see a single parameter surface. Behind it sit two
independently-sourced multi-maps:

- query parameters, parsed by the network layer from the URL;
- form parameters, decoded from the body by another collaborator and handed
  over by reference.

Neither source is copied or mutated. For every name the query-sourced values
come first, followed by the form-sourced ones.

Precedence Schema::

    query: {"id": ["7"], "tag": ["a", "b"]}
    form:  {"tag": ["c"], "note": ["hi"]}

    get_single("tag")  → "a"                  (query wins)
    get_single("note") → "hi"                 (form fallback)
    get_all("tag")     → ["a", "b", "c"]      (query then form)
    get_all("nope")    → []
    names()            → ["id", "tag", "note"]
    as_map()           → {"id": ["7"], "tag": ["a", "b", "c"], "note": ["hi"]}

A missing form mapping (None) behaves exactly like an empty one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .datastructures import QueryParams

__all__ = ["ParameterView"]


class ParameterView:
    """
    Read-only reconciliation of query and form parameters.

    Args:
        query: Query-sourced parameters.
        form: Form-sourced parameters (name to ordered values), or None.
    """

    __slots__ = ("_query", "_form")

    def __init__(
        self,
        query: QueryParams,
        form: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self._query = query
        self._form: Mapping[str, Sequence[str]] = form if form is not None else {}

    def get_single(self, name: str) -> str | None:
        """
        First value for ``name``: query first, then form, else None.

        A query value always wins, including the empty string.
        """
        values = self._query.getlist(name)
        if values:
            return values[0]
        form_values = self._form.get(name)
        if form_values:
            return form_values[0]
        return None

    def get_all(self, name: str) -> list[str]:
        """All values for ``name``, query values first. Empty list when unknown."""
        return self._query.getlist(name) + list(self._form.get(name, ()))

    def names(self) -> list[str]:
        """Union of query and form parameter names, each listed once, query names first."""
        names = self._query.keys()
        seen = set(names)
        for name in self._form:
            if name not in seen:
                seen.add(name)
                names.append(name)
        return names

    def as_map(self) -> dict[str, list[str]]:
        """Every name mapped to the same sequence ``get_all`` returns."""
        return {name: self.get_all(name) for name in self.names()}

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return name in self._query or name in self._form

    def __repr__(self) -> str:
        return f"ParameterView(query={self._query!r}, form={dict(self._form)!r})"
