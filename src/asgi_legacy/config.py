# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Adapter configuration.

Options are collected with genro-toolbox ``SmartOptions`` from several
sources, later ones overriding earlier ones::

    built-in DEFAULTS < environment variables (ASGI_LEGACY_*) < constructor args

Options:
    default_locale (str): Locale reported when Accept-Language is absent.
        Default "en-US". Env: ASGI_LEGACY_DEFAULT_LOCALE.
    default_scheme (str): Scheme used when the ASGI scope has none.
        Default "http". Env: ASGI_LEGACY_DEFAULT_SCHEME.
    default_host (str): Host used when there is neither a Host header nor a
        server address. Default "localhost". Env: ASGI_LEGACY_DEFAULT_HOST.
    max_form_size (int): Largest urlencoded body ``read_form_params`` accepts,
        in bytes. Default 1 MiB. Env: ASGI_LEGACY_MAX_FORM_SIZE.

Example:
    >>> config = AdapterConfig(default_locale="it-IT")
    >>> config.default_locale
    Locale('it-IT')
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

from .datastructures import Locale
from .exceptions import ConfigError

__all__ = ["AdapterConfig", "DEFAULTS", "default_config"]

DEFAULTS = {
    "default_locale": "en-US",
    "default_scheme": "http",
    "default_host": "localhost",
    "max_form_size": 1024 * 1024,
}


def _adapter_opts_spec(
    default_locale: str,
    default_scheme: str,
    default_host: str,
    max_form_size: int,
) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


class AdapterConfig:
    """Resolved adapter options. Immutable once built."""

    __slots__ = ("_opts", "_locale")

    def __init__(
        self,
        default_locale: str | None = None,
        default_scheme: str | None = None,
        default_host: str | None = None,
        max_form_size: int | None = None,
        use_env: bool = True,
    ) -> None:
        self._opts = self._build_config(
            default_locale=default_locale,
            default_scheme=default_scheme,
            default_host=default_host,
            max_form_size=max_form_size,
            use_env=use_env,
        )
        self._locale = self._validate()

    def _build_config(self, use_env: bool, **caller: Any) -> SmartOptions:
        """Merge DEFAULTS, environment and explicit arguments."""
        caller_opts = SmartOptions(caller, ignore_none=True)
        opts = SmartOptions(DEFAULTS)
        if use_env:
            env_opts = SmartOptions(_adapter_opts_spec, env="ASGI_LEGACY", argv=[])
            opts = opts + SmartOptions(env_opts.as_dict(), ignore_none=True)
        return opts + caller_opts

    def _validate(self) -> Locale:
        try:
            locale = Locale.from_tag(str(self._opts["default_locale"]))
        except ValueError as e:
            raise ConfigError(f"Invalid default_locale: {e}") from e
        if not self._opts["default_scheme"]:
            raise ConfigError("default_scheme must not be empty")
        if not self._opts["default_host"]:
            raise ConfigError("default_host must not be empty")
        try:
            size = int(self._opts["max_form_size"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"max_form_size must be an integer: {e}") from e
        if size <= 0:
            raise ConfigError(f"max_form_size must be positive, got {size}")
        return locale

    @property
    def default_locale(self) -> Locale:
        return self._locale

    @property
    def default_scheme(self) -> str:
        return str(self._opts["default_scheme"])

    @property
    def default_host(self) -> str:
        return str(self._opts["default_host"])

    @property
    def max_form_size(self) -> int:
        return int(self._opts["max_form_size"])

    def as_dict(self) -> dict[str, Any]:
        return {
            "default_locale": str(self._locale),
            "default_scheme": self.default_scheme,
            "default_host": self.default_host,
            "max_form_size": self.max_form_size,
        }

    def __repr__(self) -> str:
        return f"AdapterConfig({self.as_dict()!r})"


@lru_cache(maxsize=1)
def default_config() -> AdapterConfig:
    """Process-wide configuration from DEFAULTS and the environment, built on first use."""
    return AdapterConfig()
