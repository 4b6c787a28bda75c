"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  : passed by the caller
  2. Env vars     : ``VALIFY_*`` prefix
  3. TOML file    : ``valify.toml`` discovered via walk-up
  4. Code defaults: baked into :class:`ValifySettings`

A ``valify.toml`` holds flat keys::

    locale = "es"
    verbose = true
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from valify.config.discovery import find_config
from valify.errors import ConfigError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``valify.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ValifySettings(BaseSettings):
    """Process-level valify settings.

    Attributes:
        locale: Built-in locale name applied at startup.
        locale_path: TOML catalog file; takes precedence over *locale*.
        fallback_warnings: Log when a message falls back to the generic
            template.
        load_plugins: Load ``valify.plugins`` entry points at startup.
        config_path: The ``valify.toml`` the settings were read from.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VALIFY_",
        "extra": "ignore",
    }

    locale: str = "en"
    locale_path: Path | None = None
    verbose: bool = False
    log_json: bool = False
    fallback_warnings: bool = True
    load_plugins: bool = True
    config_path: Path | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> ValifySettings:
        """Construct settings, discovering ``valify.toml`` unless given one.

        A relative ``locale_path`` is resolved against the directory of the
        discovered config file.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            settings = cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

        if toml_path and settings.locale_path and not settings.locale_path.is_absolute():
            resolved = toml_path.parent / settings.locale_path
            settings = settings.model_copy(update={"locale_path": resolved})
        return settings
