"""Process bootstrap — apply settings to logging, locale, and plugins."""

from __future__ import annotations

import logging

from valify.config.logging import configure_logging
from valify.config.settings import ValifySettings
from valify.locale.catalog import load_catalog, set_locale
from valify.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


def configure(
    settings: ValifySettings | None = None,
    *,
    plugin_manager: PluginManager | None = None,
) -> list[str]:
    """Apply *settings* to the running process.

    Order matters: plugins load before the locale is chosen, so a
    plugin-provided locale can be selected by name.

    Returns the names of loaded plugins (empty when plugin loading is off).

    Raises:
        ConfigError: If the locale name is unknown or the catalog file is
            invalid.
    """
    if settings is None:
        settings = ValifySettings.load()

    configure_logging(
        verbose=settings.verbose,
        log_json=settings.log_json,
        fallback_warnings=settings.fallback_warnings,
    )

    loaded: list[str] = []
    if settings.load_plugins:
        pm = plugin_manager if plugin_manager is not None else PluginManager()
        loaded = pm.discover_and_load()
        logger.debug("Loaded plugins: %s", loaded)

    if settings.locale_path is not None:
        set_locale(load_catalog(settings.locale_path))
    else:
        set_locale(settings.locale)
    return loaded
