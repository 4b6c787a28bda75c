"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) in the ``valify.plugins`` group via
pluggy's setuptools entrypoint loader.

INVARIANT: Plugin failures are warnings, never errors. A broken plugin must
not stop the rest of the system from validating.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from types import MappingProxyType

import pluggy

from valify.domain.rules import RULE_REGISTRY, RuleRegistry
from valify.domain.types import TYPE_REGISTRY, TypeRegistry
from valify.errors import ConfigError
from valify.locale.catalog import BUILTIN_LOCALES, DEFAULT_CATALOG, check_templates
from valify.plugins.hookspecs import ValifyHookSpec

PROJECT_NAME = "valify"
ENTRY_POINT_GROUP = "valify.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and registry population."""

    def __init__(
        self,
        *,
        rules: RuleRegistry | None = None,
        types: TypeRegistry | None = None,
    ) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ValifyHookSpec)
        self._rules = rules if rules is not None else RULE_REGISTRY
        self._types = types if types is not None else TYPE_REGISTRY
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and apply their registrations.

        Returns a list of loaded plugin names.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load %s entry points", ENTRY_POINT_GROUP, exc_info=True)
        self._normalize_plugin_instances()
        for plugin in self._pm.get_plugins():
            self._apply(plugin)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly.

        After :meth:`discover_and_load` has run, the plugin's registrations
        are applied immediately.
        """
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._apply(plugin)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance. Registrations already applied stay."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _apply(self, plugin: object) -> None:
        name = self._pm.get_name(plugin) or plugin.__class__.__name__
        self._call_registrar(plugin, name, "register_types", self._types)
        self._call_registrar(plugin, name, "register_rules", self._rules)
        self._register_plugin_locales(plugin, name)

    @staticmethod
    def _call_registrar(plugin: object, plugin_name: str, hook_name: str, registry: object) -> None:
        hook = getattr(plugin, hook_name, None)
        if hook is None:
            return
        try:
            hook(registry=registry)
        except Exception:
            logger.warning(
                "Plugin %s failed in %s",
                plugin_name,
                hook_name,
                exc_info=True,
            )

    @staticmethod
    def _register_plugin_locales(plugin: object, plugin_name: str) -> None:
        """Merge locale templates exposed by a single plugin instance."""
        hook = getattr(plugin, "register_locales", None)
        if hook is None:
            return

        try:
            locales = hook()
        except Exception:
            logger.warning(
                "Failed to collect locales from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if locales is None:
            return
        if not isinstance(locales, Mapping):
            logger.warning("Plugin %s returned non-mapping locale registrations", plugin_name)
            return

        for locale_name, templates in locales.items():
            if not isinstance(templates, Mapping):
                logger.warning(
                    "Skipping locale %r from plugin %s: templates must be a mapping",
                    locale_name,
                    plugin_name,
                )
                continue
            try:
                merged = check_templates(
                    {**BUILTIN_LOCALES.get(locale_name, {}), **templates}, name=locale_name
                )
            except ConfigError:
                logger.warning(
                    "Skipping locale %r from plugin %s",
                    locale_name,
                    plugin_name,
                    exc_info=True,
                )
                continue
            BUILTIN_LOCALES[locale_name] = MappingProxyType(merged)
            if DEFAULT_CATALOG.name == locale_name:
                DEFAULT_CATALOG.swap(merged, name=locale_name)
            logger.debug("Plugin %s extended locale %s", plugin_name, locale_name)

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook calls
        against class objects leave ``self`` unbound and fail at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
