"""Pluggy hook specifications for extending valify's registries.

Plugins add rules, types, and message catalogs at startup. All three hooks
run once, when :meth:`PluginManager.discover_and_load` is called.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from valify.domain.rules import RuleRegistry
    from valify.domain.types import TypeRegistry

hookspec = pluggy.HookspecMarker("valify")
hookimpl = pluggy.HookimplMarker("valify")


class ValifyHookSpec:
    """Hook specifications for the valify plugin system."""

    @hookspec
    def register_rules(self, registry: RuleRegistry) -> None:
        """Call ``registry.register(name, predicate, message_key)`` for each rule."""

    @hookspec
    def register_types(self, registry: TypeRegistry) -> None:
        """Call ``registry.register(name, predicate)`` for each custom type."""

    @hookspec
    def register_locales(self) -> Mapping[str, Mapping[str, str]] | None:
        """Return locale name -> message templates to add to the built-ins.

        Templates for an existing locale are merged over it, so a plugin
        that adds a rule can ship that rule's message.
        """
