"""Tests for configure() — applying settings to the process."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from valify import Model, RuleFailureError, configure
from valify.config.settings import ValifySettings
from valify.domain.rules import RuleRegistry
from valify.domain.types import TypeRegistry
from valify.errors import ConfigError
from valify.locale.catalog import get_locale
from valify.plugins import PluginManager, hookimpl


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    valify_level = logging.getLogger("valify").level
    messages_level = logging.getLogger("valify.messages").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("valify").setLevel(valify_level)
    logging.getLogger("valify.messages").setLevel(messages_level)


class _GreetingLocalePlugin:
    @hookimpl
    def register_locales(self) -> dict[str, dict[str, str]]:
        return {"pirate": {"email_invalid": "arr, {field} be no email"}}


class TestConfigure:
    def test_builtin_locale(self, tmp_path: Path) -> None:
        settings = ValifySettings.load(start=tmp_path, locale="es", load_plugins=False)
        assert configure(settings) == []
        assert get_locale().name == "es"

    def test_locale_path_wins(self, tmp_path: Path) -> None:
        catalog = tmp_path / "fr.toml"
        catalog.write_text('[messages]\nemail_invalid = "{field} doit être un email"\n')
        settings = ValifySettings.load(
            start=tmp_path, locale="es", locale_path=catalog, load_plugins=False
        )
        configure(settings)
        with pytest.raises(RuleFailureError) as exc_info:
            Model({"email": {"type": "string", "validate": {"email": True}}})({"email": "x"})
        assert exc_info.value.message == "email doit être un email"

    def test_verbose_sets_logging(self, tmp_path: Path) -> None:
        configure(ValifySettings.load(start=tmp_path, verbose=True, load_plugins=False))
        assert logging.getLogger("valify").level == logging.DEBUG

    def test_fallback_warnings_off(self, tmp_path: Path) -> None:
        configure(
            ValifySettings.load(start=tmp_path, fallback_warnings=False, load_plugins=False)
        )
        assert logging.getLogger("valify.messages").level == logging.ERROR

    def test_unknown_locale(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            configure(ValifySettings.load(start=tmp_path, locale="xx", load_plugins=False))

    def test_plugin_locale_selectable(self, tmp_path: Path) -> None:
        pm = PluginManager(rules=RuleRegistry(), types=TypeRegistry())
        pm.register_plugin(_GreetingLocalePlugin(), name="pirate")
        loaded = configure(
            ValifySettings.load(start=tmp_path, locale="pirate"), plugin_manager=pm
        )
        assert "pirate" in loaded
        assert get_locale().render("email_invalid", {"field": "mail"}) == "arr, mail be no email"
