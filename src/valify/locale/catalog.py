"""Locale catalog — message-key to template lookup and rendering.

The process-wide :data:`DEFAULT_CATALOG` is read at failure time, never at
compile time, so :func:`set_locale` reaches Models that already exist.

A swap is one reference assignment of a read-only mapping. A render racing
a swap sees either the old or the new mapping, never a mix of both.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from string import Formatter
from types import MappingProxyType
from typing import Any

from valify.errors import ConfigError, MissingTemplateError
from valify.locale import en, es

logger = logging.getLogger(__name__)
# Fallback renders get their own logger so they can be silenced separately.
fallback_logger = logging.getLogger("valify.messages")

FALLBACK_TEMPLATE = "{field} failed rule {rule}"

BUILTIN_LOCALES: dict[str, Mapping[str, str]] = {
    "en": MappingProxyType(en.MESSAGES),
    "es": MappingProxyType(es.MESSAGES),
}

_CONVERSIONS = frozenset({None, "r", "s", "a"})


class _KeepMissing(dict[str, Any]):
    """format_map params that leave unknown placeholders in place."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def format_template(template: str, params: Mapping[str, Any]) -> str:
    """Substitute ``{name}`` placeholders from *params*.

    Placeholders with no matching param are left as written.

    Examples:
        >>> format_template("{field} is required", {"field": "email"})
        'email is required'
        >>> format_template("{field} >= {arg}", {"field": "age"})
        'age >= {arg}'
    """
    return template.format_map(_KeepMissing(params))


def check_templates(templates: Mapping[str, Any], *, name: str = "custom") -> dict[str, str]:
    """Return *templates* as a plain dict after checking every entry.

    A template may only use bare named placeholders such as ``{field}``.
    Positional (``{0}``, ``{}``), attribute (``{field.x}``) and index
    (``{field[0]}``) fields are rejected, as are unbalanced braces.

    Raises:
        ConfigError: If a key or template is not a string, or a template is
            malformed.
    """
    checked: dict[str, str] = {}
    for key, template in templates.items():
        if not isinstance(key, str) or not isinstance(template, str):
            msg = f"Locale {name!r}: template {key!r} must map a string key to a string"
            raise ConfigError(msg)
        try:
            parts = list(Formatter().parse(template))
        except ValueError as exc:
            msg = f"Locale {name!r}: malformed template {key!r}: {exc}"
            raise ConfigError(msg) from exc
        for _literal, field_name, _spec, conversion in parts:
            if field_name is None:
                continue
            if not field_name.isidentifier() or conversion not in _CONVERSIONS:
                msg = (
                    f"Locale {name!r}: template {key!r} has placeholder "
                    f"{{{field_name}}}; only named placeholders like {{field}} are allowed"
                )
                raise ConfigError(msg)
        checked[key] = template
    return checked


class LocaleCatalog:
    """Swappable mapping from message key to template string.

    Templates are checked on construction and on every swap, so a bad
    catalog is rejected before it becomes active.
    """

    def __init__(self, templates: Mapping[str, str], *, name: str = "custom") -> None:
        checked = check_templates(templates, name=name)
        self._templates: Mapping[str, str] = MappingProxyType(checked)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def templates(self) -> Mapping[str, str]:
        """Read-only view of the active templates."""
        return self._templates

    def swap(self, templates: Mapping[str, str], *, name: str = "custom") -> None:
        """Replace every template at once.

        Raises:
            ConfigError: If any template is malformed. The active templates
                are left unchanged.
        """
        checked = MappingProxyType(check_templates(templates, name=name))
        self._templates, self._name = checked, name
        logger.debug("Locale catalog swapped to %s (%d templates)", name, len(checked))

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def render(self, key: str, params: Mapping[str, Any]) -> str:
        """Render the template for *key*.

        Raises:
            MissingTemplateError: If the catalog has no template for *key*.
        """
        templates = self._templates
        try:
            template = templates[key]
        except KeyError:
            raise MissingTemplateError(key, self._name) from None
        return format_template(template, params)

    def render_or_fallback(self, key: str, params: Mapping[str, Any]) -> str:
        """Render *key*, or the generic fallback message if that fails.

        Used on the validation path, where rendering must never abort.
        """
        try:
            return self.render(key, params)
        except MissingTemplateError as exc:
            fallback_logger.warning("%s; using fallback message", exc)
        except (ValueError, TypeError, IndexError, AttributeError, KeyError) as exc:
            fallback_logger.warning(
                "Template %r in locale %r failed to render (%s); using fallback message",
                key,
                self._name,
                exc,
            )
        return format_template(FALLBACK_TEMPLATE, params)

    def __repr__(self) -> str:
        return f"LocaleCatalog(name={self._name!r}, templates={len(self._templates)})"


DEFAULT_CATALOG = LocaleCatalog(BUILTIN_LOCALES["en"], name="en")


def get_locale() -> LocaleCatalog:
    """Return the process-wide catalog object."""
    return DEFAULT_CATALOG


def set_locale(catalog: Mapping[str, str] | LocaleCatalog | str) -> None:
    """Swap the process-wide catalog.

    *catalog* may be a mapping of templates, another :class:`LocaleCatalog`
    (its current templates are copied), or a built-in locale name.

    Raises:
        ConfigError: If *catalog* names a locale that is not built in, or
            holds a malformed template.
    """
    if isinstance(catalog, str):
        if catalog not in BUILTIN_LOCALES:
            msg = f"Unknown locale {catalog!r}. Built-in: {sorted(BUILTIN_LOCALES)}"
            raise ConfigError(msg)
        DEFAULT_CATALOG.swap(BUILTIN_LOCALES[catalog], name=catalog)
    elif isinstance(catalog, LocaleCatalog):
        DEFAULT_CATALOG.swap(catalog.templates, name=catalog.name)
    else:
        DEFAULT_CATALOG.swap(catalog)


def load_catalog(path: Path) -> LocaleCatalog:
    """Load a catalog from a TOML file.

    Templates may sit at the top level or under a ``[messages]`` table::

        [messages]
        email_invalid = "{field} is not an email address"

    The catalog is named after the file stem.

    Raises:
        ConfigError: If the file is not valid TOML, holds non-string values,
            or holds a malformed template.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        data: dict[str, Any] = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc

    messages = data.get("messages", data)
    if not isinstance(messages, dict):
        msg = f"[messages] in {path} must be a table"
        raise ConfigError(msg)

    bad = sorted(k for k, v in messages.items() if not isinstance(v, str))
    if bad:
        msg = f"Non-string templates in {path}: {bad}"
        raise ConfigError(msg)

    return LocaleCatalog(messages, name=path.stem)
