"""Locale catalogs — localized message templates for validation failures."""

from valify.locale.catalog import (
    BUILTIN_LOCALES,
    DEFAULT_CATALOG,
    FALLBACK_TEMPLATE,
    LocaleCatalog,
    get_locale,
    load_catalog,
    set_locale,
)

__all__ = [
    "BUILTIN_LOCALES",
    "DEFAULT_CATALOG",
    "FALLBACK_TEMPLATE",
    "LocaleCatalog",
    "get_locale",
    "load_catalog",
    "set_locale",
]
