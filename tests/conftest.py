"""Shared pytest fixtures for valify tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from valify.domain.rules import RULE_REGISTRY, RuleRegistry
from valify.domain.types import TYPE_REGISTRY, TypeRegistry
from valify.locale.catalog import BUILTIN_LOCALES, set_locale


@pytest.fixture(autouse=True)
def _reset_locale() -> Generator[None]:
    """Every test starts and ends on the English catalog."""
    saved = dict(BUILTIN_LOCALES)
    set_locale("en")
    yield
    BUILTIN_LOCALES.clear()
    BUILTIN_LOCALES.update(saved)
    set_locale("en")


@pytest.fixture
def rules() -> RuleRegistry:
    """Isolated copy of the built-in rule registry."""
    return RULE_REGISTRY.copy()


@pytest.fixture
def types() -> TypeRegistry:
    """Isolated copy of the built-in type registry."""
    return TYPE_REGISTRY.copy()


@pytest.fixture
def email_schema() -> dict[str, dict[str, object]]:
    return {"email": {"type": "string", "validate": {"email": True}}}


@pytest.fixture(autouse=True)
def _restore_registries() -> Generator[None]:
    """Undo process-wide rule/type registrations made by a test."""
    saved_rules = dict(RULE_REGISTRY._rules)
    saved_types = dict(TYPE_REGISTRY._predicates)
    yield
    RULE_REGISTRY._rules.clear()
    RULE_REGISTRY._rules.update(saved_rules)
    TYPE_REGISTRY._predicates.clear()
    TYPE_REGISTRY._predicates.update(saved_types)
