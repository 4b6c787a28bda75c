"""Rule registry — named predicates paired with a message key.

A rule predicate has the signature ``(value, argument, field) -> bool``:

- *value*: the field's value, already past its type check.
- *argument*: whatever the declaration put under the rule name
  (``{"min_length": 3}`` passes ``3``; ``{"email": True}`` passes ``True``),
  after the rule's argument check has prepared it.
- *field*: the compiled field schema, for rules that need its name or type.

A rule may also declare which field types it applies to and an argument
check. Both run when a schema is compiled, so a misused rule fails at
``Model(...)`` rather than on the first input.

Predicates are pure. They never perform I/O and always return the same
result for the same value and argument.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from valify.errors import UnknownRuleError

logger = logging.getLogger(__name__)

RulePredicate = Callable[[Any, Any, Any], bool]
ArgumentCheck = Callable[[Any], Any]


@dataclass(frozen=True)
class Rule:
    """A registered validation rule.

    Attributes:
        types: Field types the rule applies to. None means any type.
        check_argument: Called with the declared argument at compile time.
            Returns the argument the predicate receives; raises
            ``ValueError`` or ``TypeError`` to reject it.
    """

    name: str
    predicate: RulePredicate
    message_key: str
    types: frozenset[str] | None = None
    check_argument: ArgumentCheck | None = None

    def __call__(self, value: Any, argument: Any, field: Any) -> bool:
        return bool(self.predicate(value, argument, field))

    def applies_to(self, type_name: str) -> bool:
        return self.types is None or type_name in self.types

    def prepare(self, argument: Any) -> Any:
        if self.check_argument is None:
            return argument
        return self.check_argument(argument)


class RuleRegistry:
    """Mapping from rule name to :class:`Rule`.

    Lookups happen once, while a schema is compiled. Compiled fields keep a
    reference to the :class:`Rule` itself, so later overrides only reach
    Models built after them.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: dict[str, Rule] = {r.name: r for r in rules}

    def register(
        self,
        name: str,
        predicate: RulePredicate,
        message_key: str,
        *,
        types: Iterable[str] | None = None,
        check_argument: ArgumentCheck | None = None,
    ) -> Rule:
        """Add or override the rule called *name*."""
        normalized = name.strip()
        if not normalized:
            msg = "Rule name must not be empty"
            raise ValueError(msg)
        if not callable(predicate):
            msg = f"Rule predicate for {normalized!r} must be callable"
            raise TypeError(msg)
        if not message_key:
            msg = f"Rule {normalized!r} needs a message key"
            raise ValueError(msg)
        if check_argument is not None and not callable(check_argument):
            msg = f"Argument check for {normalized!r} must be callable"
            raise TypeError(msg)

        rule = Rule(
            name=normalized,
            predicate=predicate,
            message_key=message_key,
            types=frozenset(types) if types is not None else None,
            check_argument=check_argument,
        )
        if normalized in self._rules:
            logger.debug("Overriding rule: %s", normalized)
        self._rules[normalized] = rule
        return rule

    def get(self, name: str) -> Rule:
        """Return the rule called *name*.

        Raises:
            UnknownRuleError: If no rule is registered under *name*.
        """
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownRuleError(name) from None

    def names(self) -> list[str]:
        return list(self._rules)

    def copy(self) -> RuleRegistry:
        """Return an independent registry with the same rules."""
        return RuleRegistry(self._rules.values())

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)


# ---------------------------------------------------------------------------
# Argument checks
# ---------------------------------------------------------------------------


def length_argument(argument: Any) -> int:
    if isinstance(argument, bool) or not isinstance(argument, int) or argument < 0:
        msg = f"expected a non-negative integer, got {argument!r}"
        raise ValueError(msg)
    return argument


def number_argument(argument: Any) -> int | float:
    if isinstance(argument, bool) or not isinstance(argument, int | float):
        msg = f"expected a number, got {argument!r}"
        raise ValueError(msg)
    return argument


def pattern_argument(argument: Any) -> re.Pattern[str]:
    if not isinstance(argument, str):
        msg = f"expected a regular expression string, got {argument!r}"
        raise ValueError(msg)
    try:
        return re.compile(argument)
    except re.error as exc:
        msg = f"invalid regular expression {argument!r}: {exc}"
        raise ValueError(msg) from exc


def choices_argument(argument: Any) -> list[Any]:
    if isinstance(argument, str | bytes | Mapping) or not isinstance(argument, Collection):
        msg = f"expected a list of choices, got {argument!r}"
        raise ValueError(msg)
    return list(argument)


# ---------------------------------------------------------------------------
# Built-in predicates
# ---------------------------------------------------------------------------

# local@domain.tld: one "@", no whitespace, a dot inside the domain.
EMAIL_RE = re.compile(r"[^@\s]+@[^@\s.]+(?:\.[^@\s.]+)+")


def is_email(value: Any, argument: Any, field: Any) -> bool:
    """Match a permissive ``local@domain.tld`` shape.

    Examples:
        >>> is_email("test@test.com", True, None)
        True
        >>> is_email("red0", True, None)
        False
    """
    return isinstance(value, str) and EMAIL_RE.fullmatch(value) is not None


def min_length(value: Any, argument: Any, field: Any) -> bool:
    return len(value) >= argument


def max_length(value: Any, argument: Any, field: Any) -> bool:
    return len(value) <= argument


def minimum(value: Any, argument: Any, field: Any) -> bool:
    return value >= argument


def maximum(value: Any, argument: Any, field: Any) -> bool:
    return value <= argument


def matches_pattern(value: Any, argument: re.Pattern[str], field: Any) -> bool:
    return argument.search(value) is not None


def one_of(value: Any, argument: Any, field: Any) -> bool:
    return value in argument


_SIZED = frozenset({"string", "array"})
_NUMERIC = frozenset({"number"})
_TEXT = frozenset({"string"})


def _builtin_rules() -> list[Rule]:
    """Return the built-in rule catalog."""
    return [
        Rule("email", is_email, "email_invalid", types=_TEXT),
        Rule("min_length", min_length, "min_length", _SIZED, length_argument),
        Rule("max_length", max_length, "max_length", _SIZED, length_argument),
        Rule("min", minimum, "min", _NUMERIC, number_argument),
        Rule("max", maximum, "max", _NUMERIC, number_argument),
        Rule("pattern", matches_pattern, "pattern", _TEXT, pattern_argument),
        Rule("one_of", one_of, "one_of", check_argument=choices_argument),
    ]


RULE_REGISTRY = RuleRegistry(_builtin_rules())


def register_rule(
    name: str,
    predicate: RulePredicate,
    message_key: str,
    *,
    types: Iterable[str] | None = None,
    check_argument: ArgumentCheck | None = None,
) -> Rule:
    """Register a rule in the process-wide registry."""
    return RULE_REGISTRY.register(
        name, predicate, message_key, types=types, check_argument=check_argument
    )


def get_rule(name: str) -> Rule:
    """Look up a rule in the process-wide registry."""
    return RULE_REGISTRY.get(name)
