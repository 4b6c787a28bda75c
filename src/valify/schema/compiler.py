"""Field schema compiler.

Turns raw declarations into immutable :class:`FieldSchema` objects. Every
type and rule name is resolved here, once, so a schema typo surfaces when
the Model is built rather than on the first bad input.

Rule order is the key order of the ``validate`` mapping and is never
changed: the first declared rule that fails decides the reported message.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from valify.domain.rules import RULE_REGISTRY, Rule, RuleRegistry
from valify.domain.types import TYPE_REGISTRY, TypePredicate, TypeRegistry
from valify.errors import InvalidDeclarationError, UnknownRuleError, UnknownTypeError
from valify.schema.declarations import FieldDeclaration

logger = logging.getLogger(__name__)

ModelSchema = Mapping[str, "FieldSchema"]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class CompiledRule:
    """A resolved rule bound to its declared argument."""

    rule: Rule
    argument: Any

    @property
    def name(self) -> str:
        return self.rule.name

    @property
    def message_key(self) -> str:
        return self.rule.message_key


@dataclass(frozen=True)
class FieldSchema:
    """Compiled, immutable description of one field."""

    name: str
    type: str
    type_check: TypePredicate
    rules: tuple[CompiledRule, ...] = ()
    optional: bool = False
    default: Any = MISSING

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def rule_names(self) -> list[str]:
        return [r.name for r in self.rules]


def _parse_declaration(name: str, raw: Any) -> FieldDeclaration:
    if isinstance(raw, FieldDeclaration):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidDeclarationError(name, f"expected a mapping, got {type(raw).__name__}")
    try:
        return FieldDeclaration.model_validate(dict(raw))
    except PydanticValidationError as exc:
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidDeclarationError(name, detail) from exc


def compile_field(
    name: str,
    raw: Mapping[str, Any] | FieldDeclaration,
    *,
    types: TypeRegistry | None = None,
    rules: RuleRegistry | None = None,
) -> FieldSchema:
    """Compile one raw field declaration.

    A rule whose argument is literally ``False`` is switched off and left
    out of the compiled field. Enabled rules must apply to the declared
    type, and their arguments are checked and prepared here (a ``pattern``
    is compiled once).

    Raises:
        InvalidDeclarationError: If *raw* has the wrong shape, or an enabled
            rule does not apply to the field type or rejects its argument.
        UnknownTypeError: If the declared type is not registered.
        UnknownRuleError: If any rule under ``validate`` is not registered.
    """
    types = types if types is not None else TYPE_REGISTRY
    rules = rules if rules is not None else RULE_REGISTRY
    decl = _parse_declaration(name, raw)

    try:
        type_check = types.get(decl.type)
    except UnknownTypeError:
        raise UnknownTypeError(decl.type, field=name) from None

    compiled: list[CompiledRule] = []
    for rule_name, argument in decl.rules.items():
        try:
            rule = rules.get(rule_name)
        except UnknownRuleError:
            raise UnknownRuleError(rule_name, field=name) from None
        if argument is False:
            continue
        if not rule.applies_to(decl.type):
            allowed = ", ".join(sorted(rule.types or ()))
            detail = (
                f"rule {rule_name!r} does not apply to type {decl.type!r} (expects {allowed})"
            )
            raise InvalidDeclarationError(name, detail)
        try:
            prepared = rule.prepare(argument)
        except (TypeError, ValueError) as exc:
            raise InvalidDeclarationError(name, f"rule {rule_name!r}: {exc}") from exc
        compiled.append(CompiledRule(rule=rule, argument=prepared))

    return FieldSchema(
        name=name,
        type=decl.type,
        type_check=type_check,
        rules=tuple(compiled),
        optional=decl.optional,
        default=decl.default if decl.has_default else MISSING,
    )


def compile_schema(
    declaration: Mapping[str, Any],
    *,
    types: TypeRegistry | None = None,
    rules: RuleRegistry | None = None,
) -> ModelSchema:
    """Compile every field of a model declaration, keeping declaration order."""
    if not isinstance(declaration, Mapping):
        msg = f"Schema declaration must be a mapping, got {type(declaration).__name__}"
        raise TypeError(msg)

    fields: dict[str, FieldSchema] = {}
    for name, raw in declaration.items():
        fields[name] = compile_field(name, raw, types=types, rules=rules)
        logger.debug(
            "Compiled field %s: type=%s rules=%s",
            name,
            fields[name].type,
            fields[name].rule_names,
        )
    return MappingProxyType(fields)
