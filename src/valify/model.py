"""Model — a compiled, callable validator.

Build once, call many times::

    user = Model({"email": {"type": "string", "validate": {"email": True}}})
    user({"email": "test@test.com"})   # -> {"email": "test@test.com"}
    user({"email": "red0"})            # raises RuleFailureError

Validation is fail-fast. Fields are walked in declaration order and the
first failure aborts the call; no errors are aggregated. Messages are
rendered from the locale catalog at failure time, so :meth:`Model.set_locale`
also changes the messages of Models built before the swap.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from valify.domain.rules import RuleRegistry
from valify.domain.types import TypeRegistry
from valify.errors import (
    MissingFieldError,
    RuleFailureError,
    TypeMismatchError,
    ValidationError,
)
from valify.locale.catalog import DEFAULT_CATALOG, LocaleCatalog, set_locale
from valify.result import FailureDetail, ValidationOutcome
from valify.schema.compiler import FieldSchema, ModelSchema, compile_schema

logger = logging.getLogger(__name__)

REQUIRED_KEY = "required"
TYPE_MISMATCH_KEY = "type_mismatch"


class Model:
    """Compiled validator for one schema declaration.

    Args:
        declaration: Mapping of field name to
            ``{"type": ..., "validate": {...}, "optional": ..., "default": ...}``.
        rules: Rule registry to resolve against. Defaults to the
            process-wide registry.
        types: Type registry to resolve against. Defaults to the
            process-wide registry.
        locale: Catalog used to render messages. Defaults to the
            process-wide catalog that :meth:`set_locale` swaps.

    Raises:
        UnknownTypeError: A field declares an unregistered type.
        UnknownRuleError: A field names an unregistered rule.
        InvalidDeclarationError: A field declaration is malformed.
    """

    def __init__(
        self,
        declaration: Mapping[str, Any],
        *,
        rules: RuleRegistry | None = None,
        types: TypeRegistry | None = None,
        locale: LocaleCatalog | None = None,
    ) -> None:
        self._schema: ModelSchema = compile_schema(declaration, types=types, rules=rules)
        self._locale = locale if locale is not None else DEFAULT_CATALOG

    @staticmethod
    def set_locale(catalog: Mapping[str, str] | LocaleCatalog | str) -> None:
        """Swap the process-wide message catalog."""
        set_locale(catalog)

    @property
    def schema(self) -> ModelSchema:
        return self._schema

    @property
    def fields(self) -> list[str]:
        return list(self._schema)

    @property
    def locale(self) -> LocaleCatalog:
        return self._locale

    def __call__(self, candidate: Mapping[str, Any]) -> dict[str, Any]:
        """Validate *candidate* and return a validated shallow copy.

        The caller's object is never modified. Absent optional fields with
        a declared default are filled in on the copy; keys the schema does
        not declare pass through unchanged.

        Raises:
            MissingFieldError: A required field is absent.
            TypeMismatchError: A field fails its type check.
            RuleFailureError: A field fails one of its rules.
        """
        if not isinstance(candidate, Mapping):
            msg = f"Candidate must be a mapping, got {type(candidate).__name__}"
            raise TypeError(msg)

        result = dict(candidate)
        for name, field in self._schema.items():
            if name not in candidate:
                if not field.optional:
                    raise self._fail(MissingFieldError, field, REQUIRED_KEY, REQUIRED_KEY)
                if field.has_default:
                    result[name] = copy.copy(field.default)
                continue

            value = candidate[name]
            if value is None and field.optional:
                continue
            self._check_field(field, value)

        return result

    def validate(self, candidate: Mapping[str, Any]) -> ValidationOutcome:
        """Validate *candidate* without raising on rejection."""
        try:
            data = self(candidate)
        except ValidationError as exc:
            return ValidationOutcome(ok=False, error=FailureDetail(**exc.to_dict()))
        return ValidationOutcome(ok=True, data=data)

    def is_valid(self, candidate: Mapping[str, Any]) -> bool:
        return self.validate(candidate).ok

    def _check_field(self, field: FieldSchema, value: Any) -> None:
        if not field.type_check(value):
            raise self._fail(TypeMismatchError, field, "type", TYPE_MISMATCH_KEY)

        for compiled in field.rules:
            if not compiled.rule(value, compiled.argument, field):
                raise self._fail(
                    RuleFailureError,
                    field,
                    compiled.name,
                    compiled.message_key,
                    argument=compiled.argument,
                )

    def _fail(
        self,
        error_cls: type[ValidationError],
        field: FieldSchema,
        rule: str,
        message_key: str,
        *,
        argument: Any = None,
    ) -> ValidationError:
        params = {"field": field.name, "rule": rule, "type": field.type, "arg": argument}
        message = self._locale.render_or_fallback(message_key, params)
        logger.debug("Validation failed: field=%s rule=%s", field.name, rule)
        return error_cls(message, field=field.name, rule=rule)

    def __repr__(self) -> str:
        return f"Model(fields={self.fields!r})"
