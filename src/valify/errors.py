"""Exception taxonomy for valify.

Two families hang off :class:`ValifyError`:

- :class:`SchemaError`: raised while building a Model. The schema must be
  fixed before a usable Model can exist.
- :class:`ValidationError`: raised by a Model call for one rejected input.
  The Model stays reusable afterwards.
"""

from __future__ import annotations


class ValifyError(Exception):
    """Base exception for all valify errors."""


class ConfigError(ValifyError):
    """Invalid configuration file or settings value."""


# --- Construction-time ---


class SchemaError(ValifyError):
    """A schema declaration could not be compiled."""


class UnknownTypeError(SchemaError):
    """A field declares a type tag with no registered checker."""

    def __init__(self, type_name: str, field: str | None = None) -> None:
        self.type_name = type_name
        self.field = field
        where = f" on field {field!r}" if field else ""
        super().__init__(f"Unknown type {type_name!r}{where}")


class UnknownRuleError(SchemaError):
    """A field's ``validate`` block names a rule with no registry entry."""

    def __init__(self, rule: str, field: str | None = None) -> None:
        self.rule = rule
        self.field = field
        where = f" on field {field!r}" if field else ""
        super().__init__(f"Unknown rule {rule!r}{where}")


class InvalidDeclarationError(SchemaError):
    """A raw field declaration has the wrong shape."""

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        super().__init__(f"Invalid declaration for field {field!r}: {detail}")


class MissingTemplateError(ValifyError, KeyError):
    """The active locale catalog has no template for a message key."""

    def __init__(self, key: str, locale: str | None = None) -> None:
        self.key = key
        self.locale = locale
        super().__init__(key)

    def __str__(self) -> str:
        where = f" in locale {self.locale!r}" if self.locale else ""
        return f"No message template for {self.key!r}{where}"


# --- Per-call ---


class ValidationError(ValifyError):
    """A candidate object was rejected.

    Attributes:
        field: Name of the field that failed.
        rule: Rule that failed (``"required"`` / ``"type"`` for the
            structural checks).
        message: Rendered, localized message. Also the ``str()`` value.
        code: Failure kind: ``missing_field``, ``type_mismatch`` or
            ``rule_failure``.
    """

    code = "validation_error"

    def __init__(self, message: str, *, field: str, rule: str) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.rule = rule

    def to_dict(self) -> dict[str, str]:
        return {
            "code": self.code,
            "field": self.field,
            "rule": self.rule,
            "message": self.message,
        }


class MissingFieldError(ValidationError):
    """A required field is absent from the candidate."""

    code = "missing_field"


class TypeMismatchError(ValidationError):
    """A field's value fails its declared type check."""

    code = "type_mismatch"


class RuleFailureError(ValidationError):
    """A field's value fails one of its declared rules."""

    code = "rule_failure"
