"""valify — schema-driven object validation with localized messages."""

from valify.domain.rules import Rule, RuleRegistry, get_rule, register_rule
from valify.domain.types import TypeRegistry, TypeTag, check_type, register_type
from valify.errors import (
    ConfigError,
    InvalidDeclarationError,
    MissingFieldError,
    MissingTemplateError,
    RuleFailureError,
    SchemaError,
    TypeMismatchError,
    UnknownRuleError,
    UnknownTypeError,
    ValidationError,
    ValifyError,
)
from valify.locale.catalog import LocaleCatalog, get_locale, load_catalog, set_locale
from valify.model import Model
from valify.result import FailureDetail, ValidationOutcome
from valify.runtime import configure

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "FailureDetail",
    "InvalidDeclarationError",
    "LocaleCatalog",
    "MissingFieldError",
    "MissingTemplateError",
    "Model",
    "Rule",
    "RuleFailureError",
    "RuleRegistry",
    "SchemaError",
    "TypeMismatchError",
    "TypeRegistry",
    "TypeTag",
    "UnknownRuleError",
    "UnknownTypeError",
    "ValidationError",
    "ValidationOutcome",
    "ValifyError",
    "check_type",
    "configure",
    "get_locale",
    "get_rule",
    "load_catalog",
    "register_rule",
    "register_type",
    "set_locale",
]
