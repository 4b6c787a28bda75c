"""Schema layer — raw declarations and the field compiler."""

from valify.schema.compiler import (
    MISSING,
    CompiledRule,
    FieldSchema,
    ModelSchema,
    compile_field,
    compile_schema,
)
from valify.schema.declarations import FieldDeclaration

__all__ = [
    "MISSING",
    "CompiledRule",
    "FieldDeclaration",
    "FieldSchema",
    "ModelSchema",
    "compile_field",
    "compile_schema",
]
