"""Pydantic models for raw schema declarations.

A declaration maps each field name to a dict such as::

    {"type": "string", "validate": {"email": True}, "optional": False}

These models only check the *shape* of a declaration. Whether the type and
rule names exist is decided by the compiler against the registries.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FieldDeclaration(BaseModel):
    """One field's raw declaration."""

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}

    type: str = Field(min_length=1)
    # "validate" would shadow BaseModel.validate
    rules: dict[str, Any] = Field(default_factory=dict, alias="validate")
    optional: bool = False
    default: Any = None

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set
