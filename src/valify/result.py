"""ValidationOutcome — non-raising result of a Model check.

``Model.__call__`` raises on the first failure. ``Model.validate`` wraps the
same walk and returns this frozen result instead, for callers that prefer
to branch on ``ok`` rather than catch.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FailureDetail(BaseModel):
    """Structured failure payload within a ValidationOutcome."""

    model_config = {"frozen": True}

    code: str
    field: str
    rule: str
    message: str


class ValidationOutcome(BaseModel):
    """Result of validating one candidate object.

    Attributes:
        ok: Whether the candidate passed every field.
        data: The validated (copied, default-filled) object on success.
        error: The single failure if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    data: dict[str, Any] = Field(default_factory=dict)
    error: FailureDetail | None = None
