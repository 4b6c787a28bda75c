"""English message catalog (default)."""

from __future__ import annotations

MESSAGES: dict[str, str] = {
    "required": "{field} is required",
    "type_mismatch": "{field} must be of type {type}",
    "email_invalid": "{field} must be a valid email",
    "min_length": "{field} must be at least {arg} characters long",
    "max_length": "{field} must be at most {arg} characters long",
    "min": "{field} must be greater than or equal to {arg}",
    "max": "{field} must be less than or equal to {arg}",
    "pattern": "{field} does not match the required pattern",
    "one_of": "{field} must be one of {arg}",
}
