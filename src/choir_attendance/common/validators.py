from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def _as_text(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def optional_text(value: Any, field_name: str) -> str:
    """Trimmed text, or "" when missing."""
    return _as_text(value, field_name).strip()


def require_non_empty(value: Any, field_name: str) -> str:
    stripped = optional_text(value, field_name)
    if not stripped:
        raise ValidationError(f"{field_name} is required")
    return stripped


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    """Trimmed length must reach ``min_len``; returns the trimmed value."""
    stripped = optional_text(value, field_name)
    if len(stripped) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return stripped


def require_email(value: Any) -> str:
    email = require_non_empty(value, "Email")
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError("Email is not valid")
    return email.lower()
