"""Lightweight validation helpers."""

from typing import Any

from utils.error_handling import ValidationError


def ensure_present(value: Any, field: str) -> None:
    """Raise ValidationError if value is falsy or only whitespace."""
    if isinstance(value, str):
        value = value.strip()
    if value in (None, "", []):
        raise ValidationError(f"{field} is required")
