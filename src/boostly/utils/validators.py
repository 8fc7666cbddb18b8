"""Input checks shared across services.

Each helper raises :class:`~boostly.core.errors.ValidationFailed` with the
message returned to the client.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from ..core.errors import ValidationFailed
from .credits import as_whole_credits


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require(message: str, *values: Any) -> None:
    if any(is_missing(value) for value in values):
        raise ValidationFailed(message)


def positive_credits(value: Any, *, label: str = "Credits") -> int:
    """Validate a credit amount: greater than zero first, then a whole number."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationFailed(f"{label} must be a number")
    if value <= 0:
        raise ValidationFailed(f"{label} must be greater than 0")
    credits = as_whole_credits(value)
    if credits is None:
        raise ValidationFailed(f"{label} must be a whole number")
    return credits


def parse_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise ValidationFailed("Invalid ID format") from exc


def clean_message(message: Optional[str], max_length: int) -> str:
    if message is None:
        return ""
    if not isinstance(message, str):
        raise ValidationFailed("Message must be a string")
    message = message.strip()
    if len(message) > max_length:
        raise ValidationFailed(f"Message cannot exceed {max_length} characters")
    return message
