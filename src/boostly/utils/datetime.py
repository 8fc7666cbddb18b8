"""Date-time helpers for month token calculations."""

import re
from datetime import datetime, timezone

_MONTH_TOKEN = re.compile(r"^\d{4}-\d{2}$")


def utcnow() -> datetime:
    """Naive UTC timestamp for database columns."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def current_month(now: datetime | None = None) -> str:
    """Return the ``YYYY-MM`` token for the provided timestamp (UTC)."""

    current = now.astimezone(timezone.utc) if now else datetime.now(timezone.utc)
    return f"{current.year:04d}-{current.month:02d}"


def is_valid_month_token(token: str) -> bool:
    if not isinstance(token, str) or not _MONTH_TOKEN.match(token):
        return False
    year, month = (int(part) for part in token.split("-"))
    return year > 0 and 1 <= month <= 12
