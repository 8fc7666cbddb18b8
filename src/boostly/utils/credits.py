"""Credit arithmetic shared by the transfer, reset and redemption flows."""

from __future__ import annotations

from typing import Any, Optional

CREDIT_TO_RUPEE_RATE = 5
CURRENCY = "INR"
MONTHLY_CREDIT_ALLOCATION = 100
MONTHLY_SENDING_LIMIT = 100
MAX_CARRY_FORWARD_CREDITS = 50


def credits_to_rupees(credits: int) -> int:
    return credits * CREDIT_TO_RUPEE_RATE


def format_voucher_value(credits: int) -> str:
    """Render the voucher value of ``credits`` as a rupee string, e.g. ``₹500``."""

    return f"₹{credits_to_rupees(credits)}"


def calculate_carry_forward(unused_credits: Optional[int]) -> int:
    """Portion of last month's unused balance that rolls over (hard cap of 50)."""

    return min(MAX_CARRY_FORWARD_CREDITS, unused_credits or 0)


def calculate_new_month_credits(unused_credits: Optional[int]) -> int:
    return MONTHLY_CREDIT_ALLOCATION + calculate_carry_forward(unused_credits)


def remaining_monthly_capacity(credits_sent: int, monthly_limit: int = MONTHLY_SENDING_LIMIT) -> int:
    return max(0, monthly_limit - credits_sent)


def as_whole_credits(value: Any) -> Optional[int]:
    """Coerce ``value`` to an int credit amount, or ``None`` if it is not a whole number.

    Integral floats such as ``10.0`` are accepted; booleans are not.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
