"""Domain logic for student redemptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.errors import ValidationFailed
from ..models import Redemption, Student
from ..utils.credits import CREDIT_TO_RUPEE_RATE, CURRENCY, credits_to_rupees, format_voucher_value
from ..utils.validators import positive_credits, require
from .monthly_reset_service import load_current_student

logger = logging.getLogger(__name__)


class RedemptionRuleViolation(ValidationFailed):
    """Raised when redemption rules are violated."""


def _reject(detail: str) -> RedemptionRuleViolation:
    logger.info("redemption rejected: %s", detail)
    return RedemptionRuleViolation(detail)


@dataclass
class RedemptionResult:
    redemption: Redemption
    student_id: str
    credits_redeemed: int
    voucher_value: int
    remaining_credits: int

    @property
    def voucher_value_formatted(self) -> str:
        return format_voucher_value(self.credits_redeemed)

    @property
    def redeemed_at(self) -> datetime:
        return self.redemption.created_at


@dataclass
class RedemptionHistory:
    student: Student
    redemptions: Sequence[Redemption]
    total: int
    total_credits_redeemed: int
    total_voucher_value: int


def redeem(
    session: Session,
    *,
    student_id: Optional[str],
    credits_to_redeem: Any,
    current_month: Optional[str] = None,
) -> RedemptionResult:
    """Convert part of the current balance into a voucher; the deduction is permanent."""

    require("studentId and creditsToRedeem are required", student_id, credits_to_redeem)
    amount = positive_credits(credits_to_redeem, label="Credits to redeem")

    student = load_current_student(session, student_id, for_update=True, current_month=current_month)

    if student.credits < amount:
        raise _reject(
            f"Insufficient credits. Available: {student.credits}, Requested: {amount}"
        )
    # lifetime check, independent of the current balance
    if not student.total_credits_received:
        raise _reject(
            "You can only redeem credits you have received. You have not received any credits yet."
        )

    voucher_value = credits_to_rupees(amount)
    student.credits -= amount
    redemption = Redemption(
        student_id=student.student_id,
        credits_redeemed=amount,
        voucher_value=voucher_value,
    )
    session.add(redemption)
    session.flush()

    logger.info(
        "redemption %s: student=%s credits=%s voucher=%s remaining=%s",
        redemption.redemption_id,
        student.student_id,
        amount,
        voucher_value,
        student.credits,
    )
    return RedemptionResult(
        redemption=redemption,
        student_id=student.student_id,
        credits_redeemed=amount,
        voucher_value=voucher_value,
        remaining_credits=student.credits,
    )


def redemption_info(session: Session, student_id: str, *, current_month: Optional[str] = None) -> dict:
    """Current redeemable balance and what it would be worth."""

    student = load_current_student(session, student_id, current_month=current_month)
    available = student.credits
    return {
        "student_id": student.student_id,
        "available_credits": available,
        "conversion_rate": CREDIT_TO_RUPEE_RATE,
        "currency": CURRENCY,
        "potential_voucher_value": credits_to_rupees(available),
        "potential_voucher_value_formatted": format_voucher_value(available),
        "total_credits_received": student.total_credits_received,
    }


def redemption_history(
    session: Session,
    student_id: str,
    *,
    limit: int = 50,
    offset: int = 0,
    current_month: Optional[str] = None,
) -> RedemptionHistory:
    student = load_current_student(session, student_id, current_month=current_month)

    stmt = (
        select(Redemption)
        .where(Redemption.student_id == student_id)
        .order_by(Redemption.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    redemptions = session.execute(stmt).scalars().all()

    totals = session.execute(
        select(
            func.count(Redemption.redemption_id),
            func.coalesce(func.sum(Redemption.credits_redeemed), 0),
            func.coalesce(func.sum(Redemption.voucher_value), 0),
        ).where(Redemption.student_id == student_id)
    ).one()

    return RedemptionHistory(
        student=student,
        redemptions=redemptions,
        total=int(totals[0]),
        total_credits_redeemed=int(totals[1]),
        total_voucher_value=int(totals[2]),
    )
