"""Monthly credit reset with carry-forward.

Every balance-touching path calls :func:`load_current_student`, which rolls the
account into the current month before any rule is checked. The batch sweep
(:func:`run_monthly_reset`) applies the same rule to all stale accounts and is
only an administrative convenience.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..core.errors import NotFound
from ..models import Student
from ..utils.credits import (
    MAX_CARRY_FORWARD_CREDITS,
    MONTHLY_SENDING_LIMIT,
    calculate_carry_forward,
    calculate_new_month_credits,
)
from ..utils.datetime import current_month as month_token, is_valid_month_token

logger = logging.getLogger(__name__)


@dataclass
class ResetSummary:
    reset_count: int
    total_carry_forward: int
    current_month: str

    def as_dict(self) -> dict:
        return asdict(self)


def needs_reset(student: Student, current_month: str) -> bool:
    return not student.last_reset_month or student.last_reset_month != current_month


def apply_reset(student: Student, current_month: str) -> int:
    """Roll ``student`` into ``current_month`` in place; return the carry-forward applied."""

    carry_forward = calculate_carry_forward(student.previous_month_unused_credits)
    # snapshot before the balance is overwritten; feeds next month's carry-forward
    previous_unused = student.credits or 0

    student.credits = calculate_new_month_credits(student.previous_month_unused_credits)
    student.monthly_sending_limit = MONTHLY_SENDING_LIMIT
    student.credits_sent_this_month = 0
    student.previous_month_unused_credits = previous_unused
    student.last_reset_month = current_month
    return carry_forward


def ensure_current_month(
    session: Session,
    student: Student,
    current_month: Optional[str] = None,
) -> Student:
    """Apply the monthly reset to ``student`` if it has not run for this month yet."""

    token = current_month or month_token()
    if not is_valid_month_token(token):
        raise ValueError(f"Invalid month token: {token!r}")
    if needs_reset(student, token):
        carry_forward = apply_reset(student, token)
        session.flush()
        logger.info(
            "monthly reset applied: student=%s month=%s carry_forward=%s credits=%s",
            student.student_id,
            token,
            carry_forward,
            student.credits,
        )
    return student


def load_current_student(
    session: Session,
    student_id: str,
    *,
    for_update: bool = False,
    current_month: Optional[str] = None,
    not_found_detail: str = "Student not found",
) -> Student:
    """Fetch a student by business id with this month's reset applied."""

    stmt = select(Student).where(Student.student_id == student_id)
    if for_update:
        stmt = stmt.with_for_update()
    student = session.execute(stmt).scalar_one_or_none()
    if student is None:
        raise NotFound(not_found_detail)
    return ensure_current_month(session, student, current_month)


def _stale_filter(current_month: str):
    return or_(Student.last_reset_month.is_(None), Student.last_reset_month != current_month)


def run_monthly_reset(session: Session, *, current_time: datetime | None = None) -> ResetSummary:
    """Reset every account whose last reset predates the current month.

    Accounts are processed one at a time; those already reset this month are
    not selected and therefore not counted.
    """

    token = month_token(current_time)
    stmt = (
        select(Student)
        .where(_stale_filter(token))
        .order_by(Student.student_id)
        .with_for_update(skip_locked=True)
    )
    students = session.execute(stmt).scalars().all()

    summary = ResetSummary(reset_count=0, total_carry_forward=0, current_month=token)
    for student in students:
        # a lazy reset may have landed between the select and this point
        if not needs_reset(student, token):
            continue
        summary.total_carry_forward += apply_reset(student, token)
        summary.reset_count += 1
        session.flush()

    logger.info(
        "monthly reset sweep: month=%s reset=%s carry_forward_total=%s",
        token,
        summary.reset_count,
        summary.total_carry_forward,
    )
    return summary


def reset_statistics(session: Session, *, current_time: datetime | None = None) -> dict:
    """Counts describing how far the current month's reset has progressed."""

    token = month_token(current_time)

    def _count(*criteria) -> int:
        return session.execute(select(func.count()).select_from(Student).where(*criteria)).scalar_one()

    total = _count()
    needing_reset = _count(_stale_filter(token))
    with_carry_forward = _count(
        Student.previous_month_unused_credits > 0,
        Student.previous_month_unused_credits <= MAX_CARRY_FORWARD_CREDITS,
    )
    with_max_carry_forward = _count(Student.previous_month_unused_credits > MAX_CARRY_FORWARD_CREDITS)

    return {
        "current_month": token,
        "total_students": total,
        "students_needing_reset": needing_reset,
        "students_with_carry_forward": with_carry_forward,
        "students_with_max_carry_forward": with_max_carry_forward,
        "reset_percentage": round(needing_reset / total * 100, 2) if total else 0,
    }
