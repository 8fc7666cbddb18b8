"""Domain logic for recognition workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.errors import NotFound, ValidationFailed
from ..models import Recognition, Student
from ..models.recognition import MAX_MESSAGE_LENGTH
from ..utils.credits import remaining_monthly_capacity
from ..utils.datetime import current_month as month_token
from ..utils.validators import clean_message, parse_uuid, positive_credits, require
from .monthly_reset_service import ensure_current_month

logger = logging.getLogger(__name__)

UNKNOWN_STUDENT_NAME = "Unknown"


class RecognitionRuleViolation(ValidationFailed):
    """Raised when business constraints are violated."""


def _reject(detail: str) -> RecognitionRuleViolation:
    logger.info("recognition rejected: %s", detail)
    return RecognitionRuleViolation(detail)


@dataclass
class TransferResult:
    recognition: Recognition
    sender_balance: int
    receiver_balance: int


@dataclass
class StudentRef:
    student_id: str
    name: str


@dataclass
class RecognitionView:
    recognition: Recognition
    sender: Optional[StudentRef] = None
    receiver: Optional[StudentRef] = None


@dataclass
class RecognitionPage:
    items: list[RecognitionView]
    total: int
    limit: int
    offset: int


def _lock_students(session: Session, student_ids: Iterable[str]) -> dict[str, Student]:
    # fixed lock order keeps two opposite transfers from deadlocking
    locked: dict[str, Student] = {}
    for student_id in sorted(set(student_ids)):
        stmt = select(Student).where(Student.student_id == student_id).with_for_update()
        student = session.execute(stmt).scalar_one_or_none()
        if student is not None:
            locked[student_id] = student
    return locked


def create_recognition(
    session: Session,
    *,
    sender_id: Optional[str],
    receiver_id: Optional[str],
    credits: Any,
    message: Optional[str] = None,
    current_month: Optional[str] = None,
) -> TransferResult:
    """Transfer ``credits`` from sender to receiver and record the recognition.

    Rules are checked in a fixed order and the first failure is raised before
    anything is written. The three writes (recognition, sender debit, receiver
    credit) share the caller's transaction.
    """

    require("senderId, receiverId, and credits are required", sender_id, receiver_id, credits)
    amount = positive_credits(credits)
    if sender_id == receiver_id:
        raise _reject("Self-recognition is not allowed")
    note = clean_message(message, MAX_MESSAGE_LENGTH)

    token = current_month or month_token()
    students = _lock_students(session, (sender_id, receiver_id))

    sender = students.get(sender_id)
    if sender is None:
        raise NotFound("Sender student not found")
    ensure_current_month(session, sender, token)

    receiver = students.get(receiver_id)
    if receiver is None:
        raise NotFound("Receiver student not found")
    ensure_current_month(session, receiver, token)

    if sender.credits < amount:
        raise _reject(
            f"Insufficient credits. Available: {sender.credits}, Requested: {amount}"
        )

    already_sent = sender.credits_sent_this_month or 0
    if amount > remaining_monthly_capacity(already_sent, sender.monthly_sending_limit):
        raise _reject(
            "Monthly sending limit exceeded. "
            f"Limit: {sender.monthly_sending_limit}, Already sent: {already_sent}, Requested: {amount}"
        )

    recognition = Recognition(
        sender_id=sender.student_id,
        receiver_id=receiver.student_id,
        credits=amount,
        message=note,
        recognition_month=token,
    )
    session.add(recognition)

    sender.credits -= amount
    sender.credits_sent_this_month = already_sent + amount
    receiver.credits += amount
    receiver.total_credits_received = (receiver.total_credits_received or 0) + amount

    session.flush()
    logger.info(
        "recognition %s: %s -> %s credits=%s",
        recognition.recognition_id,
        sender.student_id,
        receiver.student_id,
        amount,
    )
    return TransferResult(
        recognition=recognition,
        sender_balance=sender.credits,
        receiver_balance=receiver.credits,
    )


def _student_refs(session: Session, student_ids: Iterable[str]) -> dict[str, StudentRef]:
    ids = set(student_ids)
    if not ids:
        return {}
    rows = session.execute(select(Student.student_id, Student.name).where(Student.student_id.in_(ids))).all()
    return {row.student_id: StudentRef(student_id=row.student_id, name=row.name) for row in rows}


def _ref_or_unknown(refs: dict[str, StudentRef], student_id: str) -> StudentRef:
    return refs.get(student_id) or StudentRef(student_id=student_id, name=UNKNOWN_STUDENT_NAME)


def _page(
    session: Session,
    *,
    column,
    student_id: str,
    counterpart: str,
    limit: int,
    offset: int,
) -> RecognitionPage:
    stmt = (
        select(Recognition)
        .where(column == student_id)
        .order_by(Recognition.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    recognitions: Sequence[Recognition] = session.execute(stmt).scalars().all()
    total = session.execute(select(func.count()).select_from(Recognition).where(column == student_id)).scalar_one()

    refs = _student_refs(session, (getattr(r, f"{counterpart}_id") for r in recognitions))
    items = [
        RecognitionView(
            recognition=r,
            **{counterpart: _ref_or_unknown(refs, getattr(r, f"{counterpart}_id"))},
        )
        for r in recognitions
    ]
    return RecognitionPage(items=items, total=total, limit=limit, offset=offset)


def list_received(session: Session, student_id: str, *, limit: int = 50, offset: int = 0) -> RecognitionPage:
    """Recognitions received by ``student_id``, newest first, with sender names."""

    return _page(
        session,
        column=Recognition.receiver_id,
        student_id=student_id,
        counterpart="sender",
        limit=limit,
        offset=offset,
    )


def list_sent(session: Session, student_id: str, *, limit: int = 50, offset: int = 0) -> RecognitionPage:
    """Recognitions sent by ``student_id``, newest first, with receiver names."""

    return _page(
        session,
        column=Recognition.sender_id,
        student_id=student_id,
        counterpart="receiver",
        limit=limit,
        offset=offset,
    )


def get_recognition(session: Session, recognition_id: Any) -> RecognitionView:
    rid = parse_uuid(recognition_id)
    recognition = session.get(Recognition, rid)
    if recognition is None:
        raise NotFound("Recognition not found")
    refs = _student_refs(session, (recognition.sender_id, recognition.receiver_id))
    return RecognitionView(
        recognition=recognition,
        sender=_ref_or_unknown(refs, recognition.sender_id),
        receiver=_ref_or_unknown(refs, recognition.receiver_id),
    )
