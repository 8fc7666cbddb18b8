"""Leaderboard aggregation services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from ..core.errors import NotFound
from ..models import Endorsement, Recognition, Student

MAX_LIMIT = 100


@dataclass
class LeaderboardEntry:
    rank: int
    student_id: str
    name: str
    total_credits_received: int
    recognition_count: int
    endorsement_count: int


def _received_counts(session: Session, student_ids: Iterable[str]) -> tuple[dict[str, int], dict[str, int]]:
    ids = list(student_ids)
    if not ids:
        return {}, {}

    recognitions = session.execute(
        select(Recognition.receiver_id, func.count(Recognition.recognition_id))
        .where(Recognition.receiver_id.in_(ids))
        .group_by(Recognition.receiver_id)
    ).all()
    endorsements = session.execute(
        select(Recognition.receiver_id, func.count(Endorsement.endorsement_id))
        .join(Endorsement, Endorsement.recognition_id == Recognition.recognition_id)
        .where(Recognition.receiver_id.in_(ids))
        .group_by(Recognition.receiver_id)
    ).all()
    return dict(recognitions), dict(endorsements)


def top_recipients(session: Session, *, limit: int = 10) -> list[LeaderboardEntry]:
    """Return leaderboard entries ordered by credits received, ties broken by student id."""

    limit = max(1, min(limit, MAX_LIMIT))

    stmt = (
        select(Student)
        .order_by(Student.total_credits_received.desc(), Student.student_id.asc())
        .limit(limit)
    )
    students = session.execute(stmt).scalars().all()
    recognitions, endorsements = _received_counts(session, (s.student_id for s in students))

    return [
        LeaderboardEntry(
            rank=position,
            student_id=student.student_id,
            name=student.name,
            total_credits_received=student.total_credits_received or 0,
            recognition_count=recognitions.get(student.student_id, 0),
            endorsement_count=endorsements.get(student.student_id, 0),
        )
        for position, student in enumerate(students, start=1)
    ]


def student_ranking(session: Session, student_id: str) -> LeaderboardEntry:
    """Rank of a single student under the same order as :func:`top_recipients`."""

    student = session.get(Student, student_id)
    if student is None:
        raise NotFound("Student not found")

    total = student.total_credits_received or 0
    ahead = session.execute(
        select(func.count())
        .select_from(Student)
        .where(
            or_(
                Student.total_credits_received > total,
                and_(Student.total_credits_received == total, Student.student_id < student.student_id),
            )
        )
    ).scalar_one()
    recognitions, endorsements = _received_counts(session, [student.student_id])

    return LeaderboardEntry(
        rank=ahead + 1,
        student_id=student.student_id,
        name=student.name,
        total_credits_received=total,
        recognition_count=recognitions.get(student.student_id, 0),
        endorsement_count=endorsements.get(student.student_id, 0),
    )
