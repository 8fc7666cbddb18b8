"""Domain logic for recognition endorsements."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..core.errors import DuplicateEntry, NotFound
from ..models import Endorsement, Recognition, Student
from ..utils.validators import parse_uuid, require

logger = logging.getLogger(__name__)

ALREADY_ENDORSED = "You have already endorsed this recognition"


class EndorsementRuleViolation(DuplicateEntry):
    """Raised when a student endorses the same recognition twice."""


def _ensure_recognition(session: Session, recognition_id: Any) -> Recognition:
    recognition = session.get(Recognition, parse_uuid(recognition_id))
    if recognition is None:
        raise NotFound("Recognition not found")
    return recognition


def _find(session: Session, recognition_id, endorser_id: str) -> Optional[Endorsement]:
    stmt = select(Endorsement).where(
        Endorsement.recognition_id == recognition_id,
        Endorsement.endorser_id == endorser_id,
    )
    return session.execute(stmt).scalar_one_or_none()


def create_endorsement(
    session: Session,
    *,
    recognition_id: Any,
    endorser_id: Optional[str],
) -> Endorsement:
    """Insert a new endorsement ensuring one per (recognition, endorser).

    Endorsing a recognition you sent or received is allowed.
    """

    require("recognitionId and endorserId are required", recognition_id, endorser_id)
    recognition = _ensure_recognition(session, recognition_id)

    if session.get(Student, endorser_id) is None:
        raise NotFound("Endorser not found")

    if _find(session, recognition.recognition_id, endorser_id) is not None:
        raise EndorsementRuleViolation(ALREADY_ENDORSED)

    endorsement = Endorsement(recognition_id=recognition.recognition_id, endorser_id=endorser_id)
    session.add(endorsement)
    # the unique constraint settles a race with a concurrent identical request
    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        raise EndorsementRuleViolation(ALREADY_ENDORSED) from exc

    logger.info("endorsement %s: %s endorsed %s", endorsement.endorsement_id, endorser_id, recognition.recognition_id)
    return endorsement


def delete_endorsement(session: Session, endorsement_id: Any) -> None:
    """Remove an endorsement by id; there is no ownership check."""

    endorsement = session.get(Endorsement, parse_uuid(endorsement_id))
    if endorsement is None:
        raise NotFound("Endorsement not found")
    session.delete(endorsement)
    session.flush()
    logger.info("endorsement %s removed", endorsement.endorsement_id)


def list_by_recognition(session: Session, recognition_id: Any) -> Sequence[Endorsement]:
    """Return endorsements for a recognition, newest first."""

    stmt = (
        select(Endorsement)
        .options(joinedload(Endorsement.endorser))
        .where(Endorsement.recognition_id == parse_uuid(recognition_id))
        .order_by(Endorsement.created_at.desc())
    )
    return session.execute(stmt).scalars().all()


def check_endorsement(session: Session, recognition_id: Any, endorser_id: str) -> Optional[Endorsement]:
    return _find(session, parse_uuid(recognition_id), endorser_id)
