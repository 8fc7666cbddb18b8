"""Pydantic schemas for endorsement endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from .common import CamelModel, StudentRef


class EndorsementCreate(CamelModel):
    """Request payload to endorse a recognition."""

    recognition_id: Optional[str] = None
    endorser_id: Optional[str] = None


class EndorsementRead(CamelModel):
    """Response payload representing an endorsement."""

    id: UUID
    recognition_id: UUID
    endorser_id: str
    created_at: datetime
    endorser: Optional[StudentRef] = None

    @classmethod
    def from_model(cls, endorsement, *, with_endorser: bool = False) -> "EndorsementRead":
        endorser = None
        if with_endorser and endorsement.endorser is not None:
            endorser = StudentRef.model_validate(endorsement.endorser)
        return cls(
            id=endorsement.endorsement_id,
            recognition_id=endorsement.recognition_id,
            endorser_id=endorsement.endorser_id,
            created_at=endorsement.created_at,
            endorser=endorser,
        )


class EndorsementDetail(CamelModel):
    endorsement: EndorsementRead


class EndorsementList(CamelModel):
    endorsements: List[EndorsementRead]
    count: int


class EndorsementCheck(CamelModel):
    has_endorsed: bool
    endorsement: Optional[EndorsementRead] = None
