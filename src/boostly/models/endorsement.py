"""Recognition endorsement model."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Endorsement(Base):
    """Represents a student's endorsement on a recognition."""

    __tablename__ = "endorsements"
    __table_args__ = (
        UniqueConstraint("recognition_id", "endorser_id", name="endorsements_unique"),
    )

    endorsement_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recognition_id = Column(
        Uuid,
        ForeignKey("recognitions.recognition_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    endorser_id = Column(String(64), ForeignKey("students.student_id", ondelete="RESTRICT"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    recognition = relationship("Recognition", back_populates="endorsements")
    endorser = relationship("Student", back_populates="endorsements")
