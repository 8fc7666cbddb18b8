"""Redemption record model."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Redemption(Base):
    """Append-only receipt of credits converted into a voucher."""

    __tablename__ = "redemptions"
    __table_args__ = (
        CheckConstraint("credits_redeemed > 0", name="redemptions_credits_positive"),
        Index("redemptions_student_created_idx", "student_id", "created_at"),
    )

    redemption_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(String(64), ForeignKey("students.student_id", ondelete="RESTRICT"), nullable=False)
    credits_redeemed = Column(Integer, nullable=False)
    voucher_value = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    student = relationship("Student", back_populates="redemptions")
