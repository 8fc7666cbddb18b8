"""Recognition model representing credit transfers."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow

MAX_MESSAGE_LENGTH = 500


class Recognition(Base):
    """Recognition entry capturing sender, receiver, and credit amount."""

    __tablename__ = "recognitions"
    __table_args__ = (
        CheckConstraint("sender_id <> receiver_id", name="recognitions_sender_receiver_check"),
        CheckConstraint("credits >= 1", name="recognitions_credits_positive"),
        Index("recognitions_receiver_created_idx", "receiver_id", "created_at"),
        Index("recognitions_sender_month_idx", "sender_id", "recognition_month"),
    )

    recognition_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    sender_id = Column(String(64), ForeignKey("students.student_id", ondelete="RESTRICT"), nullable=False)
    receiver_id = Column(String(64), ForeignKey("students.student_id", ondelete="RESTRICT"), nullable=False)
    credits = Column(Integer, nullable=False)
    message = Column(String(MAX_MESSAGE_LENGTH), nullable=False, default="")
    recognition_month = Column(String(7), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    sender = relationship("Student", foreign_keys=[sender_id], back_populates="recognitions_sent")
    receiver = relationship("Student", foreign_keys=[receiver_id], back_populates="recognitions_received")
    endorsements = relationship(
        "Endorsement",
        back_populates="recognition",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
