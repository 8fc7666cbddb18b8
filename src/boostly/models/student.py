"""Student account model; the balance fields are the credit ledger."""

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship, validates

from ..core.database import Base
from ..utils.credits import MONTHLY_CREDIT_ALLOCATION, MONTHLY_SENDING_LIMIT
from ..utils.datetime import utcnow


class Student(Base):
    """Represents a campus user participating in Boostly."""

    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("email", name="students_email_unique"),
        CheckConstraint("credits >= 0", name="students_credits_non_negative"),
        CheckConstraint("monthly_sending_limit >= 0", name="students_sending_limit_non_negative"),
        CheckConstraint("credits_sent_this_month >= 0", name="students_credits_sent_non_negative"),
        CheckConstraint("total_credits_received >= 0", name="students_total_received_non_negative"),
        CheckConstraint("previous_month_unused_credits >= 0", name="students_previous_unused_non_negative"),
        Index("students_leaderboard_idx", "total_credits_received", "student_id"),
    )

    student_id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    credits = Column(Integer, nullable=False, default=MONTHLY_CREDIT_ALLOCATION)
    monthly_sending_limit = Column(Integer, nullable=False, default=MONTHLY_SENDING_LIMIT)
    credits_sent_this_month = Column(Integer, nullable=False, default=0)
    total_credits_received = Column(Integer, nullable=False, default=0)
    # YYYY-MM of the last applied monthly reset
    last_reset_month = Column(String(7))
    # balance snapshot taken at the last reset, input to the next carry-forward
    previous_month_unused_credits = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    recognitions_sent = relationship(
        "Recognition",
        foreign_keys="Recognition.sender_id",
        back_populates="sender",
    )
    recognitions_received = relationship(
        "Recognition",
        foreign_keys="Recognition.receiver_id",
        back_populates="receiver",
    )
    endorsements = relationship("Endorsement", back_populates="endorser")
    redemptions = relationship("Redemption", back_populates="student")

    @validates("student_id", "name")
    def _strip(self, key, value):
        return value.strip() if isinstance(value, str) else value

    @validates("email")
    def _normalize_email(self, key, value):
        return value.strip().lower() if isinstance(value, str) else value

    def __repr__(self) -> str:
        return f"<Student {self.student_id} credits={self.credits}>"
