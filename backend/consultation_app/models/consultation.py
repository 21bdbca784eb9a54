# backend/consultation_app/models/consultation.py
"""
Consultation model.

A consultation is the confirmed, single-timestamp booking created when a
consultant accepts a request. The meeting time never changes afterwards.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base
from .types import UTCDateTime

CONSULTANT_MEETING_AT_CONSTRAINT = "uq_consultations_consultant_meeting_at"
USER_MEETING_AT_CONSTRAINT = "uq_consultations_user_meeting_at"


class Consultation(Base):
    """Confirmed meeting between a requester and a consultant."""

    __tablename__ = "consultations"

    consultation_id = Column(Integer, primary_key=True, autoincrement=True)
    user_account_id = Column(Integer, ForeignKey("user_accounts.user_account_id"), nullable=False)
    consultant_id = Column(Integer, ForeignKey("user_accounts.user_account_id"), nullable=False)
    meeting_at = Column(UTCDateTime, nullable=False)
    room_name = Column(String(64), nullable=False, unique=True)

    user_account_entered_at = Column(UTCDateTime, nullable=True)
    consultant_entered_at = Column(UTCDateTime, nullable=True)

    # Same-role double bookings are rejected by the database as well
    __table_args__ = (
        UniqueConstraint("consultant_id", "meeting_at", name=CONSULTANT_MEETING_AT_CONSTRAINT),
        UniqueConstraint("user_account_id", "meeting_at", name=USER_MEETING_AT_CONSTRAINT),
    )

    awaiting_payment = relationship(
        "AwaitingPayment",
        back_populates="consultation",
        uselist=False,
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Consultation {self.consultation_id} user={self.user_account_id} "
            f"consultant={self.consultant_id} meeting_at={self.meeting_at}>"
        )
