"""Awaiting-payment satellite table."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from ..database import Base
from .types import UTCDateTime


class AwaitingPayment(Base):
    """Invoice the requester must settle before the consultation takes place."""

    __tablename__ = "awaiting_payments"

    consultation_id = Column(
        Integer,
        ForeignKey("consultations.consultation_id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_account_id = Column(Integer, nullable=False)
    consultant_id = Column(Integer, nullable=False)
    meeting_at = Column(UTCDateTime, nullable=False)
    fee_per_hour_in_yen = Column(Integer, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)

    consultation = relationship("Consultation", back_populates="awaiting_payment")

    def __repr__(self) -> str:
        return f"<AwaitingPayment consultation={self.consultation_id} fee={self.fee_per_hour_in_yen}>"
