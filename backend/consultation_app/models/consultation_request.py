# backend/consultation_app/models/consultation_request.py
"""
Consultation request model.

A request is created by the requester with three candidate meeting times and
waits for the consultant to accept one of them (or reject the whole request).
It is deleted once it has been honored, so an existing row always means
"still pending".
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, String

from ..database import Base
from .types import UTCDateTime


class ConsultationRequest(Base):
    """Pending consultation proposal awaiting the consultant's decision."""

    __tablename__ = "consultation_reqs"

    consultation_req_id = Column(Integer, primary_key=True, autoincrement=True)
    user_account_id = Column(Integer, ForeignKey("user_accounts.user_account_id"), nullable=False)
    consultant_id = Column(Integer, ForeignKey("user_accounts.user_account_id"), nullable=False)

    first_candidate_date_time = Column(UTCDateTime, nullable=False)
    second_candidate_date_time = Column(UTCDateTime, nullable=False)
    third_candidate_date_time = Column(UTCDateTime, nullable=False)
    latest_candidate_date_time = Column(UTCDateTime, nullable=False)

    # Opaque reference kept for the payment platform
    charge_id = Column(String(64), nullable=True)
    fee_per_hour_in_yen = Column(Integer, nullable=False)

    __table_args__ = (
        Index("ix_consultation_reqs_consultant_id", "consultant_id"),
        Index("ix_consultation_reqs_user_account_id", "user_account_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ConsultationRequest {self.consultation_req_id} "
            f"user={self.user_account_id} consultant={self.consultant_id}>"
        )
