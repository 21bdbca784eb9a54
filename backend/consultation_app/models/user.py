# backend/consultation_app/models/user.py
from sqlalchemy import Column, Integer, String

from ..database import Base
from .types import UTCDateTime


class UserAccount(Base):
    """
    Account of a person using the service.

    Only the columns the consultation core reads are mapped here; profile
    management lives elsewhere.
    """

    __tablename__ = "user_accounts"

    user_account_id = Column(Integer, primary_key=True, autoincrement=True)
    email_address = Column(String(254), nullable=False, unique=True)
    disabled_at = Column(UTCDateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<UserAccount {self.user_account_id} disabled={self.disabled_at is not None}>"
