# backend/consultation_app/repositories/consultation_repository.py
"""
Consultation Repository for the consultation service.

Writes the two rows an acceptance produces: the consultation itself and the
awaiting-payment record that hangs off it.
"""

from datetime import datetime
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.awaiting_payment import AwaitingPayment
from ..models.consultation import Consultation
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConsultationRepository(BaseRepository[Consultation]):
    """Repository for confirmed consultations and their pending payments."""

    def __init__(self, db: Session):
        super().__init__(db, Consultation)

    def create_consultation(
        self,
        user_account_id: int,
        consultant_id: int,
        meeting_at: datetime,
        room_name: str,
    ) -> Consultation:
        """Insert a consultation with both entry timestamps unset."""
        return self.create(
            user_account_id=user_account_id,
            consultant_id=consultant_id,
            meeting_at=meeting_at,
            room_name=room_name,
            user_account_entered_at=None,
            consultant_entered_at=None,
        )

    def create_awaiting_payment(
        self,
        consultation_id: int,
        user_account_id: int,
        consultant_id: int,
        meeting_at: datetime,
        fee_per_hour_in_yen: int,
        created_at: datetime,
    ) -> AwaitingPayment:
        """
        Insert the payment-due record for a consultation.

        Note: Does NOT commit - transaction management is handled by service layer.
        """
        try:
            awaiting_payment = AwaitingPayment(
                consultation_id=consultation_id,
                user_account_id=user_account_id,
                consultant_id=consultant_id,
                meeting_at=meeting_at,
                fee_per_hour_in_yen=fee_per_hour_in_yen,
                created_at=created_at,
            )
            self.db.add(awaiting_payment)
            self.db.flush()
            return awaiting_payment
        except IntegrityError as exc:
            self.logger.error("Integrity error creating AwaitingPayment: %s", exc, exc_info=True)
            self.db.rollback()
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating AwaitingPayment: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to create AwaitingPayment: {str(e)}") from e
