# backend/consultation_app/services/booking_transaction.py
"""
Booking Transaction for the consultation service.

Turns a pending request into a consultation in one database transaction:
lock the request row, lock both parties, re-count their consultations at the
meeting time, insert the consultation and its awaiting-payment record, delete
the request. Either all of it is committed or none of it is.
"""

from datetime import datetime
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    AcceptanceErrorCode,
    ConsultationRequestException,
    RepositoryException,
    ServiceException,
)
from ..models.consultation import CONSULTANT_MEETING_AT_CONSTRAINT, USER_MEETING_AT_CONSTRAINT
from ..repositories.factory import RepositoryFactory
from ..schemas.consultation_request import AcceptedConsultation
from .base import BaseService
from .conflict_checker import ConflictChecker

logger = logging.getLogger(__name__)

# SQLite reports the columns instead of the constraint name
_CONSULTANT_MEETING_AT_COLUMNS = "consultations.consultant_id, consultations.meeting_at"
_USER_MEETING_AT_COLUMNS = "consultations.user_account_id, consultations.meeting_at"


class BookingTransaction(BaseService):
    """Atomic request -> consultation + awaiting payment transition."""

    def __init__(self, db: Session, conflict_checker: Optional[ConflictChecker] = None):
        super().__init__(db)
        self.consultation_request_repository = (
            RepositoryFactory.create_consultation_request_repository(db)
        )
        self.consultation_repository = RepositoryFactory.create_consultation_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db)

    @BaseService.measure_operation("accept_consultation_req")
    def accept_consultation_req(
        self,
        consultation_req_id: int,
        meeting_date_time: datetime,
        room_name: str,
        current_date_time: datetime,
    ) -> AcceptedConsultation:
        """
        Accept a request at the chosen meeting time.

        Args:
            consultation_req_id: Request to accept
            meeting_date_time: Candidate picked by the consultant
            room_name: Identifier of the meeting room (UUID hex)
            current_date_time: Now; recorded on the awaiting-payment row

        Returns:
            AcceptedConsultation describing the committed consultation

        Raises:
            ConsultationRequestException: A party got a consultation at the
                same time after the earlier checks ran
            ServiceException: The request vanished or the database failed
        """
        if self.db.in_transaction():
            # End the snapshot opened by the validation reads; they wrote nothing
            self.db.commit()

        try:
            with self.transaction():
                consultation_req = self.consultation_request_repository.get_with_exclusive_lock(
                    consultation_req_id
                )
                if consultation_req is None:
                    self.logger.error(
                        f"no consultation_req (consultation_req_id: {consultation_req_id}) found "
                        "while holding the lock"
                    )
                    raise ServiceException(
                        f"consultation_req {consultation_req_id} disappeared before acceptance"
                    )

                self.user_repository.lock_user_accounts(
                    [consultation_req.consultant_id, consultation_req.user_account_id]
                )
                self.conflict_checker.ensure_consultant_has_no_same_meeting_date_time(
                    consultation_req.consultant_id, meeting_date_time
                )
                self.conflict_checker.ensure_user_has_no_same_meeting_date_time(
                    consultation_req.user_account_id, meeting_date_time
                )

                consultation = self.consultation_repository.create_consultation(
                    user_account_id=consultation_req.user_account_id,
                    consultant_id=consultation_req.consultant_id,
                    meeting_at=meeting_date_time,
                    room_name=room_name,
                )
                self.consultation_repository.create_awaiting_payment(
                    consultation_id=consultation.consultation_id,
                    user_account_id=consultation_req.user_account_id,
                    consultant_id=consultation_req.consultant_id,
                    meeting_at=meeting_date_time,
                    fee_per_hour_in_yen=consultation_req.fee_per_hour_in_yen,
                    created_at=current_date_time,
                )
                self.consultation_request_repository.delete_consultation_req(consultation_req_id)

                accepted = AcceptedConsultation(
                    consultation_id=consultation.consultation_id,
                    user_account_id=consultation_req.user_account_id,
                    consultant_id=consultation_req.consultant_id,
                    fee_per_hour_in_yen=consultation_req.fee_per_hour_in_yen,
                    meeting_date_time=meeting_date_time,
                )
        except RepositoryException as exc:
            if isinstance(exc.__cause__, IntegrityError):
                self._raise_conflict_from_integrity_error(exc.__cause__, consultation_req_id)
            raise ServiceException(f"Failed to accept consultation_req: {str(exc)}") from exc

        self.log_operation(
            "consultation_req_accepted",
            consultation_req_id=consultation_req_id,
            consultation_id=accepted.consultation_id,
        )
        return accepted

    def _resolve_conflict_code(self, integrity_error: IntegrityError) -> Optional[AcceptanceErrorCode]:
        """Map a unique violation on consultations to the party it concerns."""
        constraint_name: str = ""
        orig = getattr(integrity_error, "orig", None)
        diag = getattr(orig, "diag", None)

        if diag is not None:
            constraint_name = getattr(diag, "constraint_name", "") or ""

        text = str(orig) if orig is not None else ""
        if constraint_name == CONSULTANT_MEETING_AT_CONSTRAINT or (
            not constraint_name
            and (CONSULTANT_MEETING_AT_CONSTRAINT in text or _CONSULTANT_MEETING_AT_COLUMNS in text)
        ):
            return AcceptanceErrorCode.CONSULTANT_HAS_SAME_MEETING_DATE_TIME
        if constraint_name == USER_MEETING_AT_CONSTRAINT or (
            not constraint_name
            and (USER_MEETING_AT_CONSTRAINT in text or _USER_MEETING_AT_COLUMNS in text)
        ):
            return AcceptanceErrorCode.USER_HAS_SAME_MEETING_DATE_TIME
        return None

    def _raise_conflict_from_integrity_error(
        self, integrity_error: IntegrityError, consultation_req_id: int
    ) -> None:
        """
        Raise the business error matching a same-time unique violation.

        Returns without raising when the violation is about something else.
        """
        error_code = self._resolve_conflict_code(integrity_error)
        if error_code is None:
            return

        self.logger.warning(
            f"same meeting date time detected by constraint while accepting "
            f"consultation_req {consultation_req_id}: {error_code.value}"
        )
        raise ConsultationRequestException(error_code) from integrity_error
