# backend/consultation_app/services/consultation_request_acceptance_service.py
"""
Consultation Request Acceptance Service for the consultation service.

A consultant picks one of the three candidate times of a pending request.
The request is validated, both parties are checked for consultations at the
same time, the time is checked against planned maintenance, and then the
booking transaction turns the request into a consultation. Both parties are
notified by email afterwards; a failed email never undoes the booking.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Optional, Tuple, Union
import uuid

from sqlalchemy.orm import Session

from ..core.config import Settings, settings
from ..core.constants import FIRST_CANDIDATE, SECOND_CANDIDATE, THIRD_CANDIDATE, VALID_CANDIDATES
from ..core.exceptions import (
    AcceptanceErrorCode,
    ConsultationRequestException,
    RepositoryException,
    ServiceException,
)
from ..models.consultation_request import ConsultationRequest
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..schemas.consultation_request import (
    AcceptedConsultation,
    ConsultationRequestAcceptanceParam,
    ConsultationRequestAcceptanceResult,
)
from .base import BaseService
from .booking_transaction import BookingTransaction
from .conflict_checker import ConflictChecker
from .email import EmailService, create_email_service
from .email_console import ConsoleEmailService
from .maintenance_calendar import MaintenanceCalendar
from .notification_templates import (
    CONSULTATION_REQ_ACCEPTED_CONSULTANT,
    CONSULTATION_REQ_ACCEPTED_USER,
    format_japanese_date_time,
)

logger = logging.getLogger(__name__)


def select_meeting_date_time(picked_candidate: int, consultation_req: ConsultationRequest) -> datetime:
    """
    Return the candidate time matching the picked number.

    Raises:
        ServiceException: picked_candidate is not 1, 2 or 3
    """
    if picked_candidate == FIRST_CANDIDATE:
        return consultation_req.first_candidate_date_time
    if picked_candidate == SECOND_CANDIDATE:
        return consultation_req.second_candidate_date_time
    if picked_candidate == THIRD_CANDIDATE:
        return consultation_req.third_candidate_date_time
    raise ServiceException(f"invalid picked_candidate ({picked_candidate})")


class ConsultationRequestAcceptanceService(BaseService):
    """
    Service accepting consultation requests on behalf of consultants.

    Collaborators are injected so tests can swap any one of them; by default
    they are all built on the same session.
    """

    def __init__(
        self,
        db: Session,
        email_service: Optional[Union[EmailService, ConsoleEmailService]] = None,
        config: Settings = settings,
        conflict_checker: Optional[ConflictChecker] = None,
        maintenance_calendar: Optional[MaintenanceCalendar] = None,
        booking_transaction: Optional[BookingTransaction] = None,
    ):
        """
        Initialize acceptance service.

        Args:
            db: Database session
            email_service: Sender used for notifications (EMAIL_PROVIDER default)
            config: Scheduling, display and bank settings
            conflict_checker: Same-time consultation checks
            maintenance_calendar: Maintenance overlap checks
            booking_transaction: Atomic acceptance
        """
        super().__init__(db)
        self.config = config
        self.consultation_request_repository = (
            RepositoryFactory.create_consultation_request_repository(db)
        )
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db)
        self.maintenance_calendar = maintenance_calendar or MaintenanceCalendar(db, config=config)
        self.booking_transaction = booking_transaction or BookingTransaction(
            db, conflict_checker=self.conflict_checker
        )
        self.email_service = email_service or create_email_service(db, config)
        self.min_lead = timedelta(
            seconds=config.min_duration_before_consultation_acceptance_in_seconds
        )

    def accept_consultation_request_now(
        self,
        consultant_id: int,
        consultant_email_address: str,
        param: ConsultationRequestAcceptanceParam,
    ) -> ConsultationRequestAcceptanceResult:
        """Accept using the current time and a freshly generated room name."""
        return self.accept_consultation_request(
            consultant_id=consultant_id,
            consultant_email_address=consultant_email_address,
            param=param,
            current_date_time=datetime.now(timezone.utc),
            room_name=uuid.uuid4().hex,
        )

    @BaseService.measure_operation("accept_consultation_request")
    def accept_consultation_request(
        self,
        consultant_id: int,
        consultant_email_address: str,
        param: ConsultationRequestAcceptanceParam,
        current_date_time: datetime,
        room_name: str,
    ) -> ConsultationRequestAcceptanceResult:
        """
        Accept a pending consultation request.

        Args:
            consultant_id: Authenticated consultant accepting the request
            consultant_email_address: Where the consultant's notification goes
            param: Request id, picked candidate and confirmation flag
            current_date_time: Timezone-aware "now"
            room_name: Meeting room identifier, must parse as a UUID

        Returns:
            ConsultationRequestAcceptanceResult (empty)

        Raises:
            ConsultationRequestException: The acceptance was refused
            ServiceException: Unexpected failure
        """
        try:
            accepted, user_email_address = self._accept(
                consultant_id, param, current_date_time, room_name
            )
        except ConsultationRequestException as exc:
            self.logger.info(
                f"consultation_req acceptance refused (consultant_id: {consultant_id}, "
                f"consultation_req_id: {param.consultation_req_id}): {exc.code}"
            )
            prometheus_metrics.inc_consultation_request_refusal(exc.code)
            raise
        except RepositoryException as exc:
            raise ServiceException(f"Failed to accept consultation_req: {str(exc)}") from exc

        prometheus_metrics.inc_consultation_request_accepted()
        self.log_operation(
            "accept_consultation_request",
            consultant_id=consultant_id,
            consultation_req_id=param.consultation_req_id,
            consultation_id=accepted.consultation_id,
        )

        self._notify_user(param.consultation_req_id, accepted, user_email_address)
        self._notify_consultant(param.consultation_req_id, accepted, consultant_email_address)

        return ConsultationRequestAcceptanceResult()

    def _accept(
        self,
        consultant_id: int,
        param: ConsultationRequestAcceptanceParam,
        current_date_time: datetime,
        room_name: str,
    ) -> Tuple[AcceptedConsultation, str]:
        self._validate_room_name(room_name)
        if current_date_time.tzinfo is None or current_date_time.utcoffset() is None:
            self.logger.error(f"naive current_date_time: {current_date_time!r}")
            raise ServiceException(f"naive current_date_time is not allowed: {current_date_time!r}")
        if param.picked_candidate not in VALID_CANDIDATES:
            raise ConsultationRequestException(
                AcceptanceErrorCode.INVALID_CANDIDATE,
                details={"picked_candidate": param.picked_candidate},
            )
        if not param.user_checked:
            raise ConsultationRequestException(
                AcceptanceErrorCode.USER_DOES_NOT_CHECK_CONFIRMATION_ITEMS
            )
        if param.consultation_req_id <= 0:
            raise ConsultationRequestException(
                AcceptanceErrorCode.NON_POSITIVE_CONSULTATION_REQ_ID,
                details={"consultation_req_id": param.consultation_req_id},
            )

        consultation_req = self._find_consultation_req(
            consultant_id, param.consultation_req_id, current_date_time
        )

        user = self.user_repository.find_user_info_if_available(consultation_req.user_account_id)
        if user is None:
            raise ConsultationRequestException(
                AcceptanceErrorCode.THE_OTHER_PERSON_ACCOUNT_IS_NOT_AVAILABLE
            )

        meeting_date_time = select_meeting_date_time(param.picked_candidate, consultation_req)
        if meeting_date_time <= current_date_time + self.min_lead:
            raise ConsultationRequestException(
                AcceptanceErrorCode.NO_ENOUGH_SPARE_TIME_BEFORE_MEETING,
                details={"meeting_date_time": meeting_date_time.isoformat()},
            )

        self.conflict_checker.ensure_consultant_has_no_same_meeting_date_time(
            consultation_req.consultant_id, meeting_date_time
        )
        self.conflict_checker.ensure_user_has_no_same_meeting_date_time(
            consultation_req.user_account_id, meeting_date_time
        )
        self.maintenance_calendar.ensure_meeting_date_time_does_not_overlap_maintenance(
            current_date_time, meeting_date_time
        )

        accepted = self.booking_transaction.accept_consultation_req(
            consultation_req_id=consultation_req.consultation_req_id,
            meeting_date_time=meeting_date_time,
            room_name=room_name,
            current_date_time=current_date_time,
        )
        return accepted, user.email_address

    def _validate_room_name(self, room_name: str) -> None:
        try:
            uuid.UUID(room_name)
        except (TypeError, ValueError) as exc:
            self.logger.error(f"invalid room_name: {room_name!r}")
            raise ServiceException(f"invalid room_name: {room_name!r}") from exc

    def _find_consultation_req(
        self, consultant_id: int, consultation_req_id: int, current_date_time: datetime
    ) -> ConsultationRequest:
        """
        Load a request the consultant may still accept.

        A request addressed to someone else, or whose latest candidate is too
        close to accept, is reported exactly like a missing one.
        """
        consultation_req = self.consultation_request_repository.find_by_consultation_req_id(
            consultation_req_id
        )
        if consultation_req is None:
            raise ConsultationRequestException(AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND)
        if consultation_req.consultant_id != consultant_id:
            self.logger.warning(
                f"consultant {consultant_id} tried to accept consultation_req "
                f"{consultation_req_id} addressed to consultant {consultation_req.consultant_id}"
            )
            raise ConsultationRequestException(AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND)
        if consultation_req.latest_candidate_date_time <= current_date_time + self.min_lead:
            raise ConsultationRequestException(AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND)
        return consultation_req

    def _notify_user(
        self,
        consultation_req_id: int,
        accepted: AcceptedConsultation,
        user_email_address: str,
    ) -> None:
        try:
            subject, body = CONSULTATION_REQ_ACCEPTED_USER.render(
                consultation_req_id=consultation_req_id,
                consultant_id=accepted.consultant_id,
                fee_per_hour_in_yen=accepted.fee_per_hour_in_yen,
                meeting_date_time=format_japanese_date_time(
                    accepted.meeting_date_time, self.config.display_tz
                ),
                deadline_of_payment_in_days=self.config.deadline_of_payment_in_days,
                bank_name=self.config.bank_name,
                bank_code=self.config.bank_code,
                bank_branch_name=self.config.bank_branch_name,
                bank_branch_code=self.config.bank_branch_code,
                bank_account_type=self.config.bank_account_type,
                bank_account_number=self.config.bank_account_number,
                bank_account_holder_name=self.config.bank_account_holder_name,
                inquiry_email_address=self.config.inquiry_email_address,
                web_site_name=self.config.web_site_name,
            )
            self.email_service.send_email(to_email=user_email_address, subject=subject, text_content=body)
        except Exception as e:
            prometheus_metrics.inc_notification_failure("user")
            self.logger.warning(
                f"failed to send acceptance mail to user {accepted.user_account_id} "
                f"(consultation_req_id: {consultation_req_id}): {str(e)}"
            )

    def _notify_consultant(
        self,
        consultation_req_id: int,
        accepted: AcceptedConsultation,
        consultant_email_address: str,
    ) -> None:
        try:
            subject, body = CONSULTATION_REQ_ACCEPTED_CONSULTANT.render(
                consultation_req_id=consultation_req_id,
                user_account_id=accepted.user_account_id,
                fee_per_hour_in_yen=accepted.fee_per_hour_in_yen,
                meeting_date_time=format_japanese_date_time(
                    accepted.meeting_date_time, self.config.display_tz
                ),
                inquiry_email_address=self.config.inquiry_email_address,
                web_site_name=self.config.web_site_name,
            )
            self.email_service.send_email(
                to_email=consultant_email_address, subject=subject, text_content=body
            )
        except Exception as e:
            prometheus_metrics.inc_notification_failure("consultant")
            self.logger.warning(
                f"failed to send acceptance mail to consultant {accepted.consultant_id} "
                f"(consultation_req_id: {consultation_req_id}): {str(e)}"
            )
