# backend/consultation_app/services/consultation_request_rejection_service.py
"""
Consultation Request Rejection Service for the consultation service.

A consultant declines a pending request as a whole. The request is deleted
and the requester is told by email, unless their account no longer exists.
"""

import logging
from typing import Optional, Union

from sqlalchemy.orm import Session

from ..core.config import Settings, settings
from ..core.exceptions import (
    AcceptanceErrorCode,
    ConsultationRequestException,
    RepositoryException,
    ServiceException,
)
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..schemas.consultation_request import ConsultationRequestRejectionResult
from .base import BaseService
from .email import EmailService, create_email_service
from .email_console import ConsoleEmailService
from .notification_templates import CONSULTATION_REQ_REJECTED_USER

logger = logging.getLogger(__name__)


class ConsultationRequestRejectionService(BaseService):
    """Service rejecting consultation requests on behalf of consultants."""

    def __init__(
        self,
        db: Session,
        email_service: Optional[Union[EmailService, ConsoleEmailService]] = None,
        config: Settings = settings,
    ):
        super().__init__(db)
        self.config = config
        self.consultation_request_repository = (
            RepositoryFactory.create_consultation_request_repository(db)
        )
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.email_service = email_service or create_email_service(db, config)

    @BaseService.measure_operation("reject_consultation_request")
    def reject_consultation_request(
        self, consultant_id: int, consultation_req_id: int
    ) -> ConsultationRequestRejectionResult:
        """
        Reject a pending consultation request.

        Args:
            consultant_id: Authenticated consultant rejecting the request
            consultation_req_id: Request to reject

        Returns:
            ConsultationRequestRejectionResult (empty)

        Raises:
            ConsultationRequestException: NON_POSITIVE_CONSULTATION_REQ_ID or
                NO_CONSULTATION_REQ_FOUND
            ServiceException: Unexpected failure
        """
        try:
            user_account_id = self._reject(consultant_id, consultation_req_id)
        except ConsultationRequestException as exc:
            prometheus_metrics.inc_consultation_request_refusal(exc.code)
            raise
        except RepositoryException as exc:
            raise ServiceException(f"Failed to reject consultation_req: {str(exc)}") from exc

        prometheus_metrics.inc_consultation_request_rejected()
        self.log_operation(
            "reject_consultation_request",
            consultant_id=consultant_id,
            consultation_req_id=consultation_req_id,
        )

        self._notify_user_if_exists(user_account_id, consultation_req_id)
        return ConsultationRequestRejectionResult()

    def _reject(self, consultant_id: int, consultation_req_id: int) -> int:
        if consultation_req_id <= 0:
            raise ConsultationRequestException(
                AcceptanceErrorCode.NON_POSITIVE_CONSULTATION_REQ_ID,
                details={"consultation_req_id": consultation_req_id},
            )

        consultation_req = self.consultation_request_repository.find_by_consultation_req_id(
            consultation_req_id
        )
        if consultation_req is None or consultation_req.consultant_id != consultant_id:
            raise ConsultationRequestException(AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND)

        with self.transaction():
            deleted = self.consultation_request_repository.delete_consultation_req(
                consultation_req_id
            )
            if not deleted:
                # Accepted or rejected concurrently
                raise ConsultationRequestException(AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND)

        return consultation_req.user_account_id

    def _notify_user_if_exists(self, user_account_id: int, consultation_req_id: int) -> None:
        try:
            # A missing account was deleted; disabled accounts are still told
            user = self.user_repository.get_by_id(user_account_id)
            if user is None:
                return
            subject, body = CONSULTATION_REQ_REJECTED_USER.render(
                consultation_req_id=consultation_req_id,
                inquiry_email_address=self.config.inquiry_email_address,
                web_site_name=self.config.web_site_name,
            )
            self.logger.info(
                f"send consultation request rejection mail (consultation_req_id: "
                f"{consultation_req_id}) to user {user_account_id}"
            )
            self.email_service.send_email(to_email=user.email_address, subject=subject, text_content=body)
        except Exception as e:
            prometheus_metrics.inc_notification_failure("user")
            self.logger.warning(
                f"failed to send rejection mail to user {user_account_id} "
                f"(consultation_req_id: {consultation_req_id}): {str(e)}"
            )
