# backend/consultation_app/services/conflict_checker.py
"""
Conflict Checker Service for the consultation service.

Makes sure neither party of a request already has a consultation starting at
the chosen time. A party can be a consultant in one consultation and a user
in another, so each party is checked in both roles.
"""

from datetime import datetime
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.exceptions import AcceptanceErrorCode, ConsultationRequestException
from ..repositories.conflict_checker_repository import ConflictCheckerRepository
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class ConflictChecker(BaseService):
    """
    Service for checking same-time consultations of both parties.

    All queries go through ConflictCheckerRepository; this class only owns
    the order of the lookups and the error each one maps to.
    """

    def __init__(self, db: Session, repository: Optional[ConflictCheckerRepository] = None):
        """Initialize conflict checker service."""
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_conflict_checker_repository(db)

    def ensure_consultant_has_no_same_meeting_date_time(
        self, consultant_id: int, meeting_date_time: datetime
    ) -> None:
        """
        Refuse when the consultant already meets someone at this time.

        Checks the consultant side first, then the user side.

        Raises:
            ConsultationRequestException: CONSULTANT_HAS_SAME_MEETING_DATE_TIME
        """
        self._ensure_no_consultation(
            consultant_id,
            meeting_date_time,
            AcceptanceErrorCode.CONSULTANT_HAS_SAME_MEETING_DATE_TIME,
            consultant_side_first=True,
        )

    def ensure_user_has_no_same_meeting_date_time(
        self, user_account_id: int, meeting_date_time: datetime
    ) -> None:
        """
        Refuse when the requester already has a consultation at this time.

        Checks the user side first, then the consultant side.

        Raises:
            ConsultationRequestException: USER_HAS_SAME_MEETING_DATE_TIME
        """
        self._ensure_no_consultation(
            user_account_id,
            meeting_date_time,
            AcceptanceErrorCode.USER_HAS_SAME_MEETING_DATE_TIME,
            consultant_side_first=False,
        )

    def _ensure_no_consultation(
        self,
        party_id: int,
        meeting_date_time: datetime,
        error_code: AcceptanceErrorCode,
        consultant_side_first: bool,
    ) -> None:
        lookups = [
            ("consultant", self.repository.count_consultant_side_consultation),
            ("user", self.repository.count_user_side_consultation),
        ]
        if not consultant_side_first:
            lookups.reverse()

        for side, count_consultation in lookups:
            count = count_consultation(party_id, meeting_date_time)
            if count != 0:
                self.logger.info(
                    f"party {party_id} already has {count} consultation(s) as {side} "
                    f"at {meeting_date_time.isoformat()}"
                )
                raise ConsultationRequestException(
                    error_code,
                    details={"party_id": party_id, "side": side},
                )
