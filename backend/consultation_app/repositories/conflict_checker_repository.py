# backend/consultation_app/repositories/conflict_checker_repository.py
"""
ConflictChecker Repository for the consultation service.

A party may appear on either side of a consultation, so every conflict
question is asked twice: once against the user side and once against the
consultant side. Meetings start on the hour and last a fixed length, which
makes exact equality on ``meeting_at`` sufficient.
"""

from datetime import datetime
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.consultation import Consultation
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConflictCheckerRepository(BaseRepository[Consultation]):
    """Repository for consultation conflict queries."""

    def __init__(self, db: Session):
        """Initialize with Consultation model as primary."""
        super().__init__(db, Consultation)
        self.logger = logging.getLogger(__name__)

    def count_user_side_consultation(self, user_account_id: int, meeting_at: datetime) -> int:
        """
        Count consultations where the party is the requesting user.

        Args:
            user_account_id: Party to check
            meeting_at: Exact meeting start

        Returns:
            Number of consultations at that start time
        """
        try:
            return (
                self.db.query(Consultation)
                .filter(
                    Consultation.user_account_id == user_account_id,
                    Consultation.meeting_at == meeting_at,
                )
                .count()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting user side consultations: {str(e)}")
            raise RepositoryException(f"Failed to count user side consultations: {str(e)}") from e

    def count_consultant_side_consultation(self, consultant_id: int, meeting_at: datetime) -> int:
        """
        Count consultations where the party is the consultant.

        Args:
            consultant_id: Party to check
            meeting_at: Exact meeting start

        Returns:
            Number of consultations at that start time
        """
        try:
            return (
                self.db.query(Consultation)
                .filter(
                    Consultation.consultant_id == consultant_id,
                    Consultation.meeting_at == meeting_at,
                )
                .count()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting consultant side consultations: {str(e)}")
            raise RepositoryException(
                f"Failed to count consultant side consultations: {str(e)}"
            ) from e
