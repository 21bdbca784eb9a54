# backend/consultation_app/services/maintenance_calendar.py
"""
Maintenance Calendar Service for the consultation service.

A consultation may not overlap a planned maintenance window. Intervals are
half-open, so a meeting that ends exactly when maintenance starts (or starts
exactly when it ends) is fine.
"""

from datetime import datetime, timedelta
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.config import Settings, settings
from ..core.exceptions import AcceptanceErrorCode, ConsultationRequestException
from ..repositories.factory import RepositoryFactory
from ..repositories.maintenance_repository import MaintenanceRepository
from .base import BaseService

logger = logging.getLogger(__name__)


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """True when [a_start, a_end) and [b_start, b_end) share any instant."""
    return b_end > a_start and a_end > b_start


class MaintenanceCalendar(BaseService):
    """Service rejecting meeting times that collide with maintenance."""

    def __init__(
        self,
        db: Session,
        repository: Optional[MaintenanceRepository] = None,
        config: Settings = settings,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_maintenance_repository(db)
        self.length_of_meeting = timedelta(minutes=config.length_of_meeting_in_minute)

    def ensure_meeting_date_time_does_not_overlap_maintenance(
        self, current_date_time: datetime, meeting_date_time: datetime
    ) -> None:
        """
        Refuse a meeting that overlaps any maintenance not yet finished.

        Args:
            current_date_time: Now; windows that ended before it are ignored
            meeting_date_time: Meeting start; the meeting lasts the configured length

        Raises:
            ConsultationRequestException: MEETING_DATE_TIME_OVERLAPS_MAINTENANCE
        """
        meeting_end = meeting_date_time + self.length_of_meeting
        maintenances = self.repository.filter_maintenance_by_maintenance_end_at(current_date_time)

        for maintenance in maintenances:
            if intervals_overlap(
                maintenance.maintenance_start_at,
                maintenance.maintenance_end_at,
                meeting_date_time,
                meeting_end,
            ):
                self.logger.info(
                    f"meeting ({meeting_date_time.isoformat()} - {meeting_end.isoformat()}) "
                    f"overlaps maintenance {maintenance.maintenance_id}"
                )
                raise ConsultationRequestException(
                    AcceptanceErrorCode.MEETING_DATE_TIME_OVERLAPS_MAINTENANCE,
                    details={"maintenance_id": maintenance.maintenance_id},
                )
