# backend/consultation_app/repositories/maintenance_repository.py
from datetime import datetime
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.maintenance import Maintenance
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class MaintenanceRepository(BaseRepository[Maintenance]):
    """Read-only access to planned maintenance windows."""

    def __init__(self, db: Session):
        super().__init__(db, Maintenance)

    def filter_maintenance_by_maintenance_end_at(self, current_date_time: datetime) -> List[Maintenance]:
        """Windows that have not finished yet (end >= current), oldest first."""
        try:
            return (
                self.db.query(Maintenance)
                .filter(Maintenance.maintenance_end_at >= current_date_time)
                .order_by(Maintenance.maintenance_start_at)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading upcoming maintenance: {str(e)}")
            raise RepositoryException(f"Failed to load maintenance windows: {str(e)}") from e
