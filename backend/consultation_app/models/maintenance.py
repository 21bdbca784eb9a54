"""Planned maintenance windows."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Index, Integer

from ..database import Base
from .types import UTCDateTime


class Maintenance(Base):
    """Scheduled downtime during which no consultation may start or run."""

    __tablename__ = "maintenances"
    __table_args__ = (
        CheckConstraint(
            "maintenance_end_at > maintenance_start_at",
            name="ck_maintenances_end_after_start",
        ),
        Index("ix_maintenances_maintenance_end_at", "maintenance_end_at"),
    )

    maintenance_id = Column(Integer, primary_key=True, autoincrement=True)
    maintenance_start_at = Column(UTCDateTime, nullable=False)
    maintenance_end_at = Column(UTCDateTime, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Maintenance {self.maintenance_id} "
            f"{self.maintenance_start_at} - {self.maintenance_end_at}>"
        )
