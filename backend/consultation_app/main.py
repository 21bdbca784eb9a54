# backend/consultation_app/main.py
"""
Application entry for the consultation service.

Configures logging for the process and exposes the start-up hook that
creates the schema and the metrics payload for whatever server hosts the
services.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.engine import Engine

from .core.config import settings
from .database import Base, engine
from .monitoring.prometheus_metrics import prometheus_metrics

# Register every model on Base.metadata
from . import models  # noqa: F401

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def create_tables(bind: Optional[Engine] = None) -> None:
    """Create any missing tables on the given engine (the application engine by default)."""
    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database schema ready ({target.dialect.name}, environment={settings.environment})")


def metrics_payload() -> Tuple[bytes, str]:
    """Prometheus exposition body and its content type."""
    return prometheus_metrics.get_metrics(), prometheus_metrics.get_content_type()
