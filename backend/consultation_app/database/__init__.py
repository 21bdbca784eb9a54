"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from consultation_app.core.config import settings

logger = logging.getLogger(__name__)

_DEFAULT_POOL_KWARGS: dict[str, Any] = {
    "pool_size": 5,
    "max_overflow": 10,
    "pool_timeout": 10,
    "pool_recycle": 1800,
    "pool_pre_ping": True,
    "future": True,
}

# Each statement reads what was committed before it ran. The booking re-counts
# consultations after locking both parties, so it must see rows committed by
# the transaction that held those locks before it.
_POSTGRES_ISOLATION_LEVEL = "READ COMMITTED"


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Engine options for the configured backend."""

    if db_url.startswith("sqlite"):
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
            "future": True,
        }

    kwargs = dict(_DEFAULT_POOL_KWARGS)
    kwargs["poolclass"] = QueuePool
    kwargs["isolation_level"] = _POSTGRES_ISOLATION_LEVEL
    kwargs["connect_args"] = {
        "connect_timeout": 5,
        "application_name": "consultation_backend",
    }
    return kwargs


def create_app_engine(db_url: str) -> Engine:
    return create_engine(db_url, **_build_engine_kwargs(db_url))


db_url = settings.get_database_url()
engine: Engine = create_app_engine(db_url)


@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
    connection_record.info["connect_time"] = datetime.now()
    logger.debug("Database connection established")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()
