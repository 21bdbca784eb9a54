# backend/tests/conftest.py
"""
Pytest configuration for the consultation service.

Every test gets its own in-memory SQLite database with the full schema, so
services are free to commit. Real email is never sent: resend is patched
globally and the default provider is the console one.
"""

from datetime import datetime
import os
import sys

# Set testing mode BEFORE any app imports
os.environ["is_testing"] = "true"
os.environ["EMAIL_PROVIDER"] = "console"

# Mock Resend API globally to prevent real emails in ANY test
import unittest.mock

global_resend_mock = unittest.mock.patch("resend.Emails.send")
mocked_send = global_resend_mock.start()
mocked_send.return_value = {"id": "test-email-id", "status": "sent"}

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from typing import Callable, Optional
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from consultation_app.core.config import Settings
from consultation_app.database import Base
import consultation_app.models  # noqa: F401
from consultation_app.models import (
    Consultation,
    ConsultationRequest,
    Maintenance,
    UserAccount,
)

JST = ZoneInfo("Asia/Tokyo")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    """Session on a fresh database; services may commit freely."""
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        min_duration_before_consultation_acceptance_in_seconds=6 * 60 * 60,
        length_of_meeting_in_minute=60,
        display_timezone="Asia/Tokyo",
        email_provider="console",
        inquiry_email_address="inquiry@test.com",
        system_email_address="admin-no-reply@test.com",
        bank_name="テスト銀行",
        bank_code="0001",
        bank_branch_name="本店",
        bank_branch_code="001",
        bank_account_number="1234567",
        bank_account_holder_name="テスト株式会社",
        deadline_of_payment_in_days=3,
    )


@pytest.fixture
def make_user(db) -> Callable[..., UserAccount]:
    def _make_user(email_address: str, disabled_at: Optional[datetime] = None) -> UserAccount:
        user = UserAccount(email_address=email_address, disabled_at=disabled_at)
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_consultation_req(db) -> Callable[..., ConsultationRequest]:
    def _make_consultation_req(
        user_account_id: int,
        consultant_id: int,
        first: datetime,
        second: datetime,
        third: datetime,
        fee_per_hour_in_yen: int = 5000,
    ) -> ConsultationRequest:
        consultation_req = ConsultationRequest(
            user_account_id=user_account_id,
            consultant_id=consultant_id,
            first_candidate_date_time=first,
            second_candidate_date_time=second,
            third_candidate_date_time=third,
            latest_candidate_date_time=max(first, second, third),
            charge_id="ch_fa990a4c10672a93053a774730b0a",
            fee_per_hour_in_yen=fee_per_hour_in_yen,
        )
        db.add(consultation_req)
        db.commit()
        return consultation_req

    return _make_consultation_req


@pytest.fixture
def make_consultation(db) -> Callable[..., Consultation]:
    counter = {"n": 0}

    def _make_consultation(user_account_id: int, consultant_id: int, meeting_at: datetime) -> Consultation:
        counter["n"] += 1
        consultation = Consultation(
            user_account_id=user_account_id,
            consultant_id=consultant_id,
            meeting_at=meeting_at,
            room_name=f"{counter['n']:032x}",
        )
        db.add(consultation)
        db.commit()
        return consultation

    return _make_consultation


@pytest.fixture
def make_maintenance(db) -> Callable[..., Maintenance]:
    def _make_maintenance(start: datetime, end: datetime) -> Maintenance:
        maintenance = Maintenance(maintenance_start_at=start, maintenance_end_at=end)
        db.add(maintenance)
        db.commit()
        return maintenance

    return _make_maintenance


def pytest_sessionfinish(session, exitstatus):
    """Cleanup after all tests are done."""
    global_resend_mock.stop()
