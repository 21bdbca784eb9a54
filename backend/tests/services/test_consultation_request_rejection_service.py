# backend/tests/services/test_consultation_request_rejection_service.py
from datetime import datetime, timedelta
import logging
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from consultation_app.core.exceptions import AcceptanceErrorCode, ConsultationRequestException
from consultation_app.models import ConsultationRequest
from consultation_app.schemas.consultation_request import ConsultationRequestRejectionResult
from consultation_app.services.consultation_request_rejection_service import (
    ConsultationRequestRejectionService,
)

JST = ZoneInfo("Asia/Tokyo")
FIRST = datetime(2022, 4, 7, 15, 0, tzinfo=JST)


@pytest.fixture
def email_service():
    return MagicMock()


@pytest.fixture
def service(db, email_service, test_settings):
    return ConsultationRequestRejectionService(db, email_service=email_service, config=test_settings)


@pytest.fixture
def parties(make_user):
    return make_user("user@test.com"), make_user("consultant@test.com")


@pytest.fixture
def consultation_req(parties, make_consultation_req):
    user, consultant = parties
    return make_consultation_req(
        user.user_account_id,
        consultant.user_account_id,
        FIRST,
        FIRST + timedelta(days=1),
        FIRST + timedelta(days=2),
    )


class TestRejection:
    def test_deletes_request_and_notifies_requester(
        self, db, service, email_service, parties, consultation_req
    ):
        _, consultant = parties

        result = service.reject_consultation_request(
            consultant.user_account_id, consultation_req.consultation_req_id
        )

        assert result == ConsultationRequestRejectionResult()
        assert db.query(ConsultationRequest).count() == 0
        email_service.send_email.assert_called_once()
        kwargs = email_service.send_email.call_args.kwargs
        assert kwargs["to_email"] == "user@test.com"
        assert "相談申し込み拒否通知" in kwargs["subject"]
        assert f"相談申し込み番号: {consultation_req.consultation_req_id}" in kwargs["text_content"]

    def test_deleted_requester_is_not_notified(
        self, db, service, email_service, parties, consultation_req
    ):
        user, consultant = parties
        db.delete(user)
        db.commit()

        service.reject_consultation_request(
            consultant.user_account_id, consultation_req.consultation_req_id
        )

        assert db.query(ConsultationRequest).count() == 0
        email_service.send_email.assert_not_called()

    def test_disabled_requester_is_still_notified(
        self, db, service, email_service, parties, consultation_req
    ):
        user, consultant = parties
        user.disabled_at = FIRST - timedelta(days=3)
        db.commit()

        service.reject_consultation_request(
            consultant.user_account_id, consultation_req.consultation_req_id
        )

        email_service.send_email.assert_called_once()

    def test_email_failure_is_logged(
        self, db, service, email_service, parties, consultation_req, caplog
    ):
        _, consultant = parties
        email_service.send_email.side_effect = RuntimeError("smtp down")

        with caplog.at_level(logging.WARNING):
            service.reject_consultation_request(
                consultant.user_account_id, consultation_req.consultation_req_id
            )

        assert db.query(ConsultationRequest).count() == 0
        assert any("rejection mail" in r.getMessage() for r in caplog.records)


class TestRefusedRejection:
    @pytest.mark.parametrize("consultation_req_id", [0, -5])
    def test_non_positive_id(self, service, parties, consultation_req_id):
        _, consultant = parties
        with pytest.raises(ConsultationRequestException) as exc_info:
            service.reject_consultation_request(consultant.user_account_id, consultation_req_id)
        assert exc_info.value.error_code == AcceptanceErrorCode.NON_POSITIVE_CONSULTATION_REQ_ID

    def test_missing_request(self, service, parties):
        _, consultant = parties
        with pytest.raises(ConsultationRequestException) as exc_info:
            service.reject_consultation_request(consultant.user_account_id, 123)
        assert exc_info.value.error_code == AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND

    def test_request_of_another_consultant(self, db, service, parties, consultation_req):
        user, _ = parties
        with pytest.raises(ConsultationRequestException) as exc_info:
            service.reject_consultation_request(
                user.user_account_id, consultation_req.consultation_req_id
            )
        assert exc_info.value.error_code == AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND
        assert db.query(ConsultationRequest).count() == 1
