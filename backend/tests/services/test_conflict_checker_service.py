from datetime import datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from consultation_app.core.exceptions import AcceptanceErrorCode, ConsultationRequestException
from consultation_app.services.conflict_checker import ConflictChecker

MEETING_AT = datetime(2022, 4, 7, 15, 0, tzinfo=ZoneInfo("Asia/Tokyo"))


@pytest.fixture
def repository():
    repository = MagicMock()
    repository.count_consultant_side_consultation.return_value = 0
    repository.count_user_side_consultation.return_value = 0
    return repository


class TestConflictChecker:
    def test_consultant_checks_consultant_side_first(self, repository):
        manager = MagicMock()
        manager.attach_mock(repository, "repository")

        ConflictChecker(MagicMock(), repository).ensure_consultant_has_no_same_meeting_date_time(
            2, MEETING_AT
        )

        assert [c[0] for c in manager.mock_calls] == [
            "repository.count_consultant_side_consultation",
            "repository.count_user_side_consultation",
        ]

    def test_user_checks_user_side_first(self, repository):
        manager = MagicMock()
        manager.attach_mock(repository, "repository")

        ConflictChecker(MagicMock(), repository).ensure_user_has_no_same_meeting_date_time(
            1, MEETING_AT
        )

        assert [c[0] for c in manager.mock_calls] == [
            "repository.count_user_side_consultation",
            "repository.count_consultant_side_consultation",
        ]

    def test_stops_at_first_hit(self, repository):
        repository.count_consultant_side_consultation.return_value = 1

        with pytest.raises(ConsultationRequestException) as exc_info:
            ConflictChecker(MagicMock(), repository).ensure_consultant_has_no_same_meeting_date_time(
                2, MEETING_AT
            )

        assert exc_info.value.error_code == AcceptanceErrorCode.CONSULTANT_HAS_SAME_MEETING_DATE_TIME
        assert exc_info.value.details == {"party_id": 2, "side": "consultant"}
        repository.count_user_side_consultation.assert_not_called()

    def test_user_conflict_on_consultant_side(self, repository):
        repository.count_consultant_side_consultation.return_value = 2

        with pytest.raises(ConsultationRequestException) as exc_info:
            ConflictChecker(MagicMock(), repository).ensure_user_has_no_same_meeting_date_time(
                1, MEETING_AT
            )

        assert exc_info.value.error_code == AcceptanceErrorCode.USER_HAS_SAME_MEETING_DATE_TIME
