from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from consultation_app.core.exceptions import ServiceException
from consultation_app.services.consultation_request_acceptance_service import (
    select_meeting_date_time,
)

FIRST = datetime(2022, 4, 7, 6, 0, tzinfo=timezone.utc)
SECOND = datetime(2022, 4, 8, 1, 0, tzinfo=timezone.utc)
THIRD = datetime(2022, 4, 9, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def consultation_req():
    return SimpleNamespace(
        first_candidate_date_time=FIRST,
        second_candidate_date_time=SECOND,
        third_candidate_date_time=THIRD,
    )


@pytest.mark.parametrize("picked, expected", [(1, FIRST), (2, SECOND), (3, THIRD)])
def test_picked_candidate_maps_to_stored_time(consultation_req, picked, expected):
    assert select_meeting_date_time(picked, consultation_req) == expected


@pytest.mark.parametrize("picked", [0, 4, -1])
def test_other_numbers_are_internal_errors(consultation_req, picked):
    with pytest.raises(ServiceException):
        select_meeting_date_time(picked, consultation_req)
