# backend/consultation_app/schemas/consultation_request.py
"""
Schemas for accepting and rejecting consultation requests.

Field values are range-checked by the services rather than by pydantic so
that each bad value is reported with its own stable error code.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Forbid extras, validate defaults and assignments."""

    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        validate_assignment=True,
    )


class ConsultationRequestAcceptanceParam(StrictModel):
    """What the consultant submits when accepting a request."""

    consultation_req_id: int
    picked_candidate: int
    user_checked: bool


class ConsultationRequestAcceptanceResult(StrictModel):
    """Empty on success; the caller only needs to know nothing was raised."""


class ConsultationRequestRejectionParam(StrictModel):
    consultation_req_id: int


class ConsultationRequestRejectionResult(StrictModel):
    pass


class AcceptedConsultation(StrictModel):
    """Outcome of a committed booking transaction."""

    model_config = ConfigDict(frozen=True)

    consultation_id: int
    user_account_id: int
    consultant_id: int
    fee_per_hour_in_yen: int
    meeting_date_time: datetime
