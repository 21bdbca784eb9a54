# backend/consultation_app/repositories/consultation_request_repository.py
"""
ConsultationRequest Repository for the consultation service.

Data access for pending consultation requests: the plain lookup used while
validating an acceptance and the locked re-fetch used inside the booking
transaction.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models.consultation_request import ConsultationRequest
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConsultationRequestRepository(BaseRepository[ConsultationRequest]):
    """Repository for pending consultation requests."""

    def __init__(self, db: Session):
        super().__init__(db, ConsultationRequest)

    def find_by_consultation_req_id(self, consultation_req_id: int) -> Optional[ConsultationRequest]:
        """Look up a pending request without locking it."""
        return self.get_by_id(consultation_req_id)

    def get_with_exclusive_lock(self, consultation_req_id: int) -> Optional[ConsultationRequest]:
        """
        Re-fetch a pending request holding a row lock until the transaction ends.

        Concurrent acceptances of the same request serialise here; the one
        that waits sees no row once the first has committed.
        """
        return self.get_by_id(consultation_req_id, for_update=True)

    def delete_consultation_req(self, consultation_req_id: int) -> bool:
        return self.delete(consultation_req_id)
