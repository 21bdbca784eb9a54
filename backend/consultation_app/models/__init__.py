"""
Database models for the consultation service.

The models are organized by functionality:
- Accounts (only what the consultation core reads)
- Pending consultation requests
- Confirmed consultations and their awaiting-payment records
- Planned maintenance windows
"""

from .awaiting_payment import AwaitingPayment
from .consultation import Consultation
from .consultation_request import ConsultationRequest
from .maintenance import Maintenance
from .user import UserAccount

__all__ = [
    "AwaitingPayment",
    "Consultation",
    "ConsultationRequest",
    "Maintenance",
    "UserAccount",
]
