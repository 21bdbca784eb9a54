# backend/consultation_app/core/exceptions.py
"""
Domain-specific exceptions for the consultation service.

These exceptions provide clear, business-focused error codes
that can be caught and handled appropriately at the API layer.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)

GENERIC_INTERNAL_ERROR_MESSAGE = "An error occurred processing your request"


class AcceptanceErrorCode(str, Enum):
    """Stable codes reported to callers of consultation request operations."""

    INVALID_CANDIDATE = "INVALID_CANDIDATE"
    USER_DOES_NOT_CHECK_CONFIRMATION_ITEMS = "USER_DOES_NOT_CHECK_CONFIRMATION_ITEMS"
    NON_POSITIVE_CONSULTATION_REQ_ID = "NON_POSITIVE_CONSULTATION_REQ_ID"
    NO_CONSULTATION_REQ_FOUND = "NO_CONSULTATION_REQ_FOUND"
    THE_OTHER_PERSON_ACCOUNT_IS_NOT_AVAILABLE = "THE_OTHER_PERSON_ACCOUNT_IS_NOT_AVAILABLE"
    NO_ENOUGH_SPARE_TIME_BEFORE_MEETING = "NO_ENOUGH_SPARE_TIME_BEFORE_MEETING"
    CONSULTANT_HAS_SAME_MEETING_DATE_TIME = "CONSULTANT_HAS_SAME_MEETING_DATE_TIME"
    USER_HAS_SAME_MEETING_DATE_TIME = "USER_HAS_SAME_MEETING_DATE_TIME"
    MEETING_DATE_TIME_OVERLAPS_MAINTENANCE = "MEETING_DATE_TIME_OVERLAPS_MAINTENANCE"


ACCEPTANCE_ERROR_MESSAGES: Dict[AcceptanceErrorCode, str] = {
    AcceptanceErrorCode.INVALID_CANDIDATE: "The picked candidate must be 1, 2 or 3",
    AcceptanceErrorCode.USER_DOES_NOT_CHECK_CONFIRMATION_ITEMS: (
        "All confirmation items must be checked"
    ),
    AcceptanceErrorCode.NON_POSITIVE_CONSULTATION_REQ_ID: (
        "Consultation request id must be positive"
    ),
    AcceptanceErrorCode.NO_CONSULTATION_REQ_FOUND: "No consultation request found",
    AcceptanceErrorCode.THE_OTHER_PERSON_ACCOUNT_IS_NOT_AVAILABLE: (
        "The other person's account is not available"
    ),
    AcceptanceErrorCode.NO_ENOUGH_SPARE_TIME_BEFORE_MEETING: (
        "There is not enough time left before the meeting"
    ),
    AcceptanceErrorCode.CONSULTANT_HAS_SAME_MEETING_DATE_TIME: (
        "The consultant already has a consultation at this date and time"
    ),
    AcceptanceErrorCode.USER_HAS_SAME_MEETING_DATE_TIME: (
        "The user already has a consultation at this date and time"
    ),
    AcceptanceErrorCode.MEETING_DATE_TIME_OVERLAPS_MAINTENANCE: (
        "The meeting date and time overlaps scheduled maintenance"
    ),
}


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Default conversion to HTTPException (override in subclasses)."""
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=HTTP_422_UNPROCESSABLE,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        # Internal causes stay in the logs
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": GENERIC_INTERNAL_ERROR_MESSAGE,
                "code": "INTERNAL_ERROR",
                "details": {},
            },
        )


# Specific business exceptions


class ConsultationRequestException(BusinessRuleException):
    """
    Raised when a consultation request operation is refused.

    Every user-facing refusal of acceptance or rejection goes through this
    single type; ``code`` is always an ``AcceptanceErrorCode`` member.
    """

    def __init__(
        self,
        error_code: AcceptanceErrorCode,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=ACCEPTANCE_ERROR_MESSAGES[error_code],
            code=error_code.value,
            details=details or {},
        )
        self.error_code = error_code

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
