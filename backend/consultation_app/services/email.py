# backend/consultation_app/services/email.py
"""
Email Service for the consultation service.

Sends plain-text transactional email through the Resend API. Extends
BaseService for metrics collection and standardized error handling.
"""

import logging
from typing import Any, Dict, Optional, Union

import resend
from sqlalchemy.orm import Session

from ..core.config import Settings, settings
from ..core.exceptions import ServiceException
from .base import BaseService
from .email_console import ConsoleEmailService

logger = logging.getLogger(__name__)


class EmailService(BaseService):
    """
    Service for sending emails using Resend API.

    Extends BaseService for consistent architecture, metrics collection,
    and standardized error handling. Uses dependency injection pattern.
    """

    def __init__(self, db: Session, config: Settings = settings):
        """
        Initialize email service with dependencies.

        Args:
            db: Database session (required by BaseService)
            config: Settings providing the API key and sender address
        """
        super().__init__(db)

        api_key = config.resend_api_key.get_secret_value() if config.resend_api_key else None
        if not api_key:
            raise ServiceException("Resend API key not configured")

        resend.api_key = api_key
        self.from_email = config.system_email_address

        self.logger.info("EmailService initialized successfully")

    @BaseService.measure_operation("send_email")
    def send_email(
        self,
        to_email: str,
        subject: str,
        text_content: str,
        from_email: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a plain-text email using Resend.

        Args:
            to_email: Recipient email address
            subject: Email subject
            text_content: Body of the email
            from_email: Optional sender email (defaults to settings)

        Returns:
            Dict containing the Resend API response

        Raises:
            ServiceException: If email sending fails
        """
        try:
            email_data = {
                "from": from_email or self.from_email,
                "to": to_email,
                "subject": subject,
                "text": text_content,
            }

            response = resend.Emails.send(email_data)

            self.logger.info(f"Email sent successfully to {to_email} - Subject: {subject}")
            self.log_operation("email_sent", to_email=to_email, subject=subject)

            return response

        except Exception as e:
            error_msg = str(e) if e else "Unknown error"
            self.logger.error(f"Failed to send email to {to_email}: {error_msg}")
            self.logger.error(f"Exception type: {type(e).__name__}")
            self.log_operation("email_failed", to_email=to_email, subject=subject, error=error_msg)
            raise ServiceException(f"Email sending failed: {error_msg}") from e


def create_email_service(
    db: Session, config: Settings = settings
) -> Union[EmailService, ConsoleEmailService]:
    """Pick the email backend named by EMAIL_PROVIDER."""
    if config.email_provider == "resend":
        return EmailService(db, config)
    return ConsoleEmailService(config)
