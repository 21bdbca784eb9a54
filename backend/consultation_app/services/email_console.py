import logging
from typing import Any, Dict, Optional

from ..core.config import Settings, settings

logger = logging.getLogger(__name__)


class ConsoleEmailService:
    """Email service that only logs, used when no real provider is configured."""

    def __init__(self, config: Settings = settings) -> None:
        self.from_email = config.system_email_address

    def send_email(
        self,
        to_email: str,
        subject: str,
        text_content: str,
        from_email: Optional[str] = None,
    ) -> Dict[str, Any]:
        logger.info(
            "[EMAIL] from=%s to=%s subject=%s\n%s",
            from_email or self.from_email,
            to_email,
            subject,
            text_content,
        )
        return {"id": None, "provider": "console"}
