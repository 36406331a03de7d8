"""
==============================================================================
Subscription Service Module
==============================================================================

Appends newsletter sign-ups to a CSV file next to the workbook.

File Format:
-----------
    timestamp,name,email,phone,user_agent

The header is written when the file is created. Emails are stored
lower-cased.

==============================================================================
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime, timezone
from typing import Optional

from app.config import Settings, get_settings
from app.core import exceptions
from app.schemas.subscription import SubscribeRequest
from app.utils.validators import EmailValidator


# Module logger
logger = logging.getLogger(__name__)


CSV_HEADER = ("timestamp", "name", "email", "phone", "user_agent")


class SubscriptionService:
    """
    Newsletter subscription writer.

    Attributes:
        _settings: Application settings (subscribers file path)
        _validator: Email validator

    Example:
        >>> service = SubscriptionService()
        >>> service.subscribe(SubscribeRequest(email="Ana@Example.com"), "curl/8")
        'ana@example.com'
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._validator = EmailValidator()

    def subscribe(self, request: SubscribeRequest, user_agent: str = "") -> str:
        """
        Validate and store a subscription.

        Args:
            request: Subscription payload
            user_agent: Caller's User-Agent header

        Returns:
            Normalized email address

        Raises:
            AppException: INVALID_EMAIL or SUBSCRIPTION_FAILED
        """
        is_valid, email, _ = self._validator.validate(request.email)
        if not is_valid:
            raise exceptions.invalid_email(request.email)

        row = (
            datetime.now(timezone.utc).isoformat(),
            request.name,
            email,
            request.phone,
            user_agent or "",
        )

        path = self._settings.subscribers_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            write_header = not path.exists()
            with path.open("a", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                if write_header:
                    writer.writerow(CSV_HEADER)
                writer.writerow(row)
        except OSError as e:
            logger.error(f"Failed to append subscriber to {path}: {e}")
            raise exceptions.subscription_failed(str(e))

        logger.info(f"New subscriber: {email}")
        return email


def get_subscription_service() -> SubscriptionService:
    """FastAPI dependency returning a SubscriptionService."""
    return SubscriptionService()
