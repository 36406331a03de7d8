"""
==============================================================================
Webhook Notifier Module
==============================================================================

Fire-and-forget POST of lead payloads to the Kommo CRM webhook.

The notifier never raises: failures are logged and reported in the
returned status dict so callers running it as a background task are not
affected.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.config import Settings, get_settings


# Module logger
logger = logging.getLogger(__name__)


class KommoNotifier:
    """
    Outbound webhook client.

    Example:
        >>> notifier = KommoNotifier()
        >>> await notifier.post({"email": "ana@example.com"})
        {'ok': False, 'reason': 'no_webhook'}
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        """
        Initialize the notifier.

        Args:
            settings: Settings holding the webhook URL and timeout
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._settings = settings or get_settings()
        self._transport = transport

    async def post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Post a JSON payload to the webhook.

        Returns:
            {"ok": bool, "status": int} or {"ok": False, "reason": str}
        """
        if not self._settings.webhook_enabled:
            return {"ok": False, "reason": "no_webhook"}

        timeout = httpx.Timeout(self._settings.webhook_timeout_seconds)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(self._settings.kommo_webhook_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Kommo webhook error: {e}")
            return {"ok": False, "reason": str(e)}

        if response.is_error:
            logger.warning(f"Kommo webhook answered {response.status_code}")
        return {"ok": not response.is_error, "status": response.status_code}
