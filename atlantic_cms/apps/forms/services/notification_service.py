"""
Creator application notification relay
Best-effort call to the email-sending function; never fails the caller
"""
import httpx
from typing import Any, Dict, Optional
import logging

from atlantic_cms.config import CREATOR_NOTIFICATION_URL, HTTP_TIMEOUT, get_supabase_token

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """The notification function rejected or never received the call."""


class CreatorNotificationService:
    def __init__(self, url: str = CREATOR_NOTIFICATION_URL, timeout: float = HTTP_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def send(self, payload: Dict[str, Any]) -> None:
        """
        Call the notification function. Raises NotificationError on failure.
        """
        if not self.url:
            raise NotificationError("Creator notification URL not configured")

        headers = {"Content-Type": "application/json"}
        try:
            headers["Authorization"] = f"Bearer {get_supabase_token()}"
        except ValueError:
            logger.debug("No Supabase token configured, calling without Authorization")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as http_err:
            raise NotificationError(f"Notification HTTP error: {http_err}") from http_err
        except httpx.RequestError as req_err:
            raise NotificationError(f"Notification request error: {req_err}") from req_err

    async def notify(self, payload: Dict[str, Any]) -> bool:
        """
        Fire-and-forget wrapper around send(): failures are logged, not raised.

        Returns:
            True when the notification went out
        """
        try:
            await self.send(payload)
        except NotificationError as e:
            logger.warning(f"Creator notification not sent: {e}")
            return False
        except Exception as e:
            logger.warning(f"Creator notification unexpected error: {e}")
            return False

        logger.info(f"Creator notification sent for {payload.get('email')}")
        return True


# Singleton instance
_notification_service: Optional[CreatorNotificationService] = None


def get_notification_service() -> CreatorNotificationService:
    global _notification_service

    if _notification_service is None:
        _notification_service = CreatorNotificationService()

    return _notification_service
