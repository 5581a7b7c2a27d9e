"""
Contact form relay
Posts contact submissions to the third-party form endpoint (Formspree)
"""
import httpx
from typing import Dict, Optional
import logging

from atlantic_cms.config import CONTACT_FORM_ENDPOINT, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class FormRelayError(Exception):
    """The form endpoint did not accept the submission."""


class FormRelayService:
    def __init__(self, endpoint: str = CONTACT_FORM_ENDPOINT, timeout: float = HTTP_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    async def submit(self, fields: Dict[str, str]) -> None:
        """
        Send fields as a form-encoded POST.

        Only success or failure matters; the response body is not read.
        Raises FormRelayError on any failure.
        """
        if not self.endpoint:
            raise FormRelayError("Contact form endpoint is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.endpoint,
                    data=fields,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Contact form relay timed out after {self.timeout} seconds")
            raise FormRelayError("The form service did not respond in time") from e
        except httpx.HTTPStatusError as http_err:
            logger.error(f"Contact form relay HTTP error: {http_err}")
            raise FormRelayError(f"Submission failed ({http_err.response.status_code})") from http_err
        except httpx.RequestError as req_err:
            logger.error(f"Contact form relay request error: {req_err}")
            raise FormRelayError("Could not reach the form service") from req_err

        logger.info("Contact form submission relayed")


# Singleton instance
_form_relay_service: Optional[FormRelayService] = None


def get_form_relay_service() -> FormRelayService:
    global _form_relay_service

    if _form_relay_service is None:
        _form_relay_service = FormRelayService()

    return _form_relay_service
