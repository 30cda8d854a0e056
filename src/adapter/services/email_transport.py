"""Email Transport Implementations

Provides concrete implementations for delivering notification emails.
"""

import logging
from typing import Optional
import httpx
from src.app.services.email_transport import EmailMessage, EmailTransport

logger = logging.getLogger(__name__)


class LoggingEmailTransport(EmailTransport):
    """
    Email transport that logs messages instead of sending them

    Useful for development and testing, or when no provider is configured.
    """

    async def send(self, message: EmailMessage) -> None:
        logger.info(f"[EMAIL] To: {message.to}, Subject: {message.subject}")


class WebhookEmailTransport(EmailTransport):
    """
    Email transport that posts messages to an email provider HTTP API

    Sends a JSON payload ``{from, to, subject, html}`` with a bearer key.
    """

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str],
        sender: str,
        timeout: float = 10.0,
    ):
        """
        Initialize webhook email transport

        Args:
            api_url: Provider endpoint to POST messages to
            api_key: Bearer key for the provider, if it requires one
            sender: From address
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout

    async def send(self, message: EmailMessage) -> None:
        """
        Post a message to the provider

        Raises:
            httpx.HTTPError: on transport failure or non-2xx response
        """
        payload = {
            "from": self.sender,
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
        }
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.api_url, json=payload, headers=headers)
            response.raise_for_status()

        logger.debug(f"Email '{message.subject}' accepted by {self.api_url}")


def create_email_transport(
    api_url: Optional[str] = None,
    api_key: Optional[str] = None,
    sender: str = "notifications@localhost",
) -> EmailTransport:
    """
    Factory function to create the configured email transport

    Args:
        api_url: Optional provider URL. If provided, messages are posted
                 to it; otherwise they are only logged.
        api_key: Optional provider key
        sender: From address

    Returns:
        Configured EmailTransport
    """
    if api_url:
        return WebhookEmailTransport(api_url, api_key, sender)
    return LoggingEmailTransport()
