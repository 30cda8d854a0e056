"""Email Transport Interface

Defines the contract for delivering composed notification emails.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str


class EmailTransport(ABC):
    """
    Abstract email transport

    Implementations can deliver via:
    - Logging (development)
    - Email provider HTTP API
    - SMTP
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """
        Deliver a message

        Args:
            message: Composed EmailMessage

        Raises:
            Exception: on any delivery failure
        """
        pass
