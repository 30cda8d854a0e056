"""Notification Composer Interface

Turns a document event into the subject and HTML body of a notification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from src.domain.events import DocumentEvent


@dataclass(frozen=True)
class ComposedNotification:
    subject: str
    html: str


class NotificationComposer(ABC):
    """
    Abstract notification composer

    Implementations must HTML-escape every caller-supplied string
    (titles, notes, client names) before interpolating it.
    """

    @abstractmethod
    def compose(self, event: DocumentEvent) -> ComposedNotification:
        """
        Compose the notification for an event

        Args:
            event: DocumentEvent to describe

        Returns:
            ComposedNotification with subject and HTML body
        """
        pass
