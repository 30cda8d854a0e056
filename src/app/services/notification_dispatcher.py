"""Notification Dispatcher

Single boundary for document notifications. Dispatch is scheduled as a
background task after the state change has been committed; delivery
failures are logged and swallowed, never surfaced to the caller.
"""

import asyncio
import logging
from typing import Set
from src.app.services.email_transport import EmailMessage, EmailTransport
from src.app.services.notification_composer import NotificationComposer
from src.domain.errors import NotificationDispatchError
from src.domain.events import DocumentEvent

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Fire-and-forget notification dispatch

    Usage:
        dispatcher = NotificationDispatcher(composer, transport, "team@agency.example")
        dispatcher.dispatch(DocumentEvent.created(document))

        # On shutdown, let in-flight deliveries finish
        await dispatcher.drain()
    """

    def __init__(
        self,
        composer: NotificationComposer,
        transport: EmailTransport,
        recipient: str,
    ):
        self.composer = composer
        self.transport = transport
        self.recipient = recipient
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def dispatch(self, event: DocumentEvent) -> None:
        """
        Schedule delivery of the notification for an event

        Returns immediately; never raises.

        Args:
            event: DocumentEvent describing a creation or transition
        """
        try:
            loop = asyncio.get_running_loop()
            task = loop.create_task(
                self.deliver(event), name=f"notify:{event.name}:{event.document_id}"
            )
        except RuntimeError as e:
            logger.error(f"Notification '{event.name}' for {event.document_id} not scheduled: {e}")
            return

        # Keep a reference until the task finishes
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def deliver(self, event: DocumentEvent) -> bool:
        """
        Compose and send the notification for an event

        Args:
            event: DocumentEvent to notify about

        Returns:
            True if the transport accepted the message, False otherwise
        """
        try:
            notification = self.composer.compose(event)
            await self.transport.send(
                EmailMessage(
                    to=self.recipient,
                    subject=notification.subject,
                    html=notification.html,
                )
            )
        except Exception as e:
            error = NotificationDispatchError(event.name, str(e))
            logger.error(f"{error.message} (document {event.document_id})")
            return False

        logger.info(f"Notification '{event.name}' sent for document {event.document_id}")
        return True

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
