"""Unit tests for NotificationDispatcher

Tests cover:
- dispatch() returns before delivery completes
- Transport and composer failures are logged and swallowed
- drain() waits for in-flight deliveries
"""

import asyncio
import logging
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.email_transport import EmailMessage, EmailTransport
from src.app.services.notification_composer import ComposedNotification
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.domain.events import DocumentEvent, DocumentEventType


class SlowTransport(EmailTransport):
    def __init__(self):
        self.release = asyncio.Event()
        self.sent = []

    async def send(self, message: EmailMessage) -> None:
        await self.release.wait()
        self.sent.append(message)


@pytest.fixture
def event():
    return DocumentEvent(
        event_type=DocumentEventType.TRANSITIONED,
        document_id="doc-1",
        kind="contract",
        number="CON-2026-000003",
        status="accepted",
        currency="INR",
        total=Decimal("50000.00"),
        title="Retainer 2026",
        previous_status="sent",
        note="Approved",
    )


@pytest.fixture
def composer():
    composer = MagicMock()
    composer.compose = MagicMock(
        return_value=ComposedNotification(subject="Contract Accepted: Retainer 2026", html="<p>ok</p>")
    )
    return composer


@pytest.mark.asyncio
class TestDispatch:
    async def test_dispatch_does_not_wait_for_delivery(self, composer, event):
        transport = SlowTransport()
        dispatcher = NotificationDispatcher(composer, transport, "team@agency.example")

        dispatcher.dispatch(event)

        # Delivery is blocked on the transport, dispatch already returned
        assert dispatcher.pending_count == 1
        assert transport.sent == []

        transport.release.set()
        await dispatcher.drain()

        assert dispatcher.pending_count == 0
        assert transport.sent == [
            EmailMessage(
                to="team@agency.example",
                subject="Contract Accepted: Retainer 2026",
                html="<p>ok</p>",
            )
        ]

    async def test_transport_failure_is_swallowed_and_logged(self, composer, event, caplog):
        transport = MagicMock()
        transport.send = AsyncMock(side_effect=ConnectionError("smtp down"))
        dispatcher = NotificationDispatcher(composer, transport, "team@agency.example")

        with caplog.at_level(logging.ERROR):
            dispatcher.dispatch(event)
            await dispatcher.drain()

        assert "contract.accepted" in caplog.text
        assert "smtp down" in caplog.text

    async def test_composer_failure_is_swallowed(self, event):
        composer = MagicMock()
        composer.compose = MagicMock(side_effect=KeyError("template"))
        transport = MagicMock()
        transport.send = AsyncMock()
        dispatcher = NotificationDispatcher(composer, transport, "team@agency.example")

        delivered = await dispatcher.deliver(event)

        assert delivered is False
        transport.send.assert_not_called()

    async def test_deliver_reports_success(self, composer, event):
        transport = MagicMock()
        transport.send = AsyncMock()
        dispatcher = NotificationDispatcher(composer, transport, "team@agency.example")

        assert await dispatcher.deliver(event) is True
        composer.compose.assert_called_once_with(event)


class TestDispatchWithoutLoop:
    def test_dispatch_outside_event_loop_does_not_raise(self, composer, event):
        transport = MagicMock()
        dispatcher = NotificationDispatcher(composer, transport, "team@agency.example")

        dispatcher.dispatch(event)

        assert dispatcher.pending_count == 0
