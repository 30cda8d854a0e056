from .unit_of_work import SqlAlchemyUnitOfWork
from .email_transport import (
    LoggingEmailTransport,
    WebhookEmailTransport,
    create_email_transport,
)
from .notification_composer import JinjaNotificationComposer
from .document_renderer import ReportLabDocumentRenderer

__all__ = [
    "SqlAlchemyUnitOfWork",
    "LoggingEmailTransport",
    "WebhookEmailTransport",
    "create_email_transport",
    "JinjaNotificationComposer",
    "ReportLabDocumentRenderer",
]
