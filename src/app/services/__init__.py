from .unit_of_work import UnitOfWork
from .party_directory import PartyDirectory
from .email_transport import EmailMessage, EmailTransport
from .notification_composer import ComposedNotification, NotificationComposer
from .document_renderer import DocumentRenderer
from .identity_issuer import DocumentIdentityIssuer
from .notification_dispatcher import NotificationDispatcher

__all__ = [
    "UnitOfWork",
    "PartyDirectory",
    "EmailMessage",
    "EmailTransport",
    "ComposedNotification",
    "NotificationComposer",
    "DocumentRenderer",
    "DocumentIdentityIssuer",
    "NotificationDispatcher",
]
