from .base import BaseModel, generate_uuid
from .document import (
    BillableDocument,
    DocumentKind,
    DocumentLineItem,
    DocumentStatus,
    DocumentTransition,
)
from .party import Party
from .sequence import DocumentSequence
from .currency import CurrencyFormatter
from .ledger import LineItemLedger, LedgerTotals
from .lifecycle import LifecycleStateMachine, TRANSITION_TABLE
from .events import DocumentEvent, DocumentEventType
from .errors import (
    DocumentError,
    ValidationError,
    InvalidTransitionError,
    AlreadyFinalizedError,
    ConflictError,
    IdentityAllocationError,
    NotificationDispatchError,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "BillableDocument",
    "DocumentKind",
    "DocumentLineItem",
    "DocumentStatus",
    "DocumentTransition",
    "Party",
    "DocumentSequence",
    "CurrencyFormatter",
    "LineItemLedger",
    "LedgerTotals",
    "LifecycleStateMachine",
    "TRANSITION_TABLE",
    "DocumentEvent",
    "DocumentEventType",
    "DocumentError",
    "ValidationError",
    "InvalidTransitionError",
    "AlreadyFinalizedError",
    "ConflictError",
    "IdentityAllocationError",
    "NotificationDispatchError",
]
