"""Document Lifecycle State Machine

Status changes for every document kind go through one table-driven
machine. Each kind declares its legal edges once, below; a status with
no outgoing edges is terminal.
"""

from datetime import datetime
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional
from src.domain.document import (
    BillableDocument,
    DocumentKind,
    DocumentStatus,
    DocumentTransition,
)
from src.domain.errors import AlreadyFinalizedError, InvalidTransitionError

S = DocumentStatus

TRANSITION_TABLE: Mapping[DocumentKind, Mapping[DocumentStatus, FrozenSet[DocumentStatus]]] = MappingProxyType({
    DocumentKind.INVOICE: MappingProxyType({
        S.DRAFT: frozenset({S.SENT}),
        S.SENT: frozenset({S.PAID, S.PARTIAL, S.OVERDUE, S.CANCELLED}),
        S.PARTIAL: frozenset({S.PAID, S.OVERDUE}),
        S.PAID: frozenset(),
        S.OVERDUE: frozenset(),
        S.CANCELLED: frozenset(),
    }),
    DocumentKind.PROPOSAL: MappingProxyType({
        S.DRAFT: frozenset({S.SENT}),
        S.SENT: frozenset({S.ACCEPTED, S.REJECTED}),
        S.ACCEPTED: frozenset(),
        S.REJECTED: frozenset(),
    }),
    DocumentKind.CONTRACT: MappingProxyType({
        S.DRAFT: frozenset({S.SENT}),
        S.SENT: frozenset({S.ACCEPTED, S.REJECTED, S.EDIT_REQUESTED}),
        S.EDIT_REQUESTED: frozenset({S.SENT}),
        S.ACCEPTED: frozenset(),
        S.REJECTED: frozenset(),
    }),
})

# Statuses whose note is the client's feedback on the document
FEEDBACK_STATUSES = frozenset({S.ACCEPTED, S.REJECTED, S.EDIT_REQUESTED})

# Statuses in which line items and terms may still be edited
EDITABLE_STATUSES: Mapping[DocumentKind, FrozenSet[DocumentStatus]] = MappingProxyType({
    DocumentKind.INVOICE: frozenset({S.DRAFT}),
    DocumentKind.PROPOSAL: frozenset({S.DRAFT}),
    DocumentKind.CONTRACT: frozenset({S.DRAFT, S.EDIT_REQUESTED}),
})


class LifecycleStateMachine:
    """Validates and applies status transitions per kind"""

    def __init__(self, table: Mapping[DocumentKind, Mapping[DocumentStatus, FrozenSet[DocumentStatus]]] = TRANSITION_TABLE):
        self.table = table

    def states(self, kind: DocumentKind) -> FrozenSet[DocumentStatus]:
        return frozenset(self.table[DocumentKind(kind)])

    def allowed_transitions(self, kind: DocumentKind, status: DocumentStatus) -> FrozenSet[DocumentStatus]:
        edges = self.table[DocumentKind(kind)]
        status = DocumentStatus(status)
        if status not in edges:
            return frozenset()
        return edges[status]

    def is_terminal(self, kind: DocumentKind, status: DocumentStatus) -> bool:
        status = DocumentStatus(status)
        return status in self.table[DocumentKind(kind)] and not self.allowed_transitions(kind, status)

    def is_editable(self, kind: DocumentKind, status: DocumentStatus) -> bool:
        return DocumentStatus(status) in EDITABLE_STATUSES[DocumentKind(kind)]

    def check(self, kind: DocumentKind, current: DocumentStatus, requested: DocumentStatus) -> None:
        """
        Raise unless ``current -> requested`` is an edge of the kind's table

        Raises:
            AlreadyFinalizedError: current status is terminal (including
                                   re-requesting the same terminal status)
            InvalidTransitionError: the edge is not in the table
        """
        kind = DocumentKind(kind)
        current = DocumentStatus(current)
        requested = DocumentStatus(requested)

        if self.is_terminal(kind, current):
            raise AlreadyFinalizedError(kind.value, current.value, requested.value)
        if requested not in self.allowed_transitions(kind, current):
            raise InvalidTransitionError(kind.value, current.value, requested.value)

    def apply(
        self,
        document: BillableDocument,
        requested_status: DocumentStatus,
        note: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> DocumentTransition:
        """
        Apply a transition to the document in place

        Sets status and updated_at, stamps sent_at / closed_at, keeps the
        note as client feedback where relevant, and returns the log entry
        to append. The document is left untouched when the edge is illegal.

        Args:
            document: document to transition
            requested_status: status to move to
            note: optional actor note, stored verbatim
            at: transition timestamp (defaults to now, UTC)

        Returns:
            DocumentTransition for the transition log
        """
        requested = DocumentStatus(requested_status)
        previous = DocumentStatus(document.status)
        self.check(document.kind, previous, requested)

        now = at or datetime.utcnow()
        document.status = requested
        document.updated_at = now

        if requested == S.SENT:
            document.sent_at = now
        if requested in FEEDBACK_STATUSES and note is not None:
            document.client_feedback = note
        if self.is_terminal(document.kind, requested):
            document.closed_at = now

        return DocumentTransition(
            document_id=document.id,
            from_status=previous,
            status=requested,
            note=note,
            created_at=now,
        )
