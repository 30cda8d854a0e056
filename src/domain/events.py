"""Document Events

Immutable snapshots emitted after a document is created or transitioned.
They carry everything a notification needs, so dispatch never touches
the database session of the request that produced them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from src.domain.document import BillableDocument, DocumentKind, DocumentStatus


class DocumentEventType(str, Enum):
    """Document event types"""
    CREATED = "created"
    TRANSITIONED = "transitioned"


@dataclass(frozen=True)
class DocumentEvent:
    event_type: DocumentEventType
    document_id: str
    kind: str
    number: str
    status: str
    currency: str
    total: Decimal
    title: Optional[str] = None
    party_id: Optional[str] = None
    party_name: Optional[str] = None
    previous_status: Optional[str] = None
    note: Optional[str] = None
    occurred_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def name(self) -> str:
        """e.g. ``invoice.created`` or ``contract.accepted``"""
        if self.event_type == DocumentEventType.CREATED:
            return f"{self.kind}.created"
        return f"{self.kind}.{self.status}"

    @classmethod
    def created(cls, document: BillableDocument, party_name: Optional[str] = None) -> "DocumentEvent":
        return cls._from_document(DocumentEventType.CREATED, document, party_name=party_name)

    @classmethod
    def transitioned(
        cls,
        document: BillableDocument,
        previous_status: DocumentStatus,
        note: Optional[str] = None,
        party_name: Optional[str] = None,
    ) -> "DocumentEvent":
        return cls._from_document(
            DocumentEventType.TRANSITIONED,
            document,
            party_name=party_name,
            previous_status=DocumentStatus(previous_status).value,
            note=note,
        )

    @classmethod
    def _from_document(cls, event_type: DocumentEventType, document: BillableDocument, **extra) -> "DocumentEvent":
        return cls(
            event_type=event_type,
            document_id=document.id,
            kind=DocumentKind(document.kind).value,
            number=document.number,
            status=DocumentStatus(document.status).value,
            currency=document.currency,
            total=document.total,
            title=document.title,
            party_id=document.party_id,
            occurred_at=document.updated_at or datetime.utcnow(),
            **extra,
        )
