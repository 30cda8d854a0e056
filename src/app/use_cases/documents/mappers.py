"""Entity to DTO mapping shared by the document use cases"""

from typing import List
from src.domain.currency import CurrencyFormatter
from src.domain.document import BillableDocument, DocumentKind, DocumentLineItem, DocumentStatus, DocumentTransition
from src.domain.lifecycle import LifecycleStateMachine
from .dtos import DocumentResponseDTO, DocumentSummaryDTO, LineItemDTO, TransitionDTO


def _value(enum_or_str) -> str:
    return enum_or_str.value if hasattr(enum_or_str, "value") else enum_or_str


def to_document_response(
    document: BillableDocument,
    line_items: List[DocumentLineItem],
    transitions: List[DocumentTransition],
    formatter: CurrencyFormatter,
    state_machine: LifecycleStateMachine,
) -> DocumentResponseDTO:
    currency = document.currency
    allowed = state_machine.allowed_transitions(DocumentKind(document.kind), DocumentStatus(document.status))

    return DocumentResponseDTO(
        id=document.id,
        kind=_value(document.kind),
        number=document.number,
        party_id=document.party_id,
        currency=currency,
        title=document.title,
        notes=document.notes,
        due_date=document.due_date,
        tax_rate=document.tax_rate,
        subtotal=formatter.round(document.subtotal, currency),
        tax_amount=formatter.round(document.tax_amount, currency),
        total=formatter.round(document.total, currency),
        formatted_total=formatter.format(document.total, currency),
        status=_value(document.status),
        allowed_transitions=sorted(status.value for status in allowed),
        client_feedback=document.client_feedback,
        sent_at=document.sent_at,
        closed_at=document.closed_at,
        line_items=[
            LineItemDTO(
                id=item.id,
                description=item.description,
                quantity=item.quantity,
                unit_rate=item.unit_rate,
                amount=formatter.round(item.amount, currency),
            )
            for item in sorted(line_items, key=lambda item: item.position)
        ],
        transition_log=[
            TransitionDTO(
                from_status=_value(entry.from_status) if entry.from_status else None,
                status=_value(entry.status),
                note=entry.note,
                created_at=entry.created_at,
            )
            for entry in transitions
        ],
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def to_document_summary(document: BillableDocument, formatter: CurrencyFormatter) -> DocumentSummaryDTO:
    return DocumentSummaryDTO(
        id=document.id,
        kind=_value(document.kind),
        number=document.number,
        party_id=document.party_id,
        title=document.title,
        currency=document.currency,
        total=formatter.round(document.total, document.currency),
        formatted_total=formatter.format(document.total, document.currency),
        status=_value(document.status),
        created_at=document.created_at,
        updated_at=document.updated_at,
    )
