"""Billable Document Domain Entities

One shared model for invoices, proposals and contracts: the document
header with its derived totals, its ordered line items, and the
append-only transition log.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Text, Date, Integer, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class DocumentKind(str, Enum):
    """Document kinds"""
    INVOICE = "invoice"
    PROPOSAL = "proposal"
    CONTRACT = "contract"


class DocumentStatus(str, Enum):
    """Union of lifecycle states across all kinds"""
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EDIT_REQUESTED = "edit_requested"
    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


# Kinds whose documents must carry at least one line item; a proposal
# may be priced as a flat engagement with none
LINE_ITEMS_REQUIRED = frozenset({DocumentKind.INVOICE, DocumentKind.CONTRACT})


class BillableDocument(BaseModel, table=True):
    """
    Billable Document - invoice, proposal or contract

    Domain Rules:
    - number is unique per kind and never changes once assigned
    - kind, party_id and currency are fixed at creation
    - subtotal, tax_amount and total are derived from line items and tax_rate
    - status changes only through LifecycleStateMachine
    - documents are never deleted; terminal statuses end the lifecycle
    """

    __tablename__ = "billable_documents"
    __table_args__ = (
        UniqueConstraint("kind", "number", name="uq_billable_documents_kind_number"),
        Index("ix_billable_documents_kind_status", "kind", "status"),
        Index("ix_billable_documents_party_id", "party_id"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Opaque document identifier"
    )

    kind: DocumentKind = Field(
        description="Document kind (invoice, proposal, contract)"
    )

    number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Human-readable number, unique per kind (e.g., INV-2026-000001)"
    )

    party_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Client identifier in the party directory"
    )

    currency: str = Field(
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    title: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Short title shown in notifications"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text notes or terms"
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date (invoices)"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(7, 4), nullable=False, default=0),
        description="Tax rate percentage (0-100)"
    )

    subtotal: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 4), nullable=False, default=0),
        description="Sum of line item amounts"
    )

    tax_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 4), nullable=False, default=0),
        description="round(subtotal * tax_rate / 100)"
    )

    total: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 4), nullable=False, default=0),
        description="subtotal + tax_amount"
    )

    status: DocumentStatus = Field(
        default=DocumentStatus.DRAFT,
        description="Current lifecycle status"
    )

    client_feedback: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Note captured on the latest accept/reject/edit request"
    )

    sent_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp of the latest transition into sent"
    )

    closed_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp of the transition into a terminal status"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Document creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "0b6f3c1e-4a53-4d8e-9a65-0f1f0e6f1c2a",
                "kind": "invoice",
                "number": "INV-2026-000001",
                "party_id": "client_acme",
                "currency": "INR",
                "tax_rate": "18",
                "subtotal": "11500.00",
                "tax_amount": "2070.00",
                "total": "13570.00",
                "status": "draft",
                "created_at": "2026-01-05T10:00:00Z",
                "updated_at": "2026-01-05T10:00:00Z"
            }
        }


class DocumentLineItem(BaseModel, table=True):
    """
    Document Line Item - billable row of a document

    Domain Rules:
    - amount = round(quantity * unit_rate) in the document currency
    - amount is written by the ledger, never by callers
    - position keeps the caller's ordering
    """

    __tablename__ = "document_line_items"
    __table_args__ = (
        Index("ix_document_line_items_document_id", "document_id"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Line item identifier"
    )

    document_id: str = Field(
        sa_column=Column(String(36), ForeignKey("billable_documents.id"), nullable=False),
        description="Foreign key to BillableDocument"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Zero-based position within the document"
    )

    description: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Line item description"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity (hours, units, months)"
    )

    unit_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Price per unit"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 4), nullable=False),
        description="Derived amount (quantity * unit_rate, rounded)"
    )


class DocumentTransition(BaseModel, table=True):
    """
    Document Transition - append-only lifecycle log entry

    The implicit initial draft is logged at creation; every later entry
    is an edge of the kind's transition table.
    """

    __tablename__ = "document_transitions"
    __table_args__ = (
        Index("ix_document_transitions_document_id", "document_id"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Log entry identifier"
    )

    document_id: str = Field(
        sa_column=Column(String(36), ForeignKey("billable_documents.id"), nullable=False),
        description="Foreign key to BillableDocument"
    )

    from_status: Optional[DocumentStatus] = Field(
        default=None,
        description="Status before the transition (None for the initial draft)"
    )

    status: DocumentStatus = Field(
        description="Status entered"
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Actor note, stored verbatim"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Transition timestamp"
    )
