"""Data Transfer Objects for Document Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.document import DocumentKind, DocumentStatus


class LineItemInputDTO(BaseModel):
    """
    Line item as supplied by a caller

    There is no amount field: amounts are always derived by the ledger.
    """

    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Line item description"
    )

    quantity: Decimal = Field(
        ...,
        description="Quantity (must be >= 0)"
    )

    unit_rate: Decimal = Field(
        ...,
        description="Price per unit (must be >= 0)"
    )


class CreateDocumentCommandDTO(BaseModel):
    """
    Command DTO for creating a document

    Used as input to CreateDocument use case.
    """

    kind: DocumentKind = Field(
        ...,
        description="Document kind (invoice, proposal, contract)"
    )

    party_id: str = Field(
        ...,
        min_length=1,
        description="Client identifier"
    )

    currency: str = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Currency code (ISO 4217)"
    )

    line_items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Ordered line items"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        description="Tax rate percentage (0-100)"
    )

    title: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)
    due_date: Optional[date] = Field(default=None)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "invoice",
                "party_id": "client_acme",
                "currency": "INR",
                "line_items": [
                    {"description": "Social media retainer", "quantity": "2", "unit_rate": "5000"},
                    {"description": "Ad creative pack", "quantity": "1", "unit_rate": "1500"}
                ],
                "tax_rate": "18"
            }
        }


class TransitionDocumentCommandDTO(BaseModel):
    """
    Command DTO for a status transition

    Used as input to TransitionDocument use case.
    """

    document_id: str = Field(..., description="Document ID")

    expected_status: Optional[DocumentStatus] = Field(
        default=None,
        description="Status the caller last observed (optimistic concurrency)"
    )

    requested_status: DocumentStatus = Field(
        ...,
        description="Status to move to"
    )

    note: Optional[str] = Field(
        default=None,
        description="Optional note (e.g., client feedback), stored verbatim"
    )


class UpdateDocumentContentCommandDTO(BaseModel):
    """
    Command DTO for editing a document's billable content

    Used as input to UpdateDocumentContent use case.
    """

    document_id: str = Field(..., description="Document ID")

    expected_status: Optional[DocumentStatus] = Field(
        default=None,
        description="Status the caller last observed (optimistic concurrency)"
    )

    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(default=None)
    title: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)
    due_date: Optional[date] = Field(default=None)


class QuoteTotalsCommandDTO(BaseModel):
    """Command DTO for computing totals without persisting anything"""

    currency: str = Field(..., min_length=3, max_length=3)
    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(default=None)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()


class LineItemDTO(BaseModel):
    id: str
    description: str
    quantity: Decimal
    unit_rate: Decimal
    amount: Decimal


class TransitionDTO(BaseModel):
    from_status: Optional[str] = None
    status: str
    note: Optional[str] = None
    created_at: datetime


class DocumentResponseDTO(BaseModel):
    """
    Response DTO for a single document

    Returned by CreateDocument, TransitionDocument, UpdateDocumentContent
    and GetDocument.
    """

    id: str = Field(..., description="Document ID")
    kind: str = Field(..., description="Document kind")
    number: str = Field(..., description="Document number")
    party_id: str = Field(..., description="Client identifier")
    currency: str = Field(..., description="Currency code")
    title: Optional[str] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None
    tax_rate: Decimal = Field(..., description="Tax rate percentage")
    subtotal: Decimal = Field(..., description="Sum of line amounts")
    tax_amount: Decimal = Field(..., description="Tax amount")
    total: Decimal = Field(..., description="Subtotal plus tax")
    formatted_total: str = Field(..., description="Total formatted for display")
    status: str = Field(..., description="Current status")
    allowed_transitions: List[str] = Field(
        default_factory=list,
        description="Statuses reachable from the current status"
    )
    client_feedback: Optional[str] = None
    sent_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    line_items: List[LineItemDTO] = Field(default_factory=list)
    transition_log: List[TransitionDTO] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class DocumentSummaryDTO(BaseModel):
    id: str
    kind: str
    number: str
    party_id: str
    title: Optional[str] = None
    currency: str
    total: Decimal
    formatted_total: str
    status: str
    created_at: datetime
    updated_at: datetime


class ListDocumentsResponseDTO(BaseModel):
    documents: List[DocumentSummaryDTO]
    total: int
    limit: int
    offset: int


class TotalsResponseDTO(BaseModel):
    currency: str
    line_amounts: List[Decimal]
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    formatted_total: str


class DocumentNumberPreviewDTO(BaseModel):
    kind: str
    next_number: str


class RenderedDocumentDTO(BaseModel):
    document_id: str
    number: str
    media_type: str
    filename: str
    content: bytes
