"""Request schemas for Document API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.document import DocumentKind, DocumentStatus


class LineItemSchema(BaseModel):
    """Line item as sent by a client; amounts are derived server-side"""

    description: str = Field(..., min_length=1, max_length=500)
    quantity: Decimal = Field(..., description="Quantity (must be >= 0)")
    unit_rate: Decimal = Field(..., description="Price per unit (must be >= 0)")


class CreateDocumentRequestSchema(BaseModel):
    """
    Request schema for creating a document

    Used for POST /documents endpoint.
    """

    kind: DocumentKind = Field(..., description="invoice, proposal or contract")
    party_id: str = Field(..., min_length=1, description="Client identifier")
    currency: str = Field(..., min_length=3, max_length=3, description="Currency code (ISO 4217)")
    line_items: List[LineItemSchema] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(default=None, description="Tax rate percentage (0-100)")
    title: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None
    due_date: Optional[date] = None

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
                "tax_rate": "18",
                "due_date": "2026-02-01"
            }
        }


class TransitionDocumentRequestSchema(BaseModel):
    """
    Request schema for a status transition

    Used for PUT /documents/{id}/transition endpoint.
    """

    expected_status: DocumentStatus = Field(
        ...,
        description="Status the client last saw; a mismatch is a conflict"
    )
    requested_status: DocumentStatus = Field(..., description="Status to move to")
    note: Optional[str] = Field(default=None, description="Optional note, e.g. client feedback")

    class Config:
        json_schema_extra = {
            "example": {
                "expected_status": "sent",
                "requested_status": "accepted",
                "note": "Looks good, go ahead"
            }
        }


class UpdateDocumentRequestSchema(BaseModel):
    """
    Request schema for editing draft content

    Used for PUT /documents/{id} endpoint. Omitted fields are left unchanged.
    """

    expected_status: DocumentStatus = Field(..., description="Status the client last saw")
    line_items: Optional[List[LineItemSchema]] = None
    tax_rate: Optional[Decimal] = None
    title: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None
    due_date: Optional[date] = None


class QuoteTotalsRequestSchema(BaseModel):
    """
    Request schema for computing totals without saving

    Used for POST /documents/totals endpoint.
    """

    currency: str = Field(..., min_length=3, max_length=3)
    line_items: List[LineItemSchema] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = None
