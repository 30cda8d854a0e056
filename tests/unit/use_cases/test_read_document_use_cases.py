"""Unit tests for GetDocument, ListDocuments, QuoteTotals, PreviewDocumentNumber and RenderDocument"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.documents import (
    GetDocument,
    ListDocuments,
    QuoteTotals,
    PreviewDocumentNumber,
    RenderDocument,
    QuoteTotalsCommandDTO,
)
from src.domain.document import BillableDocument, DocumentKind, DocumentStatus, DocumentTransition


def make_document(document_id="doc-1", number="INV-2026-000001", status=DocumentStatus.SENT):
    return BillableDocument(
        id=document_id,
        kind=DocumentKind.INVOICE,
        number=number,
        party_id="client_acme",
        currency="USD",
        tax_rate=Decimal("10"),
        subtotal=Decimal("100.00"),
        tax_amount=Decimal("10.00"),
        total=Decimal("110.00"),
        status=status,
        created_at=datetime(2026, 1, 5, 10, 0, 0),
        updated_at=datetime(2026, 1, 6, 10, 0, 0),
    )


@pytest.mark.asyncio
class TestGetDocument:
    async def test_returns_document_with_log(self, formatter, state_machine):
        document_repo = MagicMock()
        document_repo.get_by_id = AsyncMock(return_value=make_document())
        line_item_repo = MagicMock()
        line_item_repo.get_by_document_id = AsyncMock(return_value=[])
        transition_repo = MagicMock()
        transition_repo.get_by_document_id = AsyncMock(
            return_value=[
                DocumentTransition(document_id="doc-1", from_status=None, status=DocumentStatus.DRAFT),
                DocumentTransition(document_id="doc-1", from_status=DocumentStatus.DRAFT, status=DocumentStatus.SENT),
            ]
        )

        result = await GetDocument(document_repo, line_item_repo, transition_repo, formatter, state_machine).execute("doc-1")

        assert result.is_ok()
        assert result.value.formatted_total == "$110.00"
        assert result.value.allowed_transitions == ["cancelled", "overdue", "paid", "partial"]
        assert [(t.from_status, t.status) for t in result.value.transition_log] == [
            (None, "draft"),
            ("draft", "sent"),
        ]

    async def test_unknown_document(self, formatter, state_machine):
        document_repo = MagicMock()
        document_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetDocument(document_repo, MagicMock(), MagicMock(), formatter, state_machine).execute("nope")

        assert result.error.code == "DOCUMENT_NOT_FOUND"


@pytest.mark.asyncio
class TestListDocuments:
    async def test_passes_filters_and_returns_summaries(self, formatter):
        document_repo = MagicMock()
        document_repo.list = AsyncMock(return_value=([make_document()], 1))

        result = await ListDocuments(document_repo, formatter).execute(
            kind=DocumentKind.INVOICE, status=DocumentStatus.SENT, party_id="client_acme", limit=10, offset=0
        )

        assert result.is_ok()
        assert result.value.total == 1
        assert result.value.documents[0].number == "INV-2026-000001"
        document_repo.list.assert_called_once_with(
            kind=DocumentKind.INVOICE, status=DocumentStatus.SENT, party_id="client_acme", limit=10, offset=0
        )

    async def test_clamps_pagination(self, formatter):
        document_repo = MagicMock()
        document_repo.list = AsyncMock(return_value=([], 0))

        result = await ListDocuments(document_repo, formatter).execute(limit=1000, offset=-5)

        assert result.value.limit == 100
        assert result.value.offset == 0


class TestQuoteTotals:
    def test_computes_totals(self, formatter, acme_line_items):
        result = QuoteTotals(formatter).execute(
            QuoteTotalsCommandDTO(currency="inr", line_items=acme_line_items, tax_rate=Decimal("18"))
        )

        assert result.is_ok()
        assert result.value.currency == "INR"
        assert result.value.line_amounts == [Decimal("10000.00"), Decimal("1500.00")]
        assert result.value.total == Decimal("13570.00")
        assert result.value.formatted_total == "₹13,570.00"

    def test_validation_error_names_field(self, formatter):
        result = QuoteTotals(formatter).execute(
            QuoteTotalsCommandDTO(
                currency="USD",
                line_items=[{"description": "x", "quantity": "1", "unit_rate": "-5"}],
            )
        )

        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details == {"field": "line_items[0].unit_rate"}


@pytest.mark.asyncio
class TestPreviewDocumentNumber:
    async def test_returns_preview(self):
        issuer = MagicMock()
        issuer.preview_number = AsyncMock(return_value="CON-2026-000005")

        result = await PreviewDocumentNumber(issuer).execute(DocumentKind.CONTRACT)

        assert result.value.kind == "contract"
        assert result.value.next_number == "CON-2026-000005"


@pytest.mark.asyncio
class TestRenderDocument:
    async def test_renders_through_port(self):
        document_repo = MagicMock()
        document_repo.get_by_id = AsyncMock(return_value=make_document())
        line_item_repo = MagicMock()
        line_item_repo.get_by_document_id = AsyncMock(return_value=[])
        party_directory = MagicMock()
        party_directory.get_by_id = AsyncMock(return_value=None)
        renderer = MagicMock()
        renderer.media_type = "application/pdf"
        renderer.render = MagicMock(return_value=b"%PDF-1.4")

        result = await RenderDocument(document_repo, line_item_repo, party_directory, renderer).execute("doc-1")

        assert result.value.content == b"%PDF-1.4"
        assert result.value.filename == "INV-2026-000001.pdf"
        renderer.render.assert_called_once()

    async def test_unknown_document(self):
        document_repo = MagicMock()
        document_repo.get_by_id = AsyncMock(return_value=None)

        result = await RenderDocument(document_repo, MagicMock(), MagicMock(), MagicMock()).execute("nope")

        assert result.error.code == "DOCUMENT_NOT_FOUND"
