"""Unit tests for UpdateDocumentContent use case"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.documents.update_document_content import UpdateDocumentContent
from src.app.use_cases.documents.dtos import UpdateDocumentContentCommandDTO
from src.domain.document import BillableDocument, DocumentKind, DocumentLineItem, DocumentStatus


def make_document(kind=DocumentKind.INVOICE, status=DocumentStatus.DRAFT):
    return BillableDocument(
        id="doc-1",
        kind=kind,
        number="INV-2026-000001",
        party_id="client_acme",
        currency="INR",
        title="Old title",
        tax_rate=Decimal("18"),
        subtotal=Decimal("1000.00"),
        tax_amount=Decimal("180.00"),
        total=Decimal("1180.00"),
        status=status,
        created_at=datetime(2026, 1, 5, 10, 0, 0),
        updated_at=datetime(2026, 1, 5, 10, 0, 0),
    )


@pytest.fixture
def mock_document_repo():
    repo = MagicMock()
    repo.compare_and_set = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_line_item_repo():
    repo = MagicMock()
    repo.get_by_document_id = AsyncMock(
        return_value=[
            DocumentLineItem(
                document_id="doc-1",
                position=0,
                description="Strategy workshop",
                quantity=Decimal("1"),
                unit_rate=Decimal("1000"),
                amount=Decimal("1000.00"),
            )
        ]
    )
    repo.replace_for_document = AsyncMock(side_effect=lambda document_id, items: items)
    return repo


@pytest.fixture
def mock_transition_repo():
    repo = MagicMock()
    repo.get_by_document_id = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def update_use_case(mock_uow, mock_document_repo, mock_line_item_repo, mock_transition_repo, formatter, state_machine):
    return UpdateDocumentContent(
        uow=mock_uow,
        document_repo=mock_document_repo,
        line_item_repo=mock_line_item_repo,
        transition_repo=mock_transition_repo,
        formatter=formatter,
        state_machine=state_machine,
    )


@pytest.mark.asyncio
class TestUpdateDocumentContent:
    async def test_replacing_line_items_recomputes_totals(
        self, update_use_case, mock_document_repo, mock_uow, acme_line_items
    ):
        document = make_document()
        mock_document_repo.get_by_id = AsyncMock(return_value=document)

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(
                document_id="doc-1",
                expected_status=DocumentStatus.DRAFT,
                line_items=acme_line_items,
            )
        )

        assert result.is_ok()
        assert result.value.subtotal == Decimal("11500.00")
        assert result.value.tax_amount == Decimal("2070.00")
        assert result.value.total == Decimal("13570.00")
        assert result.value.number == "INV-2026-000001"
        assert result.value.title == "Old title"
        mock_document_repo.compare_and_set.assert_called_once_with(document, DocumentStatus.DRAFT)
        mock_uow.commit.assert_called_once()

    async def test_changing_tax_rate_keeps_existing_lines(self, update_use_case, mock_document_repo, mock_line_item_repo):
        mock_document_repo.get_by_id = AsyncMock(return_value=make_document())

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(document_id="doc-1", tax_rate=Decimal("5"), title="New title")
        )

        assert result.is_ok()
        assert result.value.tax_rate == Decimal("5")
        assert result.value.total == Decimal("1050.00")
        assert result.value.title == "New title"
        assert [item.description for item in result.value.line_items] == ["Strategy workshop"]
        mock_line_item_repo.get_by_document_id.assert_called_once_with("doc-1")

    async def test_contract_can_be_revised_after_edit_request(self, update_use_case, mock_document_repo):
        mock_document_repo.get_by_id = AsyncMock(
            return_value=make_document(DocumentKind.CONTRACT, DocumentStatus.EDIT_REQUESTED)
        )

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(
                document_id="doc-1",
                expected_status=DocumentStatus.EDIT_REQUESTED,
                notes="Clause 4 removed",
            )
        )

        assert result.is_ok()
        assert result.value.status == "edit_requested"
        assert result.value.notes == "Clause 4 removed"

    async def test_sent_invoice_cannot_be_edited(self, update_use_case, mock_document_repo, mock_uow):
        mock_document_repo.get_by_id = AsyncMock(
            return_value=make_document(DocumentKind.INVOICE, DocumentStatus.SENT)
        )

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(document_id="doc-1", title="Too late")
        )

        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details == {"field": "status"}
        mock_document_repo.compare_and_set.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_paid_invoice_is_already_finalized(self, update_use_case, mock_document_repo):
        mock_document_repo.get_by_id = AsyncMock(
            return_value=make_document(DocumentKind.INVOICE, DocumentStatus.PAID)
        )

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(document_id="doc-1", title="Too late")
        )

        assert result.error.code == "ALREADY_FINALIZED"

    async def test_lost_race_is_a_conflict(self, update_use_case, mock_document_repo, mock_line_item_repo):
        mock_document_repo.get_by_id = AsyncMock(return_value=make_document())
        mock_document_repo.compare_and_set = AsyncMock(return_value=False)

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(document_id="doc-1", expected_status=DocumentStatus.DRAFT, title="x")
        )

        assert result.error.code == "CONFLICT"
        mock_line_item_repo.replace_for_document.assert_not_called()

    async def test_removing_all_invoice_lines_is_rejected(self, update_use_case, mock_document_repo):
        mock_document_repo.get_by_id = AsyncMock(return_value=make_document())

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(document_id="doc-1", line_items=[])
        )

        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details == {"field": "line_items"}

    async def test_unknown_document(self, update_use_case, mock_document_repo):
        mock_document_repo.get_by_id = AsyncMock(return_value=None)

        result = await update_use_case.execute(UpdateDocumentContentCommandDTO(document_id="nope"))

        assert result.error.code == "DOCUMENT_NOT_FOUND"

    async def test_failed_response_read_rolls_back_before_commit(
        self, update_use_case, mock_document_repo, mock_transition_repo, mock_uow
    ):
        mock_document_repo.get_by_id = AsyncMock(return_value=make_document())
        mock_transition_repo.get_by_document_id = AsyncMock(side_effect=RuntimeError("connection reset"))

        result = await update_use_case.execute(
            UpdateDocumentContentCommandDTO(document_id="doc-1", expected_status=DocumentStatus.DRAFT, title="x")
        )

        assert result.error.code == "UPDATE_DOCUMENT_FAILED"
        mock_uow.commit.assert_not_called()
        mock_uow.rollback.assert_called_once()
