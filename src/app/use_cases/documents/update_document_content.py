"""UpdateDocumentContent Use Case

Revises the billable content of a document that is still being drafted
(or, for contracts, being revised after the client asked for edits).
"""

import logging
from datetime import datetime
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_item_repository import DocumentLineItemRepository
from src.app.repositories.document_transition_repository import DocumentTransitionRepository
from src.domain.currency import CurrencyFormatter
from src.domain.document import DocumentKind, DocumentLineItem, DocumentStatus
from src.domain.errors import AlreadyFinalizedError, ConflictError, DocumentError, ValidationError
from src.domain.ledger import LineItemLedger
from src.domain.lifecycle import LifecycleStateMachine
from .dtos import UpdateDocumentContentCommandDTO, DocumentResponseDTO, LineItemInputDTO
from .mappers import to_document_response
from .validation import validate_content

logger = logging.getLogger(__name__)

OPTIONAL_CONTENT_FIELDS = ("title", "notes", "due_date")


class UpdateDocumentContent:
    """
    Use Case: Update line items, tax rate and terms of an editable document

    Business Rules:
    1. Editable while draft (any kind) or edit_requested (contracts)
    2. Terminal documents report ALREADY_FINALIZED
    3. kind, number, currency and client never change
    4. Totals are recomputed by the ledger on every write
    5. The write is conditioned on the observed status, like a transition
    6. Only fields present in the command are changed
    7. No notification is sent for content edits

    Flow:
    1. Load document
    2. Check expected status and editability
    3. Recompute totals from the new (or current) line items
    4. Compare-and-swap the document row
    5. Replace line items
    6. Commit transaction
    7. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_item_repo: DocumentLineItemRepository,
        transition_repo: DocumentTransitionRepository,
        formatter: CurrencyFormatter,
        state_machine: LifecycleStateMachine,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.transition_repo = transition_repo
        self.formatter = formatter
        self.ledger = LineItemLedger(formatter)
        self.state_machine = state_machine

    async def execute(self, command: UpdateDocumentContentCommandDTO) -> Result[DocumentResponseDTO]:
        """
        Execute content update

        Args:
            command: UpdateDocumentContentCommandDTO with the fields to change

        Returns:
            Result[DocumentResponseDTO]: Success with the updated document or error
        """
        provided = command.model_fields_set

        try:
            # Step 1: Load document
            document = await self.document_repo.get_by_id(command.document_id)
            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"Document {command.document_id} not found",
                        reason="Cannot update a non-existent document",
                    )
                )

            kind = DocumentKind(document.kind)
            observed = DocumentStatus(document.status)

            # Step 2: Check expected status and editability
            if command.expected_status is not None and command.expected_status != observed:
                raise ConflictError(document.id, command.expected_status.value, observed.value)

            if self.state_machine.is_terminal(kind, observed):
                raise AlreadyFinalizedError(kind.value, observed.value)
            if not self.state_machine.is_editable(kind, observed):
                raise ValidationError(
                    "status", f"{kind.value.capitalize()} cannot be edited while {observed.value}"
                )

            # Step 3: Recompute totals
            if "line_items" in provided:
                items = command.line_items
            else:
                current = await self.line_item_repo.get_by_document_id(document.id)
                items = [
                    LineItemInputDTO(
                        description=item.description,
                        quantity=item.quantity,
                        unit_rate=item.unit_rate,
                    )
                    for item in current
                ]

            validate_content(kind, document.currency, items, self.formatter)

            tax_rate = command.tax_rate if "tax_rate" in provided else document.tax_rate
            totals = self.ledger.compute_totals(items, tax_rate, document.currency)

            if "tax_rate" in provided:
                document.tax_rate = tax_rate if tax_rate is not None else Decimal("0")
            for name in OPTIONAL_CONTENT_FIELDS:
                if name in provided:
                    setattr(document, name, getattr(command, name))

            document.subtotal = totals.subtotal
            document.tax_amount = totals.tax_amount
            document.total = totals.total
            document.updated_at = datetime.utcnow()

            # Step 4: Compare-and-swap the document row
            swapped = await self.document_repo.compare_and_set(document, observed)
            if not swapped:
                raise ConflictError(document.id, observed.value)

            # Step 5: Replace line items
            line_items = await self.line_item_repo.replace_for_document(
                document.id,
                [
                    DocumentLineItem(
                        document_id=document.id,
                        position=position,
                        description=item.description.strip(),
                        quantity=item.quantity,
                        unit_rate=item.unit_rate,
                        amount=amount,
                    )
                    for position, (item, amount) in enumerate(zip(items, totals.line_amounts))
                ],
            )
            transitions = await self.transition_repo.get_by_document_id(document.id)

            # Step 6: Commit transaction
            await self.uow.commit()

        except DocumentError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=e.code,
                    message=e.message,
                    reason="Document content was not changed",
                    details=e.details,
                )
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Update of document {command.document_id} failed: {e}")
            return Return.err(
                Error(
                    code="UPDATE_DOCUMENT_FAILED",
                    message="Failed to update document",
                    reason=str(e),
                )
            )

        logger.info(f"Updated content of {document.number} ({document.id})")

        # Step 7: Build response from the committed state
        return Return.ok(
            to_document_response(document, line_items, transitions, self.formatter, self.state_machine)
        )
