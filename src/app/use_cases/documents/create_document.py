"""CreateDocument Use Case

Creates a draft invoice, proposal or contract with derived totals and a
freshly issued document number.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.party_directory import PartyDirectory
from src.app.services.identity_issuer import DocumentIdentityIssuer
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_item_repository import DocumentLineItemRepository
from src.app.repositories.document_transition_repository import DocumentTransitionRepository
from src.domain.currency import CurrencyFormatter
from src.domain.document import (
    BillableDocument,
    DocumentLineItem,
    DocumentStatus,
    DocumentTransition,
)
from src.domain.errors import DocumentError, ValidationError
from src.domain.events import DocumentEvent
from src.domain.ledger import LineItemLedger
from src.domain.lifecycle import LifecycleStateMachine
from .dtos import CreateDocumentCommandDTO, DocumentResponseDTO
from .mappers import to_document_response
from .validation import validate_content

logger = logging.getLogger(__name__)


class CreateDocument:
    """
    Use Case: Create a draft document

    Business Rules:
    1. Currency must be supported; invoices and contracts need line items
    2. The client must exist in the party directory
    3. Totals are derived by the ledger, never taken from the caller
    4. The number is issued once, atomically, inside the same transaction
    5. The document starts in draft with a logged initial draft entry
    6. The "created" notification is fired only after commit

    Flow:
    1. Validate shape and client
    2. Compute totals
    3. Issue document number
    4. Persist document, line items and initial log entry
    5. Commit transaction
    6. Dispatch notification (non-blocking)
    7. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_item_repo: DocumentLineItemRepository,
        transition_repo: DocumentTransitionRepository,
        party_directory: PartyDirectory,
        issuer: DocumentIdentityIssuer,
        dispatcher: NotificationDispatcher,
        formatter: CurrencyFormatter,
        state_machine: LifecycleStateMachine,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.transition_repo = transition_repo
        self.party_directory = party_directory
        self.issuer = issuer
        self.dispatcher = dispatcher
        self.formatter = formatter
        self.ledger = LineItemLedger(formatter)
        self.state_machine = state_machine

    async def execute(self, command: CreateDocumentCommandDTO) -> Result[DocumentResponseDTO]:
        """
        Execute document creation

        Args:
            command: CreateDocumentCommandDTO with kind, party, currency, line items

        Returns:
            Result[DocumentResponseDTO]: Success with the stored document or error
        """
        try:
            # Step 1: Validate shape and client
            validate_content(command.kind, command.currency, command.line_items, self.formatter)

            party = await self.party_directory.get_by_id(command.party_id)
            if not party:
                raise ValidationError("party_id", f"Client {command.party_id} not found")

            # Step 2: Compute totals
            totals = self.ledger.compute_totals(
                command.line_items, command.tax_rate, command.currency
            )

            # Step 3: Issue document number
            number = await self.issuer.issue_number(command.kind)

            # Step 4: Persist document, line items and initial log entry
            document = BillableDocument(
                kind=command.kind,
                number=number,
                party_id=command.party_id,
                currency=command.currency,
                title=command.title,
                notes=command.notes,
                due_date=command.due_date,
                tax_rate=command.tax_rate if command.tax_rate is not None else Decimal("0"),
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                total=totals.total,
                status=DocumentStatus.DRAFT,
            )
            created = await self.document_repo.create(document)

            line_items = await self.line_item_repo.replace_for_document(
                created.id,
                [
                    DocumentLineItem(
                        document_id=created.id,
                        position=position,
                        description=item.description.strip(),
                        quantity=item.quantity,
                        unit_rate=item.unit_rate,
                        amount=amount,
                    )
                    for position, (item, amount) in enumerate(zip(command.line_items, totals.line_amounts))
                ],
            )

            initial = await self.transition_repo.append(
                DocumentTransition(
                    document_id=created.id,
                    from_status=None,
                    status=DocumentStatus.DRAFT,
                    created_at=created.created_at,
                )
            )

            # Step 5: Commit transaction
            await self.uow.commit()

        except DocumentError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=e.code,
                    message=e.message,
                    reason="Document was not created",
                    details=e.details,
                )
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Document creation failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_DOCUMENT_FAILED",
                    message="Failed to create document",
                    reason=str(e),
                )
            )

        logger.info(f"Created {created.kind.value} {created.number} ({created.id})")

        # Step 6: Dispatch notification (non-blocking)
        self.dispatcher.dispatch(DocumentEvent.created(created, party_name=party.name))

        # Step 7: Build response
        return Return.ok(
            to_document_response(created, line_items, [initial], self.formatter, self.state_machine)
        )
