"""TransitionDocument Use Case

Moves a document along an edge of its kind's lifecycle, guarded by the
status the caller last observed.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.party_directory import PartyDirectory
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_item_repository import DocumentLineItemRepository
from src.app.repositories.document_transition_repository import DocumentTransitionRepository
from src.domain.currency import CurrencyFormatter
from src.domain.document import DocumentStatus
from src.domain.errors import ConflictError, DocumentError
from src.domain.events import DocumentEvent
from src.domain.lifecycle import LifecycleStateMachine
from .dtos import TransitionDocumentCommandDTO, DocumentResponseDTO
from .mappers import to_document_response

logger = logging.getLogger(__name__)


class TransitionDocument:
    """
    Use Case: Transition a document to a new status

    Business Rules:
    1. Only edges of the kind's transition table are legal
    2. A terminal document reports ALREADY_FINALIZED, even for its own status
    3. The persisted status must equal the caller's expected status
    4. The write is a compare-and-swap on (id, observed status); the loser
       of a race gets CONFLICT and nothing is written
    5. Every successful transition appends exactly one log entry
    6. The notification is fired only after commit

    Flow:
    1. Load document
    2. Check expected status
    3. Apply transition through the state machine
    4. Compare-and-swap the document row
    5. Append transition log entry
    6. Commit transaction
    7. Dispatch notification (non-blocking)
    8. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_item_repo: DocumentLineItemRepository,
        transition_repo: DocumentTransitionRepository,
        party_directory: PartyDirectory,
        dispatcher: NotificationDispatcher,
        formatter: CurrencyFormatter,
        state_machine: LifecycleStateMachine,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.transition_repo = transition_repo
        self.party_directory = party_directory
        self.dispatcher = dispatcher
        self.formatter = formatter
        self.state_machine = state_machine

    async def execute(self, command: TransitionDocumentCommandDTO) -> Result[DocumentResponseDTO]:
        """
        Execute status transition

        Args:
            command: TransitionDocumentCommandDTO with document ID, expected
                     and requested status, optional note

        Returns:
            Result[DocumentResponseDTO]: Success with the updated document or error
        """
        try:
            # Step 1: Load document
            document = await self.document_repo.get_by_id(command.document_id)
            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"Document {command.document_id} not found",
                        reason="Cannot transition a non-existent document",
                    )
                )

            observed = DocumentStatus(document.status)

            # Step 2: Check expected status
            if command.expected_status is not None and command.expected_status != observed:
                raise ConflictError(document.id, command.expected_status.value, observed.value)

            # Step 3: Apply transition through the state machine
            transition = self.state_machine.apply(
                document, command.requested_status, note=command.note
            )

            # Step 4: Compare-and-swap the document row
            swapped = await self.document_repo.compare_and_set(document, observed)
            if not swapped:
                raise ConflictError(document.id, observed.value)

            # Step 5: Append transition log entry
            await self.transition_repo.append(transition)

            party = await self.party_directory.get_by_id(document.party_id)
            line_items = await self.line_item_repo.get_by_document_id(document.id)
            transitions = await self.transition_repo.get_by_document_id(document.id)

            # Step 6: Commit transaction
            await self.uow.commit()

        except DocumentError as e:
            await self.uow.rollback()
            logger.info(f"Transition of {command.document_id} refused: {e.code} {e.message}")
            return Return.err(
                Error(
                    code=e.code,
                    message=e.message,
                    reason="Document status was not changed",
                    details=e.details,
                )
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Transition of {command.document_id} failed: {e}")
            return Return.err(
                Error(
                    code="TRANSITION_DOCUMENT_FAILED",
                    message="Failed to transition document",
                    reason=str(e),
                )
            )

        logger.info(
            f"{document.number}: {observed.value} -> {DocumentStatus(document.status).value}"
        )

        # Step 7: Dispatch notification (non-blocking)
        self.dispatcher.dispatch(
            DocumentEvent.transitioned(
                document,
                observed,
                note=command.note,
                party_name=party.name if party else None,
            )
        )

        # Step 8: Build response from the committed state
        return Return.ok(
            to_document_response(document, line_items, transitions, self.formatter, self.state_machine)
        )
