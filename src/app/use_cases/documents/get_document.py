"""GetDocument Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_item_repository import DocumentLineItemRepository
from src.app.repositories.document_transition_repository import DocumentTransitionRepository
from src.domain.currency import CurrencyFormatter
from src.domain.lifecycle import LifecycleStateMachine
from .dtos import DocumentResponseDTO
from .mappers import to_document_response

logger = logging.getLogger(__name__)


class GetDocument:
    """
    Use Case: Read a document with its line items and transition log

    Read-only; never writes or dispatches.
    """

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_item_repo: DocumentLineItemRepository,
        transition_repo: DocumentTransitionRepository,
        formatter: CurrencyFormatter,
        state_machine: LifecycleStateMachine,
    ):
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.transition_repo = transition_repo
        self.formatter = formatter
        self.state_machine = state_machine

    async def execute(self, document_id: str) -> Result[DocumentResponseDTO]:
        try:
            document = await self.document_repo.get_by_id(document_id)
            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"Document {document_id} not found",
                    )
                )

            line_items = await self.line_item_repo.get_by_document_id(document.id)
            transitions = await self.transition_repo.get_by_document_id(document.id)

            return Return.ok(
                to_document_response(document, line_items, transitions, self.formatter, self.state_machine)
            )

        except Exception as e:
            logger.error(f"Reading document {document_id} failed: {e}")
            return Return.err(
                Error(
                    code="GET_DOCUMENT_FAILED",
                    message="Failed to read document",
                    reason=str(e),
                )
            )
