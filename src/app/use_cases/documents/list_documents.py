"""ListDocuments Use Case"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.document_repository import DocumentRepository
from src.domain.currency import CurrencyFormatter
from src.domain.document import DocumentKind, DocumentStatus
from .dtos import ListDocumentsResponseDTO
from .mappers import to_document_summary

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class ListDocuments:
    """
    Use Case: List documents, newest first

    Business Rules:
    1. Filters (kind, status, client) are optional and combine with AND
    2. limit is clamped to 1..100, offset to >= 0
    """

    def __init__(self, document_repo: DocumentRepository, formatter: CurrencyFormatter):
        self.document_repo = document_repo
        self.formatter = formatter

    async def execute(
        self,
        kind: Optional[DocumentKind] = None,
        status: Optional[DocumentStatus] = None,
        party_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListDocumentsResponseDTO]:
        """
        Execute listing

        Args:
            kind: Optional kind filter
            status: Optional status filter
            party_id: Optional client filter
            limit: Page size
            offset: Pagination offset

        Returns:
            Result[ListDocumentsResponseDTO]: Page of summaries with total count
        """
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        offset = max(0, offset)

        try:
            documents, total = await self.document_repo.list(
                kind=kind,
                status=status,
                party_id=party_id,
                limit=limit,
                offset=offset,
            )

            return Return.ok(
                ListDocumentsResponseDTO(
                    documents=[to_document_summary(document, self.formatter) for document in documents],
                    total=total,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            logger.error(f"Listing documents failed: {e}")
            return Return.err(
                Error(
                    code="LIST_DOCUMENTS_FAILED",
                    message="Failed to list documents",
                    reason=str(e),
                )
            )
