"""Document Repository Interface

Defines the contract for billable document persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple
from src.domain.document import BillableDocument, DocumentKind, DocumentStatus


class DocumentRepository(ABC):
    """
    Repository interface for BillableDocument persistence

    Documents are never deleted. Every write after creation is
    conditioned on the status the caller observed.
    """

    @abstractmethod
    async def create(self, document: BillableDocument) -> BillableDocument:
        """
        Create a new document

        Args:
            document: BillableDocument with number and totals assigned

        Returns:
            Created BillableDocument
        """
        pass

    @abstractmethod
    async def get_by_id(self, document_id: str) -> Optional[BillableDocument]:
        """
        Retrieve document by ID

        Args:
            document_id: Document ID

        Returns:
            BillableDocument if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        kind: Optional[DocumentKind] = None,
        status: Optional[DocumentStatus] = None,
        party_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[BillableDocument], int]:
        """
        List documents, newest first

        Args:
            kind: Optional filter by kind
            status: Optional filter by status
            party_id: Optional filter by client
            limit: Maximum number of documents to return
            offset: Offset for pagination

        Returns:
            Tuple of (documents page, total matching count)
        """
        pass

    @abstractmethod
    async def compare_and_set(
        self, document: BillableDocument, expected_status: DocumentStatus
    ) -> bool:
        """
        Persist the document's mutable fields only if its stored status
        still equals expected_status

        A single conditional UPDATE: of two concurrent writers that
        observed the same status, exactly one succeeds.

        Args:
            document: Document carrying the new values
            expected_status: Status the caller observed

        Returns:
            True if the row was updated, False if the status had changed
        """
        pass
