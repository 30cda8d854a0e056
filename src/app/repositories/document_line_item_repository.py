"""Document Line Item Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.document import DocumentLineItem


class DocumentLineItemRepository(ABC):
    """Repository interface for DocumentLineItem persistence"""

    @abstractmethod
    async def get_by_document_id(self, document_id: str) -> List[DocumentLineItem]:
        """
        Retrieve line items of a document in position order

        Args:
            document_id: Document ID

        Returns:
            List of DocumentLineItem
        """
        pass

    @abstractmethod
    async def replace_for_document(
        self, document_id: str, line_items: List[DocumentLineItem]
    ) -> List[DocumentLineItem]:
        """
        Replace all line items of a document

        Args:
            document_id: Document ID
            line_items: New line items, already priced by the ledger

        Returns:
            Persisted line items
        """
        pass
