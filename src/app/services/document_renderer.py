"""Document Rendering Service Interface

Defines the contract for rendering a document to a printable file.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.document import BillableDocument, DocumentLineItem
from src.domain.party import Party


class DocumentRenderer(ABC):
    """Service interface for document rendering"""

    media_type = "application/pdf"

    @abstractmethod
    def render(
        self,
        document: BillableDocument,
        line_items: List[DocumentLineItem],
        party: Optional[Party] = None,
    ) -> bytes:
        """
        Render a document

        Args:
            document: Document with totals and number
            line_items: Line items in position order
            party: Client the document is addressed to, if known

        Returns:
            Rendered document as bytes
        """
        pass
