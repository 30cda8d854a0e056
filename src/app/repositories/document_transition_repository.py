"""Document Transition Repository Interface

The transition log is append-only: there is no update or delete.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.document import DocumentTransition


class DocumentTransitionRepository(ABC):
    """Repository interface for the document transition log"""

    @abstractmethod
    async def append(self, transition: DocumentTransition) -> DocumentTransition:
        """
        Append a log entry

        Args:
            transition: DocumentTransition to persist

        Returns:
            Persisted DocumentTransition
        """
        pass

    @abstractmethod
    async def get_by_document_id(self, document_id: str) -> List[DocumentTransition]:
        """
        Retrieve the log of a document, oldest first

        Args:
            document_id: Document ID

        Returns:
            List of DocumentTransition
        """
        pass
