"""SQLAlchemy Document Repository Implementation

Implements billable document persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from sqlalchemy import update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_repository import DocumentRepository
from src.domain.document import BillableDocument, DocumentKind, DocumentStatus

# Columns a transition or content edit may change; kind, number, party_id
# and currency are fixed at creation
MUTABLE_COLUMNS = (
    "status",
    "title",
    "notes",
    "due_date",
    "tax_rate",
    "subtotal",
    "tax_amount",
    "total",
    "client_feedback",
    "sent_at",
    "closed_at",
    "updated_at",
)


class SqlAlchemyDocumentRepository(DocumentRepository):
    """
    SQLAlchemy implementation of DocumentRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: BillableDocument) -> BillableDocument:
        """
        Create a new document

        Args:
            document: BillableDocument entity to persist

        Returns:
            Created BillableDocument
        """
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(self, document_id: str) -> Optional[BillableDocument]:
        statement = select(BillableDocument).where(BillableDocument.id == document_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

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
        conditions = []
        if kind:
            conditions.append(BillableDocument.kind == DocumentKind(kind))
        if status:
            conditions.append(BillableDocument.status == DocumentStatus(status))
        if party_id:
            conditions.append(BillableDocument.party_id == party_id)

        statement = (
            select(BillableDocument)
            .where(*conditions)
            .order_by(BillableDocument.created_at.desc(), BillableDocument.number.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        documents = list(result.scalars().all())

        count_statement = select(func.count()).select_from(BillableDocument).where(*conditions)
        count_result = await self.session.execute(count_statement)
        total = count_result.scalar_one()

        return documents, total

    async def compare_and_set(
        self, document: BillableDocument, expected_status: DocumentStatus
    ) -> bool:
        """
        Conditional UPDATE on (id, expected_status)

        Args:
            document: Document carrying the new values
            expected_status: Status the caller observed

        Returns:
            True if exactly one row was updated
        """
        statement = (
            update(BillableDocument)
            .where(BillableDocument.id == document.id)
            .where(BillableDocument.status == DocumentStatus(expected_status))
            .values({name: getattr(document, name) for name in MUTABLE_COLUMNS})
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return result.rowcount == 1
