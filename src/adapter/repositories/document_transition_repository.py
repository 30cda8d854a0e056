"""SQLAlchemy Document Transition Repository Implementation"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_transition_repository import DocumentTransitionRepository
from src.domain.document import DocumentTransition


class SqlAlchemyDocumentTransitionRepository(DocumentTransitionRepository):
    """
    SQLAlchemy implementation of DocumentTransitionRepository

    Entries are inserted and read, never updated or deleted.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, transition: DocumentTransition) -> DocumentTransition:
        self.session.add(transition)
        await self.session.flush()
        await self.session.refresh(transition)
        return transition

    async def get_by_document_id(self, document_id: str) -> List[DocumentTransition]:
        statement = (
            select(DocumentTransition)
            .where(DocumentTransition.document_id == document_id)
            .order_by(DocumentTransition.created_at, DocumentTransition.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
