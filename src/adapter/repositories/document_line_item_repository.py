"""SQLAlchemy Document Line Item Repository Implementation"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_line_item_repository import DocumentLineItemRepository
from src.domain.document import DocumentLineItem


class SqlAlchemyDocumentLineItemRepository(DocumentLineItemRepository):
    """SQLAlchemy implementation of DocumentLineItemRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document_id(self, document_id: str) -> List[DocumentLineItem]:
        statement = (
            select(DocumentLineItem)
            .where(DocumentLineItem.document_id == document_id)
            .order_by(DocumentLineItem.position)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def replace_for_document(
        self, document_id: str, line_items: List[DocumentLineItem]
    ) -> List[DocumentLineItem]:
        """
        Replace all line items of a document

        Args:
            document_id: Document ID
            line_items: New line items

        Returns:
            Persisted line items in position order
        """
        await self.session.execute(
            delete(DocumentLineItem)
            .where(DocumentLineItem.document_id == document_id)
            .execution_options(synchronize_session=False)
        )

        for item in line_items:
            item.document_id = document_id
            self.session.add(item)
        await self.session.flush()

        return sorted(line_items, key=lambda item: item.position)
