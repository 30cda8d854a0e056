"""RenderDocument Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.document_renderer import DocumentRenderer
from src.app.services.party_directory import PartyDirectory
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_item_repository import DocumentLineItemRepository
from .dtos import RenderedDocumentDTO

logger = logging.getLogger(__name__)


class RenderDocument:
    """
    Use Case: Render a document to a printable file

    Flow:
    1. Load document, line items and client
    2. Render through the DocumentRenderer port
    3. Return bytes with a download filename derived from the number
    """

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_item_repo: DocumentLineItemRepository,
        party_directory: PartyDirectory,
        renderer: DocumentRenderer,
    ):
        self.document_repo = document_repo
        self.line_item_repo = line_item_repo
        self.party_directory = party_directory
        self.renderer = renderer

    async def execute(self, document_id: str) -> Result[RenderedDocumentDTO]:
        try:
            # Step 1: Load document, line items and client
            document = await self.document_repo.get_by_id(document_id)
            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"Document {document_id} not found",
                    )
                )

            line_items = await self.line_item_repo.get_by_document_id(document.id)
            party = await self.party_directory.get_by_id(document.party_id)

            # Step 2: Render
            content = self.renderer.render(document, line_items, party)

        except Exception as e:
            logger.error(f"Rendering document {document_id} failed: {e}")
            return Return.err(
                Error(
                    code="RENDER_DOCUMENT_FAILED",
                    message="Failed to render document",
                    reason=str(e),
                )
            )

        # Step 3: Build response
        return Return.ok(
            RenderedDocumentDTO(
                document_id=document.id,
                number=document.number,
                media_type=self.renderer.media_type,
                filename=f"{document.number}.pdf",
                content=content,
            )
        )
