"""PreviewDocumentNumber Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.identity_issuer import DocumentIdentityIssuer
from src.domain.document import DocumentKind
from .dtos import DocumentNumberPreviewDTO

logger = logging.getLogger(__name__)


class PreviewDocumentNumber:
    """
    Use Case: Show the number the next document of a kind would get

    The preview reserves nothing; a concurrent creation may take the
    previewed number first.
    """

    def __init__(self, issuer: DocumentIdentityIssuer):
        self.issuer = issuer

    async def execute(self, kind: DocumentKind) -> Result[DocumentNumberPreviewDTO]:
        try:
            next_number = await self.issuer.preview_number(kind)
        except Exception as e:
            logger.error(f"Number preview for {kind} failed: {e}")
            return Return.err(
                Error(
                    code="PREVIEW_DOCUMENT_NUMBER_FAILED",
                    message="Failed to preview document number",
                    reason=str(e),
                )
            )

        return Return.ok(
            DocumentNumberPreviewDTO(kind=DocumentKind(kind).value, next_number=next_number)
        )
