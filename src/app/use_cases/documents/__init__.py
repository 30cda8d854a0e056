"""Document use cases"""
from .create_document import CreateDocument
from .transition_document import TransitionDocument
from .get_document import GetDocument
from .list_documents import ListDocuments
from .update_document_content import UpdateDocumentContent
from .quote_totals import QuoteTotals
from .preview_document_number import PreviewDocumentNumber
from .render_document import RenderDocument
from .dtos import (
    LineItemInputDTO,
    CreateDocumentCommandDTO,
    TransitionDocumentCommandDTO,
    UpdateDocumentContentCommandDTO,
    QuoteTotalsCommandDTO,
    LineItemDTO,
    TransitionDTO,
    DocumentResponseDTO,
    DocumentSummaryDTO,
    ListDocumentsResponseDTO,
    TotalsResponseDTO,
    DocumentNumberPreviewDTO,
    RenderedDocumentDTO,
)

__all__ = [
    "CreateDocument",
    "TransitionDocument",
    "GetDocument",
    "ListDocuments",
    "UpdateDocumentContent",
    "QuoteTotals",
    "PreviewDocumentNumber",
    "RenderDocument",
    "LineItemInputDTO",
    "CreateDocumentCommandDTO",
    "TransitionDocumentCommandDTO",
    "UpdateDocumentContentCommandDTO",
    "QuoteTotalsCommandDTO",
    "LineItemDTO",
    "TransitionDTO",
    "DocumentResponseDTO",
    "DocumentSummaryDTO",
    "ListDocumentsResponseDTO",
    "TotalsResponseDTO",
    "DocumentNumberPreviewDTO",
    "RenderedDocumentDTO",
]
