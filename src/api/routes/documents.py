"""Document API Routes

FastAPI routes for invoices, proposals and contracts: creation, status
transitions, reads, draft edits, totals quotes, number previews and PDF
downloads.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Result
from config import ApplicationConfig
from src.app.services.identity_issuer import DocumentIdentityIssuer
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.use_cases.documents import (
    CreateDocument,
    TransitionDocument,
    GetDocument,
    ListDocuments,
    UpdateDocumentContent,
    QuoteTotals,
    PreviewDocumentNumber,
    RenderDocument,
    CreateDocumentCommandDTO,
    TransitionDocumentCommandDTO,
    UpdateDocumentContentCommandDTO,
    QuoteTotalsCommandDTO,
    DocumentResponseDTO,
    ListDocumentsResponseDTO,
    TotalsResponseDTO,
    DocumentNumberPreviewDTO,
)
from src.adapter.repositories import (
    SqlAlchemyDocumentRepository,
    SqlAlchemyDocumentLineItemRepository,
    SqlAlchemyDocumentTransitionRepository,
    SqlAlchemyDocumentSequenceRepository,
    SqlAlchemyPartyDirectory,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.document_renderer import ReportLabDocumentRenderer
from src.api.error import ClientError
from src.api.schemas.document_request import (
    CreateDocumentRequestSchema,
    TransitionDocumentRequestSchema,
    UpdateDocumentRequestSchema,
    QuoteTotalsRequestSchema,
)
from src.depends import (
    get_session,
    get_formatter,
    get_state_machine,
    get_dispatcher,
    get_renderer,
)
from src.domain.currency import CurrencyFormatter
from src.domain.document import DocumentKind, DocumentStatus
from src.domain.lifecycle import LifecycleStateMachine

router = APIRouter(prefix="/documents", tags=["Documents"])

ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_TRANSITION": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "ALREADY_FINALIZED": status.HTTP_404_NOT_FOUND,
    "DOCUMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "IDENTITY_ALLOCATION_FAILED": status.HTTP_409_CONFLICT,
}


def _unwrap(result: Result):
    if result.is_err():
        status_code = ERROR_STATUS_CODES.get(
            result.error.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        raise ClientError(result.error, status_code=status_code)
    return result.value


def _error_example(code: str, message: str) -> dict:
    return {"content": {"application/json": {"example": {"error": {"code": code, "message": message}}}}}


@router.post(
    "",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid document", **_error_example("VALIDATION_ERROR", "At least one line item is required for invoices")},
        409: {"description": "Numbering failed", **_error_example("IDENTITY_ALLOCATION_FAILED", "Could not allocate invoice number")},
    },
)
async def create_document(
    request: CreateDocumentRequestSchema,
    session: AsyncSession = Depends(get_session),
    formatter: CurrencyFormatter = Depends(get_formatter),
    state_machine: LifecycleStateMachine = Depends(get_state_machine),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Create a draft invoice, proposal or contract.

    Totals are computed server-side from the line items and tax rate; the
    document number is allocated atomically.

    **Example request:**
    ```json
    {
      "kind": "invoice",
      "party_id": "client_acme",
      "currency": "INR",
      "line_items": [
        {"description": "Social media retainer", "quantity": "2", "unit_rate": "5000"},
        {"description": "Ad creative pack", "quantity": "1", "unit_rate": "1500"}
      ],
      "tax_rate": "18"
    }
    ```

    **Returns:**
    - 201: Document created (subtotal 11500.00, tax 2070.00, total 13570.00 for the example)
    - 400: Invalid input
    - 409: Number allocation failed
    """
    # Create UnitOfWork, repositories and services
    uow = SqlAlchemyUnitOfWork(session)
    issuer = DocumentIdentityIssuer(
        SqlAlchemyDocumentSequenceRepository(session),
        ApplicationConfig.DOCUMENT_NUMBER_PREFIXES,
    )

    # Convert request schema to command DTO
    command = CreateDocumentCommandDTO(**request.model_dump())

    # Execute use case
    use_case = CreateDocument(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineItemRepository(session),
        SqlAlchemyDocumentTransitionRepository(session),
        SqlAlchemyPartyDirectory(session),
        issuer,
        dispatcher,
        formatter,
        state_machine,
    )
    return _unwrap(await use_case.execute(command))


@router.get(
    "",
    response_model=ListDocumentsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_documents(
    kind: Optional[DocumentKind] = Query(default=None, description="Filter by kind"),
    document_status: Optional[DocumentStatus] = Query(default=None, alias="status", description="Filter by status"),
    party_id: Optional[str] = Query(default=None, description="Filter by client"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    formatter: CurrencyFormatter = Depends(get_formatter),
):
    """
    List documents, newest first.

    **Query parameters:**
    - `kind`, `status`, `party_id` (optional): Filters
    - `limit` (1-100, default 20), `offset` (default 0): Pagination
    """
    use_case = ListDocuments(SqlAlchemyDocumentRepository(session), formatter)
    result = await use_case.execute(
        kind=kind, status=document_status, party_id=party_id, limit=limit, offset=offset
    )
    return _unwrap(result)


@router.post(
    "/totals",
    response_model=TotalsResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: {"description": "Invalid line items", **_error_example("VALIDATION_ERROR", "line_items[0].quantity must not be negative")}},
)
async def quote_totals(
    request: QuoteTotalsRequestSchema,
    formatter: CurrencyFormatter = Depends(get_formatter),
):
    """
    Compute line amounts, subtotal, tax and total without saving anything.

    **Returns:**
    - 200: Computed totals
    - 400: Invalid input
    """
    command = QuoteTotalsCommandDTO(**request.model_dump())
    return _unwrap(QuoteTotals(formatter).execute(command))


@router.get(
    "/sequences/{kind}/next",
    response_model=DocumentNumberPreviewDTO,
    status_code=status.HTTP_200_OK,
)
async def preview_document_number(
    kind: DocumentKind,
    session: AsyncSession = Depends(get_session),
):
    """
    Preview the number the next document of a kind would receive.

    Nothing is reserved: a concurrent creation may take it first.
    """
    issuer = DocumentIdentityIssuer(
        SqlAlchemyDocumentSequenceRepository(session),
        ApplicationConfig.DOCUMENT_NUMBER_PREFIXES,
    )
    return _unwrap(await PreviewDocumentNumber(issuer).execute(kind))


@router.get(
    "/{document_id}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Document not found", **_error_example("DOCUMENT_NOT_FOUND", "Document 123 not found")}},
)
async def get_document(
    document_id: str,
    session: AsyncSession = Depends(get_session),
    formatter: CurrencyFormatter = Depends(get_formatter),
    state_machine: LifecycleStateMachine = Depends(get_state_machine),
):
    """
    Get a document with its line items, allowed transitions and transition log.

    **Returns:**
    - 200: Document
    - 404: Unknown document ID
    """
    use_case = GetDocument(
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineItemRepository(session),
        SqlAlchemyDocumentTransitionRepository(session),
        formatter,
        state_machine,
    )
    return _unwrap(await use_case.execute(document_id))


@router.put(
    "/{document_id}/transition",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Document not found or already finalized", **_error_example("ALREADY_FINALIZED", "This invoice is already paid")},
        409: {"description": "Stale expected status", **_error_example("CONFLICT", "Document 123 is 'accepted', expected 'sent'")},
        422: {"description": "Illegal transition", **_error_example("INVALID_TRANSITION", "Cannot move invoice from 'draft' to 'paid'")},
    },
)
async def transition_document(
    document_id: str,
    request: TransitionDocumentRequestSchema,
    session: AsyncSession = Depends(get_session),
    formatter: CurrencyFormatter = Depends(get_formatter),
    state_machine: LifecycleStateMachine = Depends(get_state_machine),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Move a document to a new status.

    **Example request:**
    ```json
    {"expected_status": "sent", "requested_status": "accepted", "note": "Approved"}
    ```

    **Returns:**
    - 200: Document in its new status
    - 404: Unknown document, or the document is already in a terminal status
    - 409: The document is no longer in `expected_status`
    - 422: The transition is not allowed for this kind and status
    """
    uow = SqlAlchemyUnitOfWork(session)

    command = TransitionDocumentCommandDTO(
        document_id=document_id,
        expected_status=request.expected_status,
        requested_status=request.requested_status,
        note=request.note,
    )

    use_case = TransitionDocument(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineItemRepository(session),
        SqlAlchemyDocumentTransitionRepository(session),
        SqlAlchemyPartyDirectory(session),
        dispatcher,
        formatter,
        state_machine,
    )
    return _unwrap(await use_case.execute(command))


@router.put(
    "/{document_id}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid content or document not editable", **_error_example("VALIDATION_ERROR", "Invoice cannot be edited while sent")},
        404: {"description": "Document not found or already finalized", **_error_example("DOCUMENT_NOT_FOUND", "Document 123 not found")},
        409: {"description": "Stale expected status", **_error_example("CONFLICT", "Document 123 is 'sent', expected 'draft'")},
    },
)
async def update_document(
    document_id: str,
    request: UpdateDocumentRequestSchema,
    session: AsyncSession = Depends(get_session),
    formatter: CurrencyFormatter = Depends(get_formatter),
    state_machine: LifecycleStateMachine = Depends(get_state_machine),
):
    """
    Edit line items, tax rate, title, notes or due date of a draft
    (or of a contract whose client requested edits).

    Omitted fields are left unchanged; totals are always recomputed.
    """
    uow = SqlAlchemyUnitOfWork(session)

    fields = request.model_dump(exclude_unset=True)
    if fields.get("line_items") is None:
        fields.pop("line_items", None)
    command = UpdateDocumentContentCommandDTO(document_id=document_id, **fields)

    use_case = UpdateDocumentContent(
        uow,
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineItemRepository(session),
        SqlAlchemyDocumentTransitionRepository(session),
        formatter,
        state_machine,
    )
    return _unwrap(await use_case.execute(command))


@router.get(
    "/{document_id}/pdf",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        404: {"description": "Document not found", **_error_example("DOCUMENT_NOT_FOUND", "Document 123 not found")},
    },
)
async def download_document_pdf(
    document_id: str,
    session: AsyncSession = Depends(get_session),
    renderer: ReportLabDocumentRenderer = Depends(get_renderer),
):
    """
    Download a document as a PDF file.

    **Returns:**
    - 200: PDF file as binary response
    - 404: Unknown document ID
    """
    use_case = RenderDocument(
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineItemRepository(session),
        SqlAlchemyPartyDirectory(session),
        renderer,
    )
    rendered = _unwrap(await use_case.execute(document_id))

    return Response(
        content=rendered.content,
        media_type=rendered.media_type,
        headers={"Content-Disposition": f"attachment; filename={rendered.filename}"},
    )
