"""
Quote, invoice and purchase order endpoints.

The three kinds share one set of handlers; ``document_router`` builds a
router for one kind from its request and response models.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from pydantic import BaseModel

from src.api.dependencies import DOCUMENT_PDF_PROVIDERS, DOCUMENT_REPOSITORY_PROVIDERS
from src.application.dto.requests import (
    CreateInvoiceRequest,
    CreatePurchaseOrderRequest,
    CreateQuoteRequest,
    PartialUpdateRequest,
    UpdateInvoiceRequest,
    UpdatePurchaseOrderRequest,
    UpdateQuoteRequest,
)
from src.application.dto.responses import (
    EntityResponse,
    ErrorResponse,
    InvoiceResponse,
    PurchaseOrderResponse,
    QuoteResponse,
)
from src.application.use_cases.generate_document_pdf import GenerateDocumentPdfUseCase
from src.core.entities.financial_document import DOCUMENT_DEFINITIONS, DocumentKind
from src.core.services import DocumentRepository

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Duplicate number or unknown reference"},
    404: {"model": ErrorResponse, "description": "Document not found"},
}


def document_router(
    kind: DocumentKind,
    prefix: str,
    create_model: type[BaseModel],
    update_model: type[PartialUpdateRequest],
    response_model: type[EntityResponse],
) -> APIRouter:
    """Build the CRUD + PDF router for one document kind."""
    definition = DOCUMENT_DEFINITIONS[kind]
    get_repository = DOCUMENT_REPOSITORY_PROVIDERS[kind]
    get_pdf_use_case = DOCUMENT_PDF_PROVIDERS[kind]

    router = APIRouter(prefix=prefix, tags=[prefix.rsplit("/", 1)[-1]])

    @router.get("", response_model=list[response_model])
    async def list_documents(
        limit: int = Query(100, ge=1, le=1000),
        offset: int = Query(0, ge=0),
        repository: DocumentRepository = Depends(get_repository),
    ) -> list[EntityResponse]:
        """List documents, newest first."""
        documents = await repository.list_documents(limit=limit, offset=offset)
        return [response_model.from_entity(d) for d in documents]

    @router.get("/{document_id}", response_model=response_model, responses=ERROR_RESPONSES)
    async def get_document(
        document_id: str,
        repository: DocumentRepository = Depends(get_repository),
    ) -> EntityResponse:
        return response_model.from_entity(await repository.get(document_id))

    @router.post(
        "",
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        responses=ERROR_RESPONSES,
    )
    async def create_document(
        request: create_model,  # type: ignore[valid-type]
        repository: DocumentRepository = Depends(get_repository),
    ) -> EntityResponse:
        """Create a document. Line amounts and totals are computed server-side."""
        document = definition.model.model_validate(request.model_dump())
        return response_model.from_entity(await repository.create(document))

    @router.put("/{document_id}", response_model=response_model, responses=ERROR_RESPONSES)
    async def update_document(
        document_id: str,
        request: update_model,  # type: ignore[valid-type]
        repository: DocumentRepository = Depends(get_repository),
    ) -> EntityResponse:
        """Partial update; sending ``items`` replaces all line items."""
        updated = await repository.update(document_id, request.to_changes())
        return response_model.from_entity(updated)

    @router.delete(
        "/{document_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}},
    )
    async def delete_document(
        document_id: str,
        repository: DocumentRepository = Depends(get_repository),
    ) -> Response:
        await repository.delete(document_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get(
        "/{document_id}/pdf",
        responses={404: {"model": ErrorResponse, "description": "Document not found"}},
    )
    async def get_document_pdf(
        document_id: str,
        use_case: GenerateDocumentPdfUseCase = Depends(get_pdf_use_case),
    ) -> Response:
        """Render and download the document as PDF."""
        result = await use_case.execute(document_id)
        return Response(
            content=result.pdf_bytes,
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{result.filename}"',
            },
        )

    return router


quotes_router = document_router(
    DocumentKind.QUOTE,
    "/api/quotes",
    CreateQuoteRequest,
    UpdateQuoteRequest,
    QuoteResponse,
)
invoices_router = document_router(
    DocumentKind.INVOICE,
    "/api/invoices",
    CreateInvoiceRequest,
    UpdateInvoiceRequest,
    InvoiceResponse,
)
purchase_orders_router = document_router(
    DocumentKind.PURCHASE_ORDER,
    "/api/purchase-orders",
    CreatePurchaseOrderRequest,
    UpdatePurchaseOrderRequest,
    PurchaseOrderResponse,
)
