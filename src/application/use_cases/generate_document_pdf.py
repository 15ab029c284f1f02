"""
Generate Document PDF Use Case.

Renders a quote, invoice or purchase order to PDF.
"""

from dataclasses import dataclass

from src.config import get_logger
from src.core.entities.financial_document import DocumentKind, FinancialDocument
from src.core.interfaces.storage import ICustomerStore, IVendorStore
from src.core.services import DocumentRepository
from src.core.services.dashboard import customer_display_name
from src.infrastructure.pdf import Fpdf2DocumentRenderer, IDocumentPdfRenderer

logger = get_logger(__name__)


@dataclass
class DocumentPdfResult:
    """Result of document PDF generation."""

    pdf_bytes: bytes
    document_id: str
    filename: str
    file_size: int


class GenerateDocumentPdfUseCase:
    """
    Use case for downloading a financial document as PDF.

    Flow:
    1. Load the document (404 when unknown)
    2. Resolve the customer or vendor name for the header
    3. Render via the PDF renderer
    """

    def __init__(
        self,
        kind: DocumentKind,
        repository: DocumentRepository | None = None,
        customer_store: ICustomerStore | None = None,
        vendor_store: IVendorStore | None = None,
        renderer: IDocumentPdfRenderer | None = None,
    ):
        self._kind = kind
        self._repository = repository
        self._customer_store = customer_store
        self._vendor_store = vendor_store
        self._renderer = renderer

    async def _get_repository(self) -> DocumentRepository:
        if self._repository is None:
            from src.application.services import get_document_repository

            self._repository = await get_document_repository(self._kind)
        return self._repository

    async def _get_customer_store(self) -> ICustomerStore:
        if self._customer_store is None:
            from src.infrastructure.storage.sqlite import get_customer_store

            self._customer_store = await get_customer_store()
        return self._customer_store

    async def _get_vendor_store(self) -> IVendorStore:
        if self._vendor_store is None:
            from src.infrastructure.storage.sqlite import get_vendor_store

            self._vendor_store = await get_vendor_store()
        return self._vendor_store

    def _get_renderer(self) -> IDocumentPdfRenderer:
        if self._renderer is None:
            self._renderer = Fpdf2DocumentRenderer()
        return self._renderer

    async def _party_name(self, document: FinancialDocument) -> str | None:
        party_id = document.counterparty_id
        if party_id is None:
            return None
        if self._kind is DocumentKind.PURCHASE_ORDER:
            vendor = await (await self._get_vendor_store()).get_vendor(party_id)
            return vendor.name if vendor else None
        customer = await (await self._get_customer_store()).get_customer(party_id)
        return customer_display_name(customer) if customer else None

    async def execute(self, document_id: str) -> DocumentPdfResult:
        """
        Render one document.

        Raises:
            NotFoundError: If the document does not exist.
            RenderingError: If the PDF library fails.
        """
        repository = await self._get_repository()
        document = await repository.get(document_id)
        party_name = await self._party_name(document)

        pdf_bytes = self._get_renderer().render(document, repository.definition, party_name)
        filename = f"{self._kind.value}_{document.number}.pdf".replace("/", "-")

        logger.info(
            "document_pdf_generated",
            kind=self._kind.value,
            document_id=document_id,
            file_size=len(pdf_bytes),
        )
        return DocumentPdfResult(
            pdf_bytes=pdf_bytes,
            document_id=document_id,
            filename=filename,
            file_size=len(pdf_bytes),
        )
