import logging

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from dashboard.config import settings
from dashboard.enums import DocumentSection
from dashboard.exceptions import InvalidRequestError
from dashboard.middleware.rate_limit import rate_limit_upload, rate_limit_write
from dashboard.models.content import Document
from dashboard.models.records import CamelModel, SuccessResponse
from dashboard.services import documents as document_service
from dashboard.services.notion import NotionService, get_notion_service
from dashboard.services.uploads import PDF_CONTENT_TYPE, upload_document, validate_upload
from dashboard.utils import validate_page_id

logger = logging.getLogger(__name__)

router = APIRouter()


class DocumentListResponse(CamelModel):
    documents: list[Document]


class MessageResponse(SuccessResponse):
    message: str


class UploadResponse(MessageResponse):
    document: Document


@router.get("/{page_id}", response_model=DocumentListResponse)
async def list_documents(
    page_id: str,
    section: DocumentSection | None = None,
    notion: NotionService = Depends(get_notion_service),
):
    """List documents for one section, or for every documents section when none is given."""
    documents = await document_service.list_documents(notion, validate_page_id(page_id), section)
    return DocumentListResponse(documents=documents)


@router.delete("/{page_id}", response_model=MessageResponse)
@rate_limit_write()
async def delete_document(
    request: Request,
    page_id: str,
    block_id: str | None = Query(None, alias="blockId"),
    notion: NotionService = Depends(get_notion_service),
):
    validate_page_id(page_id)
    if not block_id:
        raise InvalidRequestError("Block ID is required")

    await document_service.remove_document(notion, validate_page_id(block_id, "block ID"))
    return MessageResponse(message="Document deleted successfully")


@router.post("/{page_id}/upload", response_model=UploadResponse)
@rate_limit_upload()
async def upload(
    request: Request,
    page_id: str,
    file: UploadFile | None = File(None),
    section: DocumentSection = DocumentSection.SALES,
    notion: NotionService = Depends(get_notion_service),
):
    """Upload an image or PDF into a page's documents section."""
    page_id = validate_page_id(page_id)
    if file is None:
        raise InvalidRequestError("File is required")

    # Reject by declared size before reading the body
    if file.size is not None:
        validate_upload(file.content_type, file.size)

    content = await file.read(settings.max_upload_size_bytes + 1)
    document = await upload_document(
        notion,
        page_id,
        file.filename or "upload",
        file.content_type or "",
        content,
        section,
    )

    kind = "PDF" if file.content_type == PDF_CONTENT_TYPE else "Image"
    logger.info(f"{kind} {document.file_name} uploaded to {section} documents on page {page_id}")
    return UploadResponse(message=f"{kind} uploaded successfully", document=document)
