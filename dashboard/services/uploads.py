"""Three-step document upload: create slot, send bytes, attach block.

Steps run strictly in order and are not compensated; an upload slot created
before a later step fails is left for Notion to expire.
"""

import logging

from dashboard.config import settings
from dashboard.enums import BlockKind, DocumentSection
from dashboard.exceptions import InvalidRequestError, SectionNotFoundError, UpstreamError
from dashboard.models.content import Document
from dashboard.services.blocks import Block, find_section, parse_blocks
from dashboard.services.documents import is_document_block, to_document
from dashboard.services.notion import NotionService

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def validate_upload(content_type: str | None, size: int, max_size: int | None = None) -> None:
    """Reject anything that isn't an image or PDF, or is larger than the cap.

    Raises:
        InvalidRequestError: naming the violated constraint
    """
    max_size = settings.max_upload_size_bytes if max_size is None else max_size
    content_type = content_type or ""
    if not content_type.startswith("image/") and content_type != PDF_CONTENT_TYPE:
        raise InvalidRequestError("Only image files and PDFs are allowed")
    if size > max_size:
        raise InvalidRequestError(
            f"File size must be less than {max_size // (1024 * 1024)}MB"
        )


def build_attachment_block(upload_id: str, content_type: str) -> dict:
    kind = BlockKind.FILE if content_type == PDF_CONTENT_TYPE else BlockKind.IMAGE
    return {
        "object": "block",
        "type": kind.value,
        kind.value: {
            "type": "file_upload",
            "file_upload": {"id": upload_id},
            "caption": [],
        },
    }


async def upload_document(
    notion: NotionService,
    page_id: str,
    filename: str,
    content_type: str,
    content: bytes,
    section: DocumentSection = DocumentSection.SALES,
) -> Document:
    validate_upload(content_type, len(content))

    # Step 1: upload slot
    upload = await notion.create_file_upload(filename, content_type)
    upload_id = upload["id"]
    logger.info(f"Created file upload {upload_id} for {filename} ({len(content)} bytes)")

    # Step 2: file content
    await notion.send_file_upload(upload["upload_url"], filename, content_type, content)

    # Step 3: attach after the last document in the section, or after its heading
    blocks = parse_blocks(await notion.list_block_children(page_id))
    target = find_section(blocks, section.heading, case_sensitive=False)
    if target is None:
        raise SectionNotFoundError(
            section.heading, f'"{section.heading}" section does not exist.'
        )

    anchor = target.insertion_anchor(is_document_block)
    results = await notion.append_block_children(
        page_id, [build_attachment_block(upload_id, content_type)], after=anchor
    )
    if not results:
        raise UpstreamError("Notion returned no block for the attached file")

    logger.info(f"Attached upload {upload_id} to page {page_id} after block {anchor}")
    return to_document(Block.from_notion(results[0]), file_name=filename)
