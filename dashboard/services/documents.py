"""Documents: image and file blocks listed under a documents heading."""

import logging
from urllib.parse import unquote

from dashboard.enums import DOCUMENT_KINDS, BlockKind, DocumentSection
from dashboard.models.content import Document
from dashboard.services.blocks import Block, find_section, parse_blocks
from dashboard.services.notion import NotionService

logger = logging.getLogger(__name__)


def is_document_block(block: Block) -> bool:
    return block.kind in DOCUMENT_KINDS


def file_url(block: Block) -> str:
    """URL of the asset behind an image/file block, whichever way it is hosted."""
    source = block.payload.get("type", "")
    return (block.payload.get(source) or {}).get("url") or ""


def filename_from_url(url: str) -> str | None:
    """Last path segment of ``url``, decoded, if it looks like a filename."""
    if not url:
        return None
    tail = url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    if "." not in tail:
        return None
    return unquote(tail)


def resolve_filename(block: Block) -> str:
    """Display name for a document block.

    Order: upload-provided name, external link name, hosted-file name,
    name taken from the asset URL, then a synthesized ``Image_xxxxxxxx`` /
    ``Document_xxxxxxxx`` from the block id.
    """
    payload = block.payload
    source = payload.get("type", "")

    name = None
    if source == "file_upload":
        name = (payload.get("file_upload") or {}).get("name")
    elif source == "external":
        name = (payload.get("external") or {}).get("name")
    elif source == "file":
        name = (payload.get("file") or {}).get("name")
    name = name or payload.get("name") or filename_from_url(file_url(block))

    if name:
        return name
    prefix = "Image" if block.kind == BlockKind.IMAGE else "Document"
    return f"{prefix}_{block.id[-8:]}"


def to_document(block: Block, file_name: str | None = None) -> Document:
    return Document(
        id=block.id,
        type=block.kind,
        file_name=file_name or resolve_filename(block),
        file_url=file_url(block),
        created_time=block.created_time,
        last_edited_time=block.last_edited_time,
    )


def collect_documents(blocks: list[Block], section: DocumentSection) -> list[Document]:
    target = find_section(blocks, section.heading, case_sensitive=False)
    if target is None:
        return []
    return [to_document(block) for block in target.items if is_document_block(block)]


async def list_documents(
    notion: NotionService, page_id: str, section: DocumentSection | None = None
) -> list[Document]:
    blocks = parse_blocks(await notion.list_block_children(page_id))
    sections = [section] if section else list(DocumentSection)

    documents = []
    for current in sections:
        documents.extend(collect_documents(blocks, current))
    return documents


async def remove_document(notion: NotionService, block_id: str) -> None:
    """Delete the document's block. The uploaded asset itself is left to Notion."""
    await notion.delete_block(block_id)
    logger.info(f"Deleted document block {block_id}")
