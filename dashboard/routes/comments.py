from fastapi import APIRouter, Depends, Query, Request

from dashboard.enums import CommentSection
from dashboard.exceptions import InvalidRequestError
from dashboard.middleware.rate_limit import rate_limit_write
from dashboard.models.content import Comment, CommentCreate
from dashboard.models.records import CamelModel, SuccessResponse
from dashboard.services import comments as comment_service
from dashboard.services.notion import NotionService, get_notion_service
from dashboard.utils import validate_page_id

router = APIRouter()


class CommentListResponse(CamelModel):
    comments: list[Comment]


class CommentResponse(CamelModel):
    comment: Comment


@router.get("/{page_id}", response_model=CommentListResponse)
async def list_comments(
    page_id: str,
    section: CommentSection | None = None,
    notion: NotionService = Depends(get_notion_service),
):
    """List comments for one section, or for every section when none is given."""
    comments = await comment_service.list_comments(notion, validate_page_id(page_id), section)
    return CommentListResponse(comments=comments)


@router.post("/{page_id}", response_model=CommentResponse)
@rate_limit_write()
async def add_comment(
    request: Request,
    page_id: str,
    payload: CommentCreate,
    notion: NotionService = Depends(get_notion_service),
):
    """Add a comment at the end of its section."""
    if not payload.text.strip() or payload.section_type is None:
        raise InvalidRequestError("Text and section type are required")

    comment = await comment_service.add_comment(
        notion, validate_page_id(page_id), payload.text, payload.section_type
    )
    return CommentResponse(comment=comment)


@router.delete("/{page_id}", response_model=SuccessResponse)
@rate_limit_write()
async def delete_comment(
    request: Request,
    page_id: str,
    block_id: str | None = Query(None, alias="blockId"),
    notion: NotionService = Depends(get_notion_service),
):
    validate_page_id(page_id)
    if not block_id:
        raise InvalidRequestError("Block ID is required")

    await comment_service.remove_comment(notion, validate_page_id(block_id, "block ID"))
    return SuccessResponse()
