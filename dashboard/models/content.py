"""Items derived from page content blocks: comments and documents."""

from dashboard.enums import CommentSection
from dashboard.models.records import CamelModel


class Comment(CamelModel):
    id: str
    block_id: str
    timestamp: str
    text: str
    section: CommentSection | None = None


class Document(CamelModel):
    id: str
    type: str
    file_name: str
    file_url: str = ""
    created_time: str | None = None
    last_edited_time: str | None = None


class CommentCreate(CamelModel):
    text: str = ""
    section_type: CommentSection | None = None
