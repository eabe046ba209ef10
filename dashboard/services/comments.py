"""Comments stored as paragraph blocks on a record page.

Two text shapes are recognised:

- tagged: ``[SALES COMMENT] **[Jan 5, 2025, 3:45 PM]**\\nCalled customer``
- legacy: ``**[Jan 5, 2025, 3:45 PM]**\\nCalled customer``

Tagged comments are found anywhere on the page by their tag. Legacy comments
carry no tag, so they only count when they sit under the section's heading.
"""

import logging
import re
from datetime import datetime
from zoneinfo import ZoneInfo

from dashboard.config import settings
from dashboard.enums import BlockKind, CommentSection
from dashboard.exceptions import SectionNotFoundError, UpstreamError
from dashboard.models.content import Comment
from dashboard.services.blocks import Block, find_section, parse_blocks
from dashboard.services.notion import NotionService

logger = logging.getLogger(__name__)

TAGGED_PATTERN = re.compile(r"^\[(?P<tag>[^\]]*)\]\s*\*\*\[(?P<ts>.*?)\]\*\*\s*(?P<body>.*)", re.DOTALL)
LEGACY_PATTERN = re.compile(r"^\*\*\[(?P<ts>.*?)\]\*\*\s*(?P<body>.*)", re.DOTALL)


def format_timestamp(moment: datetime | None = None) -> str:
    """Render a timestamp as ``Jan 5, 2025, 3:45 PM`` in the display timezone.

    ``moment`` must be timezone-aware; naive values raise ``ValueError``.
    Defaults to now.
    """
    if moment is not None and moment.utcoffset() is None:
        raise ValueError("moment must be timezone-aware")
    tz = ZoneInfo(settings.display_timezone)
    moment = moment.astimezone(tz) if moment else datetime.now(tz)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment:%b} {moment.day}, {moment.year}, {hour}:{moment:%M} {meridiem}"


def format_comment(timestamp: str, body: str, section: CommentSection | None = None) -> str:
    """Serialise a comment into paragraph text. Without a section, the legacy shape is produced."""
    text = f"**[{timestamp}]**\n{body.strip()}"
    if section is None:
        return text
    return f"{section.tag} {text}"


def parse_comment(text: str, section: CommentSection | None = None) -> tuple[str, str] | None:
    """Parse paragraph text into ``(timestamp, body)``.

    With ``section`` given, only a tagged comment for that section matches.
    Without it, only the legacy shape matches. Blank text never matches.
    """
    if not text.strip():
        return None

    if section is not None:
        match = TAGGED_PATTERN.match(text)
        if not match or f"[{match['tag']}]" != section.tag:
            return None
    else:
        match = LEGACY_PATTERN.match(text)
        if not match:
            return None

    return match["ts"], match["body"].strip()


def is_comment_block(block: Block) -> bool:
    """Whether a block looks like a comment in either shape."""
    if block.kind != BlockKind.PARAGRAPH or not block.text.strip():
        return False
    return bool(TAGGED_PATTERN.match(block.text) or LEGACY_PATTERN.match(block.text))


def _to_comment(block: Block, parsed: tuple[str, str], section: CommentSection) -> Comment:
    timestamp, body = parsed
    return Comment(id=block.id, block_id=block.id, timestamp=timestamp, text=body, section=section)


def collect_comments(blocks: list[Block], section: CommentSection) -> list[Comment]:
    """Tagged comments for ``section`` across the page, then legacy ones under its heading."""
    comments = []
    for block in blocks:
        if block.kind != BlockKind.PARAGRAPH:
            continue
        parsed = parse_comment(block.text, section)
        if parsed:
            comments.append(_to_comment(block, parsed, section))

    heading_section = find_section(blocks, section.heading, case_sensitive=True)
    if heading_section:
        for block in heading_section.items:
            if block.kind != BlockKind.PARAGRAPH:
                continue
            parsed = parse_comment(block.text)
            if parsed:
                comments.append(_to_comment(block, parsed, section))

    return comments


async def list_comments(
    notion: NotionService, page_id: str, section: CommentSection | None = None
) -> list[Comment]:
    blocks = parse_blocks(await notion.list_block_children(page_id))
    sections = [section] if section else list(CommentSection)

    comments = []
    for current in sections:
        comments.extend(collect_comments(blocks, current))
    return comments


async def add_comment(
    notion: NotionService,
    page_id: str,
    body: str,
    section: CommentSection,
    moment: datetime | None = None,
) -> Comment:
    """Insert a comment after the last comment in the section's heading block run."""
    blocks = parse_blocks(await notion.list_block_children(page_id))
    target = find_section(blocks, section.heading, case_sensitive=True)
    if target is None:
        raise SectionNotFoundError(section.heading)

    anchor = target.insertion_anchor(is_comment_block)
    timestamp = format_timestamp(moment)
    paragraph = {
        "object": "block",
        "type": BlockKind.PARAGRAPH.value,
        BlockKind.PARAGRAPH.value: {
            "rich_text": [
                {"type": "text", "text": {"content": format_comment(timestamp, body, section)}}
            ]
        },
    }

    results = await notion.append_block_children(page_id, [paragraph], after=anchor)
    if not results:
        raise UpstreamError("Notion returned no block for the new comment")

    logger.info(f"Added {section} comment {results[0]['id']} to page {page_id}")
    return Comment(
        id=results[0]["id"],
        block_id=results[0]["id"],
        timestamp=timestamp,
        text=body.strip(),
        section=section,
    )


async def remove_comment(notion: NotionService, block_id: str) -> None:
    await notion.delete_block(block_id)
    logger.info(f"Deleted comment block {block_id}")
