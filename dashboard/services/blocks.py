"""Section scanning over a page's flat block list.

Notion pages store headings and their content as flat siblings; a heading has
no link to the blocks "under" it. This module is the one place that turns
that flat sequence into ``Section`` objects (a heading plus its ordered
items). Everything else works with sections, not block positions.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from dashboard.enums import HEADING_KINDS


@dataclass
class Block:
    id: str
    kind: str
    text: str = ""
    payload: dict = field(default_factory=dict)
    created_time: str | None = None
    last_edited_time: str | None = None

    @property
    def is_heading(self) -> bool:
        return self.kind in HEADING_KINDS

    @classmethod
    def from_notion(cls, raw: dict) -> "Block":
        kind = raw.get("type", "")
        payload = raw.get(kind) or {}
        rich_text = payload.get("rich_text") or []
        return cls(
            id=raw["id"],
            kind=kind,
            text="".join(run.get("plain_text", "") for run in rich_text),
            payload=payload,
            created_time=raw.get("created_time"),
            last_edited_time=raw.get("last_edited_time"),
        )


@dataclass
class Section:
    heading: Block
    items: list[Block] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.heading.text

    def insertion_anchor(self, predicate: Callable[[Block], bool]) -> str:
        """Id of the block a new item should follow.

        That is the last item matching ``predicate``, or the heading itself
        when the section holds no such item.
        """
        for item in reversed(self.items):
            if predicate(item):
                return item.id
        return self.heading.id


def parse_blocks(raw_blocks: Sequence[dict]) -> list[Block]:
    return [Block.from_notion(raw) for raw in raw_blocks]


def _heading_matches(block: Block, text: str, case_sensitive: bool) -> bool:
    if not block.is_heading:
        return False
    if case_sensitive:
        return text in block.text
    return text.lower() in block.text.lower()


def find_heading(
    blocks: Sequence[Block], text: str, case_sensitive: bool = True
) -> int | None:
    """Index of the first heading whose text contains ``text``, or None."""
    for index, block in enumerate(blocks):
        if _heading_matches(block, text, case_sensitive):
            return index
    return None


def find_section_end(blocks: Sequence[Block], start: int) -> int:
    """Index where the section headed at ``start`` ends (exclusive).

    The section stops at the next heading of any level, or the end of the
    page.
    """
    for index in range(start + 1, len(blocks)):
        if blocks[index].is_heading:
            return index
    return len(blocks)


def find_section(
    blocks: Sequence[Block], text: str, case_sensitive: bool = True
) -> Section | None:
    start = find_heading(blocks, text, case_sensitive=case_sensitive)
    if start is None:
        return None
    end = find_section_end(blocks, start)
    return Section(heading=blocks[start], items=list(blocks[start + 1 : end]))
