"""Enums for classification values used throughout the application."""

from enum import StrEnum


class RecordType(StrEnum):
    """Value of the ``Type`` select property on a database page."""

    LEAD = "Lead"
    SALE = "Sale"
    CANCELED = "Canceled"


class CommentSection(StrEnum):
    """Comment sections on a record page."""

    SALES = "sales"
    APPOINTMENT = "appointment"

    @property
    def heading(self) -> str:
        return _COMMENT_HEADINGS[self]

    @property
    def tag(self) -> str:
        """Bracketed prefix written in front of new comments."""
        return f"[{self.value.upper()} COMMENT]"


class DocumentSection(StrEnum):
    """Document sections on a record page."""

    SALES = "sales"
    APPOINTMENT = "appointment"
    LIVE_REPRESENTATIVE = "live_representative"

    @property
    def heading(self) -> str:
        return _DOCUMENT_HEADINGS[self]


class BlockKind(StrEnum):
    """Notion block types the scanner cares about."""

    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    FILE = "file"


_COMMENT_HEADINGS = {
    CommentSection.SALES: "Sales Comments",
    CommentSection.APPOINTMENT: "Appointment Comments",
}

_DOCUMENT_HEADINGS = {
    DocumentSection.SALES: "Sales Documents",
    DocumentSection.APPOINTMENT: "Appointment Documents (Owner)",
    DocumentSection.LIVE_REPRESENTATIVE: "Appointment Documents (Live Representative)",
}

HEADING_KINDS = frozenset({BlockKind.HEADING_1, BlockKind.HEADING_2, BlockKind.HEADING_3})

DOCUMENT_KINDS = frozenset({BlockKind.IMAGE, BlockKind.FILE})

# Headings seeded on every new lead page, in page order
TEMPLATE_HEADINGS = (
    "Sales Comments",
    "Sales Documents",
    "Appointment Comments",
    "Appointment Documents (Owner)",
    "Appointment Documents (Live Representative)",
)
