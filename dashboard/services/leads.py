"""Lead lifecycle: creation with page template, conversion and cancellation."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx

from dashboard.enums import TEMPLATE_HEADINGS, BlockKind, RecordType
from dashboard.services.notion import NotionService
from dashboard.services.properties import DATE, LEAD_FIELDS, SELECT, build_value, to_properties

logger = logging.getLogger(__name__)


@dataclass
class LeadCreation:
    """Outcome of creating a lead.

    The page exists once ``id`` is set; ``template_seeded`` reports separately
    whether the section headings were added to it. Seeding errors are
    logged, not returned.
    """

    id: str
    template_seeded: bool


def template_blocks() -> list[dict]:
    """Heading + empty paragraph for every section a lead page starts with."""
    blocks = []
    for heading in TEMPLATE_HEADINGS:
        blocks.append(
            {
                "object": "block",
                "type": BlockKind.HEADING_2.value,
                BlockKind.HEADING_2.value: {
                    "rich_text": [{"type": "text", "text": {"content": heading}}]
                },
            }
        )
        blocks.append(
            {
                "object": "block",
                "type": BlockKind.PARAGRAPH.value,
                BlockKind.PARAGRAPH.value: {"rich_text": []},
            }
        )
    return blocks


def lead_properties(data: dict) -> dict:
    """Properties for a new lead page. Unset optional fields are left off."""
    provided = {key: value for key, value in data.items() if value}
    provided.setdefault("customer_name", "")
    properties = to_properties(provided, LEAD_FIELDS)
    properties["Type"] = build_value(RecordType.LEAD, SELECT)
    return properties


async def create_lead(notion: NotionService, data: dict) -> LeadCreation:
    page = await notion.create_page(lead_properties(data))
    page_id = page["id"]

    try:
        await notion.append_block_children(page_id, template_blocks())
    except httpx.HTTPError as e:
        logger.error(f"Failed to add template to lead page {page_id}: {e}")
        return LeadCreation(id=page_id, template_seeded=False)

    logger.info(f"Created lead page {page_id} with template")
    return LeadCreation(id=page_id, template_seeded=True)


async def convert_to_sale(notion: NotionService, page_id: str, today: str | None = None) -> str:
    """Reclassify a lead as a sale, stamping today's UTC date. Returns the date used."""
    sales_date = today or datetime.now(UTC).date().isoformat()
    await notion.update_page(
        page_id,
        {
            "Type": build_value(RecordType.SALE, SELECT),
            "Sales Date": build_value(sales_date, DATE),
        },
    )
    logger.info(f"Converted lead {page_id} to sale on {sales_date}")
    return sales_date


async def cancel_lead(notion: NotionService, page_id: str) -> None:
    await notion.update_page(page_id, {"Type": build_value(RecordType.CANCELED, SELECT)})
    logger.info(f"Canceled lead {page_id}")


async def set_payments_finished(notion: NotionService, page_id: str, finished: bool) -> None:
    await notion.update_page(
        page_id, {"All Payments Finished": build_value("Yes" if finished else "No", SELECT)}
    )
