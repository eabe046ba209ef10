"""Record reads and partial updates over database pages."""

from dashboard.enums import RecordType
from dashboard.services.notion import NotionService
from dashboard.services.properties import (
    PropertyField,
    classification_filter,
    to_properties,
    to_record,
)


async def list_records(
    notion: NotionService, record_type: RecordType, fields: tuple[PropertyField, ...]
) -> list[dict]:
    pages = await notion.query_database(classification_filter(record_type))
    return [to_record(page, fields) for page in pages]


async def get_record(
    notion: NotionService, page_id: str, fields: tuple[PropertyField, ...]
) -> dict:
    return to_record(await notion.retrieve_page(page_id), fields)


async def update_record(
    notion: NotionService,
    page_id: str,
    partial: dict,
    fields: tuple[PropertyField, ...],
) -> dict:
    """Send only the properties present in ``partial``. Returns the payload sent."""
    properties = to_properties(partial, fields)
    await notion.update_page(page_id, properties)
    return properties
