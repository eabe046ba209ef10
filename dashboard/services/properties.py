"""Mapping between Notion page properties and flat dashboard records.

Each record view is described by a tuple of ``PropertyField`` entries naming
the record attribute, the Notion property and its Notion type. Reading and
writing both walk the same field table, so a field can't be readable but
silently unwritable.
"""

from dataclasses import dataclass

MULTI_SELECT_SEPARATOR = ", "

TITLE = "title"
RICH_TEXT = "rich_text"
SELECT = "select"
MULTI_SELECT = "multi_select"
STATUS = "status"
DATE = "date"


@dataclass(frozen=True)
class PropertyField:
    attr: str
    notion_name: str
    kind: str
    default: str | None = None


def split_multi_select(value: str | None) -> list[str]:
    """Split a joined multi-select string into trimmed option names."""
    if not value:
        return []
    return [token.strip() for token in value.split(MULTI_SELECT_SEPARATOR) if token.strip()]


def join_multi_select(names: list[str]) -> str:
    return MULTI_SELECT_SEPARATOR.join(names)


def _first_plain_text(runs: list[dict] | None) -> str | None:
    if not runs:
        return None
    return runs[0].get("plain_text") or None


def extract_value(prop: dict | None, kind: str) -> str | None:
    """Extract a display value from one raw Notion property, or None if unset."""
    if not prop:
        return None

    if kind in (TITLE, RICH_TEXT):
        return _first_plain_text(prop.get(kind))

    if kind in (SELECT, STATUS):
        option = prop.get(kind)
        return option.get("name") or None if option else None

    if kind == MULTI_SELECT:
        options = prop.get(MULTI_SELECT) or []
        return join_multi_select([opt["name"] for opt in options if opt.get("name")]) or None

    if kind == DATE:
        date = prop.get(DATE)
        return date.get("start") or None if date else None

    raise ValueError(f"Unsupported property kind: {kind}")


def build_value(value: str | None, kind: str) -> dict:
    """Build the outbound payload for one property. Empty values clear it."""
    if kind in (TITLE, RICH_TEXT):
        return {kind: [{"text": {"content": value or ""}}]}

    if kind in (SELECT, STATUS):
        return {kind: {"name": value} if value else None}

    if kind == MULTI_SELECT:
        return {MULTI_SELECT: [{"name": name} for name in split_multi_select(value)]}

    if kind == DATE:
        return {DATE: {"start": value} if value else None}

    raise ValueError(f"Unsupported property kind: {kind}")


def to_record(page: dict, fields: tuple[PropertyField, ...]) -> dict[str, str | None]:
    """Flatten a Notion page into a record dict keyed by field attribute."""
    properties = page.get("properties") or {}
    record: dict[str, str | None] = {"id": page["id"]}
    for field in fields:
        value = extract_value(properties.get(field.notion_name), field.kind)
        record[field.attr] = value if value is not None else field.default
    return record


def to_properties(partial: dict[str, str | None], fields: tuple[PropertyField, ...]) -> dict:
    """Build a Notion properties payload from a partial record.

    Only attributes present in ``partial`` are emitted. An explicit ``None``
    clears the property rather than leaving it unchanged.
    """
    properties = {}
    for field in fields:
        if field.attr in partial:
            properties[field.notion_name] = build_value(partial[field.attr], field.kind)
    return properties


def classification_filter(record_type: str) -> dict:
    """Database query filter selecting pages by their ``Type`` select value."""
    return {"property": "Type", "select": {"equals": record_type}}


# Field tables

_CUSTOMER_FIELDS = (
    PropertyField("customer_name", "Customer Name", TITLE),
    PropertyField("address", "Address", RICH_TEXT),
    PropertyField("city", "City", RICH_TEXT),
    PropertyField("state", "State", RICH_TEXT),
    PropertyField("zip_code", "ZIP Code", RICH_TEXT),
    PropertyField("job_type", "Job Type", MULTI_SELECT),
)

_CONTACT_FIELDS = (
    PropertyField("phone_number", "Phone Number", RICH_TEXT),
    PropertyField("email", "Email", RICH_TEXT),
)

LEAD_FIELDS = (
    PropertyField("sales_representative", "Sales Representative", SELECT),
    PropertyField("lead_date", "Lead Date", DATE),
    *_CUSTOMER_FIELDS,
    PropertyField("equipment_needed", "Equipment Needed", MULTI_SELECT),
    *_CONTACT_FIELDS,
)

SALE_FIELDS = (
    PropertyField("sales_date", "Sales Date", DATE),
    PropertyField("appointment_date", "Appointment Date", DATE),
    PropertyField("sales_representative", "Sales Representative", SELECT),
    *_CUSTOMER_FIELDS,
    PropertyField("appointment_status", "Appointment Status", STATUS),
    PropertyField("sales_status", "Sales Status", STATUS),
    PropertyField("equipment_needed", "Equipment Needed", MULTI_SELECT),
    PropertyField("live_representative", "Live Representative", SELECT),
    PropertyField("live_representative_paid", "Live Representative Paid", SELECT),
    PropertyField("sales_representative_paid", "Sales Representative Paid", SELECT),
    *_CONTACT_FIELDS,
)

PAYMENT_FIELDS = (
    PropertyField("sales_representative", "Sales Representative", SELECT),
    PropertyField("live_representative", "Live Representative", SELECT),
    *_CUSTOMER_FIELDS,
    PropertyField("appointment_status", "Appointment Status", STATUS),
    PropertyField("sales_status", "Sales Status", STATUS),
    PropertyField("all_payments_finished", "All Payments Finished", SELECT, default="No"),
    PropertyField("live_representative_paid", "Live Representative Paid", SELECT, default="No"),
    PropertyField("sales_representative_paid", "Sales Representative Paid", SELECT, default="No"),
)
