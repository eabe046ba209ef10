from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dashboard.services.notion import NotionService, get_notion_service

router = APIRouter()

OPTION_TYPES = ("select", "multi_select", "status")


class SchemaOption(BaseModel):
    id: str
    name: str
    color: str | None = None


class SchemaProperty(BaseModel):
    type: str
    options: list[SchemaOption]


def extract_options(database: dict) -> dict[str, SchemaProperty]:
    """Options of every select-like property, keyed by property name."""
    schema = {}
    for name, prop in (database.get("properties") or {}).items():
        prop_type = prop.get("type")
        if prop_type not in OPTION_TYPES:
            continue
        options = (prop.get(prop_type) or {}).get("options") or []
        schema[name] = SchemaProperty(
            type=prop_type,
            options=[SchemaOption(**option) for option in options],
        )
    return schema


@router.get("")
async def get_schema(notion: NotionService = Depends(get_notion_service)):
    """Dropdown options for the edit forms."""
    database = await notion.retrieve_database()
    schema = extract_options(database)
    return {"schema": {name: prop.model_dump() for name, prop in schema.items()}}
