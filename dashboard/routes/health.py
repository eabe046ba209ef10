"""Health check endpoints including Notion connectivity."""

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from dashboard.config import settings
from dashboard.services.notion import NotionService, get_notion_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health():
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/notion")
async def notion_health(notion: NotionService = Depends(get_notion_service)):
    """Check that the configured token can read the configured database."""
    if not settings.notion_token or not settings.notion_database_id:
        raise HTTPException(503, "Notion token or database ID is not configured")
    try:
        database = await notion.retrieve_database()
    except httpx.HTTPError as e:
        logger.error(f"Notion health check failed: {e!r}")
        raise HTTPException(503, "Notion health check failed") from e
    return {"status": "healthy", "database": database.get("id")}
